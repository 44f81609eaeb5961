import itertools
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

Row = dict[str, Any]

_message_ids = itertools.count(1)


def _next_message_id() -> int:
    return next(_message_ids)


class Sender(str, Enum):
    """Who authored a message."""

    USER = "user"
    ASSISTANT = "assistant"


class PayloadBundle(BaseModel):
    """Context retained from a successful query to drive a later summary.

    Attributes:
        query: The user's original query text.
        response: The normalized reply value (display text or table rows).
        raw: The parsed backend object, or None for plain-text replies.
    """

    model_config = ConfigDict(frozen=True)

    query: str
    response: str | list[Row]
    raw: Any = None


class Message(BaseModel):
    """A single message in the conversation.

    Attributes:
        id: Unique id, increasing in creation order.
        content: Display text. Empty for table replies.
        sender: The message author.
        timestamp: Creation time.
        table: Rows for tabular replies.
        original_request_payload: Bundle kept for summarization.
        can_summarize: False when a table reply matched no rows.
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(default_factory=_next_message_id)
    content: str = ""
    sender: Sender
    timestamp: datetime = Field(default_factory=datetime.now)
    table: list[Row] | None = None
    original_request_payload: PayloadBundle | None = None
    can_summarize: bool = True

    @model_validator(mode="after")
    def check_sender_fields(self) -> "Message":
        """Reject field combinations that cannot come out of the chat flow."""
        if self.sender is Sender.USER and (
            self.table is not None or self.original_request_payload is not None
        ):
            raise ValueError("User messages cannot carry table data or a payload bundle")
        if self.table and not self.can_summarize:
            raise ValueError("A message with table rows must be summarizable")
        return self

    @classmethod
    def from_user(cls, text: str) -> "Message":
        return cls(content=text, sender=Sender.USER)

    @property
    def is_user(self) -> bool:
        return self.sender is Sender.USER

    @property
    def time_label(self) -> str:
        return self.timestamp.strftime("%I:%M %p")

    def render_payload(self) -> dict[str, Any]:
        """Return what the rendering layer needs: either content or table rows."""
        if self.table is not None:
            return {"table": self.table}
        return {"content": self.content}


class QueryRequest(BaseModel):
    """Request body for the query endpoint.

    Attributes:
        query: The user's free-text question.
    """

    query: str = Field(..., min_length=1)

    @field_validator("query", mode="before")
    @classmethod
    def strip_query(cls, v: str) -> str:
        """Strip whitespace from query before validation."""
        if isinstance(v, str):
            return v.strip()
        return v


class SummaryRequest(BaseModel):
    """Request body for the summary endpoint.

    Attributes:
        query: The query that produced the reply being summarized.
        data: The reply content, always pre-serialized to a string.
    """

    query: str
    data: str


class SummaryStatus(str, Enum):
    """Terminal states of a summarize call."""

    PUBLISHED = "published"
    FAILED = "failed"
    BUSY = "busy"
    UNAVAILABLE = "unavailable"
    DISCARDED = "discarded"


class SummaryArtifact(BaseModel):
    """The rendered summary document currently on display.

    Attributes:
        message_id: The message this summary belongs to.
        document: Sanitized HTML text.
        path: Temporary file backing the document.
        created_at: When the artifact was published.
    """

    model_config = ConfigDict(frozen=True)

    message_id: int
    document: str
    path: Path
    created_at: datetime = Field(default_factory=datetime.now)


class SummaryOutcome(BaseModel):
    """Result of a summarize call."""

    message_id: int
    status: SummaryStatus
    artifact: SummaryArtifact | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is SummaryStatus.PUBLISHED
