"""Classification of backend query responses.

The backend is inconsistent about shapes: tables usually arrive as a JSON
array encoded inside a string ``data`` field, text may arrive as ``reply``,
as ``data``, or as a bare text body. ``normalize`` applies one ordered rule
list and turns any response into a ``TextReply``, ``TableReply`` or
``ErrorReply``. Parse failures never escape; they degrade to text.
"""

import json
import logging
from typing import Annotated, Any, Literal

import httpx
from pydantic import BaseModel, Field

from stratsync.models.schemas import Message, PayloadBundle, Row, Sender

logger = logging.getLogger(__name__)

EMPTY_REPLY_TEXT = "The server returned an empty response."


class TextReply(BaseModel):
    """A reply displayed as text."""

    kind: Literal["text"] = "text"
    text: str
    payload: PayloadBundle

    def to_message(self) -> Message:
        return Message(
            content=self.text,
            sender=Sender.ASSISTANT,
            original_request_payload=self.payload,
        )


class TableReply(BaseModel):
    """A reply displayed as a table."""

    kind: Literal["table"] = "table"
    rows: list[Row]
    payload: PayloadBundle

    def to_message(self) -> Message:
        # An empty result set has nothing worth summarizing
        return Message(
            content="",
            sender=Sender.ASSISTANT,
            table=self.rows,
            original_request_payload=self.payload,
            can_summarize=bool(self.rows),
        )


class ErrorReply(BaseModel):
    """A failed query, shown to the user in place of a reply.

    Attributes:
        status_code: HTTP status, or None when the backend was unreachable.
        detail: Response body or connection error text.
    """

    kind: Literal["error"] = "error"
    status_code: int | None = None
    detail: str = ""

    @property
    def text(self) -> str:
        if self.status_code is None:
            return f"Error: {self.detail or 'Please try again.'}"
        return f"Error: HTTP {self.status_code}: {self.detail}"

    def to_message(self) -> Message:
        return Message(content=self.text, sender=Sender.ASSISTANT)


NormalizedReply = Annotated[TextReply | TableReply | ErrorReply, Field(discriminator="kind")]


def dumps_compact(value: Any) -> str:
    """Serialize a JSON value without whitespace padding."""
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"), default=str)


def is_json_response(response: httpx.Response) -> bool:
    """Check whether the response declares a JSON media type."""
    content_type = response.headers.get("content-type", "")
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


def _plain_text_reply(query: str, body: str) -> TextReply:
    return TextReply(
        text=body or EMPTY_REPLY_TEXT,
        payload=PayloadBundle(query=query, response=body),
    )


def _embedded_rows(parsed: Any) -> list[Row] | None:
    """Decode a table from a JSON-encoded string ``data`` field, if there is one."""
    if not isinstance(parsed, dict):
        return None
    data = parsed.get("data")
    if not isinstance(data, str):
        return None

    try:
        decoded = json.loads(data)
    except json.JSONDecodeError:
        return None

    if isinstance(decoded, list) and all(isinstance(row, dict) for row in decoded):
        return decoded
    return None


def _display_text(parsed: Any) -> str:
    """Pick the text to show for a JSON reply that is not a table."""
    if isinstance(parsed, dict):
        reply = parsed.get("reply")
        if reply:
            return reply if isinstance(reply, str) else dumps_compact(reply)
        data = parsed.get("data")
        if isinstance(data, str) and data:
            return data
    return dumps_compact(parsed)


def normalize(query: str, response: httpx.Response) -> NormalizedReply:
    """Classify a query response as text, table or error.

    Rules, first match wins:
        1. Non-2xx status -> ErrorReply with the status and body.
        2. Non-JSON content type (or unparseable JSON) -> TextReply of the body.
        3. String ``data`` field that decodes to a list of objects -> TableReply.
        4. Otherwise ``reply``, then string ``data``, then the re-serialized
           object -> TextReply.

    Args:
        query: The query that produced the response.
        response: The raw backend response.

    Returns:
        The normalized reply. Payload bundles are attached to successful
        replies so they can be summarized later.
    """
    if not response.is_success:
        logger.warning(f"Query failed with HTTP {response.status_code}")
        return ErrorReply(status_code=response.status_code, detail=response.text)

    body = response.text
    if not is_json_response(response):
        return _plain_text_reply(query, body)

    try:
        parsed = json.loads(body)
    except json.JSONDecodeError as e:
        logger.warning(f"Response declared JSON but did not parse ({e}); showing as text")
        return _plain_text_reply(query, body)

    rows = _embedded_rows(parsed)
    if rows is not None:
        logger.debug(f"Classified reply as table with {len(rows)} rows")
        return TableReply(
            rows=rows,
            payload=PayloadBundle(query=query, response=rows, raw=parsed),
        )

    text = _display_text(parsed)
    return TextReply(text=text, payload=PayloadBundle(query=query, response=text, raw=parsed))
