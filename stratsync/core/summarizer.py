"""Summarization of assistant replies into rendered HTML documents.

A summary is derived from a reply already in the conversation: the stored
payload bundle (or, failing that, the table or text on display) is sent
back to the backend together with the original query. The backend answers
with an HTML document, sometimes wrapped in a Markdown code fence, which is
sanitized and handed to the ArtifactManager.
"""

import json
import logging
import re
from collections.abc import Callable
from typing import Any

from stratsync.backend.client import BackendClient, TransportError
from stratsync.core.artifacts import ArtifactManager
from stratsync.core.normalizer import dumps_compact
from stratsync.models.schemas import (
    Message,
    Sender,
    SummaryOutcome,
    SummaryRequest,
    SummaryStatus,
)

logger = logging.getLogger(__name__)

_LEADING_FENCE = re.compile(r"^```(?:html)?\s*", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"\s*```\s*$", re.IGNORECASE)


class SummarizationError(Exception):
    """Raised when the backend could not produce a summary."""

    pass


def _serialize(value: Any) -> str:
    return value if isinstance(value, str) else dumps_compact(value)


def build_summary_request(message: Message) -> SummaryRequest:
    """Rebuild the summary request for a stored reply.

    The data sent is the first non-empty of: the bundled response, the
    table rows, the displayed text, the original query.

    Args:
        message: An assistant message from the conversation.

    Returns:
        Request body with ``data`` always serialized to a string.
    """
    bundle = message.original_request_payload
    query = bundle.query if bundle is not None else message.content

    candidates = (
        bundle.response if bundle is not None else None,
        message.table,
        message.content if message.content.strip() else None,
        query,
    )
    data = next((candidate for candidate in candidates if candidate), "")
    return SummaryRequest(query=query, data=_serialize(data))


def strip_code_fences(text: str) -> str:
    """Remove a leading ```/```html fence and a trailing ``` fence.

    Stripping repeats until nothing changes, so applying it twice is the
    same as applying it once.
    """
    while True:
        stripped = _TRAILING_FENCE.sub("", _LEADING_FENCE.sub("", text, count=1), count=1)
        if stripped == text:
            return stripped
        text = stripped


def extract_document(body: str) -> str:
    """Pull the HTML document out of a summary response body.

    A JSON object with a non-blank string ``data`` field supplies the
    document; any other body is the document itself.
    """
    document = body
    try:
        parsed = json.loads(body)
    except json.JSONDecodeError:
        parsed = None

    if isinstance(parsed, dict):
        data = parsed.get("data")
        if isinstance(data, str) and data.strip():
            document = data
        elif isinstance(parsed.get("msg"), str):
            logger.info(f"Summary response carried no document: {parsed['msg']}")

    return strip_code_fences(document)


class SummarizationOrchestrator:
    """Runs summarize requests and publishes their documents.

    Each message can have at most one summarize call in flight. Calls for
    different messages run independently; whichever settles last owns the
    displayed summary.
    """

    def __init__(self, client: BackendClient, artifacts: ArtifactManager) -> None:
        self._client = client
        self._artifacts = artifacts
        self._busy: set[int] = set()

    def is_busy(self, message_id: int) -> bool:
        return message_id in self._busy

    async def summarize(
        self,
        message: Message,
        on_start: Callable[[], None] | None = None,
    ) -> SummaryOutcome:
        """Summarize an assistant message and publish the result.

        Args:
            message: The assistant message to summarize.
            on_start: Called once the message is marked busy, before the
                      request goes out.

        Returns:
            Outcome describing whether a new artifact was published. Failed
            outcomes carry a user-facing error and leave the active artifact
            as it was. A summary that settles after the artifact manager
            was closed is discarded without writing a file.

        Raises:
            ValueError: If called with a user message.
        """
        if message.sender is not Sender.ASSISTANT:
            raise ValueError("Only assistant messages can be summarized")
        if message.id in self._busy:
            return SummaryOutcome(message_id=message.id, status=SummaryStatus.BUSY)
        if not message.can_summarize:
            return SummaryOutcome(message_id=message.id, status=SummaryStatus.UNAVAILABLE)

        self._busy.add(message.id)
        try:
            if on_start is not None:
                on_start()
            document = await self._generate(message)
            artifact = self._artifacts.publish(document, message.id)
        except (SummarizationError, OSError) as e:
            logger.warning(f"Summary for message {message.id} failed: {e}")
            return SummaryOutcome(
                message_id=message.id,
                status=SummaryStatus.FAILED,
                error=f"Failed to generate summary: {e}",
            )
        finally:
            self._busy.discard(message.id)

        if artifact is None:
            # Session closed while the request was in flight
            return SummaryOutcome(message_id=message.id, status=SummaryStatus.DISCARDED)
        return SummaryOutcome(
            message_id=message.id,
            status=SummaryStatus.PUBLISHED,
            artifact=artifact,
        )

    async def _generate(self, message: Message) -> str:
        request = build_summary_request(message)
        try:
            response = await self._client.generate_summary(request)
        except TransportError as e:
            raise SummarizationError(str(e)) from e

        if not response.is_success:
            raise SummarizationError(f"HTTP {response.status_code}: {response.text}")
        return extract_document(response.text)
