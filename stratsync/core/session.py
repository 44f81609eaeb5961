"""Per-page chat controller.

Wires transport, normalization, conversation state and summarization into
the flow the UI drives. Holds no UI objects, so it can be exercised
directly in tests.
"""

import logging
from collections.abc import Callable

from stratsync.backend.client import BackendClient, TransportError
from stratsync.core.artifacts import ArtifactManager
from stratsync.core.conversation import ConversationStore
from stratsync.core.normalizer import ErrorReply, normalize
from stratsync.core.summarizer import SummarizationOrchestrator
from stratsync.models.schemas import Message, SummaryOutcome

logger = logging.getLogger(__name__)


class ChatSession:
    """Manages chat state for a user session."""

    def __init__(
        self,
        client: BackendClient,
        artifacts: ArtifactManager | None = None,
    ) -> None:
        self.store = ConversationStore()
        self.artifacts = artifacts or ArtifactManager()
        self.summarizer = SummarizationOrchestrator(client, self.artifacts)
        self.pending_queries = 0
        self._client = client

    @property
    def is_waiting(self) -> bool:
        return self.pending_queries > 0

    async def send_query(
        self,
        text: str,
        on_sent: Callable[[], None] | None = None,
    ) -> Message | None:
        """Send a query and append the reply to the conversation.

        The user message is appended before the request goes out; the reply
        is appended whenever it arrives, so overlapping queries land in
        arrival order.

        Args:
            text: Raw input from the user.
            on_sent: Called once the user message is in the conversation.

        Returns:
            The appended assistant message, or None for blank input.
        """
        query = text.strip()
        if not query:
            return None

        self.store.append(Message.from_user(query))
        self.pending_queries += 1
        if on_sent is not None:
            on_sent()
        try:
            try:
                response = await self._client.process_query(query)
            except TransportError as e:
                reply = ErrorReply(detail=str(e))
            else:
                reply = normalize(query, response)

            message = reply.to_message()
            self.store.append(message)
            logger.info(f"Appended {reply.kind} reply {message.id}")
            return message
        finally:
            self.pending_queries -= 1

    async def summarize(
        self,
        message: Message,
        on_start: Callable[[], None] | None = None,
    ) -> SummaryOutcome:
        return await self.summarizer.summarize(message, on_start)

    def close(self) -> None:
        """Release resources held for this session.

        Summaries still in flight are discarded when they settle.
        """
        self.artifacts.close()
