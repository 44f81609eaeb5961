"""HTTPX adapter for the StratSync backend.

Issues the two outbound requests the client needs and hands back the raw
response. Interpretation of status codes and bodies is left to the callers.
"""

import logging

import httpx
from pydantic import BaseModel

from stratsync.config import ClientConfig, get_client_config
from stratsync.models.schemas import QueryRequest, SummaryRequest

logger = logging.getLogger(__name__)

PROCESS_QUERY_PATH = "/process_user_query/"
GENERATE_SUMMARY_PATH = "/generate_summary/"


class TransportError(Exception):
    """Raised when the backend cannot be reached."""

    pass


class BackendClient:
    """Thin async client for the query and summary endpoints.

    A fresh ``httpx.AsyncClient`` is opened per request, so instances are
    safe to share between concurrent flows on the same event loop.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the backend client.

        Args:
            config: Optional client configuration.
                    Loads from environment if not provided.
            transport: Optional HTTPX transport, used by tests to route
                       requests to an in-process app.
        """
        self._config = config or get_client_config()
        self._transport = transport

    async def process_query(self, query: str) -> httpx.Response:
        """Send a user query to the backend.

        Args:
            query: The user's free-text question.

        Returns:
            The raw backend response, whatever its status.

        Raises:
            TransportError: If the request could not be completed.
        """
        return await self._post(PROCESS_QUERY_PATH, QueryRequest(query=query))

    async def generate_summary(self, request: SummaryRequest) -> httpx.Response:
        """Ask the backend to render a summary document.

        Args:
            request: Query text plus the pre-serialized reply data.

        Returns:
            The raw backend response, whatever its status.

        Raises:
            TransportError: If the request could not be completed.
        """
        return await self._post(GENERATE_SUMMARY_PATH, request)

    async def _post(self, path: str, body: BaseModel) -> httpx.Response:
        async with httpx.AsyncClient(
            base_url=self._config.api_base_url,
            timeout=self._config.request_timeout,
            transport=self._transport,
        ) as client:
            try:
                response = await client.post(path, json=body.model_dump())
            except httpx.RequestError as e:
                logger.warning(f"Request to {path} failed: {e!r}")
                raise TransportError(f"Connection failed: {e}") from e

        logger.info(f"POST {path} -> HTTP {response.status_code}")
        return response
