"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - client_config: Config pointing at a fake backend address
    - stub_backend: In-process FastAPI stand-in for the StratSync backend
    - backend_client: BackendClient routed to the stub via ASGITransport
    - artifact_manager: ArtifactManager writing into a tmp directory
    - chat_session: ChatSession wired to all of the above
"""

import inspect
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any

import pytest
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from httpx import ASGITransport

from stratsync.backend.client import (
    GENERATE_SUMMARY_PATH,
    PROCESS_QUERY_PATH,
    BackendClient,
)
from stratsync.config import ClientConfig
from stratsync.core.artifacts import ArtifactManager
from stratsync.core.session import ChatSession

Handler = Callable[[dict[str, Any]], Response | Awaitable[Response]]


class StubBackend:
    """Scriptable fake of the two backend endpoints.

    Tests assign ``query_handler`` / ``summary_handler`` to control the
    responses. Every request body is recorded in ``requests``.
    """

    def __init__(self) -> None:
        self.requests: list[tuple[str, dict[str, Any]]] = []
        self.query_handler: Handler = lambda payload: JSONResponse({"reply": "ok"})
        self.summary_handler: Handler = lambda payload: PlainTextResponse("<p>summary</p>")
        self.app = self._build_app()

    def requests_to(self, path: str) -> list[dict[str, Any]]:
        return [payload for route, payload in self.requests if route == path]

    def _build_app(self) -> FastAPI:
        app = FastAPI()

        @app.post(PROCESS_QUERY_PATH)
        async def process_user_query(request: Request) -> Response:
            return await self._dispatch(PROCESS_QUERY_PATH, request, self.query_handler)

        @app.post(GENERATE_SUMMARY_PATH)
        async def generate_summary(request: Request) -> Response:
            return await self._dispatch(GENERATE_SUMMARY_PATH, request, self.summary_handler)

        return app

    async def _dispatch(self, path: str, request: Request, handler: Handler) -> Response:
        payload = await request.json()
        self.requests.append((path, payload))
        result = handler(payload)
        if inspect.isawaitable(result):
            result = await result
        return result


@pytest.fixture
def client_config(tmp_path: Path) -> ClientConfig:
    """Return config with a fixed backend address and tmp artifact dir."""
    return ClientConfig(
        api_base_url="http://backend.test",
        request_timeout=5.0,
        title="StratSync",
        artifact_dir=tmp_path / "artifacts",
    )


@pytest.fixture
def stub_backend() -> StubBackend:
    return StubBackend()


@pytest.fixture
def backend_client(client_config: ClientConfig, stub_backend: StubBackend) -> BackendClient:
    """Create a BackendClient that talks to the stub in-process."""
    return BackendClient(client_config, transport=ASGITransport(app=stub_backend.app))


@pytest.fixture
def artifact_manager(client_config: ClientConfig) -> ArtifactManager:
    return ArtifactManager(client_config.artifact_dir)


@pytest.fixture
def chat_session(
    backend_client: BackendClient, artifact_manager: ArtifactManager
) -> ChatSession:
    return ChatSession(backend_client, artifact_manager)
