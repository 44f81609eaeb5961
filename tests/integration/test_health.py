"""Integration tests for the hosting FastAPI application."""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from stratsync.api.app import create_app
from stratsync.config import ClientConfig


class TestHealthEndpoint:
    """Tests for GET /health."""

    @pytest.fixture
    async def client(self, client_config: ClientConfig) -> AsyncGenerator[AsyncClient, None]:
        """Create async HTTP client with ASGI transport."""
        transport = ASGITransport(app=create_app(client_config))
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client

    async def test_health_reports_healthy(self, client: AsyncClient) -> None:
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "service": "stratsync-client"}

    async def test_app_keeps_config(self, client_config: ClientConfig) -> None:
        app = create_app(client_config)

        assert app.state.config is client_config
        assert app.title == "StratSync Client"
