"""
Integration Test Fixtures.

Fixtures for integration tests - the real FastAPI application with the
relay service swapped for one that talks to the Telegram stub.
"""

from collections.abc import AsyncGenerator
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from invoice_relay.backend.core.dependencies import get_relay_service
from invoice_relay.backend.services.relay import RelayService


# =============================================================================
# API Client Fixtures
# =============================================================================


async def _client_for(service: RelayService) -> AsyncGenerator[AsyncClient, None]:
    from invoice_relay.backend.main import create_app

    app = create_app()
    app.dependency_overrides[get_relay_service] = lambda: service

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
async def client(relay_service: RelayService) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client whose relay calls reach the Telegram stub.

    Usage:
        async def test_health_endpoint(client: AsyncClient):
            response = await client.get("/health")
            assert response.status_code == 200
    """
    async for test_client in _client_for(relay_service):
        yield test_client


@pytest.fixture
async def client_without_token(
    relay_service_without_token: RelayService,
) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client for a backend with no bot token configured."""
    async for test_client in _client_for(relay_service_without_token):
        yield test_client


# =============================================================================
# API Response Assertion Helpers
# =============================================================================


class ApiAssertions:
    """Helper class for relay API response assertions."""

    @staticmethod
    def assert_success(response: Any, expected_status: int = 200) -> dict[str, Any]:
        """
        Assert the relay reported success.

        Returns:
            Response JSON data
        """
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        data = response.json()
        assert data.get("success") is True, f"Response not successful: {data}"
        return data

    @staticmethod
    def assert_error(
        response: Any,
        expected_status: int,
        expected_code: str | None = None,
    ) -> dict[str, Any]:
        """
        Assert the relay returned an error body `{error, details?, code}`.

        Returns:
            Response JSON data
        """
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        data = response.json()
        assert "success" not in data, f"Response should be error: {data}"
        assert data.get("error"), f"Missing error message: {data}"

        if expected_code:
            assert data.get("code") == expected_code, (
                f"Expected error code {expected_code}, got {data.get('code')}"
            )

        return data


@pytest.fixture
def api() -> ApiAssertions:
    """Provide API assertion helpers."""
    return ApiAssertions()
