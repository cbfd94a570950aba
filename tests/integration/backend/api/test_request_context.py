"""
Integration Tests for Request Context Middleware.

Tests that request context is properly propagated through the API.
"""

import pytest
from httpx import AsyncClient


class TestRequestIdHeader:
    """Tests for X-Request-ID header handling."""

    @pytest.mark.asyncio
    async def test_generates_request_id(self, client: AsyncClient):
        """Should generate X-Request-ID when not provided."""
        response = await client.get("/health")

        assert response.status_code == 200
        # UUID format: 8-4-4-4-12 = 36 characters
        assert len(response.headers["X-Request-ID"]) == 36

    @pytest.mark.asyncio
    async def test_propagates_provided_request_id(self, client: AsyncClient):
        custom_id = "my-custom-request-id-12345"

        response = await client.get("/health", headers={"X-Request-ID": custom_id})

        assert response.headers["X-Request-ID"] == custom_id

    @pytest.mark.asyncio
    async def test_relay_response_carries_request_id(self, client: AsyncClient):
        custom_id = "relay-request-id"

        response = await client.post(
            "/api/send-telegram",
            data={"message": "text", "channelId": "-100123"},
            headers={"X-Request-ID": custom_id, "X-Frontend-ID": "web"},
        )

        assert response.status_code == 200
        assert response.headers["X-Request-ID"] == custom_id


class TestResponseTimeHeader:
    """Tests for X-Response-Time header."""

    @pytest.mark.asyncio
    async def test_response_time_is_numeric(self, client: AsyncClient):
        response = await client.get("/health")

        time_header = response.headers["X-Response-Time"]
        assert time_header.endswith("ms")
        assert time_header[:-2].isdigit()

    @pytest.mark.asyncio
    async def test_response_time_on_error(self, client: AsyncClient):
        """Error responses from the relay still carry timing and request id."""
        response = await client.post("/api/send-telegram", data={})

        assert response.status_code == 400
        assert "X-Response-Time" in response.headers
        assert "X-Request-ID" in response.headers
