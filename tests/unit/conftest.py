"""
Unit Test Fixtures.

Fixtures for unit tests - all external services are stubbed.
Unit tests should be fast and isolated, never touching the network.
"""

from unittest.mock import MagicMock

import pytest
from fastapi import Request

from invoice_relay.telegram.models import Attachment


@pytest.fixture
def mock_request() -> MagicMock:
    """
    Mock FastAPI request for exception handler tests.

    Usage:
        async def test_handler(mock_request):
            response = await application_error_handler(mock_request, exc)
    """
    request = MagicMock(spec=Request)
    request.state.request_id = "test-request-id"
    request.headers = {}
    request.method = "POST"
    request.url = MagicMock()
    request.url.path = "/api/send-telegram"
    return request


@pytest.fixture
def pdf_attachment() -> Attachment:
    """Small PDF attachment with a Cyrillic filename."""
    data = b"%PDF-1.4 test invoice"
    return Attachment(data=data, filename="Счёт №46.pdf", mime_type="application/pdf", size=len(data))
