"""
Root Pytest Fixtures.

Shared fixtures available to all test types.

Telegram is never contacted: every provider call goes through an
httpx.MockTransport whose handler is a TelegramStub. Tests configure
the stub's reply and inspect the requests it recorded.
"""

import json
from collections.abc import AsyncGenerator, Generator

import httpx
import pytest

from invoice_relay.backend.core.config import get_app_config, get_settings
from invoice_relay.backend.core.config_schema import TelegramRelaySchema
from invoice_relay.backend.services.relay import RelayService

TEST_BOT_TOKEN = "123456:TEST-token"


# =============================================================================
# Telegram Stub
# =============================================================================


class TelegramStub:
    """
    Stand-in for the Telegram Bot API.

    Replies with `body` (raw text) and `status_code`, or raises `error`
    to simulate a transport failure. Every request is recorded with its
    body already read.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.body: str = json.dumps({"ok": True, "result": {"message_id": 42}})
        self.error: Exception | None = None

    def reply(self, status_code: int, body: str | dict) -> None:
        self.status_code = status_code
        self.body = body if isinstance(body, str) else json.dumps(body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, text=self.body)

    @property
    def last_request(self) -> httpx.Request:
        assert self.requests, "Telegram was not called"
        return self.requests[-1]


@pytest.fixture
def telegram_stub() -> TelegramStub:
    """Provide a fresh Telegram stub."""
    return TelegramStub()


@pytest.fixture
async def telegram_http_client(
    telegram_stub: TelegramStub,
) -> AsyncGenerator[httpx.AsyncClient, None]:
    """httpx client whose requests are answered by the Telegram stub."""
    async with httpx.AsyncClient(transport=httpx.MockTransport(telegram_stub.handler)) as client:
        yield client


# =============================================================================
# Relay Fixtures
# =============================================================================


@pytest.fixture
def bot_token() -> str:
    return TEST_BOT_TOKEN


@pytest.fixture
def telegram_config() -> TelegramRelaySchema:
    return TelegramRelaySchema(
        api_base_url="https://api.telegram.org",
        parse_mode="HTML",
        max_upload_bytes=20 * 1024 * 1024,
    )


@pytest.fixture
def relay_service(
    telegram_config: TelegramRelaySchema,
    telegram_http_client: httpx.AsyncClient,
) -> RelayService:
    """Relay service with a configured token, talking to the Telegram stub."""
    return RelayService(
        bot_token=TEST_BOT_TOKEN,
        telegram_config=telegram_config,
        timeout=5.0,
        http_client=telegram_http_client,
    )


@pytest.fixture
def relay_service_without_token(
    telegram_config: TelegramRelaySchema,
    telegram_http_client: httpx.AsyncClient,
) -> RelayService:
    """Relay service with no bot token configured."""
    return RelayService(
        bot_token=None,
        telegram_config=telegram_config,
        timeout=5.0,
        http_client=telegram_http_client,
    )


# =============================================================================
# Config Cache
# =============================================================================


@pytest.fixture
def clear_config_cache() -> Generator[None, None, None]:
    """Clear lru_cache around a test so it sees a fresh load."""
    get_settings.cache_clear()
    get_app_config.cache_clear()
    yield
    get_settings.cache_clear()
    get_app_config.cache_clear()


# =============================================================================
# Utility Fixtures
# =============================================================================


@pytest.fixture
def anyio_backend() -> str:
    """Specify the async backend for anyio."""
    return "asyncio"
