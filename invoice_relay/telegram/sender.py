"""
Telegram Bot API Sender.

Issues exactly one call per message: sendMessage (JSON) for TextOnly,
sendDocument (multipart) for WithAttachment. The body is read as text
first so a non-JSON reply can be reported verbatim. No retries.
"""

from __future__ import annotations

import json
from typing import Any

import httpx

from invoice_relay.backend.core.exceptions import (
    ProviderResponseError,
    ProviderUnavailableError,
)
from invoice_relay.backend.core.logging import get_logger, log_with_source
from invoice_relay.telegram.models import OutboundMessage

logger = get_logger(__name__)

DEFAULT_API_BASE_URL = "https://api.telegram.org"


class TelegramSender:
    """Sends outbound messages to the Telegram Bot API over httpx."""

    def __init__(
        self,
        bot_token: str,
        api_base_url: str = DEFAULT_API_BASE_URL,
        parse_mode: str = "HTML",
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._bot_token = bot_token
        self._api_base_url = api_base_url.rstrip("/")
        self._parse_mode = parse_mode
        self._timeout = timeout
        self._http_client = http_client

    def method_url(self, method: str) -> str:
        return f"{self._api_base_url}/bot{self._bot_token}/{method}"

    async def send(self, outbound: OutboundMessage) -> Any:
        """
        Deliver one message and return the parsed Telegram payload.

        Raises:
            ProviderUnavailableError: Telegram could not be reached
            ProviderResponseError: Non-JSON body or non-2xx status
        """
        url = self.method_url(outbound.method)
        kwargs = outbound.request_kwargs(self._parse_mode)

        log_with_source(
            logger,
            "telegram",
            "info",
            "Sending to Telegram",
            method=outbound.method,
            **outbound.log_fields(),
        )

        try:
            if self._http_client is not None:
                response = await self._http_client.post(url, **kwargs)
            else:
                async with httpx.AsyncClient(verify=True, timeout=self._timeout) as client:
                    response = await client.post(url, **kwargs)
        except httpx.HTTPError as e:
            details = self._redact(str(e) or type(e).__name__)
            log_with_source(
                logger,
                "telegram",
                "error",
                "Telegram API unreachable",
                method=outbound.method,
                error=details,
            )
            raise ProviderUnavailableError(details) from e

        return self._parse_response(outbound.method, response)

    def _parse_response(self, method: str, response: httpx.Response) -> Any:
        raw = response.text

        log_with_source(
            logger,
            "telegram",
            "debug",
            "Telegram raw response",
            method=method,
            status_code=response.status_code,
            body=raw,
        )

        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as e:
            log_with_source(
                logger,
                "telegram",
                "error",
                "Failed to parse Telegram response",
                method=method,
                status_code=response.status_code,
            )
            raise ProviderResponseError(
                f"Invalid response from Telegram API: {raw}",
                provider_status=response.status_code,
            ) from e

        if not response.is_success:
            description = payload.get("description") if isinstance(payload, dict) else None
            log_with_source(
                logger,
                "telegram",
                "error",
                "Telegram API error",
                method=method,
                status_code=response.status_code,
                description=description,
            )
            raise ProviderResponseError(
                description or "Failed to send message",
                provider_status=response.status_code,
            )

        return payload

    def _redact(self, text: str) -> str:
        if self._bot_token:
            return text.replace(self._bot_token, "<token>")
        return text
