"""
Relay Service.

Checks a relay request and forwards it to Telegram. The checks run in a
fixed order and each one fails before any outbound call is made:

    1. message text and channel id present   → ValidationError (400)
    2. bot token configured                  → ConfigurationError (500)
    3. one Telegram call                     → ProviderResponseError (500)

Usage:
    service = RelayService(bot_token, telegram_config, timeout=30.0)
    result = await service.relay("Прошу согласовать…", "-100123", attachment)
"""

import httpx

from invoice_relay.backend.core.config_schema import TelegramRelaySchema
from invoice_relay.backend.core.exceptions import ConfigurationError, ValidationError
from invoice_relay.backend.core.logging import get_logger, log_with_source
from invoice_relay.telegram.models import Attachment, RelayResult, build_outbound
from invoice_relay.telegram.sender import TelegramSender

logger = get_logger(__name__)

MISSING_PARAMETERS_MESSAGE = "Missing required parameters: message and channelId"
MISSING_TOKEN_MESSAGE = (
    "Telegram bot token not configured. "
    "Please set TELEGRAM_BOT_TOKEN in config/.env or the environment"
)


class RelayService:
    """Stateless relay from the form backend to the Telegram Bot API."""

    def __init__(
        self,
        bot_token: str | None,
        telegram_config: TelegramRelaySchema,
        timeout: float,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._bot_token = bot_token
        self._telegram_config = telegram_config
        self._timeout = timeout
        self._http_client = http_client

    @property
    def max_upload_bytes(self) -> int:
        return self._telegram_config.max_upload_bytes

    async def relay(
        self,
        text: str,
        channel_id: str,
        attachment: Attachment | None = None,
    ) -> RelayResult:
        """
        Forward one message, with or without an attachment.

        Returns:
            Successful RelayResult with the confirmation text and Telegram payload

        Raises:
            ValidationError: text or channel id is empty
            ConfigurationError: no bot token configured
            ProviderResponseError: Telegram rejected the call or replied with non-JSON
        """
        if not text or not channel_id:
            raise ValidationError(MISSING_PARAMETERS_MESSAGE)

        if not self._bot_token:
            raise ConfigurationError(MISSING_TOKEN_MESSAGE)

        outbound = build_outbound(text, channel_id, attachment)

        sender = TelegramSender(
            bot_token=self._bot_token,
            api_base_url=self._telegram_config.api_base_url,
            parse_mode=self._telegram_config.parse_mode,
            timeout=self._timeout,
            http_client=self._http_client,
        )
        payload = await sender.send(outbound)

        log_with_source(
            logger,
            "relay",
            "info",
            "Message relayed",
            method=outbound.method,
            chat_id=channel_id,
        )

        return RelayResult.ok(outbound.confirmation, payload)
