"""Unit tests for the Telegram sender."""

import json

import httpx
import pytest

from invoice_relay.backend.core.exceptions import ProviderResponseError, ProviderUnavailableError
from invoice_relay.telegram.models import Attachment, TextOnly, WithAttachment
from invoice_relay.telegram.sender import TelegramSender

TOKEN = "987654:SENDER-token"


@pytest.fixture
def sender(telegram_http_client: httpx.AsyncClient) -> TelegramSender:
    return TelegramSender(
        bot_token=TOKEN,
        api_base_url="https://api.telegram.org/",
        http_client=telegram_http_client,
    )


class TestMethodUrl:
    def test_embeds_token_and_method(self, sender: TelegramSender) -> None:
        assert sender.method_url("sendMessage") == (
            f"https://api.telegram.org/bot{TOKEN}/sendMessage"
        )


class TestSendTextOnly:
    """JSON path to sendMessage."""

    @pytest.mark.asyncio
    async def test_posts_json_to_send_message(
        self, sender: TelegramSender, telegram_stub
    ) -> None:
        payload = await sender.send(TextOnly(text="Привет", channel_id="-100123"))

        request = telegram_stub.last_request
        assert request.method == "POST"
        assert request.url.path == f"/bot{TOKEN}/sendMessage"
        assert request.headers["content-type"] == "application/json"
        assert json.loads(request.content) == {
            "chat_id": "-100123",
            "text": "Привет",
            "parse_mode": "HTML",
        }
        assert payload == {"ok": True, "result": {"message_id": 42}}

    @pytest.mark.asyncio
    async def test_exactly_one_call(self, sender: TelegramSender, telegram_stub) -> None:
        await sender.send(TextOnly(text="a", channel_id="b"))

        assert len(telegram_stub.requests) == 1


class TestSendWithAttachment:
    """Multipart path to sendDocument."""

    @pytest.mark.asyncio
    async def test_posts_multipart_to_send_document(
        self,
        sender: TelegramSender,
        telegram_stub,
        pdf_attachment: Attachment,
    ) -> None:
        await sender.send(
            WithAttachment(text="Прошу согласовать", channel_id="-100123", attachment=pdf_attachment)
        )

        request = telegram_stub.last_request
        assert request.url.path == f"/bot{TOKEN}/sendDocument"
        assert request.headers["content-type"].startswith("multipart/form-data")

        body = request.content
        assert b'name="chat_id"' in body
        assert b'name="caption"' in body
        assert "Прошу согласовать".encode("utf-8") in body
        assert b'name="parse_mode"' in body
        assert b'name="document"' in body
        assert pdf_attachment.data in body
        assert b"Content-Type: application/pdf" in body


class TestResponseHandling:
    """Provider reply normalization."""

    @pytest.mark.asyncio
    async def test_non_json_body_reports_raw_text(
        self, sender: TelegramSender, telegram_stub
    ) -> None:
        telegram_stub.reply(502, "<html>Bad Gateway</html>")

        with pytest.raises(ProviderResponseError) as exc_info:
            await sender.send(TextOnly(text="a", channel_id="b"))

        assert exc_info.value.details == "Invalid response from Telegram API: <html>Bad Gateway</html>"
        assert exc_info.value.message == "Failed to send message to Telegram"
        assert exc_info.value.provider_status == 502

    @pytest.mark.asyncio
    async def test_non_json_success_body_is_still_an_error(
        self, sender: TelegramSender, telegram_stub
    ) -> None:
        telegram_stub.reply(200, "not json")

        with pytest.raises(ProviderResponseError, match="Failed to send message to Telegram") as exc_info:
            await sender.send(TextOnly(text="a", channel_id="b"))

        assert exc_info.value.details == "Invalid response from Telegram API: not json"

    @pytest.mark.asyncio
    async def test_error_status_uses_description(
        self, sender: TelegramSender, telegram_stub
    ) -> None:
        telegram_stub.reply(400, {"ok": False, "description": "Bad Request: chat not found"})

        with pytest.raises(ProviderResponseError) as exc_info:
            await sender.send(TextOnly(text="a", channel_id="b"))

        assert exc_info.value.details == "Bad Request: chat not found"
        assert exc_info.value.code == "EXT_PROVIDER_RESPONSE_ERROR"

    @pytest.mark.asyncio
    async def test_error_status_without_description(
        self, sender: TelegramSender, telegram_stub
    ) -> None:
        telegram_stub.reply(500, {"ok": False})

        with pytest.raises(ProviderResponseError) as exc_info:
            await sender.send(TextOnly(text="a", channel_id="b"))

        assert exc_info.value.details == "Failed to send message"


class TestTransportFailure:
    """Telegram unreachable."""

    @pytest.mark.asyncio
    async def test_connect_error_is_provider_unavailable(
        self, sender: TelegramSender, telegram_stub
    ) -> None:
        telegram_stub.error = httpx.ConnectError("Connection refused")

        with pytest.raises(ProviderUnavailableError) as exc_info:
            await sender.send(TextOnly(text="a", channel_id="b"))

        assert exc_info.value.details == "Connection refused"
        assert exc_info.value.code == "EXT_PROVIDER_UNAVAILABLE"

    @pytest.mark.asyncio
    async def test_token_is_redacted_from_details(
        self, sender: TelegramSender, telegram_stub
    ) -> None:
        telegram_stub.error = httpx.ReadTimeout(
            f"Timed out on https://api.telegram.org/bot{TOKEN}/sendMessage"
        )

        with pytest.raises(ProviderUnavailableError) as exc_info:
            await sender.send(TextOnly(text="a", channel_id="b"))

        assert TOKEN not in exc_info.value.details
        assert "<token>" in exc_info.value.details
