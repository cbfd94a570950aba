"""Data models for the Telegram relay."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar


class ErrorKind(str, Enum):
    """Categories of relay failure surfaced to the form."""

    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    PROVIDER_RESPONSE = "provider_response"
    NETWORK = "network"


@dataclass(frozen=True)
class Attachment:
    """A file to send along with the message."""

    data: bytes
    filename: str
    mime_type: str
    size: int


@dataclass(frozen=True)
class TextOnly:
    """Message without a file: JSON call to sendMessage."""

    text: str
    channel_id: str

    method: ClassVar[str] = "sendMessage"
    confirmation: ClassVar[str] = "Message sent successfully to Telegram"

    def log_fields(self) -> dict[str, Any]:
        return {"chat_id": self.channel_id}

    def request_kwargs(self, parse_mode: str) -> dict[str, Any]:
        return {
            "json": {
                "chat_id": self.channel_id,
                "text": self.text,
                "parse_mode": parse_mode,
            },
        }


@dataclass(frozen=True)
class WithAttachment:
    """Message with a file: multipart call to sendDocument, text as caption."""

    text: str
    channel_id: str
    attachment: Attachment

    method: ClassVar[str] = "sendDocument"
    confirmation: ClassVar[str] = "Message with file sent successfully to Telegram"

    def log_fields(self) -> dict[str, Any]:
        return {
            "chat_id": self.channel_id,
            "filename": self.attachment.filename,
            "mime_type": self.attachment.mime_type,
            "size": self.attachment.size,
        }

    def request_kwargs(self, parse_mode: str) -> dict[str, Any]:
        return {
            "data": {
                "chat_id": self.channel_id,
                "caption": self.text,
                "parse_mode": parse_mode,
            },
            "files": {
                "document": (
                    self.attachment.filename,
                    self.attachment.data,
                    self.attachment.mime_type,
                ),
            },
        }


OutboundMessage = TextOnly | WithAttachment


def build_outbound(
    text: str,
    channel_id: str,
    attachment: Attachment | None = None,
) -> OutboundMessage:
    """Pick the message variant by presence of an attachment."""
    if attachment is None:
        return TextOnly(text=text, channel_id=channel_id)
    return WithAttachment(text=text, channel_id=channel_id, attachment=attachment)


@dataclass
class RelayResult:
    """
    Outcome of one relay call.

    On success `message` is the confirmation text and `provider_payload`
    the parsed Telegram response. On failure `error_kind` says which
    side rejected the message and `details` carries the reason.
    """

    success: bool
    message: str = ""
    provider_payload: Any = None
    error_kind: ErrorKind | None = None
    details: str | None = None

    @classmethod
    def ok(cls, message: str, provider_payload: Any = None) -> RelayResult:
        return cls(success=True, message=message, provider_payload=provider_payload)

    @classmethod
    def failed(
        cls,
        error_kind: ErrorKind,
        details: str | None = None,
        message: str = "",
    ) -> RelayResult:
        return cls(success=False, message=message, error_kind=error_kind, details=details)
