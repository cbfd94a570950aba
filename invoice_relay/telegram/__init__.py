"""
Telegram Provider Layer.

Outbound calls to the Telegram Bot API made on behalf of the relay backend.

Structure:
    invoice_relay/telegram/
    ├── __init__.py      # This file
    ├── models.py        # Attachment, TextOnly | WithAttachment, RelayResult
    ├── filename.py      # Filename encoding repair for multipart uploads
    └── sender.py        # httpx sender for sendMessage / sendDocument

Usage:
    from invoice_relay.telegram import TelegramSender, build_outbound

    sender = TelegramSender(bot_token)
    payload = await sender.send(build_outbound(text, channel_id, attachment))
"""

from invoice_relay.telegram.filename import fix_filename_encoding
from invoice_relay.telegram.models import (
    Attachment,
    ErrorKind,
    OutboundMessage,
    RelayResult,
    TextOnly,
    WithAttachment,
    build_outbound,
)
from invoice_relay.telegram.sender import TelegramSender

__all__ = [
    "Attachment",
    "ErrorKind",
    "OutboundMessage",
    "RelayResult",
    "TelegramSender",
    "TextOnly",
    "WithAttachment",
    "build_outbound",
    "fix_filename_encoding",
]
