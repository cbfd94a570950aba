"""
Relay Schemas.

Response bodies of POST /api/send-telegram. The field names are part of
the wire contract with the form front end and must not change.
"""

from typing import Any

from pydantic import BaseModel


class RelaySuccessResponse(BaseModel):
    """200 body: confirmation text plus the parsed Telegram payload."""

    success: bool = True
    message: str
    data: Any = None


class RelayErrorResponse(BaseModel):
    """
    4xx/5xx body.

    `details` is omitted when empty; `code` is the machine-readable error
    code used by the relay client to classify the failure.
    """

    error: str
    details: str | None = None
    code: str | None = None


# Example bodies:
#
#   {"success": true, "message": "Message sent successfully to Telegram",
#    "data": {"ok": true, "result": {"message_id": 42}}}
#
#   {"error": "Failed to send message to Telegram",
#    "details": "Bad Request: chat not found",
#    "code": "EXT_PROVIDER_RESPONSE_ERROR"}
