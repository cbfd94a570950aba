"""
Relay Endpoint.

POST /api/send-telegram: multipart form with `message`, `channelId`
and an optional `file` part. Forwards to Telegram via RelayService.
"""

from typing import Annotated

from fastapi import APIRouter, File, Form, UploadFile

from invoice_relay.backend.core.dependencies import RelayServiceDep, RequestId
from invoice_relay.backend.core.exceptions import PayloadTooLargeError
from invoice_relay.backend.core.logging import get_logger, log_with_source
from invoice_relay.backend.schemas.relay import RelayErrorResponse, RelaySuccessResponse
from invoice_relay.telegram.filename import fix_filename_encoding
from invoice_relay.telegram.models import Attachment

router = APIRouter()
logger = get_logger(__name__)

_ERROR_RESPONSES = {
    400: {"model": RelayErrorResponse, "description": "Missing message or channelId"},
    413: {"model": RelayErrorResponse, "description": "Attachment above the upload ceiling"},
    500: {"model": RelayErrorResponse, "description": "Configuration or Telegram failure"},
}


async def _read_attachment(upload: UploadFile, max_bytes: int) -> Attachment:
    """Enforce the upload ceiling, then load the file and repair its name."""
    limit_message = f"File too large. Maximum size is {max_bytes // (1024 * 1024)} MiB"

    if upload.size is not None and upload.size > max_bytes:
        raise PayloadTooLargeError(limit_message)

    data = await upload.read()
    if len(data) > max_bytes:
        raise PayloadTooLargeError(limit_message)

    filename = fix_filename_encoding(upload.filename or "document")
    mime_type = upload.content_type or "application/octet-stream"

    log_with_source(
        logger,
        "relay",
        "info",
        "Attachment received",
        original_filename=upload.filename,
        fixed_filename=filename,
        mime_type=mime_type,
        size=len(data),
    )

    return Attachment(data=data, filename=filename, mime_type=mime_type, size=len(data))


@router.post(
    "/api/send-telegram",
    response_model=RelaySuccessResponse,
    responses=_ERROR_RESPONSES,
    summary="Send a message to Telegram",
    description=(
        "Relay message text to a Telegram chat. With a `file` part the text "
        "becomes the caption of a document."
    ),
)
async def send_telegram(
    relay_service: RelayServiceDep,
    request_id: RequestId,
    message: Annotated[str, Form()] = "",
    channel_id: Annotated[str, Form(alias="channelId")] = "",
    file: Annotated[UploadFile | None, File()] = None,
) -> RelaySuccessResponse:
    """Relay one message, attaching the uploaded file when present."""
    attachment = None
    # Browsers send an empty, unnamed part when no file is chosen
    if file is not None and file.filename:
        attachment = await _read_attachment(file, relay_service.max_upload_bytes)

    log_with_source(
        logger,
        "relay",
        "debug",
        "Relay request received",
        has_attachment=attachment is not None,
        chat_id=channel_id,
    )

    result = await relay_service.relay(message, channel_id, attachment)
    return RelaySuccessResponse(message=result.message, data=result.provider_payload)
