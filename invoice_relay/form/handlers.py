"""
Form Event Handlers.

Each handler takes the current InvoiceFormState and returns the next
one; the input state is never modified.

Usage:
    state = InvoiceFormState()
    state = set_field(state, "rubles", "789")
    state = submit(state)
    state = await send(state, client, channel_id)
"""

from typing import Any

from invoice_relay.backend.core.exceptions import ValidationError
from invoice_relay.backend.core.logging import get_logger, log_with_source
from invoice_relay.client.relay_client import RelayClient, UploadPolicy
from invoice_relay.form.assembly import assemble_message
from invoice_relay.form.state import AttachedFile, InvoiceFields, InvoiceFormState, MediaPlan
from invoice_relay.form.validation import validate_fields
from invoice_relay.telegram.models import ErrorKind

logger = get_logger(__name__)

FILE_ATTACHED_STATUS = "✅ Файл успешно загружен!"
NO_TEXT_STATUS = "Сначала сгенерируйте текст"
SENT_STATUS = "✅ Сообщение успешно отправлено в Telegram!"
UNKNOWN_ERROR = "Неизвестная ошибка"


def set_field(state: InvoiceFormState, name: str, value: Any) -> InvoiceFormState:
    """Set one field value and drop its stale error."""
    values = InvoiceFields.model_validate({**state.values.model_dump(), name: value})
    errors = {k: v for k, v in state.errors.items() if k != name}
    return state.model_copy(update={"values": values, "errors": errors})


def submit(state: InvoiceFormState) -> InvoiceFormState:
    """Validate the fields and assemble the message text when they pass."""
    errors = validate_fields(state.values)
    if errors:
        log_with_source(logger, "form", "debug", "Form rejected", fields=sorted(errors))
        return state.model_copy(update={"errors": errors, "result_text": ""})

    return state.model_copy(update={"errors": {}, "result_text": assemble_message(state.values)})


def select_plan(state: InvoiceFormState, plan: MediaPlan | str | None) -> InvoiceFormState:
    """
    Switch the media plan.

    The housing complex value is kept when leaving the Atmosphere plan
    but is no longer validated or rendered.
    """
    if not plan:
        return state

    values = state.values.model_copy(update={"plan": MediaPlan(plan)})
    errors = {k: v for k, v in state.errors.items() if k != "housing_complex"}
    return state.model_copy(update={"values": values, "errors": errors})


def attach_file(
    state: InvoiceFormState,
    file: AttachedFile,
    policy: UploadPolicy,
) -> InvoiceFormState:
    """Attach a file if it passes the upload policy; report rejection in the status."""
    try:
        policy.check(file.mime_type, file.size)
    except ValidationError as e:
        log_with_source(
            logger,
            "form",
            "info",
            "File rejected",
            mime_type=file.mime_type,
            size=file.size,
        )
        return state.model_copy(update={"send_status": f"❌ {e.message}"})

    return state.model_copy(update={"attached_file": file, "send_status": FILE_ATTACHED_STATUS})


def remove_file(state: InvoiceFormState) -> InvoiceFormState:
    return state.model_copy(update={"attached_file": None, "send_status": ""})


async def send(
    state: InvoiceFormState,
    client: RelayClient,
    channel_id: str,
) -> InvoiceFormState:
    """
    Send the assembled text, with the attached file if any.

    A state that is already sending is returned unchanged.
    """
    if state.is_sending:
        return state
    if not state.result_text:
        return state.model_copy(update={"send_status": NO_TEXT_STATUS})

    attachment = state.attached_file.to_attachment() if state.attached_file else None
    result = await client.send_message(state.result_text, channel_id, attachment)

    if result.success:
        status = SENT_STATUS
    elif result.error_kind == ErrorKind.NETWORK:
        status = f"❌ Ошибка отправки: {result.details or UNKNOWN_ERROR}"
    else:
        status = f"❌ Ошибка: {result.details or result.message or UNKNOWN_ERROR}"

    log_with_source(
        logger,
        "form",
        "info" if result.success else "warning",
        "Send finished",
        success=result.success,
        error_kind=result.error_kind.value if result.error_kind else None,
    )
    return state.model_copy(update={"send_status": status, "is_sending": False})
