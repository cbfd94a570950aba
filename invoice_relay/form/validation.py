"""Field validators for the invoice form."""

import re

from invoice_relay.form.state import InvoiceFields, MediaPlan

REQUIRED_MESSAGE = "Обязательное поле"
RUBLES_MESSAGE = "Введите корректное количество рублей"
KOPECKS_MESSAGE = "Введите 0-99 копеек"

_RUBLES_RE = re.compile(r"\d+", re.ASCII)
_KOPECKS_RE = re.compile(r"\d{0,2}", re.ASCII)

_REQUIRED_FIELDS = (
    "invoice_number",
    "invoice_date",
    "period",
    "counterparty",
    "service",
    "plan_article",
)


def validate_fields(fields: InvoiceFields) -> dict[str, str]:
    """
    Check every field and return {field_name: message} for the failures.

    An empty dict means the form can be assembled. Kopecks may be left
    empty; the housing complex is required only under the Atmosphere plan.
    """
    errors: dict[str, str] = {}

    if not _RUBLES_RE.fullmatch(fields.rubles):
        errors["rubles"] = RUBLES_MESSAGE
    if not _KOPECKS_RE.fullmatch(fields.kopecks):
        errors["kopecks"] = KOPECKS_MESSAGE

    for name in _REQUIRED_FIELDS:
        if not getattr(fields, name):
            errors[name] = REQUIRED_MESSAGE

    if fields.plan == MediaPlan.ATMOSPHERE and not fields.housing_complex:
        errors["housing_complex"] = REQUIRED_MESSAGE

    if not fields.media_plan_month:
        errors["media_plan_month"] = REQUIRED_MESSAGE

    return errors
