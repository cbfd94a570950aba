"""Approval request text assembled from the form fields."""

from datetime import date

from invoice_relay.form.state import InvoiceFields, MediaPlan


def format_invoice_date(value: date | str | None) -> str:
    """Render a date as DD.MM.YYYY; text is kept as typed."""
    if value is None:
        return ""
    if isinstance(value, date):
        return value.strftime("%d.%m.%Y")
    return value


def assemble_message(fields: InvoiceFields) -> str:
    """
    Build the approval request text.

    No validation happens here: empty fields render as empty strings.
    The opening guillemet is never closed.
    """
    housing = ""
    if fields.plan == MediaPlan.ATMOSPHERE and fields.housing_complex:
        housing = f" ЖК: {fields.housing_complex}"

    return "".join(
        [
            f"«Прошу согласовать оплату в сумме {fields.rubles} руб. {fields.kopecks} коп.",
            f" по счету №{fields.invoice_number} от {format_invoice_date(fields.invoice_date)}",
            f" за период {fields.period}",
            f" подрядчику {fields.counterparty}",
            f" за {fields.service}",
            f" по МП {fields.plan_article}",
            housing,
            f" Месяц МП: {fields.media_plan_month}",
        ]
    )
