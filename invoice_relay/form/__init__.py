"""
Invoice Form.

Form state, field validation, message assembly and the event handlers
that move the form from one state to the next.

Structure:
    invoice_relay/form/
    ├── __init__.py      # This file
    ├── state.py         # InvoiceFields, AttachedFile, InvoiceFormState
    ├── validation.py    # Field validators with the user-facing messages
    ├── assembly.py      # Approval request text
    └── handlers.py      # submit, select_plan, attach_file, remove_file, send
"""

from invoice_relay.form.assembly import assemble_message, format_invoice_date
from invoice_relay.form.state import (
    HOUSING_COMPLEXES,
    MEDIA_PLAN_MONTHS,
    AttachedFile,
    InvoiceFields,
    InvoiceFormState,
    MediaPlan,
)
from invoice_relay.form.validation import validate_fields

__all__ = [
    "HOUSING_COMPLEXES",
    "MEDIA_PLAN_MONTHS",
    "AttachedFile",
    "InvoiceFields",
    "InvoiceFormState",
    "MediaPlan",
    "assemble_message",
    "format_invoice_date",
    "validate_fields",
]
