"""Fixtures for invoice form tests."""

import pytest

from invoice_relay.form.state import InvoiceFields, MediaPlan


@pytest.fixture
def sample_fields() -> InvoiceFields:
    """The approval request used across the end-to-end form tests."""
    return InvoiceFields.model_validate(
        {
            "rubles": "789",
            "kopecks": "50",
            "invoiceNumber": "46",
            "invoiceDate": "01.10.2025",
            "period": "с 08.10 по 16.10.2025г",
            "counterparty": "ООО Ромашка",
            "service": "реклама",
            "planArticle": "11.3",
        }
    )


@pytest.fixture
def complete_fields(sample_fields: InvoiceFields) -> InvoiceFields:
    """Sample fields with everything the validators require."""
    return sample_fields.model_copy(
        update={
            "plan": MediaPlan.ATMOSPHERE,
            "housing_complex": "Уютный",
            "media_plan_month": "Октябрь",
        }
    )
