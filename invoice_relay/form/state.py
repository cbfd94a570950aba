"""
Form State.

The whole form is one pydantic model that handlers take and return, so
a state can be dumped, stored and restored with model_dump/model_validate.
"""

from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from invoice_relay.telegram.models import Attachment


class MediaPlan(str, Enum):
    """Media plan the invoice is booked against."""

    ATMOSPHERE = "Атмосфера"
    BH = "БХ"


# Housing complex is only asked for under the Atmosphere plan
HOUSING_COMPLEXES = ("Уютный", "Чемпион", "Парковый", "Общий")

MEDIA_PLAN_MONTHS = (
    "Январь",
    "Февраль",
    "Март",
    "Апрель",
    "Май",
    "Июнь",
    "Июль",
    "Август",
    "Сентябрь",
    "Октябрь",
    "Ноябрь",
    "Декабрь",
)


class AttachedFile(BaseModel):
    """A file picked in the form, held in memory until sent."""

    model_config = ConfigDict(frozen=True, ser_json_bytes="base64", val_json_bytes="base64")

    filename: str
    mime_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)

    def to_attachment(self) -> Attachment:
        return Attachment(
            data=self.data,
            filename=self.filename,
            mime_type=self.mime_type,
            size=self.size,
        )


class InvoiceFields(BaseModel):
    """
    Raw field values as typed by the user.

    Accepts both snake_case names and the camelCase names used by the
    web form (`invoiceNumber`, `planArticle`, ...).
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    rubles: str = ""
    kopecks: str = ""
    period: str = ""
    invoice_number: str = ""
    invoice_date: date | str | None = None
    counterparty: str = ""
    service: str = ""
    plan: MediaPlan = MediaPlan.ATMOSPHERE
    plan_article: str = ""
    housing_complex: str = ""
    media_plan_month: str = ""


class InvoiceFormState(BaseModel):
    """Everything the form shows: values, attachment, result text and status."""

    values: InvoiceFields = Field(default_factory=InvoiceFields)
    attached_file: AttachedFile | None = None
    result_text: str = ""
    errors: dict[str, str] = Field(default_factory=dict)
    send_status: str = ""
    is_sending: bool = False
