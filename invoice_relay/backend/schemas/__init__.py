# Pydantic schemas package
from invoice_relay.backend.schemas.relay import (
    RelayErrorResponse,
    RelaySuccessResponse,
)

__all__ = [
    "RelayErrorResponse",
    "RelaySuccessResponse",
]
