"""
FastAPI Dependencies.

Shared dependencies for request handling.
"""

from typing import Annotated

from fastapi import Depends, Header

from invoice_relay.backend.core.config import get_app_config, get_settings
from invoice_relay.backend.services.relay import RelayService


async def get_request_id(x_request_id: str | None = Header(None)) -> str:
    """
    Extract or generate request ID from headers.

    Used for request tracing and correlation.
    """
    import uuid

    return x_request_id or str(uuid.uuid4())


RequestId = Annotated[str, Depends(get_request_id)]


def get_relay_service() -> RelayService:
    """
    Build the relay service for one request.

    The token may be missing here; the service reports that per request
    after validating the input.
    """
    app_config = get_app_config()
    return RelayService(
        bot_token=get_settings().telegram_bot_token,
        telegram_config=app_config.relay.telegram,
        timeout=float(app_config.application.timeouts.external_api),
    )


RelayServiceDep = Annotated[RelayService, Depends(get_relay_service)]
