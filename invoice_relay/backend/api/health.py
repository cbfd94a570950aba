"""
Health Check Endpoints.

Endpoints:
- /health: Liveness check (process running)
- /health/detailed: Application info and relay configuration status
"""

from typing import Any

from fastapi import APIRouter

from invoice_relay.backend.core.logging import get_logger
from invoice_relay.backend.core.utils import utc_now

router = APIRouter()
logger = get_logger(__name__)


def check_telegram_credential() -> dict[str, Any]:
    """Report whether a bot token is configured, never the token itself."""
    try:
        from invoice_relay.backend.core.config import get_settings

        if get_settings().telegram_bot_token:
            return {"status": "configured"}
        return {"status": "not_configured"}
    except Exception as e:
        logger.warning("Telegram credential check failed", extra={"error": str(e)})
        return {"status": "error", "error": str(e)}


@router.get("/health")
async def health_check() -> dict[str, str]:
    """
    Liveness check.

    Returns 200 if the process is running. No dependency checks.
    """
    return {"status": "healthy"}


@router.get("/health/detailed")
async def detailed_health_check() -> dict[str, Any]:
    """
    Detailed health check.

    A missing bot token does not make the service unhealthy: relay
    requests report it individually as a configuration error.
    """
    checks = {"telegram_credential": check_telegram_credential()}

    try:
        from invoice_relay.backend.core.config import get_app_config

        app_settings = get_app_config().application
        app_info = {
            "name": app_settings.name,
            "env": app_settings.environment,
            "debug": app_settings.debug,
            "version": app_settings.version,
        }
    except Exception:
        app_info = {"status": "not_configured"}

    overall_status = "unhealthy" if checks["telegram_credential"]["status"] == "error" else "healthy"

    return {
        "status": overall_status,
        "application": app_info,
        "checks": checks,
        "timestamp": utc_now().isoformat(),
    }
