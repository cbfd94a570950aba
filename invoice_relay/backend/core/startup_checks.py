"""
Startup Checks.

Runs during FastAPI lifespan initialization. Problems that make the
deployment unsafe block startup; a missing bot token does not, because
each relay request reports it on its own.
"""

from invoice_relay.backend.core.config import AppConfig, get_app_config, get_settings
from invoice_relay.backend.core.logging import get_logger

logger = get_logger(__name__)


class StartupCheckError(RuntimeError):
    """Raised when a startup check fails."""

    pass


def run_startup_checks() -> None:
    """
    Validate the configuration before accepting traffic.

    Raises:
        StartupCheckError: If any blocking check fails
    """
    app_config = get_app_config()
    environment = app_config.application.environment

    errors: list[str] = []
    _check_production_safety(app_config, environment == "production", errors)
    _check_upload_limits(app_config, errors)

    if errors:
        for error in errors:
            logger.error("Startup check failed", extra={"check": error})
        raise StartupCheckError(
            f"Startup blocked: {len(errors)} check(s) failed:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )

    if not get_settings().telegram_bot_token:
        logger.warning(
            "TELEGRAM_BOT_TOKEN is not set; relay requests will fail until it is configured"
        )

    logger.info("Startup checks passed", extra={"environment": environment})


def _check_production_safety(app_config: AppConfig, is_production: bool, errors: list[str]) -> None:
    """Validate production environment safety constraints."""
    if not is_production:
        return

    app = app_config.application
    if app.debug:
        errors.append("debug is true in production environment")

    if app_config.features.api_detailed_errors:
        errors.append("api_detailed_errors is true in production environment")

    localhost_origins = [o for o in app.cors.origins if "localhost" in o]
    if localhost_origins:
        errors.append(f"CORS origins contain localhost in production: {localhost_origins}")


def _check_upload_limits(app_config: AppConfig, errors: list[str]) -> None:
    """The client cap must fit under the server cap, or valid uploads get 413."""
    client_limit = app_config.relay.client.max_file_bytes
    server_limit = app_config.relay.telegram.max_upload_bytes
    if client_limit > server_limit:
        errors.append(
            f"relay.client.max_file_bytes ({client_limit}) exceeds "
            f"relay.telegram.max_upload_bytes ({server_limit})"
        )
