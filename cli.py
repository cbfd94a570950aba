#!/usr/bin/env python3
"""
Invoice Relay CLI.

Operations entry point for the relay backend.
Use --service to select what to run, --action to control the server.

Usage:
    python cli.py --help
    python cli.py --service server --verbose
    python cli.py --service server --action stop
    python cli.py --service health --debug
    python cli.py --service config
    python cli.py --service test --test-type unit
"""

import os
import signal
import subprocess
import sys
import time
from pathlib import Path

import click
import structlog

PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from invoice_relay.backend.core.logging import get_logger, setup_logging


def validate_project_root() -> Path:
    """Validate that we're running from the project root."""
    if not (PROJECT_ROOT / ".project_root").exists():
        click.echo(
            click.style("Error: .project_root not found. Run from project root.", fg="red"),
            err=True,
        )
        sys.exit(1)
    return PROJECT_ROOT


def _find_process_on_port(port: int) -> list[int]:
    """Find PIDs listening on a port."""
    result = subprocess.run(
        ["lsof", "-ti", f":{port}"],
        capture_output=True, text=True,
    )
    pids = result.stdout.strip().split("\n")
    return [int(p) for p in pids if p.strip()]


def _server_stop(logger, port: int) -> None:
    pids = _find_process_on_port(port)
    if not pids:
        click.echo(f"No server running on port {port}.")
        return

    for pid in pids:
        os.kill(pid, signal.SIGINT)
        logger.info("Sent SIGINT", extra={"pid": pid, "port": port})

    click.echo(f"Server on port {port} stopped (PID: {', '.join(str(p) for p in pids)}).")


def _server_status(port: int) -> None:
    pids = _find_process_on_port(port)
    if pids:
        click.echo(f"Server is running on port {port} (PID: {', '.join(str(p) for p in pids)}).")
    else:
        click.echo(f"Server is not running on port {port}.")


def _get_server_port(port: int | None) -> int:
    if port is not None:
        return port
    from invoice_relay.backend.core.config import get_app_config
    return get_app_config().application.server.port


@click.command()
@click.option(
    "--service", "-s",
    type=click.Choice(["server", "health", "config", "test", "info"]),
    default="info",
    help="Service or command to run.",
)
@click.option(
    "--action", "-a",
    type=click.Choice(["start", "stop", "restart", "status"]),
    default="start",
    help="Lifecycle action for the server.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output (INFO level logging).")
@click.option("--debug", "-d", is_flag=True, help="Enable debug output (DEBUG level logging).")
@click.option("--host", default=None, help="Server host.")
@click.option("--port", default=None, type=int, help="Server port.")
@click.option("--reload", is_flag=True, help="Enable auto-reload (server only).")
@click.option(
    "--test-type",
    type=click.Choice(["all", "unit", "integration"]),
    default="all",
    help="Test type to run.",
)
def main(
    service: str,
    action: str,
    verbose: bool,
    debug: bool,
    host: str | None,
    port: int | None,
    reload: bool,
    test_type: str,
) -> None:
    """
    Invoice Relay CLI.

    Use --service to select what to run. For the server, use --action
    to control lifecycle (start/stop/restart/status).

    \b
    Examples:
        python cli.py --service server --verbose
        python cli.py --service server --action stop
        python cli.py --service server --action restart --port 3002
        python cli.py --service health --debug
        python cli.py --service config
        python cli.py --service test --test-type unit
    """
    validate_project_root()

    if debug:
        log_level = "DEBUG"
    elif verbose:
        log_level = "INFO"
    else:
        log_level = "WARNING"

    setup_logging(level=log_level, format_type="console")

    structlog.contextvars.bind_contextvars(source="cli")

    logger = get_logger(__name__)

    logger.debug("CLI invoked", extra={"service": service, "action": action, "log_level": log_level})

    if service == "server" and action != "start":
        server_port = _get_server_port(port)

        if action == "stop":
            _server_stop(logger, server_port)
            return
        elif action == "status":
            _server_status(server_port)
            return
        elif action == "restart":
            _server_stop(logger, server_port)
            time.sleep(2)

    if service == "server":
        run_server(logger, host, port, reload)
    elif service == "health":
        check_health(logger)
    elif service == "config":
        show_config(logger)
    elif service == "test":
        run_tests(logger, test_type)
    elif service == "info":
        show_info(logger)


def run_server(logger, host: str | None, port: int | None, reload: bool) -> None:
    """Start the relay backend under uvicorn."""
    from invoice_relay.backend.core.config import get_app_config

    try:
        server_config = get_app_config().application.server
    except Exception as e:
        logger.error("Failed to load configuration.", extra={"error": str(e)})
        click.echo(
            click.style("Error: Could not load config/settings/application.yaml.", fg="red"),
            err=True,
        )
        sys.exit(1)

    server_host = host or server_config.host
    server_port = port or server_config.port

    logger.info(
        "Starting server",
        extra={"host": server_host, "port": server_port, "reload": reload},
    )

    cmd = [
        sys.executable, "-m", "uvicorn",
        "invoice_relay.backend.main:app",
        "--host", server_host,
        "--port", str(server_port),
    ]

    if reload:
        cmd.append("--reload")

    click.echo(f"Starting relay backend at http://{server_host}:{server_port}")
    click.echo("Press Ctrl+C to stop\n")

    try:
        subprocess.run(cmd, check=True)
    except KeyboardInterrupt:
        logger.info("Server stopped")
    except subprocess.CalledProcessError as e:
        logger.error("Server failed to start", extra={"exit_code": e.returncode})
        sys.exit(e.returncode)


def check_health(logger) -> None:
    """Check that the relay can start: imports, configuration, credential, app."""
    click.echo("Checking application health...\n")

    checks = []

    try:
        from invoice_relay.backend.core.config import get_app_config
        app_config = get_app_config()
        checks.append(("YAML configuration", True, f"App: {app_config.application.name}"))
        logger.debug("Configuration loaded", extra={"app_name": app_config.application.name})
    except Exception as e:
        checks.append(("YAML configuration", False, str(e)))
        logger.error("Configuration failed", extra={"error": str(e)})

    try:
        from invoice_relay.backend.core.config import get_settings
        configured = bool(get_settings().telegram_bot_token)
        checks.append((
            "Telegram bot token",
            configured,
            None if configured else "Set TELEGRAM_BOT_TOKEN in config/.env",
        ))
    except Exception as e:
        checks.append(("Telegram bot token", False, str(e)))
        logger.error("Settings failed", extra={"error": str(e)})

    try:
        from invoice_relay.backend.main import get_app
        app = get_app()
        checks.append(("FastAPI application", True, f"Title: {app.title}"))
        logger.debug("FastAPI app loaded", extra={"title": app.title})
    except Exception as e:
        checks.append(("FastAPI application", False, str(e)))
        logger.error("FastAPI app failed", extra={"error": str(e)})

    click.echo("Health Check Results:")
    click.echo("-" * 50)

    all_passed = True
    for name, passed, detail in checks:
        status = click.style("✓ PASS", fg="green") if passed else click.style("✗ FAIL", fg="red")
        detail_str = f" ({detail})" if detail else ""
        click.echo(f"  {status}  {name}{detail_str}")
        if not passed:
            all_passed = False

    click.echo("-" * 50)

    if all_passed:
        click.echo(click.style("\nAll checks passed!", fg="green"))
    else:
        click.echo(click.style("\nSome checks failed. See details above.", fg="yellow"))


def _echo_section(title: str, values: dict) -> None:
    click.echo(f"\n{title}:")
    click.echo("-" * 40)
    for key, value in values.items():
        if isinstance(value, dict):
            click.echo(f"  {key}:")
            for k, v in value.items():
                click.echo(f"    {k}: {v}")
        else:
            click.echo(f"  {key}: {value}")


def show_config(logger) -> None:
    """Display loaded configuration. The bot token is never printed."""
    click.echo("Application Configuration:")

    try:
        from invoice_relay.backend.core.config import get_app_config, get_settings

        app_config = get_app_config()

        _echo_section("Application Settings (from YAML)", app_config.application.model_dump())
        _echo_section("Logging Settings (from YAML)", app_config.logging.model_dump())
        _echo_section("Feature Flags (from YAML)", app_config.features.model_dump())
        _echo_section("Relay Settings (from YAML)", app_config.relay.model_dump())
        _echo_section(
            "Secrets (from config/.env)",
            {"TELEGRAM_BOT_TOKEN": "set" if get_settings().telegram_bot_token else "not set"},
        )

        logger.info("Configuration displayed successfully")

    except Exception as e:
        logger.error("Failed to load configuration", extra={"error": str(e)})
        click.echo(click.style(f"Error loading configuration: {e}", fg="red"))
        sys.exit(1)


def run_tests(logger, test_type: str) -> None:
    """Run the test suite."""
    logger.info("Running tests", extra={"type": test_type})

    cmd = [sys.executable, "-m", "pytest"]

    if test_type == "unit":
        cmd.append("tests/unit")
    elif test_type == "integration":
        cmd.append("tests/integration")
    else:
        cmd.append("tests/")

    cmd.append("-v")

    click.echo(f"Running: {' '.join(cmd)}\n")

    try:
        result = subprocess.run(cmd)
        sys.exit(result.returncode)
    except FileNotFoundError:
        logger.error("pytest not found. Install with: pip install -e .[test]")
        sys.exit(1)


def show_info(logger) -> None:
    """Display application information."""
    click.echo("Invoice Relay")
    click.echo("=" * 40)

    try:
        from invoice_relay.backend.core.config import get_app_config
        app_config = get_app_config()
        click.echo(f"Name: {app_config.application.name}")
        click.echo(f"Version: {app_config.application.version}")
        click.echo(f"Description: {app_config.application.description}")
    except Exception as e:
        logger.error(
            "Failed to load application configuration",
            extra={"error": str(e)},
        )
        click.echo(
            click.style("Error: Could not load application.yaml configuration.", fg="red"),
            err=True,
        )
        sys.exit(1)

    click.echo()
    click.echo("Services (--service):")
    click.echo("  server         Relay backend (uvicorn)")
    click.echo("  health         Check application health")
    click.echo("  config         Display configuration")
    click.echo("  test           Run test suite")
    click.echo("  info           Show this information")
    click.echo()
    click.echo("Server actions (--action):")
    click.echo("  start          Start the server (default)")
    click.echo("  stop           Stop a running server")
    click.echo("  restart        Stop then start")
    click.echo("  status         Check if running")
    click.echo()
    click.echo("Fill in and send an invoice with: python invoice.py --help")

    logger.debug("Info displayed")


if __name__ == "__main__":
    main()
