#!/usr/bin/env python3
"""
Invoice Form Client.

Fills in the invoice approval form, shows the assembled text and sends
it to the Telegram channel through the relay backend.

Usage:
    python invoice.py --help
    python invoice.py --preview
    python invoice.py --rubles 789 --kopecks 50 --invoice-number 46 \\
        --invoice-date 01.10.2025 --period "с 08.10 по 16.10.2025г" \\
        --counterparty "ООО Ромашка" --service реклама --plan-article 11.3 \\
        --plan БХ --media-plan-month Октябрь --file invoice.pdf
    python invoice.py --ping
"""

import asyncio
import json
import mimetypes
import sys
from datetime import date, datetime
from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from invoice_relay.backend.core.config import get_app_config, get_server_base_url
from invoice_relay.backend.core.exceptions import NetworkError
from invoice_relay.backend.core.logging import get_logger, setup_logging
from invoice_relay.client.relay_client import RelayClient, UploadPolicy
from invoice_relay.form import handlers
from invoice_relay.form.state import (
    HOUSING_COMPLEXES,
    MEDIA_PLAN_MONTHS,
    AttachedFile,
    InvoiceFormState,
    MediaPlan,
)

console = Console()

# Field name -> prompt text, in form order
FIELD_PROMPTS = {
    "rubles": "Сумма, руб.",
    "kopecks": "Копейки",
    "invoice_number": "Номер счета",
    "invoice_date": "Дата счета",
    "period": "Период",
    "counterparty": "Подрядчик",
    "service": "Услуга",
    "plan_article": "Статья МП",
    "housing_complex": "ЖК",
    "media_plan_month": "Месяц МП",
}


def validate_project_root() -> Path:
    """Validate that we're running from the project root."""
    if not (PROJECT_ROOT / ".project_root").exists():
        click.echo(
            click.style("Error: .project_root not found. Run from project root.", fg="red"),
            err=True,
        )
        sys.exit(1)
    return PROJECT_ROOT


def _parse_date(ctx, param, value: str | None) -> date | str | None:
    """ISO dates become dates; anything else is kept as typed."""
    if not value:
        return value
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        return value


def _make_client(port: int | None) -> RelayClient:
    base_url, timeout = get_server_base_url()
    if port is not None:
        base_url = f"{base_url.rsplit(':', 1)[0]}:{port}"
    return RelayClient(base_url=base_url, timeout=timeout)


def _load_file(path: Path) -> AttachedFile:
    mime_type, _ = mimetypes.guess_type(path.name)
    return AttachedFile(
        filename=path.name,
        mime_type=mime_type or "application/octet-stream",
        data=path.read_bytes(),
    )


def fill_form(values: dict, plan: str, prompt_missing: bool) -> InvoiceFormState:
    """Build a form state from option values, asking for the ones left out."""
    state = handlers.select_plan(InvoiceFormState(), plan)

    for name, label in FIELD_PROMPTS.items():
        value = values.get(name)
        if name == "housing_complex" and state.values.plan != MediaPlan.ATMOSPHERE:
            continue
        if value is None and prompt_missing:
            if name == "housing_complex":
                value = click.prompt(label, type=click.Choice(HOUSING_COMPLEXES))
            elif name == "media_plan_month":
                value = click.prompt(label, type=click.Choice(MEDIA_PLAN_MONTHS))
            else:
                value = click.prompt(label, default="", show_default=False)
                if name == "invoice_date":
                    value = _parse_date(None, None, value)
        if value is not None:
            state = handlers.set_field(state, name, value)

    return state


def _show_errors(state: InvoiceFormState) -> None:
    table = Table(title="Ошибки заполнения", show_header=True)
    table.add_column("Поле", style="cyan")
    table.add_column("Ошибка", style="red")
    for name, message in state.errors.items():
        table.add_row(FIELD_PROMPTS.get(name, name), message)
    console.print(table)


async def send_form(state: InvoiceFormState, channel_id: str, port: int | None) -> InvoiceFormState:
    client = _make_client(port)
    try:
        return await handlers.send(state, client, channel_id)
    finally:
        await client.close()


async def ping_backend(port: int | None, raw: bool) -> int:
    """Query /health/detailed on the relay backend."""
    client = _make_client(port)
    try:
        response = await client.get("/health/detailed")
    except NetworkError as e:
        console.print(f"[red]Error: Backend is not reachable ({e.message}).[/red]")
        console.print("[dim]Start it with: python cli.py --service server[/dim]")
        return 1
    finally:
        await client.close()

    data = response.json()
    if raw:
        click.echo(json.dumps(data, indent=2, ensure_ascii=False))
        return 0 if response.status_code == 200 else 1

    status = data.get("status", "unknown")
    color = "green" if status == "healthy" else "red"
    table = Table(title=f"Relay backend: [{color}]{status}[/{color}]", show_header=True)
    table.add_column("Check", style="cyan")
    table.add_column("Status")
    for name, check in data.get("checks", {}).items():
        check_status = check.get("status", "unknown")
        check_color = "green" if check_status == "configured" else "yellow"
        table.add_row(name, f"[{check_color}]{check_status}[/{check_color}]")
    console.print(table)
    return 0 if status == "healthy" else 1


@click.command()
@click.option("--rubles", default=None, help="Amount, whole rubles.")
@click.option("--kopecks", default=None, help="Amount, kopecks (0-99, may be empty).")
@click.option("--invoice-number", default=None, help="Invoice number.")
@click.option("--invoice-date", default=None, callback=_parse_date, help="Invoice date (YYYY-MM-DD or as written).")
@click.option("--period", default=None, help="Service period.")
@click.option("--counterparty", default=None, help="Contractor name.")
@click.option("--service", default=None, help="What the invoice is for.")
@click.option(
    "--plan",
    type=click.Choice([p.value for p in MediaPlan]),
    default=MediaPlan.ATMOSPHERE.value,
    help="Media plan.",
)
@click.option("--plan-article", default=None, help="Media plan article.")
@click.option("--housing-complex", type=click.Choice(HOUSING_COMPLEXES), default=None, help="Housing complex (Атмосфера plan only).")
@click.option("--media-plan-month", type=click.Choice(MEDIA_PLAN_MONTHS), default=None, help="Media plan month.")
@click.option("--file", "file_path", type=click.Path(exists=True, dir_okay=False, path_type=Path), default=None, help="File to attach.")
@click.option("--channel-id", default=None, help="Telegram chat or channel id (overrides config).")
@click.option("--preview", is_flag=True, help="Print the assembled text without sending.")
@click.option("--no-input", is_flag=True, help="Do not prompt for missing fields.")
@click.option("--ping", is_flag=True, help="Check the relay backend health and exit.")
@click.option("--raw", is_flag=True, help="Output the final form state as JSON.")
@click.option("--debug", "-d", is_flag=True, help="Enable debug logging.")
@click.option("--port", default=None, type=int, help="Backend server port (overrides config).")
def main(
    rubles: str | None,
    kopecks: str | None,
    invoice_number: str | None,
    invoice_date: date | str | None,
    period: str | None,
    counterparty: str | None,
    service: str | None,
    plan: str,
    plan_article: str | None,
    housing_complex: str | None,
    media_plan_month: str | None,
    file_path: Path | None,
    channel_id: str | None,
    preview: bool,
    no_input: bool,
    ping: bool,
    raw: bool,
    debug: bool,
    port: int | None,
) -> None:
    """
    Fill in the invoice approval form and send it to Telegram.

    Missing fields are asked for interactively unless --no-input is given.

    \b
    Examples:
        python invoice.py --preview
        python invoice.py --plan БХ --file invoice.pdf
        python invoice.py --ping
    """
    validate_project_root()

    setup_logging(level="DEBUG" if debug else "WARNING", format_type="console")
    logger = get_logger(__name__)

    if ping:
        sys.exit(asyncio.run(ping_backend(port, raw)))

    values = {
        "rubles": rubles,
        "kopecks": kopecks,
        "invoice_number": invoice_number,
        "invoice_date": invoice_date,
        "period": period,
        "counterparty": counterparty,
        "service": service,
        "plan_article": plan_article,
        "housing_complex": housing_complex,
        "media_plan_month": media_plan_month,
    }
    state = handlers.submit(fill_form(values, plan, prompt_missing=not no_input))

    if state.errors:
        _show_errors(state)
        sys.exit(1)

    if file_path is not None:
        state = handlers.attach_file(state, _load_file(file_path), UploadPolicy.from_config())
        if state.attached_file is None:
            console.print(state.send_status, style="red", markup=False)
            sys.exit(1)
        console.print(f"[green]{state.send_status}[/green] {file_path.name}")

    console.print(Panel(Text(state.result_text), title="Текст заявки", border_style="cyan"))

    if preview:
        return

    target = channel_id or get_app_config().relay.client.channel_id
    logger.debug("Sending form", extra={"chat_id": target, "has_file": state.attached_file is not None})

    state = asyncio.run(send_form(state, target, port))

    if raw:
        click.echo(
            json.dumps(
                state.model_dump(mode="json", exclude={"attached_file"}),
                indent=2,
                ensure_ascii=False,
            )
        )

    sent = state.send_status == handlers.SENT_STATUS
    console.print(state.send_status, style="green" if sent else "red", markup=False)
    sys.exit(0 if sent else 1)


if __name__ == "__main__":
    main()
