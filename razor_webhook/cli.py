from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import typer

from .config import Settings
from .errors import InvalidPayloadError, UnsupportedEventError
from .events import EVENT_SLOTS, WebhookPayload, parse_payload
from .handlers.dispatcher import WebhookDispatcher
from .handlers.registry import HandlerRegistry
from .logging import configure_logging

app = typer.Typer(help="Razorpay webhook routing utility")


@app.command("events")
def list_events() -> None:
    """List every supported event and the handler slot it routes to."""
    for event, (category, sub_event) in EVENT_SLOTS.items():
        typer.echo(f"{event.value}\t{category}.{sub_event}")


def _reporting_registry() -> HandlerRegistry:
    registry = HandlerRegistry()
    for category, sub_event in EVENT_SLOTS.values():

        async def report(payload: WebhookPayload, slot: str = f"{category}.{sub_event}") -> str:
            return slot

        registry.set(category, sub_event, report)
    return registry


@app.command()
def route(
    path: str = typer.Argument(..., help="JSON payload file, or - for stdin"),
    verbose: bool = typer.Option(False, help="Print effective settings"),
) -> None:
    """Validate a webhook payload and show which handler slot it reaches."""
    settings = Settings()
    configure_logging(settings.log_level.upper(), settings.log_format)
    if verbose:
        typer.echo(settings.model_dump_json(indent=2))

    try:
        raw = sys.stdin.read() if path == "-" else Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        typer.echo(f"Cannot read payload: {exc}", err=True)
        raise typer.Exit(code=2) from exc
    try:
        payload = parse_payload(raw)
    except InvalidPayloadError as exc:
        typer.echo(f"Invalid payload: {exc}", err=True)
        raise typer.Exit(code=2) from exc

    registry = _reporting_registry()
    if settings.freeze_registry:
        registry.freeze()
    try:
        slot = asyncio.run(WebhookDispatcher(payload, registry).execute())
    except UnsupportedEventError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=3) from exc
    typer.echo(f"{payload.event} -> {slot}")


if __name__ == "__main__":  # pragma: no cover
    app()
