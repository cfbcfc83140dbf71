"""Send mode: deliver an .eml file through SES (or the mock client)."""

import asyncio
from pathlib import Path
from typing import Optional

import typer

from ses_transport.mail import Mail
from ses_transport.transport import SendResult

from .shared import build_transport, console, logger


def send(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Raw .eml message"),
    mock: bool = typer.Option(False, "--mock", help="Use the mock client instead of SES"),
    outbox: Optional[Path] = typer.Option(None, "--outbox", help="Mock outbox JSON file"),
    region: Optional[str] = typer.Option(None, "--region", "-r", help="Override AWS region"),
) -> None:
    """Send a raw RFC-5322 message file via SES SendRawEmail."""
    log = logger.bind(command="send", path=str(path), mock=mock)
    log.info("send.start")

    mail = Mail.from_file(path)
    transport = build_transport(mock=mock, outbox_path=outbox, region=region)

    async def _run() -> SendResult:
        async with transport:
            return await transport.send(mail)

    try:
        result = asyncio.run(_run())
    except Exception as e:
        console.print(f"[red]Send failed: {e}[/red]")
        log.error("send.fail", error=str(e), error_type=type(e).__name__)
        raise typer.Exit(1) from e

    console.print(f"[green]Sent[/green] {mail.subject!r} via {transport.name} ({transport.config.region})")
    console.print(f"  Message-ID: {result.message_id or '(none returned)'}")
    log.info("send.ok", message_id=result.message_id)
