"""Shared CLI helpers: console, logger, transport construction."""

from pathlib import Path
from typing import Any, Optional

from rich.console import Console

from ses_transport.config import SES_MOCK_OUTBOX_PATH, options_from_env
from ses_transport.transport import SESMockClient, SESTransport, create
from ses_transport.utils.logger import get_logger

console = Console()
logger = get_logger("ses_transport.cli")


def build_options(region: Optional[str] = None) -> dict[str, Any]:
    """Options from the environment, with a --region override when given."""
    options: dict[str, Any] = options_from_env()
    if region:
        options["region"] = region
    return options


def build_transport(
    mock: bool = False,
    outbox_path: Optional[Path] = None,
    region: Optional[str] = None,
) -> SESTransport:
    """Real SES transport, or one backed by the mock client (JSON outbox)."""
    options = build_options(region)
    if mock:
        client = SESMockClient(outbox_path=outbox_path or SES_MOCK_OUTBOX_PATH)
        return create(options, client=client)
    return create(options)


def mask_secret(value: Optional[str]) -> str:
    """Show only the last four characters of a credential."""
    if not value:
        return "(not set)"
    if len(value) <= 4:
        return "****"
    return f"****{value[-4:]}"
