"""Validate transport config: resolve options from the environment and print them."""

from typing import Optional

import typer
from rich.table import Table

from ses_transport.transport import resolve_options

from .shared import build_options, console, logger, mask_secret


def validate_config(
    region: Optional[str] = typer.Option(None, "--region", "-r", help="Override AWS region"),
) -> None:
    """Print the resolved SES transport configuration (secrets masked)."""
    log = logger.bind(command="validate-config")
    log.info("validate_config.start")

    config = resolve_options(build_options(region))

    table = Table(title="SES transport config")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("region", config.region)
    table.add_row("api_version", config.api_version)
    table.add_row("endpoint_url", config.endpoint_url or "(default)")
    table.add_row("access_key_id", mask_secret(config.access_key_id))
    table.add_row("secret_access_key", mask_secret(config.secret_access_key))
    table.add_row("session_token", mask_secret(config.session_token))
    console.print(table)

    if not config.access_key_id or not config.secret_access_key:
        console.print(
            "[yellow]No explicit credentials; the AWS SDK will use its default chain "
            "(shared config, instance role).[/yellow]"
        )
    log.info(
        "validate_config.ok",
        region=config.region,
        explicit_credentials=bool(config.access_key_id and config.secret_access_key),
    )
