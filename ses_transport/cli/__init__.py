"""CLI commands: one module per command (send, validate-config)."""

from typer import Typer

from ses_transport.cli import send_mode, validate_config as validate_config_module

app = Typer(help="Send e-mail through Amazon SES SendRawEmail")


def register_commands() -> None:
    """Register all CLI commands on the global app."""
    app.command()(send_mode.send)
    app.command(name="validate-config")(validate_config_module.validate_config)


register_commands()
