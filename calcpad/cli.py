"""
Calcpad CLI Tool

Command-line interface for running the calculator, driving a headless
session from the shell, or starting the MCP server.
"""

import logging
import sys

import click
from textual.logging import TextualHandler

from calcpad import __version__, apps  # noqa: F401  # Required for app auto-registration
from calcpad.core.base import AppRegistry
from calcpad.core.config import CalculatorConfig
from calcpad.core.engine import CalculatorSession
from calcpad.core.keymap import split_keys

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def configure_logging(level: str, handler: logging.Handler) -> None:
    """Send calcpad logs at ``level`` and above to ``handler``.

    The level is set on the ``calcpad`` logger, so it holds even when the
    root logger was configured by an imported library.
    """
    logging.basicConfig(handlers=[handler])
    logging.getLogger("calcpad").setLevel(level)


@click.group()
@click.version_option(version=__version__)
@click.option('--log-level', type=click.Choice(LOG_LEVELS, case_sensitive=False),
              default="WARNING", help='Logging verbosity')
@click.pass_context
def cli(ctx: click.Context, log_level: str):
    """Calcpad - keypad calculator for the terminal with an MCP interface."""
    ctx.ensure_object(dict)
    ctx.obj["log_level"] = log_level.upper()


@cli.command()
def server():
    """Start the MCP server."""
    from calcpad.server.mcp_server import main as server_main

    click.echo("Starting Calcpad MCP Server...", err=True)
    server_main()


@cli.command()
def list_apps():
    """List all available applications."""
    app_configs = AppRegistry.list_apps()
    if not app_configs:
        click.echo("No applications available.")
        return

    click.echo("Available applications:")
    click.echo()

    for app_config in app_configs:
        click.echo(f"  {app_config.name}")
        click.echo(f"    Description: {app_config.description}")
        click.echo(f"    Version: {app_config.version}")
        click.echo(f"    Tags: {', '.join(app_config.tags)}")
        click.echo()


@cli.command()
@click.argument('app_name', default="calculator")
@click.option('--max-digits', default=12, show_default=True, help='Digits that fit the display')
@click.pass_context
def run(ctx: click.Context, app_name: str, max_digits: int):
    """Run an application (the calculator by default)."""
    app_class = AppRegistry.get_app_class(app_name)
    if not app_class:
        click.echo(f"Unknown application: {app_name}", err=True)
        click.echo("Use 'calcpad list-apps' to see available applications.")
        sys.exit(1)

    configure_logging(ctx.obj["log_level"], TextualHandler())
    app = app_class(config=CalculatorConfig(max_digits=max_digits))
    app.run()


@cli.command()
@click.argument('app_name')
def info(app_name: str):
    """Get detailed information about an application."""
    app_class = AppRegistry.get_app_class(app_name)
    if not app_class:
        click.echo(f"Unknown application: {app_name}", err=True)
        sys.exit(1)

    config = app_class.get_config()

    click.echo(f"Application: {config.name}")
    click.echo(f"Description: {config.description}")
    click.echo(f"Version: {config.version}")
    click.echo(f"Author: {config.author}")
    click.echo(f"Tags: {', '.join(config.tags)}")

    bindings = getattr(app_class, 'BINDINGS', [])
    if bindings:
        click.echo("\nKey Bindings:")
        for key, _action, description in bindings:
            click.echo(f"  {key}: {description}")


@cli.command()
@click.argument('keys', nargs=-1, required=True)
@click.option('--max-digits', default=12, show_default=True, help='Digits that fit the display')
@click.option('--trace', is_flag=True, help='Print the display after every key')
@click.pass_context
def keys(ctx: click.Context, keys: tuple[str, ...], max_digits: int, trace: bool):
    """Type KEYS into a fresh calculator and print the display.

    \b
    Example:
        calcpad keys 7+3=
        calcpad keys 5 / 0 Enter
    """
    configure_logging(ctx.obj["log_level"], logging.StreamHandler(sys.stderr))
    session = CalculatorSession(CalculatorConfig(max_digits=max_digits))

    for key in split_keys(" ".join(keys)):
        if not session.press_key(key):
            click.echo(f"Ignoring unknown key: {key}", err=True)
            continue
        if trace:
            click.echo(f"{key:>6}  {session.display}")

    if not trace:
        click.echo(session.display)


if __name__ == "__main__":
    cli()
