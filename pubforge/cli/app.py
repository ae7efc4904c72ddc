"""Main Typer application: imports and registers all CLI commands.

Entry point: ``pubforge`` (configured via pyproject.toml console_scripts).
"""

from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from pubforge.cli.commands.credentials import credentials_cmd
from pubforge.cli.commands.keygen import keygen_cmd
from pubforge.cli.commands.publish import plan_cmd, publish_cmd
from pubforge.config import PublishSettings

app = typer.Typer(
    name="pubforge",
    help="pubforge: channel-aware, signed release publishing for multi-module libraries.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        None, "--log-level", help="Override PUBFORGE_LOG_LEVEL (DEBUG, INFO, WARNING...)."
    ),
) -> None:
    """Configure logging once for every subcommand."""
    level = (log_level or PublishSettings().log_level).upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)
        ],
        force=True,
    )


# Register subcommands
app.command(name="plan", help="Show the publications a release would produce.")(plan_cmd)
app.command(name="publish", help="Configure publications and write their descriptors.")(publish_cmd)
app.command(name="credentials", help="Show which credentials resolve.")(credentials_cmd)
app.command(name="keygen", help="Create a password-protected signing key.")(keygen_cmd)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
