"""``pubforge credentials``: show which credential keys resolve.

Values are never printed, only ``set (N chars)`` or ``not set``, so the output
is safe to paste into CI logs.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from pubforge.config import PublishSettings
from pubforge.core.credential_resolver import (
    REPOSITORY_CREDENTIAL_KEYS,
    SIGNING_CREDENTIAL_KEYS,
    CredentialResolver,
)
from pubforge.core.properties import load_properties
from pubforge.models.credentials import describe_secret
from pubforge.monitor.renderer import ReportRenderer

console = Console()


def credentials_cmd(
    properties: Path = typer.Option(
        None, "--properties", "-p", help="Path to the declared properties file."
    ),
) -> None:
    """Report the resolution status of repository and signing credentials."""
    settings = PublishSettings()
    props_path = properties or settings.properties_path
    resolver = CredentialResolver.from_sources(load_properties(props_path))

    rows = [
        (key, describe_secret(resolver.resolve(key)))
        for key in (*REPOSITORY_CREDENTIAL_KEYS, *SIGNING_CREDENTIAL_KEYS)
    ]
    console.print(ReportRenderer(console=console).render_credentials(rows))
