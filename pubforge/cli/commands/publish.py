"""``pubforge plan`` / ``pubforge publish``: configure every module's publication.

``plan`` prints what would be published; ``publish`` additionally writes one
descriptor per module (and a run report) for the uploader.  Both exit with
code 1 on a fatal configuration error: a module without its publishing
subsystem, corrupt signing key material, or an invalid manifest.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from pubforge.config import PublishSettings
from pubforge.core.descriptor_store import DescriptorStore
from pubforge.core.errors import PublishError
from pubforge.core.orchestrator import ReleaseOrchestrator
from pubforge.models.report import ReleaseReport
from pubforge.monitor.renderer import ReportRenderer

console = Console()


def _settings(
    manifest: Path | None = None,
    properties: Path | None = None,
    output: Path | None = None,
) -> PublishSettings:
    overrides = {
        key: value
        for key, value in (
            ("manifest_path", manifest),
            ("properties_path", properties),
            ("output_dir", output),
        )
        if value is not None
    }
    return PublishSettings(**overrides)


def _run(settings: PublishSettings) -> ReleaseReport:
    try:
        return ReleaseOrchestrator.from_settings(settings).run()
    except PublishError as exc:
        console.print(f"[bold red]Publishing configuration failed:[/bold red] {exc}")
        raise typer.Exit(code=1)


def plan_cmd(
    manifest: Path = typer.Option(
        None, "--manifest", "-m", help="Path to the release manifest (pubforge.toml)."
    ),
    properties: Path = typer.Option(
        None, "--properties", "-p", help="Path to the declared properties file."
    ),
) -> None:
    """Resolve channel, identity, targets and signing without writing anything."""
    report = _run(_settings(manifest, properties))
    ReportRenderer(console=console).print_report(report)


def publish_cmd(
    manifest: Path = typer.Option(
        None, "--manifest", "-m", help="Path to the release manifest (pubforge.toml)."
    ),
    properties: Path = typer.Option(
        None, "--properties", "-p", help="Path to the declared properties file."
    ),
    output: Path = typer.Option(
        None, "--output", "-o", help="Directory for publication descriptors."
    ),
) -> None:
    """Configure all publications and write their descriptors."""
    settings = _settings(manifest, properties, output)
    report = _run(settings)
    ReportRenderer(console=console).print_report(report)

    paths = DescriptorStore(settings.output_dir).write_report(report)
    console.print()
    console.print(
        f"[bold green]Wrote {len(paths)} files to {settings.output_dir}[/bold green]"
    )
