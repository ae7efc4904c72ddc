"""Rich terminal renderer for release reports.

Color scheme
------------
- green   : SIGNED
- yellow  : SKIPPED_INCOMPLETE (signing wanted but not possible)
- dim     : SKIPPED_BY_CHANNEL / UNATTEMPTED
"""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from pubforge.models.publication import SigningState
from pubforge.models.report import ReleaseReport

_STATE_ICONS: dict[SigningState, str] = {
    SigningState.SIGNED: "[green]SIGNED[/green]",
    SigningState.SKIPPED_INCOMPLETE: "[yellow]SKIPPED[/yellow]",
    SigningState.SKIPPED_BY_CHANNEL: "[dim]N/A[/dim]",
    SigningState.UNATTEMPTED: "[dim]--[/dim]",
}


class ReportRenderer:
    """Renders a :class:`ReleaseReport` as Rich terminal output.

    Parameters
    ----------
    console:
        Rich Console instance.  A new one is created if not provided.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render_publications(self, report: ReleaseReport) -> Table:
        context = report.context
        table = Table(
            title=f"Publications: {context.group_id}:{context.version} "
            f"({context.channel.value})"
        )
        table.add_column("Module", style="cyan")
        table.add_column("Coordinates")
        table.add_column("Packaging", justify="center")
        table.add_column("Repository")
        table.add_column("Signing", justify="center")

        for pub in report.publications:
            repos = "\n".join(t.url for t in pub.repositories) or "[dim]none[/dim]"
            table.add_row(
                pub.module,
                pub.identity.coordinates,
                pub.packaging,
                repos,
                _STATE_ICONS[pub.signing_state],
            )
        return table

    def render_warnings(self, report: ReleaseReport) -> Panel | None:
        if not report.warnings:
            return None
        lines = [
            f"[yellow]{w.code.value}[/yellow] "
            f"{'[bold]' + w.module + '[/bold]: ' if w.module else ''}{w.message}"
            for w in report.warnings
        ]
        return Panel(
            "\n".join(lines),
            title="[bold yellow]Warnings[/bold yellow]",
            border_style="yellow",
        )

    def print_report(self, report: ReleaseReport) -> None:
        self.console.print(self.render_publications(report))
        warnings = self.render_warnings(report)
        if warnings is not None:
            self.console.print(warnings)

    def render_credentials(self, rows: list[tuple[str, str]]) -> Table:
        """Table of credential keys and their set / not-set description."""
        table = Table(title="Credentials")
        table.add_column("Key", style="cyan")
        table.add_column("Status")
        for key, status in rows:
            style = "red" if status == "not set" else "green"
            table.add_row(key, f"[{style}]{status}[/{style}]")
        return table
