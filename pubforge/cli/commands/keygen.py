"""``pubforge keygen``: create a password-protected Ed25519 signing key."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel

from pubforge.bridge.crypto_bridge import export_signing_key, generate_keypair, key_fingerprint

console = Console()


def keygen_cmd(
    output: Path = typer.Argument(..., help="Where to write the armored key file."),
    password: str = typer.Option(
        ...,
        prompt=True,
        hide_input=True,
        confirmation_prompt=True,
        envvar="SIGNING_PASSWORD",
        help="Password protecting the key file.",
    ),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing key file."),
) -> None:
    """Generate a signing key and print the key id to configure."""
    if output.exists() and not force:
        console.print(f"[bold red]Refusing to overwrite {output}[/bold red] (use --force)")
        raise typer.Exit(code=1)

    private_key, public_key = generate_keypair()
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(export_signing_key(private_key, password), encoding="utf-8")

    console.print(
        Panel(
            "\n".join([
                f"[bold]Key file:[/bold]   {output}",
                f"[bold]Key id:[/bold]     {key_fingerprint(public_key)}",
                f"[bold]Public key:[/bold] {public_key}",
                "",
                "[dim]Set SIGNING_KEY_ID, SIGNING_PASSWORD and",
                "SIGNING_SECRET_KEY_RING_FILE to sign publications.[/dim]",
            ]),
            title="[bold]Signing key created[/bold]",
            border_style="green",
            padding=(1, 2),
        )
    )
