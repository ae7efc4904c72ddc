"""pubforge CLI: Typer-based command-line interface.

Provides the ``pubforge`` command with subcommands for planning and writing
publications, checking credentials and creating signing keys.

All output uses Rich for formatted terminal display.
"""
