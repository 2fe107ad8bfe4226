"""CLI subcommand registration."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all subcommands on the CLI group."""
    from ccr.cli_commands.providers import providers
    from ccr.cli_commands.start import start

    cli.add_command(start)
    cli.add_command(providers)
