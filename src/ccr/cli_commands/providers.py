"""``ccr providers`` — list the providers a config file registers."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from ccr.cli_commands._output import console, print_providers_table
from ccr.config.loader import DEFAULT_CONFIG_PATH


@click.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_CONFIG_PATH,
    show_default=True,
    help="Config file to read.",
)
@click.option("--json", "as_json", is_flag=True, help="Print as JSON.")
def providers(config_path: Path, as_json: bool) -> None:
    """List configured providers and their models."""
    from ccr.config.errors import ConfigError
    from ccr.config.loader import SettingsLoader
    from ccr.protocols.registry import ProviderRegistry

    try:
        settings = SettingsLoader(config_path).load()
    except ConfigError as exc:
        console.print(f"[red]Config error:[/red] {exc}")
        sys.exit(1)

    registry = ProviderRegistry.from_settings(settings)
    if not len(registry):
        console.print("[yellow]No providers configured.[/yellow]")
        return

    print_providers_table(registry, as_json=as_json)
