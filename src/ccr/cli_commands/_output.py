"""Shared CLI output formatters."""

from __future__ import annotations

import json

from rich.console import Console
from rich.table import Table

from ccr.protocols.registry import ProviderRegistry  # noqa: TC001

console = Console()


def print_providers_table(registry: ProviderRegistry, *, as_json: bool = False) -> None:
    """Pretty-print registered providers, aliases included."""
    if as_json:
        data = [
            {
                "name": name,
                "provider": provider.name,
                "api_base_url": provider.api_base_url,
                "models": sorted(provider.models),
            }
            for name, provider in registry.items()
        ]
        console.print_json(json.dumps(data))
        return

    table = Table(title="Providers")
    table.add_column("Name", style="cyan")
    table.add_column("Base URL")
    table.add_column("Models")

    for name, provider in registry.items():
        label = name if name == provider.name else f"{name} → {provider.name}"
        table.add_row(label, provider.api_base_url, _truncate(", ".join(sorted(provider.models))))

    console.print(table)


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
