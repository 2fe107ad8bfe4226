"""``ccr start`` — run the proxy server."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from ccr.cli_commands._output import console
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
@click.option("--host", default=None, help="Override the HOST config key.")
@click.option("--port", "-p", type=int, default=None, help="Override the PORT config key.")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.option("--telemetry", is_flag=True, help="Export traces even if the config leaves them off.")
def start(
    config_path: Path,
    host: str | None,
    port: int | None,
    verbose: bool,
    telemetry: bool,
) -> None:
    """Start the router proxy in the foreground."""
    import uvicorn

    from ccr.config.errors import ConfigError
    from ccr.config.loader import DEFAULT_LOG_PATH, SettingsLoader
    from ccr.runtime.context import ProxyContext
    from ccr.server.app import create_app
    from ccr.server.writer import SSEPassthroughWriter
    from ccr.utils.log import configure_logging

    try:
        settings = SettingsLoader(config_path).load()
    except ConfigError as exc:
        console.print(f"[red]Config error:[/red] {exc}")
        sys.exit(1)

    configure_logging(verbose=verbose, log_file=DEFAULT_LOG_PATH if settings.log else None)

    if telemetry or settings.telemetry.enabled:
        from ccr.utils.telemetry import configure_telemetry

        try:
            configure_telemetry(settings.telemetry)
        except ImportError as exc:
            console.print(f"[red]Telemetry error:[/red] {exc}")
            sys.exit(1)

    context = ProxyContext.from_settings(settings, writer=SSEPassthroughWriter())
    app = create_app(context)

    bind_host = host or settings.host
    bind_port = port or settings.port
    console.print(f"[green]ccr is running on {bind_host}:{bind_port}[/green]")
    uvicorn.run(
        app,
        host=bind_host,
        port=bind_port,
        log_level="debug" if verbose else "warning",
        log_config=None,
    )
