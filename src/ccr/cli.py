"""ccr CLI entrypoint."""

from __future__ import annotations

import click

from ccr import __version__


@click.group()
@click.version_option(version=__version__, prog_name="ccr")
def main() -> None:
    """ccr — Anthropic Messages to OpenAI router proxy."""


# Register subcommands
from ccr.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
