"""Logging setup for the proxy process."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rich.logging import RichHandler

if TYPE_CHECKING:
    from pathlib import Path

_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_NOISY_LOGGERS = ("uvicorn", "uvicorn.access", "uvicorn.error", "httpx", "httpcore")


def configure_logging(*, verbose: bool = False, log_file: Path | None = None) -> None:
    """Install console (and optionally file) handlers on the root logger.

    The console gets a :class:`~rich.logging.RichHandler`. When *log_file* is
    set every record, debug included, is also appended to that file.
    """
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(logging.DEBUG if verbose or log_file else logging.INFO)

    console = RichHandler(rich_tracebacks=True, show_path=False)
    console.setLevel(logging.DEBUG if verbose else logging.INFO)
    root.addHandler(console)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        file_handler.setLevel(logging.DEBUG)
        root.addHandler(file_handler)

    if not verbose:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
