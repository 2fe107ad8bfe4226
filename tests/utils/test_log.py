"""Tests for logging setup."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest
from rich.logging import RichHandler

from ccr.utils.log import configure_logging

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


@pytest.fixture(autouse=True)
def _restore_root_logger() -> Iterator[None]:
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    httpx_level = logging.getLogger("httpx").level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("httpx").setLevel(httpx_level)


def test_console_only() -> None:
    configure_logging()
    root = logging.getLogger()
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0], RichHandler)
    assert root.level == logging.INFO
    assert logging.getLogger("httpx").level == logging.WARNING


def test_verbose() -> None:
    configure_logging(verbose=True)
    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert root.handlers[0].level == logging.DEBUG


def test_file_handler_writes_debug(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "ccr.log"
    configure_logging(log_file=log_file)

    logging.getLogger("ccr.test").debug("routed to %s", "openrouter")
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert "routed to openrouter" in log_file.read_text()
