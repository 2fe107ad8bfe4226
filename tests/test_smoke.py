"""Smoke test to verify the project scaffolding works."""

from __future__ import annotations


def test_import() -> None:
    import ccr

    assert ccr.__version__ == "0.1.0"


def test_cli_entrypoint() -> None:
    from ccr.cli import main

    assert callable(main)


def test_public_surfaces() -> None:
    from ccr.core.interface import OpenAITranspiler, validate_tool_pairing
    from ccr.protocols import ProviderClientCache, ProviderRegistry
    from ccr.runtime import RequestDispatcher
    from ccr.server import create_app

    assert OpenAITranspiler is not None
    assert validate_tool_pairing is not None
    assert ProviderClientCache is not None
    assert ProviderRegistry is not None
    assert RequestDispatcher is not None
    assert create_app is not None
