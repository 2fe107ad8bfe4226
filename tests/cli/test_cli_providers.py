"""Tests for ``ccr providers`` CLI command."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from click.testing import CliRunner

from ccr.cli import main

if TYPE_CHECKING:
    from pathlib import Path


def _write_config(tmp_path: Path, data: dict) -> Path:
    path = tmp_path / "config.json"
    path.write_text(json.dumps(data))
    return path


class TestProviders:
    def test_lists_providers_and_default_alias(self, tmp_path: Path) -> None:
        path = _write_config(
            tmp_path,
            {
                "Providers": [
                    {
                        "name": "openrouter",
                        "api_base_url": "https://openrouter.ai/api",
                        "api_key": "sk-or",
                        "models": ["anthropic/claude-sonnet-4"],
                    }
                ]
            },
        )

        result = CliRunner().invoke(main, ["providers", "--config", str(path)])

        assert result.exit_code == 0
        assert "openrouter" in result.output
        assert "default" in result.output

    def test_json_output(self, tmp_path: Path) -> None:
        path = _write_config(
            tmp_path,
            {
                "OPENAI_API_KEY": "sk-x",
                "OPENAI_BASE_URL": "https://api.openai.com",
                "OPENAI_MODEL": "gpt-4o",
            },
        )

        result = CliRunner().invoke(main, ["providers", "-c", str(path), "--json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data == [
            {
                "name": "default",
                "provider": "default",
                "api_base_url": "https://api.openai.com",
                "models": ["gpt-4o"],
            }
        ]

    def test_no_providers(self, tmp_path: Path) -> None:
        path = _write_config(tmp_path, {})
        result = CliRunner().invoke(main, ["providers", "-c", str(path)])
        assert result.exit_code == 0
        assert "No providers configured" in result.output

    def test_config_error(self, tmp_path: Path) -> None:
        result = CliRunner().invoke(main, ["providers", "-c", str(tmp_path / "missing.json")])
        assert result.exit_code == 1
        assert "Config error" in result.output
