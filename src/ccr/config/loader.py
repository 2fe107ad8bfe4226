"""Config file loading for the router proxy."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from ccr.config.errors import ConfigError
from ccr.config.models import ProxySettings

HOME_DIR = Path.home() / ".claude-code-router"
DEFAULT_CONFIG_PATH = HOME_DIR / "config.json"
DEFAULT_LOG_PATH = HOME_DIR / "claude-code-router.log"


class SettingsLoader:
    """Load and validate a config file into :class:`ProxySettings`."""

    def __init__(self, path: Path = DEFAULT_CONFIG_PATH) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> ProxySettings:
        """Read the file, interpolate env vars, and validate.

        ``.json`` files are parsed as JSON, anything else as YAML. Environment
        variables in the form ``${VAR}`` or ``$VAR`` are expanded with
        :func:`os.path.expandvars` before parsing.

        Raises:
            ConfigError: On read errors, parse errors or schema validation failures.
        """
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Cannot read {self._path}: {exc}") from exc

        expanded = os.path.expandvars(raw)

        data: Any
        if self._path.suffix == ".json":
            try:
                data = json.loads(expanded)
            except json.JSONDecodeError as exc:
                raise ConfigError(f"JSON parse error: {exc}") from exc
        else:
            try:
                data = yaml.safe_load(expanded)
            except yaml.YAMLError as exc:
                raise ConfigError(f"YAML parse error: {exc}") from exc

        if not isinstance(data, dict):
            raise ConfigError("Config must be a mapping")

        try:
            return ProxySettings.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(str(exc)) from exc
