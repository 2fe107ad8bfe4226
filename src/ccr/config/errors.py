"""Configuration error types."""

from __future__ import annotations


class ConfigError(Exception):
    """Raised when the config file cannot be read, parsed, or validated."""
