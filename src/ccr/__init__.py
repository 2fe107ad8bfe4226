"""ccr — Anthropic Messages to OpenAI chat completions router proxy."""

from __future__ import annotations

__version__ = "0.1.0"
