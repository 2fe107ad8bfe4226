"""Wire-format transpilers."""

from ccr.core.interface.transpilers.openai import OpenAITranspiler

__all__ = ["OpenAITranspiler"]
