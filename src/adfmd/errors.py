"""Exception hierarchy for the ADF to Markdown converter."""
from __future__ import annotations

from typing import Any


class AdfMarkdownError(RuntimeError):
    """Base exception that carries structured context."""

    def __init__(self, message: str, *, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.context = context or {}


class RenderError(AdfMarkdownError):
    """Raised inside the renderer when a node cannot be converted."""


class ConfigError(AdfMarkdownError):
    """Raised when configuration validation fails."""


__all__ = [
    "AdfMarkdownError",
    "RenderError",
    "ConfigError",
]
