"""Convert Atlassian Document Format (ADF) documents to Markdown."""
from __future__ import annotations

from .config import RenderOptions
from .errors import AdfMarkdownError, ConfigError, RenderError
from .nodes import Document, parse_document
from .renderer import MarkdownRenderer, to_markdown

__version__ = "0.1.0"

__all__ = [
    "AdfMarkdownError",
    "ConfigError",
    "Document",
    "MarkdownRenderer",
    "RenderError",
    "RenderOptions",
    "parse_document",
    "to_markdown",
]
