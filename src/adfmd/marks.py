"""Inline mark application for ADF text nodes."""
from __future__ import annotations

from typing import Callable, Iterable, Mapping, Optional, Tuple

from .nodes import Mark

Decorator = Callable[[str, Mark], Optional[str]]


def _wrap(delimiter: str) -> Decorator:
    def decorate(text: str, mark: Mark) -> Optional[str]:
        return f"{delimiter}{text}{delimiter}"

    return decorate


def _link(text: str, mark: Mark) -> Optional[str]:
    href = mark.attrs.get("href")
    if not href or not isinstance(href, str):
        return None
    return f"[{text}]({href})"


# Innermost first. ``link`` must stay last: emphasis wrapped around a finished
# link breaks it, while a link around emphasis is fine.
MARK_PIPELINE: Tuple[Tuple[str, Decorator], ...] = (
    ("strong", _wrap("**")),
    ("em", _wrap("*")),
    ("code", _wrap("`")),
    ("strike", _wrap("~~")),
    # Markdown has no underline.
    ("underline", _wrap("_")),
    ("superscript", _wrap("^")),
    ("subscript", _wrap("~")),
    ("link", _link),
)


def _index_marks(marks: Iterable[Mark]) -> Mapping[str, Mark]:
    """Return the first mark of each kind, keyed by kind."""

    indexed: dict[str, Mark] = {}
    for mark in marks:
        if mark.kind == "link" and not mark.attrs.get("href"):
            continue
        indexed.setdefault(mark.kind, mark)
    return indexed


def apply_marks(text: str, marks: Iterable[Mark]) -> str:
    """Decorate ``text`` with ``marks`` in a fixed precedence order.

    The order in which marks appear in the source is irrelevant. Each kind is
    applied at most once, unknown kinds such as ``textColor`` are ignored and
    a link without an ``href`` leaves the text untouched.
    """

    present = _index_marks(marks)
    if not present:
        return text
    for kind, decorate in MARK_PIPELINE:
        mark = present.get(kind)
        if mark is None:
            continue
        decorated = decorate(text, mark)
        if decorated is not None:
            text = decorated
    return text


__all__ = ["MARK_PIPELINE", "apply_marks"]
