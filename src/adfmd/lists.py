"""Helpers for nested list layout."""
from __future__ import annotations

import re

BULLET = "- "
NESTED_INDENT = "  "

_LEADING_BULLET = re.compile(r"^- ")


def indent_block(text: str, prefix: str = NESTED_INDENT) -> str:
    """Prefix every line of ``text`` with ``prefix``.

    Applied once per nesting level, so a list three levels deep ends up
    indented by three prefixes.
    """

    return "\n".join(f"{prefix}{line}" for line in text.split("\n"))


def number_item(rendered_item: str, ordinal: int) -> str:
    """Swap the leading bullet of a rendered list item for ``N. ``.

    Only the first line is touched; nested lines keep their own markers.
    """

    return _LEADING_BULLET.sub(f"{ordinal}. ", rendered_item, count=1)


__all__ = ["BULLET", "NESTED_INDENT", "indent_block", "number_item"]
