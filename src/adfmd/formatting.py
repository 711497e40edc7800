"""Markdown snippets used to embed rendered fragments in larger reports."""
from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence, TypeVar

T = TypeVar("T")


def format_heading(text: str, level: int = 1) -> str:
    """Return an ATX heading with ``level`` clamped to ``[1, 6]``."""

    return f"{'#' * max(1, min(6, level))} {text}"


def format_url(url: str, title: Optional[str] = None) -> str:
    return f"[{title or url}]({url})"


def format_separator() -> str:
    return "---"


def _parse_datetime(value: str) -> datetime:
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def format_date(value: str | datetime | date | None) -> str:
    """Format ``value`` as ``YYYY-MM-DD HH:MM:SS UTC``.

    Naive datetimes are taken to be UTC already. Empty input yields
    ``Not available``; unparseable input yields ``Invalid date``.
    """

    if not value:
        return "Not available"
    try:
        if isinstance(value, str):
            parsed = _parse_datetime(value)
        elif isinstance(value, datetime):
            parsed = value
        elif isinstance(value, date):
            parsed = datetime(value.year, value.month, value.day)
        else:
            return "Invalid date"
    except ValueError:
        return "Invalid date"

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")


def _format_value(value: Any) -> str:
    if isinstance(value, Mapping) and "url" in value:
        url = str(value["url"])
        return format_url(url, str(value.get("title") or url))
    if isinstance(value, str) and value.startswith(("http://", "https://")):
        return format_url(value)
    if isinstance(value, (datetime, date)):
        return format_date(value)
    if isinstance(value, Sequence) and not isinstance(value, str):
        return ", ".join(str(item) for item in value)
    return str(value)


def format_bullet_list(
    items: Mapping[str, Any],
    key_formatter: Optional[Callable[[str], str]] = None,
) -> str:
    """Render ``items`` as ``- **key**: value`` lines, skipping ``None`` values.

    URL strings and ``{"url": ..., "title": ...}`` mappings become links,
    dates are formatted with :func:`format_date` and sequences are joined
    with commas.
    """

    lines = []
    for key, value in items.items():
        if value is None:
            continue
        label = key_formatter(key) if key_formatter else key
        lines.append(f"- **{label}**: {_format_value(value)}")
    return "\n".join(lines)


def format_numbered_list(items: Iterable[T], formatter: Callable[[T, int], str]) -> str:
    """Number each formatted item, separating items with a blank line."""

    return "\n\n".join(
        f"{index + 1}. {formatter(item, index)}" for index, item in enumerate(items)
    )


__all__ = [
    "format_bullet_list",
    "format_date",
    "format_heading",
    "format_numbered_list",
    "format_separator",
    "format_url",
]
