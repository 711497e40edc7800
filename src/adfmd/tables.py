"""Pipe-table layout for rendered table cells."""
from __future__ import annotations

from typing import List, Sequence

CELL_SEPARATOR = " | "
HEADER_RULE = "---"


def rectangularize(rows: Sequence[Sequence[str]]) -> List[List[str]]:
    """Right-pad every row with empty cells up to the widest row.

    Rows are never truncated. Returns new lists; the input is left alone.
    """

    if not rows:
        return []
    width = max(len(row) for row in rows)
    return [list(row) + [""] * (width - len(row)) for row in rows]


def format_pipe_table(rows: Sequence[Sequence[str]]) -> str:
    """Lay out ``rows`` as a Markdown pipe table.

    Empty rows are dropped. The first remaining row is always used as the
    header, whether or not the source marked its cells as header cells.
    """

    kept = [row for row in rows if row]
    if not kept:
        return ""

    normalized = rectangularize(kept)
    header, body = normalized[0], normalized[1:]
    lines = [
        CELL_SEPARATOR.join(header),
        CELL_SEPARATOR.join(HEADER_RULE for _ in header),
    ]
    lines.extend(CELL_SEPARATOR.join(row) for row in body)
    return "\n".join(lines)


__all__ = ["CELL_SEPARATOR", "HEADER_RULE", "format_pipe_table", "rectangularize"]
