"""Builders for raw ADF payloads used across the test suite."""
from __future__ import annotations

from typing import Any, Dict, Optional

Raw = Dict[str, Any]


def mark(kind: str, **attrs: Any) -> Raw:
    payload: Raw = {"type": kind}
    if attrs:
        payload["attrs"] = attrs
    return payload


def text(value: str, *marks: Raw) -> Raw:
    payload: Raw = {"type": "text", "text": value}
    if marks:
        payload["marks"] = list(marks)
    return payload


def _inline(child: Any) -> Raw:
    return text(child) if isinstance(child, str) else child


def para(*children: Any) -> Raw:
    return {"type": "paragraph", "content": [_inline(child) for child in children]}


def heading(level: Any, *children: Any) -> Raw:
    return {
        "type": "heading",
        "attrs": {"level": level},
        "content": [_inline(child) for child in children],
    }


def item(*children: Any) -> Raw:
    return {"type": "listItem", "content": [para(child) if isinstance(child, str) else child for child in children]}


def bullet_list(*items: Raw) -> Raw:
    return {"type": "bulletList", "content": list(items)}


def ordered_list(*items: Raw, order: Optional[int] = None) -> Raw:
    payload: Raw = {"type": "orderedList", "content": list(items)}
    if order is not None:
        payload["attrs"] = {"order": order}
    return payload


def cell(*children: Any, header: bool = False) -> Raw:
    return {
        "type": "tableHeader" if header else "tableCell",
        "content": [para(child) if isinstance(child, str) else child for child in children],
    }


def row(*cells: Any) -> Raw:
    return {"type": "tableRow", "content": [cell(value) if isinstance(value, str) else value for value in cells]}


def table(*rows: Raw) -> Raw:
    return {"type": "table", "content": list(rows)}


def doc(*nodes: Any) -> Raw:
    return {"version": 1, "type": "doc", "content": list(nodes)}
