"""Typed records for Atlassian Document Format (ADF) nodes.

The upstream API hands us loosely typed JSON. Everything downstream of
:func:`parse_document` works with the immutable records defined here, so
missing or malformed attributes are resolved to defaults exactly once.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Dict, Mapping, Optional, Tuple

from .logging_config import get_logger

LOGGER = get_logger(__name__)

DEFAULT_MAX_DEPTH = 100


@dataclass(frozen=True)
class Mark:
    """Inline decoration attached to a text node."""

    kind: str
    attrs: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Node:
    kind: ClassVar[str] = ""

    children: Tuple["Node", ...] = ()


@dataclass(frozen=True)
class Paragraph(Node):
    kind: ClassVar[str] = "paragraph"


@dataclass(frozen=True)
class Heading(Node):
    kind: ClassVar[str] = "heading"

    level: int = 1


@dataclass(frozen=True)
class BulletList(Node):
    kind: ClassVar[str] = "bulletList"


@dataclass(frozen=True)
class OrderedList(Node):
    kind: ClassVar[str] = "orderedList"


@dataclass(frozen=True)
class ListItem(Node):
    kind: ClassVar[str] = "listItem"


@dataclass(frozen=True)
class CodeBlock(Node):
    kind: ClassVar[str] = "codeBlock"

    language: str = ""


@dataclass(frozen=True)
class Blockquote(Node):
    kind: ClassVar[str] = "blockquote"


@dataclass(frozen=True)
class Rule(Node):
    kind: ClassVar[str] = "rule"


@dataclass(frozen=True)
class MediaGroup(Node):
    kind: ClassVar[str] = "mediaGroup"


@dataclass(frozen=True)
class Media(Node):
    kind: ClassVar[str] = "media"

    media_type: str = ""
    media_id: str = ""
    alt: str = ""
    url: str = ""


@dataclass(frozen=True)
class Table(Node):
    kind: ClassVar[str] = "table"


@dataclass(frozen=True)
class TableRow(Node):
    kind: ClassVar[str] = "tableRow"


@dataclass(frozen=True)
class TableCell(Node):
    """A ``tableCell`` or, when ``header`` is set, a ``tableHeader``."""

    kind: ClassVar[str] = "tableCell"

    header: bool = False


@dataclass(frozen=True)
class Text(Node):
    kind: ClassVar[str] = "text"

    text: str = ""
    marks: Tuple[Mark, ...] = ()


@dataclass(frozen=True)
class Mention(Node):
    kind: ClassVar[str] = "mention"

    text: str = ""
    display_name: str = ""


@dataclass(frozen=True)
class InlineCard(Node):
    kind: ClassVar[str] = "inlineCard"

    url: str = ""


@dataclass(frozen=True)
class Emoji(Node):
    kind: ClassVar[str] = "emoji"

    short_name: str = ""
    emoji_id: str = ""


@dataclass(frozen=True)
class Date(Node):
    kind: ClassVar[str] = "date"

    timestamp: str = ""


@dataclass(frozen=True)
class Status(Node):
    kind: ClassVar[str] = "status"

    text: str = ""


@dataclass(frozen=True)
class HardBreak(Node):
    kind: ClassVar[str] = "hardBreak"


@dataclass(frozen=True)
class Unknown(Node):
    """Any node kind the converter has no dedicated rule for."""

    kind: ClassVar[str] = "unknown"

    raw_kind: str = ""


@dataclass(frozen=True)
class Document:
    """Root of an ADF tree.

    ``content`` is ``None`` when the source had no usable node sequence.
    """

    version: Optional[int] = None
    content: Optional[Tuple[Node, ...]] = None


def _string(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def _integer(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return default


def heading_level(value: Any) -> int:
    """Return ``value`` as a heading level clamped to ``[1, 6]``."""

    return max(1, min(6, _integer(value, 1)))


def _attrs(raw: Mapping[str, Any]) -> Mapping[str, Any]:
    attrs = raw.get("attrs")
    return attrs if isinstance(attrs, Mapping) else {}


def _marks(raw: Mapping[str, Any]) -> Tuple[Mark, ...]:
    items = raw.get("marks")
    if not isinstance(items, (list, tuple)):
        return ()
    marks = []
    for item in items:
        if not isinstance(item, Mapping):
            continue
        kind = item.get("type")
        if not isinstance(kind, str) or not kind:
            continue
        attrs = item.get("attrs")
        marks.append(Mark(kind, dict(attrs) if isinstance(attrs, Mapping) else {}))
    return tuple(marks)


_Builder = Callable[[Mapping[str, Any], Mapping[str, Any], Tuple[Node, ...]], Node]


def _build_heading(raw, attrs, children):
    return Heading(children=children, level=heading_level(attrs.get("level")))


def _build_code_block(raw, attrs, children):
    return CodeBlock(children=children, language=_string(attrs.get("language")))


def _build_media(raw, attrs, children):
    return Media(
        children=children,
        media_type=_string(attrs.get("type")),
        media_id=_string(attrs.get("id")),
        alt=_string(attrs.get("alt")),
        url=_string(attrs.get("url")),
    )


def _build_text(raw, attrs, children):
    return Text(text=_string(raw.get("text")), marks=_marks(raw))


def _build_mention(raw, attrs, children):
    return Mention(text=_string(attrs.get("text")), display_name=_string(attrs.get("displayName")))


def _build_emoji(raw, attrs, children):
    return Emoji(
        short_name=_string(attrs.get("shortName")),
        emoji_id=_string(attrs.get("id")),
    )


_SIMPLE_KINDS: Dict[str, type] = {
    cls.kind: cls
    for cls in (
        Paragraph,
        BulletList,
        OrderedList,
        ListItem,
        Blockquote,
        Rule,
        MediaGroup,
        Table,
        TableRow,
        HardBreak,
    )
}

_BUILDERS: Dict[str, _Builder] = {
    "heading": _build_heading,
    "codeBlock": _build_code_block,
    "media": _build_media,
    "text": _build_text,
    "mention": _build_mention,
    "emoji": _build_emoji,
    "tableCell": lambda raw, attrs, children: TableCell(children=children),
    "tableHeader": lambda raw, attrs, children: TableCell(children=children, header=True),
    "inlineCard": lambda raw, attrs, children: InlineCard(url=_string(attrs.get("url"))),
    "date": lambda raw, attrs, children: Date(timestamp=_string(attrs.get("timestamp"))),
    "status": lambda raw, attrs, children: Status(text=_string(attrs.get("text"))),
}


class _Parser:
    """Single-use tree builder that tracks depth truncation."""

    def __init__(self, max_depth: int) -> None:
        self.max_depth = max_depth
        self.truncated = 0

    def node(self, raw: Any, depth: int) -> Node:
        if not isinstance(raw, Mapping):
            return Unknown()
        kind = raw.get("type")
        if not isinstance(kind, str) or not kind:
            return Unknown()
        if depth > self.max_depth:
            self.truncated += 1
            return Unknown(raw_kind=kind)

        attrs = _attrs(raw)
        children = self.children(raw, depth)

        simple = _SIMPLE_KINDS.get(kind)
        if simple is not None:
            return simple(children=children)
        builder = _BUILDERS.get(kind)
        if builder is not None:
            return builder(raw, attrs, children)

        LOGGER.debug("Unsupported node kind %r, falling back to its children", kind)
        return Unknown(children=children, raw_kind=kind)

    def children(self, raw: Mapping[str, Any], depth: int) -> Tuple[Node, ...]:
        content = raw.get("content")
        if not isinstance(content, (list, tuple)):
            return ()
        return tuple(self.node(item, depth + 1) for item in content)

    def report(self) -> None:
        if self.truncated:
            LOGGER.warning(
                "Document nesting exceeds %d levels; dropped %d subtrees",
                self.max_depth,
                self.truncated,
                extra={"max_depth": self.max_depth, "truncated": self.truncated},
            )


def parse_node(raw: Any, *, max_depth: int = DEFAULT_MAX_DEPTH) -> Node:
    """Build a typed record for a single raw node and its descendants."""

    parser = _Parser(max_depth)
    node = parser.node(raw, 1)
    parser.report()
    return node


def parse_document(raw: Any, *, max_depth: int = DEFAULT_MAX_DEPTH) -> Document:
    """Build a :class:`Document` from a decoded ADF payload.

    Anything other than a mapping with a list under ``content`` yields a
    document without content. Nodes nested deeper than ``max_depth`` are
    replaced by childless :class:`Unknown` records.
    """

    if not isinstance(raw, Mapping):
        return Document()
    version = raw.get("version")
    version = version if isinstance(version, int) and not isinstance(version, bool) else None
    content = raw.get("content")
    if not isinstance(content, (list, tuple)):
        return Document(version=version)

    parser = _Parser(max_depth)
    nodes = tuple(parser.node(item, 1) for item in content)
    parser.report()
    return Document(version=version, content=nodes)


__all__ = [
    "DEFAULT_MAX_DEPTH",
    "Blockquote",
    "BulletList",
    "CodeBlock",
    "Date",
    "Document",
    "Emoji",
    "HardBreak",
    "Heading",
    "InlineCard",
    "ListItem",
    "Mark",
    "Media",
    "MediaGroup",
    "Mention",
    "Node",
    "OrderedList",
    "Paragraph",
    "Rule",
    "Status",
    "Table",
    "TableCell",
    "TableRow",
    "Text",
    "Unknown",
    "heading_level",
    "parse_document",
    "parse_node",
]
