"""Render Atlassian Document Format (ADF) trees as Markdown."""
from __future__ import annotations

import json
import re
from collections.abc import Mapping
from typing import Any, Callable, Dict, List, Optional, Union

from .config import RenderOptions
from .errors import RenderError
from .lists import BULLET, indent_block, number_item
from .logging_config import get_logger
from .marks import apply_marks
from .nodes import (
    Blockquote,
    BulletList,
    CodeBlock,
    Date,
    Document,
    Emoji,
    HardBreak,
    Heading,
    InlineCard,
    ListItem,
    Media,
    MediaGroup,
    Mention,
    Node,
    OrderedList,
    Paragraph,
    Rule,
    Status,
    Table,
    TableCell,
    TableRow,
    Text,
    heading_level,
    parse_document,
)
from .tables import format_pipe_table

LOGGER = get_logger(__name__)

BLOCK_SEPARATOR = "\n\n"
EMOJI_FALLBACK = "\U0001F4DD"

_LAST_PATH_SEGMENT = re.compile(r"/([^/]+)$")


def _needs_space(left: str, right: str) -> bool:
    if not left or not right:
        return False
    return not left[-1].isspace() and not right[0].isspace()


class MarkdownRenderer:
    """Convert ADF documents to Markdown fragments.

    :meth:`render` never raises. Malformed input degrades to a best-effort
    string and unexpected failures become ``options.error_message``.
    """

    def __init__(self, options: Optional[RenderOptions] = None) -> None:
        self.options = options or RenderOptions()
        self._handlers: Dict[type, Callable[[Any], str]] = {
            Paragraph: self._render_paragraph,
            Heading: self._render_heading,
            BulletList: self._render_bullet_list,
            OrderedList: self._render_ordered_list,
            ListItem: self._render_list_item,
            CodeBlock: self._render_code_block,
            Blockquote: self._render_blockquote,
            Rule: lambda node: "---",
            MediaGroup: self._render_media_group,
            Media: self._render_media,
            Table: self._render_table,
            Text: self._render_text,
            Mention: self._render_mention,
            InlineCard: self._render_inline_card,
            Emoji: self._render_emoji,
            Date: self._render_date,
            Status: self._render_status,
            HardBreak: lambda node: "\n",
        }

    # Entry points -----------------------------------------------------

    def render(self, value: Any) -> str:
        """Render ``value`` to Markdown.

        ``value`` may be a decoded ADF mapping, a :class:`Document`, a JSON
        string or anything else. Strings that are not JSON are assumed to be
        pre-rendered and come back unchanged.
        """

        try:
            prepared = self._prepare(value)
            if isinstance(prepared, str):
                return prepared
            if prepared.content is None:
                return ""
            markdown = self.render_blocks(prepared.content)
        except RenderError as exc:
            LOGGER.error("Error converting ADF to Markdown: %s", exc, extra={"context": exc.context})
            return self.options.error_message
        except Exception:
            LOGGER.exception("Error converting ADF to Markdown")
            return self.options.error_message

        LOGGER.debug("Converted ADF to Markdown", extra={"length": len(markdown)})
        return markdown

    def render_blocks(self, nodes: Any) -> str:
        """Render each node independently and separate them by a blank line."""

        return BLOCK_SEPARATOR.join(self.render_node(node) for node in nodes)

    def render_node(self, node: Node) -> str:
        if not isinstance(node, Node):
            raise RenderError(
                f"Cannot render value of type {type(node).__name__}",
                context={"type": type(node).__name__},
            )
        handler = self._handlers.get(type(node), self._render_fallback)
        return handler(node)

    def _prepare(self, value: Any) -> Union[Document, str]:
        if isinstance(value, Document):
            return value
        if not value:
            return ""
        if isinstance(value, str):
            try:
                decoded = json.loads(value)
            except ValueError:
                return value
            return parse_document(decoded, max_depth=self.options.max_depth)
        if isinstance(value, Mapping):
            return parse_document(value, max_depth=self.options.max_depth)
        if isinstance(value, (list, tuple)):
            return Document()
        return str(value)

    # Block nodes ------------------------------------------------------

    def _render_inline(self, nodes: Any) -> str:
        return "".join(self.render_node(node) for node in nodes)

    def _render_paragraph(self, node: Paragraph) -> str:
        parts: List[str] = []
        previous: Optional[Node] = None
        for child in node.children:
            # Separate adjacent text runs that would otherwise glue words.
            if (
                isinstance(child, Text)
                and isinstance(previous, Text)
                and _needs_space(previous.text, child.text)
            ):
                parts.append(" ")
            parts.append(self.render_node(child))
            previous = child
        return "".join(parts)

    def _render_heading(self, node: Heading) -> str:
        content = self._render_inline(node.children).replace("\n", " ")
        return f"{'#' * heading_level(node.level)} {content}"

    def _render_bullet_list(self, node: BulletList) -> str:
        return "\n".join(self.render_node(item) for item in node.children)

    def _render_ordered_list(self, node: OrderedList) -> str:
        return "\n".join(
            number_item(self.render_node(item), index + 1)
            for index, item in enumerate(node.children)
        )

    def _render_list_item(self, node: ListItem) -> str:
        if not node.children:
            return ""
        parts: List[str] = []
        for child in node.children:
            rendered = self.render_node(child)
            if isinstance(child, (BulletList, OrderedList)):
                rendered = indent_block(rendered)
            parts.append(rendered)
        return BULLET + "\n".join(parts)

    def _render_code_block(self, node: CodeBlock) -> str:
        fence = f"```{node.language}"
        if not node.children:
            return f"{fence}\n```"
        code = "".join(self._plain_text(child) for child in node.children)
        return f"{fence}\n{code}\n```"

    def _plain_text(self, node: Node) -> str:
        if isinstance(node, Text):
            return node.text
        if isinstance(node, HardBreak):
            return "\n"
        return "".join(self._plain_text(child) for child in node.children)

    def _render_blockquote(self, node: Blockquote) -> str:
        if not node.children:
            return ""
        content = self.render_blocks(node.children)
        return "\n".join(f"> {line}" for line in content.split("\n"))

    def _render_media_group(self, node: MediaGroup) -> str:
        entries: List[str] = []
        for child in node.children:
            if not isinstance(child, Media):
                continue
            if child.media_type == "file":
                entries.append(f"[Attachment: {child.media_id}]")
            elif child.media_type == "link":
                entries.append("[External Link]")
        return "\n".join(entries)

    def _render_media(self, node: Media) -> str:
        if node.media_type == "file":
            alt = node.alt or f"Attachment: {node.media_id}"
            return f"![{alt}](attachment:{node.media_id})"
        if node.media_type == "external" and node.url:
            return f"[External Media]({node.url})"
        return ""

    def _render_table(self, node: Table) -> str:
        rows: List[List[str]] = []
        for row in node.children:
            if not isinstance(row, TableRow):
                continue
            rows.append(
                [
                    self._render_cell(cell)
                    for cell in row.children
                    if isinstance(cell, TableCell) and cell.children
                ]
            )
        return format_pipe_table(rows)

    def _render_cell(self, cell: TableCell) -> str:
        content = " ".join(self.render_node(child) for child in cell.children)
        return " ".join(content.split("\n")).strip()

    def _render_fallback(self, node: Node) -> str:
        if node.children:
            return self.render_blocks(node.children)
        return ""

    # Inline nodes -----------------------------------------------------

    def _render_text(self, node: Text) -> str:
        if not node.text:
            return ""
        return apply_marks(node.text, node.marks)

    def _render_mention(self, node: Mention) -> str:
        name = node.text or node.display_name
        if not name:
            return ""
        if name.startswith("@"):
            name = name[1:]
        return f"@{name}"

    def _render_inline_card(self, node: InlineCard) -> str:
        if not node.url:
            return "[Link]"
        match = _LAST_PATH_SEGMENT.search(node.url)
        name = match.group(1) if match else "Link"
        return f"[{name}]({node.url})"

    def _render_emoji(self, node: Emoji) -> str:
        return node.short_name or node.emoji_id or EMOJI_FALLBACK

    def _render_date(self, node: Date) -> str:
        return node.timestamp

    def _render_status(self, node: Status) -> str:
        return f"[{node.text or 'Status'}]"


def to_markdown(value: Any, options: Optional[RenderOptions] = None) -> str:
    """Render an ADF document (or raw string) to Markdown."""

    return MarkdownRenderer(options).render(value)


__all__ = ["BLOCK_SEPARATOR", "EMOJI_FALLBACK", "MarkdownRenderer", "to_markdown"]
