from __future__ import annotations

import pytest

from adfmd import to_markdown
from adfmd.renderer import EMOJI_FALLBACK

from tests.helpers_adf import doc, para


def _inline(node):
    return to_markdown(doc(para(node)))


@pytest.mark.parametrize(
    ("attrs", "expected"),
    [
        ({"text": "@jdoe"}, "@jdoe"),
        ({"text": "jdoe"}, "@jdoe"),
        ({"displayName": "Jane Doe"}, "@Jane Doe"),
        ({"text": "@@echo"}, "@@echo"),
        ({"id": "123"}, ""),
    ],
)
def test_mention(attrs, expected):
    assert _inline({"type": "mention", "attrs": attrs}) == expected


def test_mention_without_attrs_is_empty():
    assert _inline({"type": "mention"}) == ""


@pytest.mark.parametrize(
    ("attrs", "expected"),
    [
        (
            {"url": "https://example.atlassian.net/browse/PROJ-7"},
            "[PROJ-7](https://example.atlassian.net/browse/PROJ-7)",
        ),
        ({"url": "https://example.com/"}, "[Link](https://example.com/)"),
        ({"url": "no-slashes"}, "[Link](no-slashes)"),
        ({}, "[Link]"),
    ],
)
def test_inline_card(attrs, expected):
    assert _inline({"type": "inlineCard", "attrs": attrs}) == expected


@pytest.mark.parametrize(
    ("attrs", "expected"),
    [
        ({"shortName": ":smile:", "id": "1f604", "text": "😄"}, ":smile:"),
        ({"id": "1f604"}, "1f604"),
        ({}, EMOJI_FALLBACK),
    ],
)
def test_emoji_preference(attrs, expected):
    assert _inline({"type": "emoji", "attrs": attrs}) == expected


def test_date_is_rendered_verbatim():
    assert _inline({"type": "date", "attrs": {"timestamp": "1700000000000"}}) == "1700000000000"
    assert _inline({"type": "date"}) == ""


def test_status_chip():
    assert _inline({"type": "status", "attrs": {"text": "In Progress", "color": "blue"}}) == "[In Progress]"
    assert _inline({"type": "status"}) == "[Status]"


def test_text_without_value_is_empty():
    assert _inline({"type": "text"}) == ""
