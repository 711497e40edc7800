from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from adfmd.formatting import (
    format_bullet_list,
    format_date,
    format_heading,
    format_numbered_list,
    format_separator,
    format_url,
)


def test_format_heading_clamps_level():
    assert format_heading("Title") == "# Title"
    assert format_heading("Title", 0) == "# Title"
    assert format_heading("Title", 9) == "###### Title"


def test_format_url_and_separator():
    assert format_url("https://example.com") == "[https://example.com](https://example.com)"
    assert format_url("https://example.com", "Example") == "[Example](https://example.com)"
    assert format_separator() == "---"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("2024-01-02T03:04:05Z", "2024-01-02 03:04:05 UTC"),
        ("2024-01-02T03:04:05.123+02:00", "2024-01-02 01:04:05 UTC"),
        (datetime(2024, 5, 6, 7, 8, 9, tzinfo=timezone.utc), "2024-05-06 07:08:09 UTC"),
        (date(2024, 5, 6), "2024-05-06 00:00:00 UTC"),
        (None, "Not available"),
        ("", "Not available"),
        ("yesterday", "Invalid date"),
    ],
)
def test_format_date(value, expected):
    assert format_date(value) == expected


def test_format_bullet_list():
    items = {
        "Title": "Release notes",
        "Link": "https://example.com/page",
        "Page": {"url": "https://example.com/p", "title": "P"},
        "Labels": ["api", "web"],
        "Updated": datetime(2024, 1, 1, tzinfo=timezone.utc),
        "Version": 3,
        "Missing": None,
    }

    assert format_bullet_list(items, str.upper).split("\n") == [
        "- **TITLE**: Release notes",
        "- **LINK**: [https://example.com/page](https://example.com/page)",
        "- **PAGE**: [P](https://example.com/p)",
        "- **LABELS**: api, web",
        "- **UPDATED**: 2024-01-01 00:00:00 UTC",
        "- **VERSION**: 3",
    ]


def test_format_numbered_list():
    assert format_numbered_list(["a", "b"], lambda item, index: f"{item}{index}") == "1. a0\n\n2. b1"
