import textwrap

from adfmd import to_markdown

from tests.helpers_adf import bullet_list, doc, heading, item, mark, ordered_list, para, text


def test_to_markdown_renders_common_nodes():
    adf = doc(
        heading(2, "Heading"),
        para(
            "This is ",
            text("bold", mark("strong")),
            " and ",
            text("italic", mark("em")),
            " with ",
            text("code", mark("code")),
            " and ",
            text("a link", mark("link", href="https://example.com")),
        ),
        bullet_list(item("First"), item("Second")),
        ordered_list(item("One"), item("Two"), order=1),
        {
            "type": "codeBlock",
            "attrs": {"language": "python"},
            "content": [{"type": "text", "text": "print('hello')"}],
        },
    )

    markdown = to_markdown(adf)
    assert (
        markdown
        == textwrap.dedent(
            """\
        ## Heading

        This is **bold** and *italic* with `code` and [a link](https://example.com)

        - First
        - Second

        1. One
        2. Two

        ```python
        print('hello')
        ```
        """
        ).strip()
    )


def test_to_markdown_renders_release_page_fixture(fixtures_dir, load_json):
    adf = load_json(fixtures_dir / "release_page.json")

    expected = "\n\n".join(
        [
            "## Release notes",
            "Owner: @Jane Doe tracked in [REL-42](https://example.atlassian.net/browse/REL-42) [In Progress]",
            ":warning: Deploy window closes 1717200000000",
            "Component | Version\n--- | ---\napi | `1.4.0`\nweb | ",
            "1. Freeze\n2. Ship\n  - API\n  - Web",
            "[Attachment: f-1]",
            "---",
        ]
    )
    assert to_markdown(adf) == expected


def test_json_string_input_matches_decoded_input(fixtures_dir, load_json):
    path = fixtures_dir / "release_page.json"

    assert to_markdown(path.read_text(encoding="utf-8")) == to_markdown(load_json(path))


def test_hard_break_inside_paragraph():
    adf = doc(para("Line", {"type": "hardBreak"}, "Two"))

    assert to_markdown(adf) == "Line\nTwo"


def test_blank_paragraphs_still_separate_blocks():
    adf = doc(para(), para("Hello"))

    assert to_markdown(adf) == "\n\nHello"
