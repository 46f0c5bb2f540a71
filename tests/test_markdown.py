"""Tests for Markdown conversion."""

from __future__ import annotations

import pytest

from trilium_explorer.markdown import to_markdown


def test_headings_paragraphs_and_emphasis() -> None:
    html = "<h2>Title</h2><p>Para <em>one</em> and <strong>bold</strong></p><p>Last</p>"
    assert to_markdown(html) == "## Title\n\nPara *one* and **bold**\n\nLast"


def test_legacy_emphasis_tags() -> None:
    assert to_markdown("<p><i>a</i> <b>b</b></p>") == "*a* **b**"


def test_unordered_list() -> None:
    assert to_markdown("<ul><li>One</li><li>Two</li></ul>") == "- One\n- Two"


def test_ordered_list_uses_one_dot_prefix() -> None:
    assert to_markdown("<ol><li>First</li><li>Second</li></ol>") == "1. First\n1. Second"


def test_nested_list_is_indented_two_spaces() -> None:
    html = "<ul><li>Parent<ul><li>Child</li></ul></li></ul>"
    assert to_markdown(html) == "- Parent\n  - Child"


def test_reference_link_keeps_text_only() -> None:
    html = '<p>See <a class="reference-link" href="#root/x/B">that&nbsp;note</a></p>'
    assert to_markdown(html) == "See that note"


def test_regular_link() -> None:
    html = '<p><a href="https://example.com">site</a></p>'
    assert to_markdown(html) == "[site](https://example.com)"


def test_fenced_code_block() -> None:
    html = "<pre><code>x = 1\ny = 2</code></pre>"
    assert to_markdown(html) == "```\nx = 1\ny = 2\n```"


def test_inline_code() -> None:
    assert to_markdown("<p>run <code>make</code></p>") == "run `make`"


def test_non_breaking_space_and_curly_quotes() -> None:
    assert to_markdown("<p>a&nbsp;b &ldquo;c&rdquo;</p>") == 'a b "c"'


def test_line_break() -> None:
    assert to_markdown("<p>line1<br>line2</p>") == "line1\nline2"


def test_blockquote() -> None:
    assert to_markdown("<blockquote><p>Quote</p></blockquote>") == "> Quote"


def test_drops_scripts() -> None:
    assert to_markdown("<p>ok</p><script>alert(1)</script>") == "ok"


@pytest.mark.parametrize("value", [None, "", "   ", 7])
def test_empty_input(value: object) -> None:
    assert to_markdown(value) == ""


def test_escapes_inline_markdown_characters() -> None:
    html = "<p>a*b*c and snake_case [x] `tick` back\\slash</p>"
    assert to_markdown(html) == r"a\*b\*c and snake\_case \[x\] \`tick\` back\\slash"


@pytest.mark.parametrize(
    ("html", "expected"),
    [
        ("<p>1. Introduction</p>", r"1\. Introduction"),
        ("<p>2) Second</p>", r"2\) Second"),
        ("<p>- item</p>", r"\- item"),
        ("<p>+ plus</p>", r"\+ plus"),
        ("<p># not a heading</p>", r"\# not a heading"),
        ("<p>&gt; not a quote</p>", r"\> not a quote"),
        ("<p>line1<br>- line2</p>", "line1\n\\- line2"),
        ("<ul><li>1. First</li></ul>", r"- 1\. First"),
    ],
)
def test_escapes_line_start_markers(html: str, expected: str) -> None:
    assert to_markdown(html) == expected


def test_markers_inside_a_line_are_left_alone() -> None:
    assert to_markdown("<p><b>One</b> - intro, see 1. below</p>") == "**One** - intro, see 1. below"


def test_code_is_not_escaped() -> None:
    html = "<p><code>a*b_c</code></p><pre>x_1 * [2]</pre>"
    assert to_markdown(html) == "`a*b_c`\n\n```\nx_1 * [2]\n```"
