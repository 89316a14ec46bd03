"""Tests for the block parser and its list state machine."""

import pytest

from slides_md.blocks import (
    LIST_TRANSITIONS,
    BlockParser,
    LineKind,
    ListAction,
    classify_line,
    render_slide,
)


# ============================================================
# CLASSIFICATION TESTS
# ============================================================

@pytest.mark.parametrize("line, kind", [
    ("```", LineKind.fence),
    ("```python", LineKind.fence),
    ("# Title", LineKind.heading),
    ("###### Six", LineKind.heading),
    ("####### Seven", LineKind.paragraph),
    ("#NoSpace", LineKind.paragraph),
    ("---", LineKind.rule),
    ("***", LineKind.rule),
    ("___", LineKind.rule),
    ("- item", LineKind.unordered),
    ("* item", LineKind.unordered),
    ("12. item", LineKind.ordered),
    ("1.", LineKind.paragraph),
    ("text", LineKind.paragraph),
    ("   ", LineKind.blank),
])
def test_classify_line(line, kind):
    assert classify_line(line, in_code=False).kind == kind


def test_classify_inside_code_keeps_raw_line():
    line = classify_line("  # not a heading", in_code=True)
    assert line.kind == LineKind.code
    assert line.text == "  # not a heading"


def test_classify_heading_level():
    line = classify_line("### Three", in_code=False)
    assert line.level == 3
    assert line.text == "Three"


def test_list_transition_table():
    assert LIST_TRANSITIONS[LineKind.heading] == ListAction.keep
    assert LIST_TRANSITIONS[LineKind.rule] == ListAction.keep
    assert LIST_TRANSITIONS[LineKind.blank] == ListAction.keep
    assert LIST_TRANSITIONS[LineKind.paragraph] == ListAction.close
    assert LIST_TRANSITIONS[LineKind.fence] == ListAction.close
    assert set(LIST_TRANSITIONS) == set(LineKind)


# ============================================================
# BLOCK RENDERING TESTS
# ============================================================

def test_empty_slide():
    assert render_slide("") == ""


def test_headings():
    assert render_slide("# A") == "<h1>A</h1>\n"
    assert render_slide("###### F") == "<h6>F</h6>\n"


def test_heading_content_is_inline_transformed():
    assert render_slide("## Use `x<y`") == "<h2>Use <code>x&lt;y</code></h2>\n"


def test_bare_hash_is_empty_heading():
    assert render_slide("#") == "<h1></h1>\n"


def test_paragraph():
    assert render_slide("hello **world**") == "<p>hello <strong>world</strong></p>\n"


def test_each_line_is_its_own_paragraph():
    assert render_slide("one\ntwo") == "<p>one</p>\n<p>two</p>\n"


def test_horizontal_rules():
    assert render_slide("***\n___") == "<hr/>\n<hr/>\n"


def test_unordered_list():
    assert render_slide("- a\n* b") == "<ul>\n<li>a</li>\n<li>b</li>\n</ul>\n"


def test_ordered_list():
    assert render_slide("1. one\n2. two") == "<ol>\n<li>one</li>\n<li>two</li>\n</ol>\n"


def test_indented_list_item():
    assert render_slide("  - a") == "<ul>\n<li>a</li>\n</ul>\n"


def test_switching_list_type_closes_previous_list():
    html = render_slide("- a\n- b\n1. c")
    assert html == "<ul>\n<li>a</li>\n<li>b</li>\n</ul>\n<ol>\n<li>c</li>\n</ol>\n"
    assert html.count("<ul>") == 1
    assert html.count("<ol>") == 1


def test_paragraph_closes_list():
    assert render_slide("- a\ntext") == "<ul>\n<li>a</li>\n</ul>\n<p>text</p>\n"


def test_blank_line_keeps_list_open():
    assert render_slide("- a\n\n- b") == "<ul>\n<li>a</li>\n<li>b</li>\n</ul>\n"


def test_heading_keeps_list_open():
    assert render_slide("- a\n# H\n- b") == "<ul>\n<li>a</li>\n<h1>H</h1>\n<li>b</li>\n</ul>\n"


def test_rule_keeps_list_open():
    assert render_slide("1. a\n---\n2. b") == "<ol>\n<li>a</li>\n<hr/>\n<li>b</li>\n</ol>\n"


# ============================================================
# CODE BLOCK TESTS
# ============================================================

def test_code_block_is_escaped_not_transformed():
    html = render_slide("```\n<b>**x**</b>\n  indented\n```")
    assert html == "<pre><code>&lt;b&gt;**x**&lt;/b&gt;\n  indented\n</code></pre>"


def test_code_block_with_language_tag():
    assert render_slide("```python\nx = 1\n```") == "<pre><code>x = 1\n</code></pre>"


def test_code_block_keeps_blank_lines():
    assert render_slide("```\na\n\nb\n```") == "<pre><code>a\n\nb\n</code></pre>"


def test_markdown_inside_code_block_is_literal():
    html = render_slide("```\n# not heading\n- not item\n[x](y)\n```")
    assert "<h1>" not in html
    assert "<li>" not in html
    assert "<a " not in html


def test_fence_closes_list():
    html = render_slide("- a\n```\ncode\n```")
    assert html == "<ul>\n<li>a</li>\n</ul>\n<pre><code>code\n</code></pre>"


def test_unterminated_fence_is_closed_at_end():
    assert render_slide("```\ncode") == "<pre><code>code\n</code></pre>"


def test_end_of_input_closes_open_list():
    assert render_slide("1. a") == "<ol>\n<li>a</li>\n</ol>\n"


def test_parser_state_is_per_call():
    render_slide("```\nunterminated")
    assert render_slide("# A") == "<h1>A</h1>\n"


def test_block_parser_feed_and_finish():
    parser = BlockParser()
    parser.feed("- a")
    parser.feed("```")
    parser.feed("x")
    assert parser.finish() == "<ul>\n<li>a</li>\n</ul>\n<pre><code>x\n</code></pre>"
