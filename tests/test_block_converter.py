"""
Tests for block conversion: headings, blockquotes, rules, lists and tables.
"""

from mdengine.converters.block_converter import convert_blocks, heading_id
from mdengine.converters.lists import ORDERED, UNORDERED, ListItem, convert_lists, parse_list_item
from mdengine.converters.tables import is_separator_row, render_table, split_row
from mdengine.placeholders import CODESPAN, get_placeholder_table


def test_heading_levels():
    assert convert_blocks("# Title", {}) == '<h1 id="title">Title</h1>'
    assert convert_blocks("###### Six", {}) == '<h6 id="six">Six</h6>'


def test_not_headings():
    assert convert_blocks("####### seven", {}) == "####### seven"
    assert convert_blocks("#tag", {}) == "#tag"


def test_heading_closing_hashes_are_dropped():
    assert convert_blocks("## Title ##", {}) == '<h2 id="title">Title</h2>'


def test_heading_id_slug():
    assert convert_blocks("## Hello, World!", {}) == '<h2 id="hello-world">Hello, World!</h2>'


def test_heading_id_decodes_entities():
    assert convert_blocks("# A & B", {}) == '<h1 id="a-b">A &amp; B</h1>'


def test_heading_id_sees_code_span_text():
    context = {}
    token = get_placeholder_table(context).add(CODESPAN, "<code>x_y</code>")
    assert heading_id(f"Use {token}", context) == "use-x_y"


def test_source_is_escaped():
    assert convert_blocks("<script>", {}) == "&lt;script&gt;"


def test_blockquote_lines():
    assert convert_blocks("> a\n> b", {}) == "<blockquote>a<br>b</blockquote>"


def test_nested_blockquote():
    assert convert_blocks("> a\n>> b", {}) == "<blockquote>a<blockquote>b</blockquote></blockquote>"


def test_horizontal_rules():
    for rule in ("---", "***", "___", "* * *", "- - -"):
        assert convert_blocks(rule, {}) == "<hr>"


def test_parse_list_item():
    assert parse_list_item("- a") == ListItem(UNORDERED, 0, "a")
    assert parse_list_item("  * b") == ListItem(UNORDERED, 1, "b")
    assert parse_list_item("12. twelve") == ListItem(ORDERED, 0, "twelve", 12)
    assert parse_list_item("-no space") is None
    assert parse_list_item("plain") is None


def test_task_items_win_over_bullets():
    item = parse_list_item("- [ ] todo")
    assert item.content == '<input type="checkbox" disabled> todo'
    done = parse_list_item("* [X] done")
    assert done.content == '<input type="checkbox" disabled checked> done'


def test_tab_is_one_level():
    assert parse_list_item("\t- nested").level == 1


def test_flat_list():
    assert convert_lists("- a\n- b", {}) == "<ul>\n<li>a\n</li>\n<li>b\n</li>\n</ul>"


def test_nested_list():
    expected = "<ul>\n<li>a\n<ul>\n<li>b\n</li>\n</ul>\n</li>\n<li>c\n</li>\n</ul>"
    assert convert_lists("- a\n  - b\n- c", {}) == expected


def test_list_kind_change_at_same_level():
    assert convert_lists("- a\n1. b", {}) == "<ul>\n<li>a\n</li>\n</ul>\n<ol>\n<li>b\n</li>\n</ol>"


def test_ordered_list_start():
    assert convert_lists("3. c\n4. d", {}).startswith('<ol start="3">\n<li>c')


def test_blank_line_between_items_keeps_list():
    assert convert_lists("- a\n\n- b", {}) == "<ul>\n<li>a\n</li>\n<li>b\n</li>\n</ul>"


def test_text_closes_list():
    assert convert_lists("- a\ntext", {}) == "<ul>\n<li>a\n</li>\n</ul>\ntext"


def test_split_row():
    assert split_row("| a | b |") == ["a", "b"]
    assert split_row("|a||b|") == ["a", "", "b"]


def test_separator_row():
    assert is_separator_row(["---", ":--:", "--:"])
    assert not is_separator_row(["a", "---"])
    assert not is_separator_row([""])


def test_render_table_alignment_and_padding():
    html = render_table(["| a | b |", "| --- | :-: |", "| 1 |", "| 1 | 2 | 3 |"])
    assert html == "\n".join(
        [
            "<table>",
            "<thead>",
            '<tr><th>a</th><th style="text-align: center">b</th></tr>',
            "</thead>",
            "<tbody>",
            '<tr><td>1</td><td style="text-align: center"></td></tr>',
            '<tr><td>1</td><td style="text-align: center">2</td></tr>',
            "</tbody>",
            "</table>",
        ]
    )


def test_render_table_left_right():
    html = render_table(["| a | b |", "|:--|--:|"])
    assert '<th style="text-align: left">a</th>' in html
    assert '<th style="text-align: right">b</th>' in html
    assert "<tbody>" not in html


def test_table_needs_separator_below_header():
    assert render_table(["| a |", "| b |"]) is None
    assert render_table(["| --- |", "| a |"]) is None


def test_table_without_separator_is_left_as_text():
    assert convert_blocks("| a |\n| b |", {}) == "| a |\n| b |"
