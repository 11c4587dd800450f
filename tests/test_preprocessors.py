"""
Tests for the preprocessors: source normalisation, fence and code span
protection, backslash escapes.
"""

from mdengine.placeholders import TOKEN_CLOSE, TOKEN_OPEN, get_placeholder_table, is_block_token
from mdengine.preprocessors.escape_protector import protect_escapes
from mdengine.preprocessors.fence_protector import (
    closes_fence,
    parse_fence_opener,
    protect_fences,
    render_fenced_block,
)
from mdengine.preprocessors.inline_code_protector import protect_inline_code
from mdengine.preprocessors.source_normalizer import normalize_source


def _protect(processor, text):
    context = {}
    output = processor(text, context)
    return output, get_placeholder_table(context)


def test_normalize_line_endings():
    assert normalize_source("a\r\nb\rc\n", {}) == "a\nb\nc\n"


def test_normalize_strips_sentinels():
    text = f"{TOKEN_OPEN}CODEBLOCK0{TOKEN_CLOSE}"
    assert normalize_source(text, {}) == "CODEBLOCK0"


def test_parse_fence_opener():
    assert parse_fence_opener("```python") == (0, "```", "python")
    assert parse_fence_opener("  ~~~~ js extra") == (2, "~~~~", "js")
    assert parse_fence_opener("``") is None
    assert parse_fence_opener("    ```") is None


def test_inline_triple_backticks_are_not_a_fence():
    assert parse_fence_opener("```foo```") is None


def test_closes_fence_needs_same_char_and_length():
    assert closes_fence("```", "```")
    assert closes_fence("`````", "```")
    assert not closes_fence("```", "````")
    assert not closes_fence("~~~", "```")
    assert not closes_fence("``` python", "```")


def test_protect_fences_replaces_block_with_one_line():
    output, table = _protect(protect_fences, "before\n```py\nx = 1\n```\nafter")

    lines = output.split("\n")
    assert len(lines) == 3
    assert lines[0] == "before"
    assert lines[2] == "after"
    assert is_block_token(lines[1])
    assert table.restore(lines[1]) == '<pre><code class="language-py">x = 1</code></pre>'


def test_longer_fence_keeps_inner_fences():
    output, table = _protect(protect_fences, "````\n```\ninner\n```\n````")
    assert table.restore(output) == "<pre><code>```\ninner\n```</code></pre>"


def test_tilde_fence_not_closed_by_backticks():
    output, table = _protect(protect_fences, "~~~\na\n```\n~~~\nb")
    assert table.restore(output) == "<pre><code>a\n```</code></pre>\nb"


def test_unterminated_fence_runs_to_end():
    output, table = _protect(protect_fences, "text\n```\ncode\nmore")
    assert table.restore(output) == "text\n<pre><code>code\nmore</code></pre>"


def test_fence_indentation_is_removed():
    output, table = _protect(protect_fences, "  ```\n  code\n    deeper\n  ```")
    assert table.restore(output) == "<pre><code>code\n  deeper</code></pre>"


def test_fenced_code_is_escaped_once():
    html = render_fenced_block("<b>&amp;</b>", "")
    assert html == "<pre><code>&lt;b&gt;&amp;amp;&lt;/b&gt;</code></pre>"


def test_mermaid_block():
    html = render_fenced_block("graph TD; A-->B", "mermaid")
    assert html == '<div class="mermaid">graph TD; A--&gt;B</div>'


def test_plantuml_block():
    html = render_fenced_block("A -> B\nB -> C", "PlantUML")
    assert html == (
        '<div class="plantuml" data-code="A -&gt; B&#10;B -&gt; C">[PlantUML Diagram]</div>'
    )


def test_protect_inline_code():
    output, table = _protect(protect_inline_code, "use `a<b` now")
    assert "`" not in output
    assert table.restore(output) == "use <code>a&lt;b</code> now"


def test_inline_code_does_not_span_lines():
    output, table = _protect(protect_inline_code, "a `b\nc` d")
    assert output == "a `b\nc` d"
    assert len(table) == 0


def test_protect_escapes():
    output, table = _protect(protect_escapes, r"\*a\* \# \$")
    assert "*" not in output
    assert table.restore(output) == "&#42;a&#42; &#35; &#36;"


def test_backslash_before_letter_is_kept():
    output, table = _protect(protect_escapes, r"C:\path")
    assert output == r"C:\path"
