# mdengine/converters/block_converter.py
"""
Converter for block-level markdown.

This converter:
- HTML-escapes the protected source, once, for the whole document
- Turns ATX headings into <hN id="slug">
- Groups ``>`` lines into (possibly nested) <blockquote> elements
- Turns thematic breaks into <hr>
- Builds nested lists (see lists.py) and pipe tables (see tables.py)

It works line by line. Lines that are not block syntax are passed through
untouched for the inline and extension converters.
"""

from __future__ import annotations

import re

from ..placeholders import get_placeholder_table
from ..utils import escape_html, slugify_heading
from .lists import convert_lists
from .tables import convert_tables

# Exact marker counts: "#######" is not a heading
HEADING_RE = re.compile(r"^(#{1,6})[ \t]+(.+?)(?:[ \t]+#+)?[ \t]*$")
# Markers are matched after escaping, so ">" reads "&gt;"
_QUOTE_RE = re.compile(r"^ {0,3}&gt; ?(.*)$")
_RULE_RE = re.compile(r"^ {0,3}([-*_])(?:[ \t]*\1){2,}[ \t]*$")


def heading_id(content: str, context: dict) -> str:
    """Slug for a heading, computed from its text with placeholders resolved."""
    table = get_placeholder_table(context)
    return slugify_heading(table.restore(content))


def convert_headings(text, context):
    def _heading(line):
        match = HEADING_RE.match(line)
        if not match or not match.group(2).strip():
            return line
        level = len(match.group(1))
        content = match.group(2).strip()
        return f'<h{level} id="{heading_id(content, context)}">{content}</h{level}>'

    return "\n".join(_heading(line) for line in text.split("\n"))


def _render_blockquote(lines: list[str]) -> str:
    """Render the contents of one ``>`` group; deeper markers nest."""
    parts: list[tuple[bool, str]] = []
    i = 0
    while i < len(lines):
        nested = []
        while i < len(lines):
            match = _QUOTE_RE.match(lines[i])
            if not match:
                break
            nested.append(match.group(1))
            i += 1

        if nested:
            parts.append((True, _render_blockquote(nested)))
        else:
            parts.append((False, lines[i]))
            i += 1

    html = []
    for index, (is_block, part) in enumerate(parts):
        # <br> only between two text lines
        if index and not is_block and not parts[index - 1][0]:
            html.append("<br>")
        html.append(part)
    return f"<blockquote>{''.join(html)}</blockquote>"


def convert_blockquotes(text, context):
    output: list[str] = []
    group: list[str] = []

    for line in text.split("\n"):
        match = _QUOTE_RE.match(line)
        if match:
            group.append(match.group(1))
            continue
        if group:
            output.append(_render_blockquote(group))
            group = []
        output.append(line)

    if group:
        output.append(_render_blockquote(group))

    return "\n".join(output)


def convert_horizontal_rules(text, context):
    return "\n".join("<hr>" if _RULE_RE.match(line) else line for line in text.split("\n"))


BLOCK_STEPS = [
    convert_headings,
    convert_blockquotes,
    convert_horizontal_rules,  # Before lists, so "* * *" is a rule and not a bullet
    convert_lists,
    convert_tables,
]


def convert_blocks(text, context):
    """
    Escape the document and convert its block structure.

    Args:
        text: Markdown with code, code spans and escapes already protected
        context: Rendering context holding the placeholder table

    Returns:
        Text with block HTML in place and escaped loose text lines
    """
    text = escape_html(text)
    for step in BLOCK_STEPS:
        text = step(text, context)
    return text
