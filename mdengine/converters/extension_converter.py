# mdengine/converters/extension_converter.py
"""
Converter for the syntax extensions, followed by paragraph wrapping.

Extensions:
- Footnote definitions ``[^1]: text`` (at the start of a line)
- Footnote references ``[^1]`` (not followed by ``:``)
- Highlight ``==text==``
- Superscript ``^text^``
- Subscript ``~text~`` (a doubled tilde is never subscript; ~~strikethrough~~
  has already been converted by the inline converter)

Once the extensions are done the shielded inline tags and math spans are put
back and the remaining loose text is wrapped in <p> elements.
"""

from __future__ import annotations

import re

from ..config import get_renderer_config
from ..placeholders import MATH, TAG, get_placeholder_table, is_block_token
from ..utils import map_text_segments

_FOOTNOTE_DEF_RE = re.compile(r"^\[\^([\w-]+)\]:[ \t]*(.*)$", re.MULTILINE)
_FOOTNOTE_REF_RE = re.compile(r"\[\^([\w-]+)\](?!:)")
_HIGHLIGHT_RE = re.compile(r"==(?!\s)([^=\n]+)(?<!\s)==")
_SUPERSCRIPT_RE = re.compile(r"\^(?!\s)([^\^\n]+)(?<!\s)\^")
_SUBSCRIPT_RE = re.compile(r"(?<!~)~(?![\s~])([^~\n]+)(?<![\s~])~(?!~)")

_BLANK_LINES_RE = re.compile(r"\n[ \t]*\n")


def _convert_segment(text, table):
    def _definition(match):
        label, body = match.groups()
        opening = table.add(TAG, f'<div class="footnote" id="fn{label}"><sup>{label}</sup> ')
        closing = table.add(TAG, f' <a href="#fnref{label}">↩</a></div>')
        return f"{opening}{body}{closing}"

    def _reference(match):
        label = match.group(1)
        return table.add(TAG, f'<sup><a href="#fn{label}" id="fnref{label}">{label}</a></sup>')

    def _wrap(tag):
        def _replace(match):
            return table.add(TAG, f"<{tag}>") + match.group(1) + table.add(TAG, f"</{tag}>")

        return _replace

    text = _FOOTNOTE_DEF_RE.sub(_definition, text)
    text = _FOOTNOTE_REF_RE.sub(_reference, text)
    text = _HIGHLIGHT_RE.sub(_wrap("mark"), text)
    text = _SUPERSCRIPT_RE.sub(_wrap("sup"), text)
    return _SUBSCRIPT_RE.sub(_wrap("sub"), text)


def _block_line_pattern():
    tags = "|".join(get_renderer_config()["block_tags"])
    return re.compile(rf"^\s*(?:</|<(?:{tags})\b)")


def wrap_paragraphs(text, context):
    """
    Wrap loose text in <p>, one paragraph per run of non-block lines.

    The text is split on blank lines first. Inside each chunk, lines that
    start with a block-level tag (or are a code block placeholder) pass
    through; runs of other lines become one paragraph with <br> line breaks.
    """
    block_line = _block_line_pattern()
    output: list[str] = []

    def _flush(loose):
        if loose:
            output.append("<p>" + "<br>\n".join(loose) + "</p>")
            loose.clear()

    for chunk in _BLANK_LINES_RE.split(text):
        loose: list[str] = []
        for line in chunk.split("\n"):
            if is_block_token(line):
                _flush(loose)
                output.append(line.strip())
            elif block_line.match(line):
                _flush(loose)
                output.append(line)
            elif line.strip():
                loose.append(line.strip())
        _flush(loose)

    return "\n".join(output)


def convert_extensions(text, context):
    table = get_placeholder_table(context)
    text = map_text_segments(text, lambda segment: _convert_segment(segment, table))
    text = table.restore(text, kinds={TAG, MATH})
    return wrap_paragraphs(text, context)
