# mdengine/postprocessors/math_converter.py
"""
Postprocessor that marks TeX math for the client-side typesetter.

This postprocessor:
- Turns a paragraph holding only ``$$...$$`` into <div class="math-block">
- Turns any other ``$$...$$`` into <div class="math-block">
- Turns ``$...$`` on one line into <span class="math-inline">

It runs after the code placeholders are restored and skips <pre>, <code>
and diagram containers entirely, so a ``$`` inside code is never taken for a
delimiter. Delimiters are only looked for in text between tags: a ``$`` in
an attribute value (a link URL, an image's alt text) is left alone. The TeX
itself is left as the escaped text the typesetter reads.
"""

import re

_PROTECTED_RE = re.compile(
    r'(<pre\b.*?</pre>|<code\b.*?</code>|<div class="(?:mermaid|plantuml)".*?</div>)',
    re.DOTALL,
)
# <br> stays inside text runs: display math may span paragraph line breaks
_TAG_SPLIT_RE = re.compile(r"(<(?!br>)[^<>]*>)")

_PARAGRAPH_BLOCK_RE = re.compile(r"<p>\s*\$\$([^$<]*(?:<br>[^$<]*)*)\$\$\s*</p>")
_BLOCK_RE = re.compile(r"\$\$([^$]+)\$\$")
_INLINE_RE = re.compile(r"\$([^$\n]+)\$")


def _block(match):
    # Paragraph wrapping turned the TeX's line breaks into <br>
    tex = match.group(1).replace("<br>\n", "\n").replace("<br>", "\n").strip()
    return f'<div class="math-block">{tex}</div>'


def _convert_text(text):
    if "$" not in text:
        return text
    text = _BLOCK_RE.sub(_block, text)
    return _INLINE_RE.sub(r'<span class="math-inline">\1</span>', text)


def _convert(segment):
    segment = _PARAGRAPH_BLOCK_RE.sub(_block, segment)
    parts = _TAG_SPLIT_RE.split(segment)
    # Even indices are text, odd indices are tags
    for index in range(0, len(parts), 2):
        parts[index] = _convert_text(parts[index])
    return "".join(parts)


def convert_math(html, context):
    parts = _PROTECTED_RE.split(html)
    # Odd indices are the protected code and diagram regions
    for index in range(0, len(parts), 2):
        if "$" in parts[index]:
            parts[index] = _convert(parts[index])
    return "".join(parts)
