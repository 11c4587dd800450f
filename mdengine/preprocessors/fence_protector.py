# mdengine/preprocessors/fence_protector.py
"""
Preprocessor that lifts fenced code blocks out of the markdown source.

This preprocessor:
- Finds fences opened by 3+ backticks or tildes at the start of a line
- Renders each block to its final HTML right away:
  - ``mermaid`` blocks become <div class="mermaid"> for client-side rendering
  - ``plantuml`` blocks become a <div class="plantuml" data-code="..."> stub
  - everything else becomes <pre><code class="language-...">
- Replaces the block with a single placeholder line so no later stage can
  touch its contents

A block is closed by a fence of the same character that is at least as long
as the opener. That lets a ```` fence carry literal ``` lines. A fence that
is never closed runs to the end of the document.
"""

import logging
import re

from ..config import get_renderer_config
from ..placeholders import CODEBLOCK, get_placeholder_table
from ..utils import escape_html

logger = logging.getLogger(__name__)

_FENCE_OPEN_RE = re.compile(r"^( {0,3})(`{3,}|~{3,})[ \t]*(.*)$")
_FENCE_CLOSE_RE = re.compile(r"^ {0,3}(`{3,}|~{3,})[ \t]*$")


def parse_fence_opener(line):
    """Return ``(indent, fence, language)`` when ``line`` opens a fence."""
    match = _FENCE_OPEN_RE.match(line)
    if not match:
        return None

    indent, fence, info = match.groups()
    # ```foo``` on one line is inline code, not a fence
    if fence[0] == "`" and "`" in info:
        return None

    info = info.strip()
    language = info.split()[0] if info else ""
    return len(indent), fence, language


def closes_fence(line, fence):
    match = _FENCE_CLOSE_RE.match(line)
    if not match:
        return False
    closer = match.group(1)
    return closer[0] == fence[0] and len(closer) >= len(fence)


def _dedent(line, indent):
    """Remove up to ``indent`` leading spaces (the opener's indentation)."""
    if not indent:
        return line
    stripped = len(line) - len(line.lstrip(" "))
    return line[min(stripped, indent):]


def render_fenced_block(code: str, language: str) -> str:
    """Render one fenced block body to HTML."""
    config = get_renderer_config()
    kind = language.lower()

    if kind in config["diagram_languages"]:
        if kind == "plantuml":
            # The diagram server gets the source from the attribute, one line per &#10;
            data_code = escape_html(code).replace("\n", "&#10;")
            return f'<div class="plantuml" data-code="{data_code}">{config["plantuml_label"]}</div>'
        return f'<div class="{kind}">{escape_html(code)}</div>'

    lang_class = f' class="language-{escape_html(language)}"' if language else ""
    return f"<pre><code{lang_class}>{escape_html(code)}</code></pre>"


def protect_fences(text, context):
    """
    Swap every fenced block for a placeholder line.

    Args:
        text: Normalised markdown source
        context: Rendering context holding the placeholder table

    Returns:
        Markdown with one placeholder line per fenced block
    """
    table = get_placeholder_table(context)
    lines = text.split("\n")
    output = []

    i = 0
    while i < len(lines):
        opener = parse_fence_opener(lines[i])
        if opener is None:
            output.append(lines[i])
            i += 1
            continue

        indent, fence, language = opener
        body = []
        j = i + 1
        while j < len(lines) and not closes_fence(lines[j], fence):
            body.append(_dedent(lines[j], indent))
            j += 1

        if j >= len(lines):
            logger.debug(f"Unterminated {fence} fence at line {i + 1}, closing at end of document")

        output.append(table.add(CODEBLOCK, render_fenced_block("\n".join(body), language)))
        # Skip the closing fence (or run past the end when there was none)
        i = j + 1

    return "\n".join(output)
