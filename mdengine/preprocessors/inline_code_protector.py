# mdengine/preprocessors/inline_code_protector.py

import re

from ..placeholders import CODESPAN, get_placeholder_table
from ..utils import escape_html

# Single backtick pairs on one line; fenced blocks are already placeholders
_CODE_SPAN_RE = re.compile(r"`([^`\n]+)`")


def protect_inline_code(text, context):
    """Replace `code` spans with placeholders holding <code>escaped</code>."""
    table = get_placeholder_table(context)

    def _protect(match):
        return table.add(CODESPAN, f"<code>{escape_html(match.group(1))}</code>")

    return _CODE_SPAN_RE.sub(_protect, text)
