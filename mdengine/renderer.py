# mdengine/renderer.py

import logging

from .converters import apply_converters
from .placeholders import new_placeholder_table
from .postprocessors import apply_postprocessors
from .preprocessors import apply_preprocessors

logger = logging.getLogger(__name__)


def render_markdown(text, context=None):
    """
    Main rendering function: markdown source in, HTML fragment out

    Args:
        text: Raw markdown text
        context: Optional dict for processors that need additional data.
            It is copied, so one dict can be shared between renders.

    The pipeline never raises for malformed markdown; the worst case is
    literal text in the output.
    """
    if not text:
        return ""

    # Every render gets its own placeholder table, so renders can run in parallel
    context = dict(context or {})
    new_placeholder_table(context)

    # Pre-processing: protect code and escapes from markdown rules
    text = apply_preprocessors(text, context)

    # Block, inline and extension conversion
    html = apply_converters(text, context)

    # Post-processing: restore protected content, then math
    html = apply_postprocessors(html, context)

    logger.debug(f"Rendered {len(text)} characters of markdown to {len(html)} characters of HTML")
    return html


def convert_to_html(markdown: str) -> str:
    """Convert a markdown document to an HTML fragment (no <html>/<body>)."""
    return render_markdown(markdown)
