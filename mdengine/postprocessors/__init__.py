# mdengine/postprocessors/__init__.py

from ..utils import run_processors
from .math_converter import convert_math
from .restorer import restore_placeholders
from .sanitizer import sanitize_html

POSTPROCESSORS = [
    restore_placeholders,  # Code blocks, code spans and escapes come back
    sanitize_html,  # Tag, attribute and URL protocol allow-lists
    convert_math,  # Must run after restoration: it skips the restored code
    # Order matters - they run sequentially
]


def apply_postprocessors(html, context):
    """Apply all postprocessors in order"""
    return run_processors(POSTPROCESSORS, html, context, "postprocess")
