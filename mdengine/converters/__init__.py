# mdengine/converters/__init__.py

from ..utils import run_processors
from .block_converter import convert_blocks
from .extension_converter import convert_extensions
from .inline_converter import convert_inline

CONVERTERS = [
    convert_blocks,  # Escapes the text, then headings, quotes, rules, lists, tables
    convert_inline,  # Emphasis, strikethrough, links, images
    convert_extensions,  # Footnotes, highlight, super/subscript, then paragraphs
]


def apply_converters(text, context):
    """Apply all converters in order"""
    return run_processors(CONVERTERS, text, context, "convert")
