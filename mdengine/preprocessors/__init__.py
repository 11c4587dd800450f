# mdengine/preprocessors/__init__.py

from ..utils import run_processors
from .escape_protector import protect_escapes
from .fence_protector import protect_fences
from .inline_code_protector import protect_inline_code
from .source_normalizer import normalize_source

PREPROCESSORS = [
    normalize_source,  # Must be first: later tokens rely on the stripped sentinels
    protect_fences,  # Fenced code and diagram blocks
    protect_inline_code,  # `code` spans, never inside fenced blocks
    protect_escapes,  # Backslash escapes, after code so code keeps its backslashes
    # Order matters - they run sequentially
]


def apply_preprocessors(text, context):
    """Apply all preprocessors in order"""
    return run_processors(PREPROCESSORS, text, context, "preprocess")
