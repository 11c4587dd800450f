# mdengine/preprocessors/escape_protector.py
"""
Preprocessor for backslash escapes (``\\*``, ``\\#``, ``\\$`` ...).

An escaped ASCII punctuation character is replaced by a placeholder whose
HTML is the character's numeric reference. The character is then invisible
to every markdown rule and to the math delimiters, and shows up literally in
the preview. Runs after code protection, so backslashes in code are kept.
"""

import re
import string

from ..placeholders import ESCAPE, get_placeholder_table

_ESCAPE_RE = re.compile(r"\\([" + re.escape(string.punctuation) + r"])")


def protect_escapes(text, context):
    table = get_placeholder_table(context)
    return _ESCAPE_RE.sub(lambda m: table.add(ESCAPE, f"&#{ord(m.group(1))};"), text)
