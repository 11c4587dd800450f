# mdengine/preprocessors/source_normalizer.py

from ..placeholders import TOKEN_CLOSE, TOKEN_OPEN


def normalize_source(text, context):
    """
    Normalise line endings to ``\\n`` and drop the placeholder sentinels.

    Removing the sentinel characters here is what keeps every later
    placeholder token unique: the source can no longer spell one.
    """
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    if TOKEN_OPEN in text or TOKEN_CLOSE in text:
        text = text.replace(TOKEN_OPEN, "").replace(TOKEN_CLOSE, "")
    return text
