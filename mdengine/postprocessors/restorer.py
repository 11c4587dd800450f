# mdengine/postprocessors/restorer.py

from ..placeholders import get_placeholder_table


def restore_placeholders(html, context):
    """
    Put the protected code blocks, code spans and escapes back.

    Tokens are unique per render, so the order of substitution does not
    matter and one pass over the document is enough.
    """
    return get_placeholder_table(context).restore(html)
