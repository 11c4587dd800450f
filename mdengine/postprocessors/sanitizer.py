# mdengine/postprocessors/sanitizer.py
"""
Postprocessor that runs the rendered fragment through bleach.

This postprocessor:
- Allows only the tags and attributes the converters emit
- Drops ``href``/``src`` values whose protocol is not allowed
  (``javascript:``, ``vbscript:``, ``data:`` ...), including ones hidden
  behind entities or escapes
- Keeps ``text-align`` as the only inline style (table alignment)

It runs once the placeholders are restored, so it sees every link and image
the document produced, and before the math converter, which only adds its
own spans and divs.
"""

import logging
from functools import lru_cache

import bleach
from bleach.css_sanitizer import CSSSanitizer

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _get_bleach_config():
    """Cache bleach configuration for better performance."""
    allowed_tags = {
        # text
        "p",
        "br",
        "div",
        "span",
        "strong",
        "em",
        "del",
        "mark",
        "sup",  # superscript and footnote references
        "sub",
        # headings
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        # lists
        "ul",
        "ol",
        "li",
        "input",  # task list checkboxes
        # blocks
        "blockquote",
        "hr",
        "pre",
        "code",
        # tables
        "table",
        "thead",
        "tbody",
        "tr",
        "th",
        "td",
        # links and media
        "a",
        "img",
    }

    allowed_attrs = {
        "*": ["class", "id"],
        "a": ["href", "title"],
        "img": ["src", "alt", "title"],
        "div": ["data-code"],  # PlantUML source
        "ol": ["start"],
        "th": ["style"],
        "td": ["style"],
        "input": ["type", "checked", "disabled"],
    }

    allowed_protocols = ["http", "https", "ftp", "mailto", "tel"]

    css_sanitizer = CSSSanitizer(allowed_css_properties=["text-align"])

    return allowed_tags, allowed_attrs, allowed_protocols, css_sanitizer


def sanitize_html(html, context):
    """
    Sanitize HTML output using bleach.

    Disallowed tags are escaped rather than removed; the block converter has
    already escaped the source, so only generated markup reaches this point.
    """
    allowed_tags, allowed_attrs, allowed_protocols, css_sanitizer = _get_bleach_config()

    return bleach.clean(
        html,
        tags=allowed_tags,
        attributes=allowed_attrs,
        protocols=allowed_protocols,
        css_sanitizer=css_sanitizer,
        strip=False,
    )
