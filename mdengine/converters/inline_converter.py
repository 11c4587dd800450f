# mdengine/converters/inline_converter.py
"""
Converter for inline markdown: emphasis, strikethrough, links and images.

Rules only ever see the text between existing tags, and every tag they emit
is stored as a placeholder right away. Attribute values (URLs, alt text) are
therefore out of reach of the rules that run afterwards, while the text a
link or emphasis wraps stays visible to them. No span crosses a line break
or a block tag. URL protocols are checked later by the sanitizer.

Order:
1. ``$...$`` / ``$$...$$`` spans are shielded so their TeX survives
2. autolinks, images, then links (an image is never read as a link)
3. ***bold italic***, then **bold**, then *italic*
4. ~~strikethrough~~ (single tildes are left for subscript)
"""

from __future__ import annotations

import re

from ..placeholders import MATH, TAG, get_placeholder_table
from ..utils import map_text_segments

_MATH_RE = re.compile(r"\$\$[^$]+\$\$|\$[^$\n]+\$")

_AUTOLINK_RE = re.compile(r"&lt;((?:https?|ftp|mailto):[^\s]*?)&gt;")
_IMAGE_RE = re.compile(r"!\[([^\[\]\n]*)\]\(([^()\s]*)(?:[ \t]+&quot;([^\n]*?)&quot;)?[ \t]*\)")
_LINK_RE = re.compile(r"\[([^\[\]\n]+)\]\(([^()\s]*)(?:[ \t]+&quot;([^\n]*?)&quot;)?[ \t]*\)")

# Content may not start or end with whitespace; underscores never open
# emphasis inside a word (snake_case_name stays literal)
_SPAN_RULES = [
    (re.compile(r"\*\*\*(?!\s)([^*\n]+)(?<!\s)\*\*\*"), ("strong", "em")),
    (re.compile(r"(?<!\w)___(?!\s)([^_\n]+)(?<!\s)___(?!\w)"), ("strong", "em")),
    (re.compile(r"\*\*(?!\s)((?:[^*\n]|\*[^*\n]+\*)+)(?<!\s)\*\*"), ("strong",)),
    (re.compile(r"(?<!\w)__(?!\s)((?:[^_\n]|_[^_\n]+_)+)(?<!\s)__(?!\w)"), ("strong",)),
    (re.compile(r"\*(?!\s)([^*\n]+)(?<!\s)\*"), ("em",)),
    (re.compile(r"(?<!\w)_(?!\s)([^_\n]+)(?<!\s)_(?!\w)"), ("em",)),
    (re.compile(r"~~(?!\s)([^~\n]+)(?<!\s)~~"), ("del",)),
]


class _InlineRules:
    """Inline rules bound to one render's placeholder table."""

    def __init__(self, context):
        self.table = get_placeholder_table(context)

    def tag(self, html_tag: str) -> str:
        return self.table.add(TAG, html_tag)

    def _title(self, title):
        return f' title="{title}"' if title else ""

    def shield_math(self, text):
        return _MATH_RE.sub(lambda m: self.table.add(MATH, m.group(0)), text)

    def wrap(self, opening: str, content: str, closing: str) -> str:
        return f"{self.tag(opening)}{content}{self.tag(closing)}"

    def autolinks(self, text):
        def _autolink(match):
            url = match.group(1)
            return self.wrap(f'<a href="{url}">', url, "</a>")

        return _AUTOLINK_RE.sub(_autolink, text)

    def images(self, text):
        def _image(match):
            alt, url, title = match.groups()
            return self.tag(f'<img src="{url}" alt="{alt}"{self._title(title)}>')

        return _IMAGE_RE.sub(_image, text)

    def links(self, text):
        def _link(match):
            label, url, title = match.groups()
            return self.wrap(f'<a href="{url}"{self._title(title)}>', label, "</a>")

        return _LINK_RE.sub(_link, text)

    def emphasis(self, text):
        for pattern, tags in _SPAN_RULES:
            opening = "".join(f"<{name}>" for name in tags)
            closing = "".join(f"</{name}>" for name in reversed(tags))
            text = pattern.sub(lambda m, o=opening, c=closing: self.wrap(o, m.group(1), c), text)
        return text

    def __call__(self, text):
        text = self.shield_math(text)
        text = self.autolinks(text)
        text = self.images(text)
        text = self.links(text)
        return self.emphasis(text)


def convert_inline(text, context):
    """Convert inline markdown in the text segments of block-converted HTML."""
    return map_text_segments(text, _InlineRules(context))
