"""Helpers shared by the processors: escaping, heading slugs, stage runner."""

from __future__ import annotations

import html
import logging
import re

logger = logging.getLogger(__name__)

_ESCAPE_TABLE = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "'": "&#39;",
    }
)

_TAG_RE = re.compile(r"<[^<>]*>")
_TAG_SPLIT_RE = re.compile(r"(<[^<>]*>)")
_HYPHEN_RUN_RE = re.compile(r"-{2,}")


def escape_html(text: str) -> str:
    """Escape the five HTML-significant characters, exactly once."""
    return text.translate(_ESCAPE_TABLE)


def strip_tags(text: str) -> str:
    return _TAG_RE.sub("", text)


def slugify_heading(text: str) -> str:
    """
    Build an anchor id from heading text.

    Tags are dropped and entities decoded before the text is lower-cased.
    Spaces become hyphens; anything that is not a letter, digit, hyphen or
    underscore goes away (letters from any script are kept). The result may
    be empty.
    """
    slug = html.unescape(strip_tags(text)).lower()
    slug = slug.replace(" ", "-")
    slug = "".join(ch for ch in slug if ch.isalnum() or ch in "-_")
    slug = _HYPHEN_RUN_RE.sub("-", slug)
    return slug.strip("-")


def map_text_segments(text: str, func) -> str:
    """
    Apply ``func`` to the text between tags, leaving the tags themselves alone.

    After block conversion every literal ``<`` in the document is escaped, so
    anything that still looks like a tag was generated by the pipeline.
    """
    parts = _TAG_SPLIT_RE.split(text)
    # re.split with a capture group alternates text, tag, text, ...
    for index in range(0, len(parts), 2):
        if parts[index]:
            parts[index] = func(parts[index])
    return "".join(parts)


def run_processors(processors, text: str, context: dict, stage: str) -> str:
    """
    Run ``processors`` in order, passing each one's output to the next.

    A processor that raises is skipped: its input flows on unchanged so a
    rendering bug degrades the preview instead of breaking it.
    """
    for processor in processors:
        name = getattr(processor, "__name__", repr(processor))
        try:
            text = processor(text, context)
        except Exception as e:
            logger.error(f"{stage} processor '{name}' failed: {e}", exc_info=True)
    return text
