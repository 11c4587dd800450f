# mdengine/extensions/outline.py
"""
Source-level helpers for the editor sidebar.

The outline is read from the markdown itself rather than from rendered HTML,
so every entry knows the source line it came from. Headings inside fenced
code are skipped, using the same fence rules as the renderer.
"""

from __future__ import annotations

from typing import NamedTuple, Optional

from ..converters.block_converter import HEADING_RE
from ..preprocessors.fence_protector import closes_fence, parse_fence_opener


class OutlineItem(NamedTuple):
    level: int  # 1-6
    title: str
    line: int  # 0-based source line


class DocumentStats(NamedTuple):
    word_count: int
    character_count: int
    line_count: int


def build_outline(markdown: str) -> list[OutlineItem]:
    """Return the document's ATX headings in source order."""
    items: list[OutlineItem] = []
    fence = None

    for index, line in enumerate(markdown.splitlines()):
        if fence is not None:
            if closes_fence(line, fence):
                fence = None
            continue

        opener = parse_fence_opener(line)
        if opener is not None:
            fence = opener[1]
            continue

        match = HEADING_RE.match(line)
        if match and match.group(2).strip():
            items.append(OutlineItem(len(match.group(1)), match.group(2).strip(), index))

    return items


def active_heading_line(items: list[OutlineItem], current_line: int) -> Optional[int]:
    """Line of the last heading at or above ``current_line``, None before the first."""
    active = None
    for item in items:
        if item.line > current_line:
            break
        active = item.line
    return active


def document_stats(markdown: str) -> DocumentStats:
    return DocumentStats(
        word_count=len(markdown.split()),
        character_count=len(markdown),
        line_count=max(1, len(markdown.splitlines())),
    )
