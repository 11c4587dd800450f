# mdengine/extensions/toc_extractor.py
"""
Table of contents built from rendered HTML.

Works on the output of ``render_markdown`` so the entries carry the same ids
the preview uses for its anchors. Footnote references are left out of the
entry titles; inline markup (code, emphasis, math spans) is kept in
``title_html``.
"""

from __future__ import annotations

from typing import Iterable, TypedDict

from bs4 import BeautifulSoup, NavigableString, Tag

from ..renderer import render_markdown
from ..utils import slugify_heading

HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")


class HeadingNode(TypedDict):
    level: int
    id: str
    title: str
    title_html: str
    children: list["HeadingNode"]


def _is_footnote_ref(node) -> bool:
    if not isinstance(node, Tag) or node.name != "sup":
        return False
    anchor = node.find("a")
    return anchor is not None and anchor.get("href", "").startswith("#fn")


def _heading_parts(heading: Tag) -> tuple[str, str]:
    """Plain title and inner HTML of a heading, without footnote references."""
    texts: list[str] = []
    html_parts: list[str] = []
    for child in heading.contents:
        if _is_footnote_ref(child):
            continue
        if isinstance(child, NavigableString):
            texts.append(str(child))
            html_parts.append(str(child))
        else:
            texts.append(child.get_text())
            html_parts.append(str(child))

    title = " ".join("".join(texts).split())
    return title, "".join(html_parts).strip()


def _nest(nodes: Iterable[HeadingNode]) -> list[HeadingNode]:
    """Hang each node under the nearest preceding node of a lower level."""
    roots: list[HeadingNode] = []
    open_nodes: list[HeadingNode] = []
    for node in nodes:
        while open_nodes and open_nodes[-1]["level"] >= node["level"]:
            open_nodes.pop()
        (open_nodes[-1]["children"] if open_nodes else roots).append(node)
        open_nodes.append(node)
    return roots


def extract_toc_from_html(html: str, max_level: int = 6) -> list[HeadingNode]:
    """
    Given rendered HTML, return a hierarchical list of headings for a TOC.

    Each node holds:
        - level: Heading level (1-6)
        - id: The heading's id, or the slug of its title when it has none
        - title: Plain text, whitespace collapsed
        - title_html: Inner HTML with inline formatting kept
        - children: Nested list of deeper headings

    Headings without text and headings deeper than ``max_level`` are skipped.
    """
    soup = BeautifulSoup(html, "html.parser")
    nodes: list[HeadingNode] = []
    for heading in soup.find_all(HEADING_TAGS[:max_level]):
        title, title_html = _heading_parts(heading)
        if not title:
            continue
        nodes.append(
            {
                "level": int(heading.name[1]),
                "id": heading.get("id") or slugify_heading(title),
                "title": title,
                "title_html": title_html or title,
                "children": [],
            }
        )
    return _nest(nodes)


def extract_toc(markdown: str, max_level: int = 6) -> list[HeadingNode]:
    """Render ``markdown`` and return its heading tree."""
    return extract_toc_from_html(render_markdown(markdown), max_level)
