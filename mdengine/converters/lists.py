# mdengine/converters/lists.py
"""
List conversion with nesting.

Each line is classified, in this priority, as a task item, an ordered item,
a bullet item or not a list line. Task syntax is a superset of bullet syntax,
so it has to be tried first.

Open lists are tracked on a stack of ``ListFrame``s whose levels strictly
increase from bottom to top:

- deeper item: push a frame and open <ul>/<ol>
- same level, other kind: close that list and open one of the new kind
- same level, same kind: close the previous <li>, open the next
- shallower item: pop and close frames down to its level
- any other line closes every open list

Blank lines between two items do not end a list.
"""

from __future__ import annotations

import re
from typing import NamedTuple, Optional

from ..config import get_renderer_config

ORDERED = "ordered"
UNORDERED = "unordered"

_TASK_RE = re.compile(r"^([ \t]*)[-*+][ \t]+\[([ xX])\][ \t]+(.*)$")
_ORDERED_RE = re.compile(r"^([ \t]*)(\d+)\.[ \t]+(.*)$")
_BULLET_RE = re.compile(r"^([ \t]*)[-*+][ \t]+(.*)$")


class ListItem(NamedTuple):
    kind: str
    level: int
    content: str
    start: int = 1


class ListFrame(NamedTuple):
    kind: str
    level: int


def _indent_level(indent: str, indent_width: int) -> int:
    # A tab is one whole level
    columns = sum(indent_width if ch == "\t" else 1 for ch in indent)
    return columns // indent_width


def _checkbox(mark: str) -> str:
    if mark.lower() == "x":
        return '<input type="checkbox" disabled checked>'
    return '<input type="checkbox" disabled>'


def parse_list_item(line: str, indent_width: int = 2) -> Optional[ListItem]:
    """Classify ``line`` as a list item, or return None."""
    match = _TASK_RE.match(line)
    if match:
        indent, mark, content = match.groups()
        return ListItem(UNORDERED, _indent_level(indent, indent_width), f"{_checkbox(mark)} {content}")

    match = _ORDERED_RE.match(line)
    if match:
        indent, number, content = match.groups()
        return ListItem(ORDERED, _indent_level(indent, indent_width), content, int(number))

    match = _BULLET_RE.match(line)
    if match:
        indent, content = match.groups()
        return ListItem(UNORDERED, _indent_level(indent, indent_width), content)

    return None


def _open_tag(item: ListItem) -> str:
    if item.kind == ORDERED:
        return "<ol>" if item.start == 1 else f'<ol start="{item.start}">'
    return "<ul>"


def _close_frame(stack: list[ListFrame], output: list[str]) -> None:
    frame = stack.pop()
    output.append("</li>")
    output.append("</ol>" if frame.kind == ORDERED else "</ul>")


def _continues_list(lines: list[str], index: int, indent_width: int) -> bool:
    """True when the next non-blank line from ``index`` is a list item."""
    for line in lines[index:]:
        if line.strip():
            return parse_list_item(line, indent_width) is not None
    return False


def convert_lists(text, context):
    """Turn list item lines into nested <ul>/<ol> markup, one tag per line."""
    indent_width = get_renderer_config()["indent_width"]
    lines = text.split("\n")
    output: list[str] = []
    stack: list[ListFrame] = []

    for index, line in enumerate(lines):
        item = parse_list_item(line, indent_width)

        if item is None:
            if stack and not line.strip() and _continues_list(lines, index + 1, indent_width):
                continue
            while stack:
                _close_frame(stack, output)
            output.append(line)
            continue

        while stack and stack[-1].level > item.level:
            _close_frame(stack, output)

        if stack and stack[-1].level == item.level:
            if stack[-1].kind != item.kind:
                # Retype in place rather than nesting
                _close_frame(stack, output)
            else:
                output.append("</li>")

        if not stack or stack[-1].level < item.level:
            output.append(_open_tag(item))
            stack.append(ListFrame(item.kind, item.level))

        output.append(f"<li>{item.content}")

    while stack:
        _close_frame(stack, output)

    return "\n".join(output)
