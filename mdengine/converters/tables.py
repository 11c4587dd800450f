# mdengine/converters/tables.py
"""
Pipe table conversion.

Consecutive lines that start and end with ``|`` form a candidate table. The
first row made only of ``-``, ``:`` and spaces is the separator: rows above
it go to <thead> (more than one header row is fine), rows below to <tbody>.
Without a separator, or with the separator on the first row, the lines are
left alone and end up as paragraph text.

Alignment colons in the separator (``:--``, ``:-:``, ``--:``) become
``text-align`` styles, and every row is padded or cut to the separator's
column count. An escaped pipe (``\\|``) never reaches this module: the escape
preprocessor has already turned it into a placeholder.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from ..config import get_renderer_config

logger = logging.getLogger(__name__)

_SEPARATOR_CELL_RE = re.compile(r"^[\s:]*-[\s:-]*$")

TableRow = List[str]


def is_table_line(line: str) -> bool:
    stripped = line.strip()
    return len(stripped) >= 2 and stripped.startswith("|") and stripped.endswith("|")


def split_row(line: str) -> TableRow:
    """Split a pipe row into trimmed cells, dropping the outer empty cells."""
    cells = line.strip().split("|")
    if cells and not cells[0].strip():
        cells = cells[1:]
    if cells and not cells[-1].strip():
        cells = cells[:-1]
    return [cell.strip() for cell in cells]


def is_separator_row(cells: TableRow) -> bool:
    return bool(cells) and all(_SEPARATOR_CELL_RE.match(cell) for cell in cells)


def _alignment(cell: str) -> Optional[str]:
    cell = cell.strip()
    key = (cell.startswith(":"), cell.endswith(":"))
    return get_renderer_config()["table_alignments"].get(key)


def _render_row(cells: TableRow, tag: str, alignments: list) -> str:
    width = len(alignments)
    cells = (cells + [""] * width)[:width]
    parts = []
    for cell, align in zip(cells, alignments):
        style = f' style="text-align: {align}"' if align else ""
        parts.append(f"<{tag}{style}>{cell}</{tag}>")
    return f"<tr>{''.join(parts)}</tr>"


def render_table(lines: list[str]) -> Optional[str]:
    """Render grouped table lines, or return None when they are not a table."""
    if len(lines) < 2:
        return None

    rows = [split_row(line) for line in lines]
    # A table needs at least one header row above its separator
    separator = next((i for i in range(1, len(rows)) if is_separator_row(rows[i])), None)
    if separator is None:
        logger.debug(f"Pipe block of {len(lines)} lines has no usable separator row, leaving as text")
        return None

    alignments = [_alignment(cell) for cell in rows[separator]]

    html = ["<table>", "<thead>"]
    html.extend(_render_row(row, "th", alignments) for row in rows[:separator])
    html.append("</thead>")

    body = rows[separator + 1 :]
    if body:
        html.append("<tbody>")
        html.extend(_render_row(row, "td", alignments) for row in body)
        html.append("</tbody>")

    html.append("</table>")
    return "\n".join(html)


def convert_tables(text, context):
    """Replace each group of pipe lines with a table when it has a separator."""
    output: list[str] = []
    group: list[str] = []

    def _flush():
        if not group:
            return
        table = render_table(group)
        output.extend([table] if table is not None else group)
        group.clear()

    for line in text.split("\n"):
        if is_table_line(line):
            group.append(line)
            continue
        _flush()
        output.append(line)

    _flush()
    return "\n".join(output)
