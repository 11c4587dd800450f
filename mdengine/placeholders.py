"""Per-render placeholder storage shared by the pipeline processors."""

from __future__ import annotations

import re

TOKEN_OPEN = "\ue000"
TOKEN_CLOSE = "\ue001"

CODEBLOCK = "CODEBLOCK"
CODESPAN = "CODESPAN"
ESCAPE = "ESCAPE"
TAG = "TAG"
MATH = "MATH"

_TOKEN_RE = re.compile(f"{TOKEN_OPEN}([A-Z]+)(\\d+){TOKEN_CLOSE}")
_BLOCK_TOKEN_RE = re.compile(f"{TOKEN_OPEN}{CODEBLOCK}\\d+{TOKEN_CLOSE}")

_PLACEHOLDER_KEY = "__placeholders"


class PlaceholderTable:
    """
    Maps opaque tokens to finished HTML.

    Tokens are built from two private-use characters that the source
    normaliser strips from every input, so they cannot appear in markdown
    text or in generated HTML. The counter lives on the table, and a table
    lives for exactly one render.
    """

    def __init__(self):
        self._entries: dict[str, str] = {}
        self._counter = 0

    def add(self, kind: str, html: str) -> str:
        token = f"{TOKEN_OPEN}{kind}{self._counter}{TOKEN_CLOSE}"
        self._counter += 1
        self._entries[token] = html
        return token

    def get(self, token: str) -> str | None:
        return self._entries.get(token)

    def restore(self, text: str, kinds=None) -> str:
        """Replace tokens in ``text`` with their HTML, optionally only some kinds."""
        if TOKEN_OPEN not in text:
            return text

        def _substitute(match):
            if kinds is not None and match.group(1) not in kinds:
                return match.group(0)
            value = self._entries.get(match.group(0))
            if value is None:
                return match.group(0)
            # Stored HTML may itself hold tokens (e.g. a code span inside link text)
            return self.restore(value, kinds)

        return _TOKEN_RE.sub(_substitute, text)

    def __len__(self):
        return len(self._entries)

    def __contains__(self, token):
        return token in self._entries


def is_block_token(text: str) -> bool:
    """True when ``text`` is exactly one protected code/diagram block token."""
    return _BLOCK_TOKEN_RE.fullmatch(text.strip()) is not None


def strip_tokens(text: str) -> str:
    return _TOKEN_RE.sub("", text)


def new_placeholder_table(context: dict) -> PlaceholderTable:
    """Install a fresh table in the rendering context and return it."""
    table = PlaceholderTable()
    context[_PLACEHOLDER_KEY] = table
    return table


def get_placeholder_table(context: dict) -> PlaceholderTable:
    """Return the context's table, creating one for processors run standalone."""
    table = context.get(_PLACEHOLDER_KEY)
    if table is None:
        table = new_placeholder_table(context)
    return table
