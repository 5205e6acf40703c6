"""A single line of text, indexed by grapheme cluster."""

from __future__ import annotations

import functools

import grapheme


def _refreshes_length(method):
    """Recompute the cached grapheme count after a mutating method."""

    @functools.wraps(method)
    def wrapper(self: "Line", *args, **kwargs):
        result = method(self, *args, **kwargs)
        self._length = grapheme.length(self._text)
        return result

    return wrapper


class Line:
    """One line of a document.

    All column arguments are grapheme indices, so a flag emoji or a letter
    followed by a combining accent counts as one column. Out-of-range
    indices are clamped or ignored instead of raising, because the cursor
    that produced them may be stale by one frame.
    """

    def __init__(self, text: str = ""):
        self._text = ""
        self._length = 0
        self._set(text)

    @_refreshes_length
    def _set(self, text: str) -> None:
        self._text = text

    @property
    def content(self) -> str:
        return self._text

    def as_bytes(self) -> bytes:
        return self._text.encode("utf-8")

    def length(self) -> int:
        """Number of grapheme clusters in the line (cached)."""
        return self._length

    def __len__(self) -> int:
        return self._length

    def is_empty(self) -> bool:
        return self._length == 0

    def render(self, start: int, end: int) -> str:
        """Return graphemes ``[start, end)``, clamped to the line."""
        end = max(min(end, self._length), 0)
        start = min(max(start, 0), end)
        return grapheme.slice(self._text, start, end)

    @_refreshes_length
    def insert(self, at: int, text: str) -> None:
        """Insert text before grapheme ``at``; past the end it is appended."""
        at = max(at, 0)
        if at >= self._length:
            self._text += text
            return
        self._text = (
            grapheme.slice(self._text, 0, at)
            + text
            + grapheme.slice(self._text, at)
        )

    @_refreshes_length
    def delete(self, at: int) -> None:
        """Remove the grapheme at ``at``; no-op past the end."""
        if at < 0 or at >= self._length:
            return
        self._text = (
            grapheme.slice(self._text, 0, at)
            + grapheme.slice(self._text, at + 1)
        )

    @_refreshes_length
    def split(self, at: int) -> "Line":
        """Truncate to ``[0, at)`` and return the remainder as a new line."""
        at = max(at, 0)
        remainder = grapheme.slice(self._text, at)
        self._text = grapheme.slice(self._text, 0, at)
        return Line(remainder)

    @_refreshes_length
    def append(self, other: "Line") -> None:
        self._text += other.content

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"Line({self._text!r})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Line):
            return NotImplemented
        return self._text == other._text
