"""Cursor movement and scrolling over a document.

These are pure functions: they take the current cursor/offset and the
document and return new values without mutating anything.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .document import Document


@dataclass(frozen=True)
class Position:
    """Cursor coordinate: grapheme column ``x`` on line ``y``."""
    x: int = 0
    y: int = 0


@dataclass(frozen=True)
class Offset:
    """Top-left corner of the visible window into the document."""
    x: int = 0
    y: int = 0


class Direction(Enum):
    """Cursor movements; values match keyboard key names."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    HOME = "home"
    END = "end"


def _line_width(document: Document, y: int) -> int:
    line = document.row_at(y)
    return line.length() if line is not None else 0


def move_cursor(position: Position, direction: Direction, document: Document,
                terminal_height: int) -> Position:
    """Return the cursor position after moving one step in ``direction``.

    The cursor may rest on the line just past the last one (``y ==
    document.length()``). After every move ``x`` is clamped to the width of
    the target line.
    """
    x, y = position.x, position.y
    height = document.length()
    width = _line_width(document, y)

    if direction is Direction.UP:
        y = max(y - 1, 0)
    elif direction is Direction.DOWN:
        y = min(y + 1, height)
    elif direction is Direction.LEFT:
        if x > 0:
            x -= 1
        elif y > 0:
            y -= 1
            x = _line_width(document, y)
    elif direction is Direction.RIGHT:
        if x < width:
            x += 1
        elif y < height:
            y += 1
            x = 0
    elif direction is Direction.PAGE_UP:
        y = max(y - terminal_height, 0)
    elif direction is Direction.PAGE_DOWN:
        y = min(y + terminal_height, height)
    elif direction is Direction.HOME:
        x = 0
    elif direction is Direction.END:
        x = width

    x = min(x, _line_width(document, y))
    return Position(x, y)


def scroll(cursor: Position, offset: Offset, viewport_width: int,
           viewport_height: int) -> Offset:
    """Shift ``offset`` by the minimum amount that brings ``cursor`` into view.

    Never recenters, so calling it again with the same cursor returns the
    same offset.
    """
    width = max(viewport_width, 1)
    height = max(viewport_height, 1)
    x, y = offset.x, offset.y

    if cursor.y < y:
        y = cursor.y
    elif cursor.y >= y + height:
        y = cursor.y - height + 1

    if cursor.x < x:
        x = cursor.x
    elif cursor.x >= x + width:
        x = cursor.x - width + 1

    return Offset(x, y)


def visible_range(offset: Offset, viewport_height: int, document: Document) -> range:
    """Document rows that fall inside the window starting at ``offset.y``."""
    start = min(offset.y, document.length())
    end = min(offset.y + max(viewport_height, 0), document.length())
    return range(start, end)
