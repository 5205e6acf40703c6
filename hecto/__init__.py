"""Hecto - a minimal terminal text editor."""

from .line import Line
from .document import Document, DocumentError, LoadError, SaveError
from .viewport import Position, Offset, Direction, move_cursor, scroll, visible_range

__all__ = [
    'Line',
    'Document',
    'DocumentError',
    'LoadError',
    'SaveError',
    'Position',
    'Offset',
    'Direction',
    'move_cursor',
    'scroll',
    'visible_range',
]
