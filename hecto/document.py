"""Line-oriented document model with load/save against byte streams."""

from __future__ import annotations

import logging
import os
import tempfile
from typing import BinaryIO, Iterator, Optional

from .constants import EditorConstants
from .line import Line

logger = logging.getLogger(__name__)


class DocumentError(Exception):
    """Base class for document persistence errors."""


class LoadError(DocumentError):
    """The document could not be read or decoded."""


class SaveError(DocumentError):
    """The document could not be written."""


class Document:
    """An ordered sequence of lines.

    A document always holds at least one line; an empty document is a
    single empty line. Positions are ``(x, y)`` pairs with ``x`` a grapheme
    column and ``y`` a line index; ``y == length()`` means "end of document",
    where inserting appends a new line.
    """

    def __init__(self, lines: Optional[list[Line]] = None, file_name: Optional[str] = None):
        self._lines: list[Line] = list(lines) if lines else [Line()]
        self.file_name = file_name
        self._dirty = False

    @property
    def dirty(self) -> bool:
        return self._dirty

    @property
    def lines(self) -> Iterator[Line]:
        return iter(self._lines)

    def row_at(self, index: int) -> Optional[Line]:
        if 0 <= index < len(self._lines):
            return self._lines[index]
        return None

    def length(self) -> int:
        return len(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def is_empty(self) -> bool:
        return len(self._lines) == 1 and self._lines[0].is_empty()

    def insert(self, position, character: str) -> None:
        """Insert text at ``position``; a newline splits the line."""
        y = position.y
        if y > len(self._lines):
            return
        if character == EditorConstants.LINE_TERMINATOR:
            self._insert_newline(position)
        elif y == len(self._lines):
            self._lines.append(Line(character))
        else:
            self._lines[y].insert(position.x, character)
        self._dirty = True

    def _insert_newline(self, position) -> None:
        if position.y == len(self._lines):
            self._lines.append(Line())
            return
        tail = self._lines[position.y].split(position.x)
        self._lines.insert(position.y + 1, tail)

    def delete(self, position) -> None:
        """Delete the grapheme at ``position``.

        At the end of a line the following line is merged into it. Stale
        positions are ignored.
        """
        y = position.y
        if y < 0 or y >= len(self._lines):
            return
        line = self._lines[y]
        if position.x >= line.length():
            if y + 1 >= len(self._lines):
                return
            line.append(self._lines.pop(y + 1))
        else:
            line.delete(position.x)
        self._dirty = True

    # --- Persistence ---

    @classmethod
    def open(cls, stream: BinaryIO, file_name: Optional[str] = None) -> "Document":
        """Read a UTF-8 byte stream, one line per ``\\n``-terminated segment.

        Carriage returns are kept as ordinary characters.
        """
        try:
            text = stream.read().decode("utf-8")
        except UnicodeDecodeError as e:
            raise LoadError(f"{file_name or 'stream'} is not valid UTF-8: {e}") from e
        except OSError as e:
            raise LoadError(f"Could not read {file_name or 'stream'}: {e}") from e

        segments = text.split(EditorConstants.LINE_TERMINATOR)
        if segments[-1] == "":
            # A final terminator ends the last line rather than starting a new one
            segments.pop()
        return cls([Line(s) for s in segments], file_name=file_name)

    @classmethod
    def load(cls, path: str) -> "Document":
        """Open the file at ``path``."""
        try:
            with open(path, 'rb') as f:
                document = cls.open(f, file_name=path)
        except OSError as e:
            raise LoadError(f"Could not open {path}: {e.strerror or e}") from e
        logger.info(f"Loaded {path} ({document.length()} lines)")
        return document

    def save(self, writer: BinaryIO) -> None:
        """Write every line followed by a terminator, then clear ``dirty``."""
        terminator = EditorConstants.LINE_TERMINATOR.encode("utf-8")
        try:
            for line in self._lines:
                writer.write(line.as_bytes())
                writer.write(terminator)
            writer.flush()
        except OSError as e:
            raise SaveError(str(e.strerror or e)) from e
        self._dirty = False

    def save_to(self, path: Optional[str] = None) -> None:
        """Save atomically to ``path`` (default: ``file_name``).

        The content is written to a temporary file in the target directory
        and renamed over the target, so a failed save never truncates it.
        """
        path = path or self.file_name
        if not path:
            raise SaveError("No file name")

        dir_name = os.path.dirname(path) or '.'
        was_dirty = self._dirty
        temp_filename = None
        try:
            with tempfile.NamedTemporaryFile(
                mode='wb',
                dir=dir_name,
                prefix=EditorConstants.ATOMIC_SAVE_PREFIX,
                suffix=EditorConstants.ATOMIC_SAVE_SUFFIX,
                delete=False,
            ) as temp_file:
                temp_filename = temp_file.name
                self.save(temp_file)
                os.fsync(temp_file.fileno())
            os.replace(temp_filename, path)
        except (OSError, SaveError) as e:
            self._dirty = was_dirty
            if temp_filename is not None:
                try:
                    os.remove(temp_filename)
                except FileNotFoundError:
                    pass
            if isinstance(e, SaveError):
                raise
            raise SaveError(str(e.strerror or e)) from e

        self.file_name = path
        self._dirty = False
        logger.info(f"Saved {path} ({self.length()} lines)")
