"""Terminal interface using Blessed for display and Curtsies for input."""

import logging
import select
import sys
import termios
from typing import Optional

import blessed

from .constants import EditorConstants

logger = logging.getLogger(__name__)


class TerminalInterface:
    """Handles terminal I/O using Blessed."""

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None
        # Virtual screen state for minimal updates
        self._last_rows: Optional[list[str]] = None
        self._last_size: Optional[tuple[int, int]] = None

    def setup(self):
        """Enter fullscreen mode and start raw key input."""
        print(self.term.enter_fullscreen, end='')
        print(self.term.clear, end='', flush=True)
        self.is_fullscreen = True
        if self._curtsies_input is None:
            try:
                from curtsies import Input
                self._curtsies_input = Input(keynames='curtsies')
                self._curtsies_input.__enter__()
            except (OSError, ImportError, termios.error) as e:
                # No usable tty (CI, pipes): run without key input
                logger.warning(f"Key input unavailable: {e}")
                self._curtsies_input = None

    def cleanup(self):
        """Exit fullscreen mode and restore terminal."""
        if self._curtsies_input is not None:
            try:
                self._curtsies_input.__exit__(None, None, None)
            except (OSError, termios.error) as e:
                logger.warning(f"Could not restore terminal mode: {e}")
            finally:
                self._curtsies_input = None
        if self.is_fullscreen:
            print(self.term.normal + self.term.exit_fullscreen, end='')
            print(self.term.normal_cursor, end='', flush=True)
            self.is_fullscreen = False

    def invalidate_frame(self) -> None:
        """Forget the last frame so the next update repaints everything."""
        self._last_rows = None
        self._last_size = None

    def display_width(self, text: str) -> int:
        """Number of screen columns ``text`` occupies."""
        return self.term.length(text)

    def update_frame(
        self,
        rows: list[str],
        status_left: str,
        status_right: str,
        message: str,
        cursor_y: int,
        cursor_x: int,
    ) -> None:
        """Draw text rows, the status bar and the message bar.

        Only rows that changed since the last frame are rewritten; the
        first paint and any size change do a full clear.
        """
        size = (self.term.width, self.term.height)
        if self._last_rows is None or self._last_size != size or len(self._last_rows) != len(rows):
            print(self.term.home + self.term.clear, end='')
            self._last_rows = [None] * len(rows)
            self._last_size = size

        out = [self.term.hide_cursor]
        for y, row in enumerate(rows):
            if row != self._last_rows[y]:
                out.append(self.term.move(y, 0) + row + self.term.clear_eol)
                self._last_rows[y] = row

        out.append(self.term.move(len(rows), 0) + self._compose_status(status_left, status_right))
        out.append(self.term.move(len(rows) + 1, 0)
                   + self.term.truncate(message, self.term.width) + self.term.clear_eol)
        out.append(self.term.move(cursor_y, cursor_x) + self.term.normal_cursor)
        print(''.join(out), end='', flush=True)

    def _compose_status(self, left: str, right: str) -> str:
        """Reverse-video bar with ``left`` and ``right`` at its two ends."""
        width = self.term.width
        left = self.term.truncate(left, width)
        gap = width - self.term.length(left) - self.term.length(right)
        if gap > 0:
            bar = left + ' ' * gap + right
        else:
            bar = self.term.ljust(left, width)
        return self.term.reverse + bar + self.term.normal

    def get_key(self, timeout=None):
        """Get a single keypress from the user.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)

        Returns:
            The curtsies key name, or None if no key arrived or input is unavailable.
        """
        if self._curtsies_input is None:
            return None
        if timeout is None:
            return str(next(self._curtsies_input))
        r, _, _ = select.select([sys.stdin], [], [], float(timeout))
        if not r:
            return None
        return str(next(self._curtsies_input))

    @property
    def width(self):
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self):
        """Rows available for text (excluding the status and message bars)."""
        return max(self.term.height - EditorConstants.STATUS_BAR_ROWS, 1)
