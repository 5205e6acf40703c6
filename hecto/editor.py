"""Main editor controller: interaction loop, status bars and prompts."""

import logging
import os
import select
import signal
import sys
import termios
import time
from dataclasses import dataclass, field
from typing import Optional

from .commands import CommandRegistry
from .constants import EditorConstants
from .document import Document, LoadError, SaveError
from .keyboard import KeyboardHandler, KeyEvent, KeyType
from .terminal import TerminalInterface
from .version import get_version
from .viewport import Offset, Position, scroll, visible_range

logger = logging.getLogger(__name__)


@dataclass
class StatusMessage:
    text: str = ""
    time: float = field(default_factory=time.monotonic)


@dataclass
class EditorState:
    """Everything the interaction loop mutates, passed around explicitly."""
    document: Document = field(default_factory=Document)
    cursor: Position = field(default_factory=Position)
    offset: Offset = field(default_factory=Offset)
    quit_times: int = EditorConstants.QUIT_TIMES
    message: StatusMessage = field(
        default_factory=lambda: StatusMessage(EditorConstants.HELP_MESSAGE))
    prompt_mode: Optional[str] = None  # None or 'save_as'
    prompt_input: str = ""


class Editor:
    """Main text editor application controller."""

    def __init__(self, terminal: Optional[TerminalInterface] = None):
        """Initialize the editor components."""
        self.terminal = terminal or TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.command_registry = CommandRegistry()
        self.state = EditorState()
        self.running = False
        self._resize_pipe_r: Optional[int] = None
        self._resize_pipe_w: Optional[int] = None

    def set_message(self, text: str) -> None:
        self.state.message = StatusMessage(text)

    def load_file(self, filename: str):
        """Load a file into the editor.

        A file that cannot be opened leaves an empty document that will be
        saved under ``filename``.
        """
        try:
            self.state = EditorState(document=Document.load(filename))
        except LoadError as e:
            logger.warning(f"Could not open {filename}: {e}")
            self.state = EditorState(document=Document(file_name=filename))
            self.set_message(f"ERR: Could not open file: {filename}")

    # --- Main loop ---

    def _handle_resize(self, signum, frame):
        """Handle terminal resize signal."""
        del signum, frame  # Unused
        # Write to pipe to wake up select()
        os.write(self._resize_pipe_w, EditorConstants.RESIZE_PIPE_MARKER)

    def run(self):
        """Run the main editor loop until the user quits."""
        self._resize_pipe_r, self._resize_pipe_w = os.pipe()
        self.terminal.setup()
        self.running = True
        original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize)

        old_settings = None
        try:
            # Disable flow control so Ctrl-S and Ctrl-Q reach the editor
            try:
                old_settings = termios.tcgetattr(sys.stdin)
                new_settings = list(old_settings)
                new_settings[0] &= ~(termios.IXON | termios.IXOFF)
                termios.tcsetattr(sys.stdin, termios.TCSANOW, new_settings)
            except (termios.error, OSError):
                old_settings = None

            need_draw = True
            while self.running:
                if need_draw:
                    self.refresh_screen()
                    need_draw = False

                # Wake up again when the current message expires
                timeout = None
                if self.state.message.text:
                    age = time.monotonic() - self.state.message.time
                    timeout = max(EditorConstants.MESSAGE_TIMEOUT - age, 0.0)
                ready, _, _ = select.select([0, self._resize_pipe_r], [], [], timeout)

                if self._resize_pipe_r in ready:
                    os.read(self._resize_pipe_r, 1024)
                    self.terminal.invalidate_frame()
                    self.state.offset = scroll(self.state.cursor, self.state.offset,
                                               self.terminal.width, self.terminal.height)
                    need_draw = True
                elif 0 in ready:
                    key_event = self.keyboard.get_key_event(timeout=0)
                    if key_event:
                        self.process_key_event(key_event)
                        need_draw = True
                else:
                    # Message timed out
                    self.state.message = StatusMessage("")
                    need_draw = True
        finally:
            if old_settings is not None:
                try:
                    termios.tcsetattr(sys.stdin, termios.TCSANOW, old_settings)
                except (termios.error, OSError):
                    pass
            signal.signal(signal.SIGWINCH, original_winch_handler)
            os.close(self._resize_pipe_r)
            os.close(self._resize_pipe_w)
            self.terminal.cleanup()

    def process_key_event(self, key_event: KeyEvent) -> None:
        """Apply one key: edit, move the cursor, then scroll it into view."""
        state = self.state
        command = self.command_registry.get_command(key_event)

        if (command is None or not command.keeps_quit_confirmation) \
                and state.quit_times < EditorConstants.QUIT_TIMES:
            state.quit_times = EditorConstants.QUIT_TIMES
            self.set_message("")

        if state.prompt_mode == 'save_as':
            self._handle_save_prompt(key_event)
        elif command is not None:
            command.execute(self, key_event)

        state.offset = scroll(state.cursor, state.offset,
                              self.terminal.width, self.terminal.height)

    # --- System commands ---

    def handle_quit(self):
        """Quit, asking for confirmation presses while there are unsaved changes."""
        state = self.state
        if state.document.dirty and state.quit_times > 0:
            self.set_message(EditorConstants.UNSAVED_CHANGES_MESSAGE.format(state.quit_times))
            state.quit_times -= 1
            return
        self.running = False

    def handle_save(self):
        """Handle Ctrl-S save command."""
        if self.state.document.file_name:
            self.save_file()
        else:
            self.state.prompt_mode = 'save_as'
            self.state.prompt_input = ""

    def save_file(self, filename: Optional[str] = None) -> bool:
        """Save the document, reporting the outcome in the message bar."""
        try:
            self.state.document.save_to(filename)
        except SaveError as e:
            logger.exception(f"Saving {filename or self.state.document.file_name} failed")
            self.set_message(f"Error writing file: {e}")
            return False
        self.set_message("File saved successfully.")
        return True

    def _handle_save_prompt(self, key_event: KeyEvent):
        """Handle keypress during the 'Save as' prompt."""
        state = self.state
        if (key_event.key_type == KeyType.SPECIAL and key_event.value == 'escape') or \
           (key_event.key_type == KeyType.CTRL and key_event.value == 'g'):  # ESC or Ctrl-G
            state.prompt_mode = None
            state.prompt_input = ""
            self.set_message("Save aborted.")
        elif key_event.key_type == KeyType.SPECIAL and key_event.value == 'enter':
            if state.prompt_input:
                filename = state.prompt_input
                state.prompt_mode = None
                state.prompt_input = ""
                self.save_file(filename)
        elif key_event.key_type == KeyType.SPECIAL and key_event.value == 'backspace':
            state.prompt_input = state.prompt_input[:-1]
        elif key_event.key_type == KeyType.REGULAR and ord(key_event.value[0]) >= 32:
            state.prompt_input += key_event.value

    # --- Drawing ---

    def compose_rows(self, width: int, height: int) -> list[str]:
        """Text for each of the ``height`` document rows on screen."""
        state = self.state
        document = state.document
        rows = []
        shown = visible_range(state.offset, height, document)
        for terminal_row in range(height):
            y = state.offset.y + terminal_row
            if y in shown:
                rows.append(document.row_at(y).render(state.offset.x, state.offset.x + width))
            elif document.is_empty() and terminal_row == height // 3:
                rows.append(self._welcome_message(width))
            else:
                rows.append(EditorConstants.EMPTY_ROW_MARKER)
        return rows

    def _welcome_message(self, width: int) -> str:
        message = EditorConstants.WELCOME_MESSAGE.format(get_version())
        padding = max(width - len(message), 0) // 2
        spaces = " " * max(padding - 1, 0)
        return (EditorConstants.EMPTY_ROW_MARKER + spaces + message)[:width]

    def status_text(self) -> tuple[str, str]:
        """Left and right halves of the status bar."""
        document = self.state.document
        name = (document.file_name or "[No Name]")[:EditorConstants.FILE_NAME_WIDTH]
        modified = " (modified)" if document.dirty else ""
        left = f"{name} - {document.length()} lines{modified}"
        right = f"{self.state.cursor.y + 1}/{document.length()}"
        return left, right

    def message_text(self) -> str:
        state = self.state
        if state.prompt_mode == 'save_as':
            return EditorConstants.SAVE_PROMPT + state.prompt_input
        if time.monotonic() - state.message.time < EditorConstants.MESSAGE_TIMEOUT:
            return state.message.text
        return ""

    def screen_cursor(self) -> tuple[int, int]:
        """Terminal (row, column) of the cursor."""
        state = self.state
        if state.prompt_mode == 'save_as':
            return self.terminal.height + 1, self.terminal.display_width(self.message_text())
        line = state.document.row_at(state.cursor.y)
        prefix = line.render(state.offset.x, state.cursor.x) if line is not None else ""
        return state.cursor.y - state.offset.y, self.terminal.display_width(prefix)

    def refresh_screen(self):
        """Draw the current editor state to terminal."""
        left, right = self.status_text()
        cursor_y, cursor_x = self.screen_cursor()
        self.terminal.update_frame(
            self.compose_rows(self.terminal.width, self.terminal.height),
            left,
            right,
            self.message_text(),
            cursor_y,
            cursor_x,
        )
