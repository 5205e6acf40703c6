"""Command pattern implementation for editor actions."""

from abc import ABC, abstractmethod
from typing import Dict, Tuple, Optional, TYPE_CHECKING

from .constants import EditorConstants
from .keyboard import KeyType
from .viewport import Direction, Position, move_cursor

if TYPE_CHECKING:
    from .editor import Editor
    from .keyboard import KeyEvent


class EditorCommand(ABC):
    """Base class for editor commands."""

    # Commands that keep a pending quit confirmation alive
    keeps_quit_confirmation = False

    @abstractmethod
    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> None:
        """Execute the command against ``editor.state``."""


class MoveCommand(EditorCommand):
    """Move the cursor one step in a fixed direction."""

    def __init__(self, direction: Direction):
        self.direction = direction

    def execute(self, editor, key_event):
        state = editor.state
        state.cursor = move_cursor(state.cursor, self.direction, state.document,
                                   editor.terminal.height)


def _line_length(document, y: int) -> int:
    line = document.row_at(y)
    return line.length() if line is not None else 0


def _insert(editor: 'Editor', text: str) -> None:
    """Insert text at the cursor and advance past it.

    The cursor advances by the change in grapheme count, so a combining
    mark that joins the previous cluster leaves it where it is.
    """
    state = editor.state
    cursor = state.cursor
    before = _line_length(state.document, cursor.y)
    state.document.insert(cursor, text)
    after = _line_length(state.document, cursor.y)
    state.cursor = Position(min(cursor.x, before) + after - before, cursor.y)


class InsertTextCommand(EditorCommand):
    def execute(self, editor, key_event):
        text = key_event.value
        # Filter out control characters
        if not text or ord(text[0]) < 32:
            return
        _insert(editor, text)


class TabCommand(EditorCommand):
    def execute(self, editor, key_event):
        _insert(editor, '\t')


class InsertNewlineCommand(EditorCommand):
    def execute(self, editor, key_event):
        state = editor.state
        state.document.insert(state.cursor, EditorConstants.LINE_TERMINATOR)
        state.cursor = move_cursor(state.cursor, Direction.RIGHT, state.document,
                                   editor.terminal.height)


class DeleteCommand(EditorCommand):
    """Forward delete; at the end of a line the next line is joined."""

    def execute(self, editor, key_event):
        state = editor.state
        state.document.delete(state.cursor)


class BackspaceCommand(EditorCommand):
    """Step left, then delete; at column zero this joins with the previous line."""

    def execute(self, editor, key_event):
        state = editor.state
        if state.cursor.x == 0 and state.cursor.y == 0:
            return
        state.cursor = move_cursor(state.cursor, Direction.LEFT, state.document,
                                   editor.terminal.height)
        state.document.delete(state.cursor)


class SaveCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.handle_save()


class QuitCommand(EditorCommand):
    keeps_quit_confirmation = True

    def execute(self, editor, key_event):
        editor.handle_quit()


class CommandRegistry:
    """Registry for mapping key combinations to commands."""

    def __init__(self):
        self._commands: Dict[Tuple[KeyType, str], EditorCommand] = {}
        self._insert_text = InsertTextCommand()
        self._setup_default_commands()

    def _setup_default_commands(self):
        """Set up the default command mappings."""
        # Movement commands
        for direction in Direction:
            self.register((KeyType.SPECIAL, direction.value), MoveCommand(direction))
        self.register((KeyType.CTRL, 'a'), MoveCommand(Direction.HOME))
        self.register((KeyType.CTRL, 'e'), MoveCommand(Direction.END))

        # Editing commands
        self.register((KeyType.SPECIAL, 'enter'), InsertNewlineCommand())
        self.register((KeyType.SPECIAL, 'tab'), TabCommand())
        self.register((KeyType.SPECIAL, 'backspace'), BackspaceCommand())
        self.register((KeyType.SPECIAL, 'delete'), DeleteCommand())
        self.register((KeyType.CTRL, 'd'), DeleteCommand())

        # System commands
        self.register((KeyType.CTRL, 's'), SaveCommand())
        self.register((KeyType.CTRL, 'q'), QuitCommand())

    def register(self, key: Tuple[KeyType, str], command: EditorCommand):
        """Register a command for a key combination."""
        self._commands[key] = command

    def get_command(self, key_event: 'KeyEvent') -> Optional[EditorCommand]:
        """Get the command for a key event, or None if the key is unbound."""
        command = self._commands.get((key_event.key_type, key_event.value))
        if command is None and key_event.key_type == KeyType.REGULAR:
            return self._insert_text
        return command
