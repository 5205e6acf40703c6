"""Constants and configuration for the hecto editor."""

class EditorConstants:
    """Central configuration constants for the editor."""

    # Quitting with unsaved changes
    QUIT_TIMES = 3  # Extra Ctrl-Q presses required when the document is dirty

    # Screen layout
    STATUS_BAR_ROWS = 2  # Status bar plus message bar at the bottom
    EMPTY_ROW_MARKER = "~"
    FILE_NAME_WIDTH = 20  # Maximum file name length shown in the status bar

    # Messages
    MESSAGE_TIMEOUT = 5.0  # Seconds a message stays in the message bar
    HELP_MESSAGE = "HELP: Ctrl-S = save | Ctrl-Q = quit"
    WELCOME_MESSAGE = "Hecto editor -- version {}"
    UNSAVED_CHANGES_MESSAGE = (
        "WARNING! File has unsaved changes. Press Ctrl-Q {} more times to quit."
    )
    SAVE_PROMPT = "Save as: "

    # File operations
    LINE_TERMINATOR = "\n"
    ATOMIC_SAVE_PREFIX = "."  # Prefix for temporary save files
    ATOMIC_SAVE_SUFFIX = ".tmp"  # Suffix for temporary save files

    # Resize handling
    RESIZE_PIPE_MARKER = b'R'  # Byte written to pipe to signal resize
