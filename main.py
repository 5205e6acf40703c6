#!/usr/bin/env python3
"""Hecto - a minimal terminal text editor.

Usage:
    python main.py [filename]

Controls:
    Arrow keys, Home/End, PageUp/PageDown: Move the cursor
    Ctrl-S: Save file (prompts for a name if the document has none)
    Ctrl-Q: Quit (press repeatedly to discard unsaved changes)
    Type to insert text
    Backspace/Delete: Delete character before/under the cursor
    Enter: Split the line
"""

from hecto.__main__ import main


if __name__ == "__main__":
    main()
