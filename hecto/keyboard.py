"""Keyboard input handling using curtsies-style tokens."""

from typing import Optional
from dataclasses import dataclass
from enum import Enum


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"
    CTRL = "ctrl"
    ALT = "alt"
    SPECIAL = "special"


@dataclass
class KeyEvent:
    """Represents a parsed keyboard event."""
    key_type: KeyType
    value: str  # The base key (e.g., 'a', 'left', 'backspace')
    raw: str  # The raw key string from curtsies
    is_alt: bool = False
    is_ctrl: bool = False
    is_shift: bool = False


SPECIAL_KEYS = {
    'left', 'right', 'up', 'down', 'home', 'end', 'page_up', 'page_down',
    'enter', 'backspace', 'delete', 'insert', 'tab',
}

# Alternate spellings curtsies and terminals use for the same key
KEY_ALIASES = {
    'pageup': 'page_up',
    'pagedown': 'page_down',
    'pgup': 'page_up',
    'pgdn': 'page_down',
    'return': 'enter',
    'del': 'delete',
    'esc': 'escape',
}


class KeyboardHandler:
    """Turns terminal key strings into KeyEvents."""

    def __init__(self, terminal_interface):
        self.terminal = terminal_interface

    def get_key_event(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        """Get next key event, or None when no key arrived in time."""
        key = self.terminal.get_key(timeout)
        if not key:
            return None
        return self.parse_key(key)

    def parse_key(self, key) -> KeyEvent:
        """Parse a curtsies key name (e.g. '<UP>', '<Ctrl-q>') or raw character."""
        key_str = str(key)

        if len(key_str) > 2 and key_str.startswith('<') and key_str.endswith('>'):
            return self._parse_named(key_str)

        if len(key_str) == 1:
            o = ord(key_str)
            if key_str in ('\r', '\n'):
                return KeyEvent(KeyType.SPECIAL, 'enter', key_str)
            if key_str == '\t':
                return KeyEvent(KeyType.SPECIAL, 'tab', key_str)
            if key_str in ('\x7f', '\x08'):
                return KeyEvent(KeyType.SPECIAL, 'backspace', key_str)
            if key_str == '\x1b':
                return KeyEvent(KeyType.SPECIAL, 'escape', key_str)
            if 1 <= o <= 26:  # Ctrl-A .. Ctrl-Z
                ch = chr(ord('a') + o - 1)
                return KeyEvent(KeyType.CTRL, ch, key_str, is_ctrl=True)

        return KeyEvent(KeyType.REGULAR, key_str, key_str)

    def _parse_named(self, key_str: str) -> KeyEvent:
        name = key_str[1:-1].lower().replace('+', '-')
        parts = name.split('-')
        base = parts[-1]
        mods = set(parts[:-1])
        if 'meta' in mods or 'esc' in mods:
            mods.add('alt')
        # '<Ctrl-->' and similar leave an empty base after splitting
        if base == '' and len(parts) > 1:
            base = '-'
        base = KEY_ALIASES.get(base, base)

        if base in ('space', 'spacebar') and not mods:
            return KeyEvent(KeyType.REGULAR, ' ', ' ')
        if 'ctrl' in mods and len(base) == 1:
            if base in ('j', 'm'):
                return KeyEvent(KeyType.SPECIAL, 'enter', key_str)
            if base == 'h':
                return KeyEvent(KeyType.SPECIAL, 'backspace', key_str)
            if base == 'i':
                return KeyEvent(KeyType.SPECIAL, 'tab', key_str)
            return KeyEvent(KeyType.CTRL, base, key_str, is_ctrl=True)
        if 'alt' in mods:
            return KeyEvent(KeyType.ALT, base, key_str, is_alt=True,
                            is_ctrl='ctrl' in mods)
        if base == 'escape':
            return KeyEvent(KeyType.SPECIAL, 'escape', '\x1b')
        # Unknown tokens (function keys etc.) are passed through as specials
        return KeyEvent(KeyType.SPECIAL, base, key_str, is_shift='shift' in mods)
