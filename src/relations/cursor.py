"""Position-tracking cursor over a relationship field body."""

from __future__ import annotations

from typing import Optional

# Returned by peek/advance once the cursor is past the last character.
EOF_MARK = None

WHITESPACE = frozenset(" \t\r\n")


class Cursor:
    """Look-ahead-one view over an immutable input string.

    The cursor never raises: running off the end yields ``EOF_MARK`` so the
    grammar decides whether end of input is acceptable at that point.
    """

    __slots__ = ("text", "index")

    def __init__(self, text: str):
        self.text = text
        self.index = 0

    def peek(self) -> Optional[str]:
        """Return the current character without consuming it."""
        if self.index >= len(self.text):
            return EOF_MARK
        return self.text[self.index]

    def advance(self) -> Optional[str]:
        """Return the current character and move past it."""
        char = self.peek()
        if char is not EOF_MARK:
            self.index += 1
        return char

    def slice(self, start: int) -> str:
        """Return the input between ``start`` and the current position."""
        return self.text[start:self.index]

    def at_end(self) -> bool:
        return self.index >= len(self.text)

    def __repr__(self) -> str:
        return f"Cursor(index={self.index}, length={len(self.text)})"


def skip_whitespace(cursor: Cursor) -> None:
    """Advance over any run of space, tab, carriage return or newline."""
    while cursor.peek() in WHITESPACE:
        cursor.advance()
