"""Base class for character-by-character scanners.

Provides cursor navigation and string-literal tracking shared by the
destructuring and property scanners.

String-literal rule used by the whole engine: a quote character (``"``,
``'`` or a backtick) toggles string mode unless the single character
immediately before it is a backslash. Runs of backslashes are not counted,
so ``'\\\\'`` (an escaped backslash followed by the closing quote) leaves
the string open.
"""

QUOTE_CHARS = ('"', "'", "`")
ESCAPE_CHAR = "\\"


def is_unescaped_quote(ch: str, prev: str) -> bool:
    """Return True if ``ch`` is a quote not preceded by a backslash."""
    return ch in QUOTE_CHARS and prev != ESCAPE_CHAR


class BaseScanner:
    """Cursor over a text body with string-literal state.

    Attributes:
        body: Text being scanned.
        pos: Current index into ``body``.
        depth: Nesting depth, for subclasses that track a single counter.
        in_string: True while inside a string literal.
        string_char: Quote that opened the current string literal.
    """

    def __init__(self, body: str) -> None:
        self.body = body
        self.pos = 0
        self.depth = 0
        self.in_string = False
        self.string_char = ""

    def current(self) -> str:
        """Character at the cursor, or '' past the end."""
        return self.body[self.pos] if self.pos < len(self.body) else ""

    def peek(self, offset: int = 1) -> str:
        """Character ``offset`` positions ahead, or '' past the end."""
        idx = self.pos + offset
        return self.body[idx] if 0 <= idx < len(self.body) else ""

    def previous(self) -> str:
        """Character before the cursor, or '' at the start."""
        return self.body[self.pos - 1] if 0 < self.pos <= len(self.body) else ""

    def advance(self) -> None:
        self.pos += 1

    def is_at_end(self) -> bool:
        return self.pos >= len(self.body)

    def handle_string_literal(self, ch: str, prev: str) -> bool:
        """Update string state for a quote character.

        Args:
            ch: Current character.
            prev: Character before ``ch``.

        Returns:
            True if the call entered or left a string literal.
        """
        if not is_unescaped_quote(ch, prev):
            return False

        if not self.in_string:
            self.in_string = True
            self.string_char = ch
            return True

        if ch == self.string_char:
            self.in_string = False
            self.string_char = ""
            return True

        # A different quote inside the string is plain text
        return False
