"""
State machine scanner for type alias and interface bodies.

Extracts property declarations from the text between the outer braces of
``type Props = { ... }`` or ``interface Props { ... }``, including:
- Multi-line properties with or without terminating semicolons
- Nested object, array, tuple and function types
- Doc comments (``/** ... */``) attached to the following property
- String literal types containing comment or bracket characters
- Comments nested inside a type, kept verbatim

Character handling depends on the context:

1. Comment contexts (LINE_COMMENT, BLOCK_COMMENT, DOC_COMMENT): every
   character is plain text. Quotes do not open strings and brackets do not
   change depth. Only the terminator (newline, ``*/``) is recognised.
2. String literal mode: every character is accumulated into the type
   until the matching unescaped quote.
3. Code contexts (SEEKING, PROPERTY_NAME, AFTER_OPTIONAL_MARKER,
   AFTER_COLON, PROPERTY_TYPE): quotes open strings, brackets change
   depth and comment delimiters open comments.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

import re
from enum import Enum
from typing import Callable, Dict, Optional

from propdoc_core.models import PropertyDeclaration
from propdoc_core.scanners.base import BaseScanner
from propdoc_core.scanners.normalize import clean_type_text, normalize_comment
from propdoc_core.utils import get_logger

logger = get_logger(__name__)

# Maximum distance scanned when guessing whether a new property starts
LOOKAHEAD_LIMIT = 256

_IDENT_START = re.compile(r"[A-Za-z_$]")
_IDENT_CHAR = re.compile(r"[A-Za-z0-9_$]")

_OPENERS = "{[("
_CLOSERS = "}])"
_GROUP_PAIRS = {"(": ")", "[": "]", "<": ">"}


class ScannerContext(str, Enum):
    """Scanner states. Exactly one is active at a time."""

    SEEKING = "seeking"
    LINE_COMMENT = "line_comment"
    BLOCK_COMMENT = "block_comment"
    DOC_COMMENT = "doc_comment"
    PROPERTY_NAME = "property_name"
    AFTER_OPTIONAL_MARKER = "after_optional_marker"
    AFTER_COLON = "after_colon"
    PROPERTY_TYPE = "property_type"


COMMENT_CONTEXTS = frozenset(
    {ScannerContext.LINE_COMMENT, ScannerContext.BLOCK_COMMENT, ScannerContext.DOC_COMMENT}
)

# Contexts where quotes open string literals
STRING_CONTEXTS = frozenset({ScannerContext.SEEKING, ScannerContext.PROPERTY_TYPE})


class PropertyScanner(BaseScanner):
    """
    Extract ``name -> PropertyDeclaration`` from a type/interface body.

    Each state has one handler method; ``_scan_character`` applies the
    string-literal rule and dispatches on the current context. Handlers
    that want the current character looked at again under a new context
    step the cursor back by one.

    Example:
        >>> scanner = PropertyScanner(" a: string; b?: number; ")
        >>> {name: (p.type_text, p.required) for name, p in scanner.parse().items()}
        {'a': ('string', True), 'b': ('number', False)}
    """

    def __init__(
        self,
        body: str,
        normalise_comment: bool = False,
        normalise_type: bool = True,
    ) -> None:
        super().__init__(body)
        self.normalise_comment = normalise_comment
        self.normalise_type = normalise_type

        self.context = ScannerContext.SEEKING
        self._properties: Dict[str, PropertyDeclaration] = {}
        self._pending_comment: Optional[str] = None
        self._comment_buffer = ""
        self._buffer = ""
        self._name = ""
        self._optional = False
        self._name_closed = False

        self._handlers: Dict[ScannerContext, Callable[[str, str], None]] = {
            ScannerContext.SEEKING: self._handle_seeking,
            ScannerContext.LINE_COMMENT: self._handle_line_comment,
            ScannerContext.BLOCK_COMMENT: self._handle_block_comment,
            ScannerContext.DOC_COMMENT: self._handle_doc_comment,
            ScannerContext.PROPERTY_NAME: self._handle_property_name,
            ScannerContext.AFTER_OPTIONAL_MARKER: self._handle_after_optional_marker,
            ScannerContext.AFTER_COLON: self._handle_after_colon,
            ScannerContext.PROPERTY_TYPE: self._handle_property_type,
        }

    def parse(self) -> Dict[str, PropertyDeclaration]:
        """Scan the body and return declarations in declaration order."""
        while not self.is_at_end():
            self._scan_character()

        self._finalize_property()
        return self._properties

    # =========================================================================
    # Dispatch
    # =========================================================================

    def _scan_character(self) -> None:
        ch = self.current()
        nxt = self.peek()

        if self.context in STRING_CONTEXTS:
            if self.handle_string_literal(ch, self.previous()) or self.in_string:
                self._buffer += ch
                self.advance()
                return

        self._handlers[self.context](ch, nxt)
        self.advance()

    # =========================================================================
    # Comment contexts
    # =========================================================================

    def _enter_comment(self, ch: str, nxt: str) -> bool:
        """Switch into a comment context if a comment starts at the cursor."""
        if ch != "/":
            return False

        if nxt == "*":
            if self.peek(2) == "*" and self.peek(3) != "/":
                self.context = ScannerContext.DOC_COMMENT
                self._comment_buffer = ""
                self.pos += 2  # '/**'
            else:
                self.context = ScannerContext.BLOCK_COMMENT
                self.pos += 1  # '/*'
            return True

        if nxt == "/":
            self.context = ScannerContext.LINE_COMMENT
            self.pos += 1  # '//'
            return True

        return False

    def _handle_line_comment(self, ch: str, nxt: str) -> None:
        if ch in ("\n", "\r"):
            self.context = ScannerContext.SEEKING

    def _handle_block_comment(self, ch: str, nxt: str) -> None:
        if ch == "*" and nxt == "/":
            self.context = ScannerContext.SEEKING
            self.pos += 1  # '*/'

    def _handle_doc_comment(self, ch: str, nxt: str) -> None:
        if ch == "*" and nxt == "/":
            self._pending_comment = normalize_comment(self._comment_buffer, self.normalise_comment)
            self._comment_buffer = ""
            self.context = ScannerContext.SEEKING
            self.pos += 1  # '*/'
            return
        self._comment_buffer += ch

    # =========================================================================
    # Code contexts
    # =========================================================================

    def _handle_seeking(self, ch: str, nxt: str) -> None:
        if ch.isspace():
            return

        if self._enter_comment(ch, nxt):
            return

        if _IDENT_START.match(ch):
            self.context = ScannerContext.PROPERTY_NAME
            self._buffer = ch
            self._name_closed = False
            return

        # Index signatures, call signatures, method parameter lists and stray
        # object bodies are not property names
        if ch in _GROUP_PAIRS or ch == "{":
            self._skip_group()

    def _handle_property_name(self, ch: str, nxt: str) -> None:
        if _IDENT_CHAR.match(ch):
            # A second word means the first one was a modifier (readonly)
            if self._name_closed:
                self._buffer = ""
                self._name_closed = False
            self._buffer += ch
            return

        if ch == "?" and nxt == ":":
            self._capture_name(optional=True)
            self.context = ScannerContext.AFTER_OPTIONAL_MARKER
            return

        if ch == ":":
            self._capture_name(optional=False)
            self.context = ScannerContext.AFTER_COLON
            return

        if ch.isspace():
            self._name_closed = True
            return

        self._abort_property()
        # Let SEEKING look at the character (quotes, brackets, comments)
        self.pos -= 1

    def _handle_after_optional_marker(self, ch: str, nxt: str) -> None:
        if ch == ":":
            self.context = ScannerContext.AFTER_COLON
            return
        self._abort_property()

    def _handle_after_colon(self, ch: str, nxt: str) -> None:
        if ch.isspace():
            return

        self.context = ScannerContext.PROPERTY_TYPE
        self.depth = 0
        self._buffer = ""
        self.pos -= 1

    def _handle_property_type(self, ch: str, nxt: str) -> None:
        if ch in _OPENERS:
            self.depth += 1
            self._buffer += ch
            return

        if ch in _CLOSERS:
            self.depth -= 1
            if self.depth < 0:
                # Closing brace of the enclosing body
                self._end_property(reprocess=True)
                return
            self._buffer += ch
            return

        if self.depth == 0:
            if ch == ";":
                self._end_property(reprocess=False)
                return

            # A comment at top level belongs to the next property
            if ch == "/" and nxt in ("*", "/"):
                self._end_property(reprocess=True)
                return

            if (
                _IDENT_START.match(ch)
                and not _IDENT_CHAR.match(self.previous())
                and self._is_next_property_start()
            ):
                self._end_property(reprocess=True)
                return

        elif ch == "/" and nxt in ("*", "/"):
            self._copy_nested_comment(nxt)
            return

        self._buffer += ch

    # =========================================================================
    # Helpers
    # =========================================================================

    def _copy_nested_comment(self, kind: str) -> None:
        """Append a comment found inside a nested type verbatim."""
        terminator = "*/" if kind == "*" else None
        start = self.pos
        if terminator:
            end = self.body.find(terminator, self.pos + 2)
            end = len(self.body) if end == -1 else end + 2
        else:
            end = self.pos + 2
            while end < len(self.body) and self.body[end] not in ("\n", "\r"):
                end += 1
            end = min(end + 1, len(self.body))
        self._buffer += self.body[start:end]
        self.pos = end - 1

    def _skip_group(self) -> None:
        """Move the cursor to the closer matching the opener at the cursor."""
        depth = 0
        in_string = ""
        i = self.pos
        while i < len(self.body):
            c = self.body[i]
            prev = self.body[i - 1] if i > 0 else ""
            if in_string:
                if c == in_string and prev != "\\":
                    in_string = ""
            elif c in ('"', "'", "`") and prev != "\\":
                in_string = c
            elif c in _GROUP_PAIRS or c == "{":
                depth += 1
            elif c in _GROUP_PAIRS.values() or c == "}":
                if c == ">" and prev == "=":
                    i += 1
                    continue
                depth -= 1
                if depth <= 0:
                    self.pos = i
                    return
            i += 1
        self.pos = len(self.body) - 1

    def _is_next_property_start(self) -> bool:
        """Look ahead for ``identifier ?: `` or ``identifier :``.

        Used to recover from a missing semicolon between two properties.
        The branch of a conditional type (``A extends B ? X : Y``) is not a
        property start.
        """
        if self._buffer.rstrip().endswith("?"):
            return False

        limit = min(len(self.body), self.pos + LOOKAHEAD_LIMIT)
        i = self.pos
        while i < limit and self.body[i].isspace():
            i += 1
        if i >= limit or self.body[i] in ("|", "&") or not _IDENT_START.match(self.body[i]):
            return False

        while i < limit and _IDENT_CHAR.match(self.body[i]):
            i += 1
        while i < limit and self.body[i].isspace():
            i += 1

        if i >= limit:
            return False
        if self.body[i] == ":":
            return True
        return self.body[i] == "?" and i + 1 < limit and self.body[i + 1] == ":"

    def _capture_name(self, optional: bool) -> None:
        self._name = self._buffer.strip()
        self._optional = optional
        self._buffer = ""

    def _end_property(self, reprocess: bool) -> None:
        self._finalize_property()
        self.context = ScannerContext.SEEKING
        if reprocess:
            self.pos -= 1

    def _finalize_property(self) -> None:
        if not self._name:
            return

        type_text = clean_type_text(self._buffer, self.normalise_type)
        if type_text:
            self._properties[self._name] = PropertyDeclaration(
                name=self._name,
                type_text=type_text,
                optional=self._optional,
                comment=self._pending_comment,
            )
        else:
            logger.debug("property_discarded", name=self._name, reason="empty_type")

        self._reset_property()
        self._pending_comment = None

    def _abort_property(self) -> None:
        self._reset_property()
        self._pending_comment = None
        self.context = ScannerContext.SEEKING

    def _reset_property(self) -> None:
        self._name = ""
        self._optional = False
        self._buffer = ""
        self._name_closed = False
