"""Scanner for the body of an intake destructuring pattern.

Turns the text between the outer braces of::

    const { id = 'default', count = $bindable(10), ...rest }: Props = $props();

into ordered ``DestructuredBinding`` items. Default values are kept as raw
text, including nested braces, arrow functions and string literals. Rest
items are dropped and aliases (``{ class: className }``) report the external
name only.
"""

import re
from typing import List

from propdoc_core.models import DestructuredBinding
from propdoc_core.scanners.base import BaseScanner
from propdoc_core.scanners.normalize import clean_default_value

_NAME_CHAR = re.compile(r"[A-Za-z_$0-9]")

_OPENERS = {"(": "paren", "[": "bracket", "{": "brace"}
_CLOSERS = {")": "paren", "]": "bracket", "}": "brace"}


class DestructuringScanner(BaseScanner):
    """Character scanner producing one binding per destructured item.

    Nesting inside default values is tracked with three independent signed
    counters. They are not clamped: an unmatched closer drives its counter
    negative, after which no comma counts as top level and the rest of the
    input is absorbed into the current default value.

    Example:
        >>> scanner = DestructuringScanner("id = 'x', count = $bindable(10), ...rest")
        >>> [(b.name, b.default_value) for b in scanner.scan()]
        [('id', "'x'"), ('count', '$bindable(10)')]
    """

    def __init__(self, content: str, normalise_default_value: bool = True) -> None:
        super().__init__(content)
        self.normalise_default_value = normalise_default_value
        self._items: List[DestructuredBinding] = []
        self._reset_item()

    def scan(self) -> List[DestructuredBinding]:
        """Scan the whole body and return bindings in source order."""
        while not self.is_at_end():
            self._scan_character()

        self._finalize_item()
        return self._items

    def _scan_character(self) -> None:
        ch = self.current()
        prev = self.previous()

        # Quotes and everything inside a string go straight to the value
        if self.handle_string_literal(ch, prev) or self.in_string:
            if self._parsing_value:
                self._value += ch
            self.advance()
            return

        if self._parsing_value:
            if ch in _OPENERS:
                self._depth[_OPENERS[ch]] += 1
            elif ch in _CLOSERS:
                self._depth[_CLOSERS[ch]] -= 1

        if ch == "," and self._is_top_level():
            self._finalize_item()
            self.advance()
            return

        if not self._parsing_value:
            if ch == "=" and self._name:
                self._parsing_value = True
                self.advance()
                return

            if ch == ":" and self._name:
                self._skip_alias()
                return

            if ch.isspace():
                self.advance()
                return

            if ch == "." and self.peek() == "." and self.peek(2) == ".":
                self._skip_rest()
                return

            if _NAME_CHAR.match(ch):
                self._name += ch
            self.advance()
            return

        self._value += ch
        self.advance()

    def _is_top_level(self) -> bool:
        return all(count == 0 for count in self._depth.values())

    def _skip_alias(self) -> None:
        """Skip the local part after ``:``, which may be a nested pattern.

        Stops at the first ``,`` or ``=`` outside brackets and strings; the
        ``=`` starts the default value.
        """
        self.advance()  # ':'
        depth = 0
        while not self.is_at_end():
            ch = self.current()
            if self.handle_string_literal(ch, self.previous()) or self.in_string:
                self.advance()
                continue

            if ch in _OPENERS:
                depth += 1
            elif ch in _CLOSERS:
                depth -= 1
            elif depth == 0 and ch == ",":
                return
            elif depth == 0 and ch == "=":
                self._parsing_value = True
                self.advance()
                return
            self.advance()

    def _skip_rest(self) -> None:
        """Skip ``...name`` and discard the item."""
        self.pos += 3
        while not self.is_at_end() and self.current() not in (",", "}"):
            self.advance()
        self._reset_item()
        self._rest_seen = True

    def _finalize_item(self) -> None:
        name = self._name.strip()
        if name and not self._rest_seen:
            default_value = clean_default_value(self._value, self.normalise_default_value)
            self._store(DestructuredBinding(name=name, default_value=default_value or None))
        self._reset_item()

    def _store(self, binding: DestructuredBinding) -> None:
        # Duplicate names overwrite in place
        for index, item in enumerate(self._items):
            if item.name == binding.name:
                self._items[index] = binding
                return
        self._items.append(binding)

    def _reset_item(self) -> None:
        self._name = ""
        self._value = ""
        self._parsing_value = False
        self._rest_seen = False
        self._depth = {"paren": 0, "bracket": 0, "brace": 0}
