"""String- and comment-aware helpers for component script text.

All helpers share the single-backslash escape rule documented in
``propdoc_core.scanners.base``.
"""

from typing import Iterable, List

from propdoc_core.scanners.base import is_unescaped_quote

_OPEN_DEPTH = "<([{"
_CLOSE_DEPTH = ">)]}"


def strip_comments(code: str) -> str:
    """Remove ``//``, ``/* */`` and ``/** */`` comments outside strings.

    Line comments keep their terminating newline so line structure
    survives.
    """
    result: List[str] = []
    i = 0
    in_string = ""
    length = len(code)

    while i < length:
        ch = code[i]
        nxt = code[i + 1] if i + 1 < length else ""
        prev = code[i - 1] if i > 0 else ""

        if is_unescaped_quote(ch, prev):
            if not in_string:
                in_string = ch
            elif ch == in_string:
                in_string = ""
            result.append(ch)
            i += 1
            continue

        if not in_string and ch == "/" and nxt == "/":
            while i < length and code[i] not in ("\n", "\r"):
                i += 1
            continue

        if not in_string and ch == "/" and nxt == "*":
            end = code.find("*/", i + 2)
            i = length if end == -1 else end + 2
            continue

        result.append(ch)
        i += 1

    return "".join(result)


def mask_code(code: str) -> str:
    """Blank out comments and string contents, preserving every offset.

    Quote delimiters stay in place; everything between them and every
    comment character becomes a space (newlines are kept). The result can
    be searched with regular expressions and bracket matching without
    tripping over text that is not code, while offsets still index into
    the original ``code``.
    """
    masked = list(code)
    i = 0
    in_string = ""
    length = len(code)

    def blank(start: int, end: int) -> None:
        for j in range(start, end):
            if masked[j] not in ("\n", "\r"):
                masked[j] = " "

    while i < length:
        ch = code[i]
        nxt = code[i + 1] if i + 1 < length else ""
        prev = code[i - 1] if i > 0 else ""

        if in_string:
            if ch == in_string and prev != "\\":
                in_string = ""
            else:
                blank(i, i + 1)
            i += 1
            continue

        if is_unescaped_quote(ch, prev):
            in_string = ch
            i += 1
            continue

        if ch == "/" and nxt == "/":
            end = i
            while end < length and code[end] not in ("\n", "\r"):
                end += 1
            blank(i, end)
            i = end
            continue

        if ch == "/" and nxt == "*":
            end = code.find("*/", i + 2)
            end = length if end == -1 else end + 2
            blank(i, end)
            i = end
            continue

        i += 1

    return "".join(masked)


def find_matching_brace(masked: str, open_pos: int) -> int:
    """Return the index of the ``}`` closing the ``{`` at ``open_pos``.

    ``masked`` must come from ``mask_code``. Returns -1 when the brace is
    never closed.
    """
    depth = 0
    for i in range(open_pos, len(masked)):
        ch = masked[i]
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i
    return -1


def split_top_level(text: str, separators: Iterable[str]) -> List[str]:
    """Split ``text`` on separators that are not nested or quoted.

    Depth is tracked across ``<>``, ``()``, ``[]`` and ``{}`` and clamped
    at zero, so a stray closer cannot hide later separators. The ``>`` of
    an arrow (``=>``) does not close anything. Parts are trimmed and empty
    parts dropped.

    >>> split_top_level("A<B, C> & D", "&")
    ['A<B, C>', 'D']
    >>> split_top_level("'a|b' | C", "|")
    ["'a|b'", 'C']
    """
    seps = set(separators)
    parts: List[str] = []
    current: List[str] = []
    depth = 0
    in_string = ""

    for i, ch in enumerate(text):
        prev = text[i - 1] if i > 0 else ""

        if in_string:
            if ch == in_string and prev != "\\":
                in_string = ""
        elif is_unescaped_quote(ch, prev):
            in_string = ch
        elif ch in _OPEN_DEPTH:
            depth += 1
        elif ch in _CLOSE_DEPTH:
            if not (ch == ">" and prev == "="):
                depth = max(0, depth - 1)
        elif depth == 0 and ch in seps:
            parts.append("".join(current))
            current = []
            continue

        current.append(ch)

    parts.append("".join(current))
    return [part.strip() for part in parts if part.strip()]


def find_closing_paren(text: str, open_pos: int) -> int:
    """Return the index of the ``)`` closing the ``(`` at ``open_pos``.

    Quoted text is skipped. Returns -1 when the parenthesis is never
    closed.
    """
    depth = 0
    in_string = ""
    for i in range(open_pos, len(text)):
        ch = text[i]
        prev = text[i - 1] if i > 0 else ""
        if in_string:
            if ch == in_string and prev != "\\":
                in_string = ""
        elif is_unescaped_quote(ch, prev):
            in_string = ch
        elif ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth == 0:
                return i
    return -1
