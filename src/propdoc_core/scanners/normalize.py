"""Text clean-up for extracted types, default values and doc comments.

Every function here is idempotent: feeding its own output back in returns
the same text.
"""

import re
from typing import List

_WHITESPACE_RUN = re.compile(r"\s+")
_LEADING_WHITESPACE = re.compile(r"^(\s*)")

# Spacing rules applied after whitespace has been collapsed
_TYPE_SPACING_RULES = [
    (re.compile(r"\(\s+"), "("),
    (re.compile(r"\s+\)"), ")"),
    (re.compile(r"\{\s+"), "{ "),
    (re.compile(r"\s+\}"), " }"),
    (re.compile(r"\[\s+"), "["),
    (re.compile(r"\s+\]"), "]"),
    (re.compile(r"<\s+"), "<"),
    (re.compile(r"\s+>"), ">"),
]

_DOC_LINE_MARKER = re.compile(r"^[ \t]*\*+\s?")
_DOC_LINE_INDENT = re.compile(r"^[ \t]+\*")
_LINE_BREAK = re.compile(r"\r?\n")


def dedent(text: str) -> str:
    """Strip the common indentation of every line after the first.

    The first line is left alone because it starts right after the
    delimiter (``:`` or ``=``) and carries no source indentation. Blank
    lines are ignored when measuring and emitted empty.
    """
    lines = text.split("\n")
    if len(lines) == 1:
        return text

    min_indent = None
    for line in lines[1:]:
        if not line.strip():
            continue
        indent = len(_LEADING_WHITESPACE.match(line).group(1))
        min_indent = indent if min_indent is None else min(min_indent, indent)

    if not min_indent:
        return text

    dedented: List[str] = [lines[0]]
    for line in lines[1:]:
        dedented.append(line[min_indent:] if line.strip() else "")
    return "\n".join(dedented)


def collapse_whitespace(text: str) -> str:
    """Replace every whitespace run with a single space."""
    return _WHITESPACE_RUN.sub(" ", text)


def normalize_type_text(text: str) -> str:
    """Collapse whitespace and tidy spacing just inside brackets.

    >>> normalize_type_text("{\\n  a: string;\\n  b: number\\n}")
    '{ a: string; b: number }'
    >>> normalize_type_text("Array< string >")
    'Array<string>'
    """
    text = collapse_whitespace(text)
    for pattern, replacement in _TYPE_SPACING_RULES:
        text = pattern.sub(replacement, text)
    return text


def clean_type_text(raw: str, normalise: bool) -> str:
    """Trim, dedent and optionally normalize raw type text."""
    text = dedent(raw.strip())
    if normalise:
        text = normalize_type_text(text)
    return text


def clean_default_value(raw: str, normalise: bool) -> str:
    """Trim, dedent and optionally collapse a raw default value."""
    text = dedent(raw.strip())
    if normalise:
        text = collapse_whitespace(text)
    return text


def normalize_comment(raw: str, collapse: bool) -> str:
    """Clean the text between ``/**`` and ``*/``.

    Args:
        raw: Comment body without the delimiters.
        collapse: When True, drop the leading ``*`` of every line and join
            the non-empty lines with single spaces. When False, keep the
            line structure and reduce each line's indentation before ``*``
            to a single space.
    """
    if not collapse:
        lines = [_DOC_LINE_INDENT.sub(" *", line) for line in _LINE_BREAK.split(raw)]
        return "\n".join(lines).strip(" \t")

    lines = [_DOC_LINE_MARKER.sub("", line).strip() for line in _LINE_BREAK.split(raw)]
    return " ".join(line for line in lines if line).strip()
