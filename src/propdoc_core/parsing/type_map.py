"""
Type Map Builder - collects local type alias and interface declarations.

Recognised shapes::

    interface Name [<Generics>] [extends A, B<C>] { body }
    type Name [<Generics>] = [A & B<C> &] { body }

Declarations are located on a masked copy of each script block (comments
and string contents blanked) so keywords inside strings or comments are
never matched, while slices are taken from the original text.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

import re
from typing import List, Optional, Sequence, Tuple

from propdoc_core.models import TypeDefinition, TypeMap
from propdoc_core.parsing.text import (
    find_matching_brace,
    mask_code,
    split_top_level,
    strip_comments,
)
from propdoc_core.scanners.property_scanner import PropertyScanner
from propdoc_core.utils import get_logger

logger = get_logger(__name__)

DECLARATION_PATTERN = re.compile(r"(?<![\w$.])(interface|type)\s+([A-Za-z_$][A-Za-z0-9_$]*)")

# A new statement on the next line ends an alias without a semicolon
_STATEMENT_START = re.compile(
    r"\s*(?:export\s+)?(?:type|interface|const|let|var|function|class|import|enum|declare)\b"
)


def build_type_map(
    blocks: Sequence[str],
    normalise_comment: bool = False,
    normalise_type: bool = True,
) -> TypeMap:
    """
    Build a ``TypeMap`` from every declaration in ``blocks``.

    Later declarations of a name replace earlier ones.

    Args:
        blocks: Script block contents, in source order.
        normalise_comment: Passed to the PropertyScanner.
        normalise_type: Passed to the PropertyScanner.

    Returns:
        Mapping of type name to its TypeDefinition.
    """
    type_map: TypeMap = {}

    for content in blocks:
        masked = mask_code(content)
        for match in DECLARATION_PATTERN.finditer(masked):
            found = _read_declaration(content, masked, match)
            if found is None:
                continue

            name, body, parents = found
            entries = PropertyScanner(body, normalise_comment, normalise_type).parse()
            type_map[name] = TypeDefinition(entries=entries, inherits=parents)

    logger.debug("type_map_built", type_count=len(type_map), names=list(type_map))
    return type_map


def parse_parent_types(clause: str, separator: str) -> List[str]:
    """Split an extends/intersection clause into deduplicated type names.

    Empty object literals (``{}``) are dropped.

    >>> parse_parent_types("Base<T>, Other", ",")
    ['Base<T>', 'Other']
    """
    parents: List[str] = []
    for part in split_top_level(strip_comments(clause), separator):
        if part != "{}" and part not in parents:
            parents.append(part)
    return parents


def _read_declaration(
    content: str, masked: str, match: "re.Match[str]"
) -> Optional[Tuple[str, str, List[str]]]:
    """Return ``(name, body, parents)`` for one matched declaration."""
    kind, name = match.group(1), match.group(2)
    i = _skip_whitespace(masked, match.end())
    if i < len(masked) and masked[i] == "<":
        i = _skip_whitespace(masked, _skip_angle_group(masked, i))

    if kind == "interface":
        clause_start = i
        if masked.startswith("extends", i) and not _is_ident_char(masked, i + 7):
            clause_start = i + 7
        brace = _find_body_start(masked, clause_start, stop_at_semicolon=False)
        if brace is None or (clause_start == i and brace != i):
            return None
        parents = parse_parent_types(content[clause_start:brace], ",")
        close = find_matching_brace(masked, brace)
    else:
        if i >= len(masked) or masked[i] != "=":
            return None
        brace = _find_body_start(masked, i + 1, stop_at_semicolon=True)
        # Skip empty literals inside an intersection: A & {} & { ... }
        while brace is not None and _is_empty_intersected_literal(masked, brace):
            brace = _find_body_start(
                masked, find_matching_brace(masked, brace) + 1, stop_at_semicolon=True
            )
        if brace is None:
            return None
        # Function type returning an object: type Fn = () => { ... }
        if _has_top_level_arrow(masked, i + 1, brace):
            return None
        parents = parse_parent_types(content[i + 1:brace], "&")
        close = find_matching_brace(masked, brace)
        if close != -1 and _next_char(masked, close + 1) == "&":
            tail_end = _find_statement_end(masked, close + 1)
            for parent in parse_parent_types(content[close + 1:tail_end], "&"):
                if parent not in parents:
                    parents.append(parent)

    body = content[brace + 1:close] if close != -1 else content[brace + 1:]
    return name, body, parents


def _find_body_start(masked: str, start: int, stop_at_semicolon: bool) -> Optional[int]:
    """Find the ``{`` opening the declaration body at nesting depth zero."""
    depth = 0
    i = start
    while i < len(masked):
        ch = masked[i]
        prev = masked[i - 1] if i > 0 else ""
        if ch in "<([":
            depth += 1
        elif ch in ">)]":
            if not (ch == ">" and prev == "="):
                depth = max(0, depth - 1)
        elif depth == 0:
            if ch == "{":
                return i
            if ch == ";" and stop_at_semicolon:
                return None
            if ch == "\n" and _STATEMENT_START.match(masked, i + 1):
                return None
        i += 1
    return None


def _skip_angle_group(masked: str, start: int) -> int:
    """Return the index just past the ``>`` closing the ``<`` at ``start``."""
    depth = 0
    for i in range(start, len(masked)):
        ch = masked[i]
        if ch == "<":
            depth += 1
        elif ch == ">" and masked[i - 1] != "=":
            depth -= 1
            if depth == 0:
                return i + 1
    return len(masked)


def _skip_whitespace(text: str, i: int) -> int:
    while i < len(text) and text[i].isspace():
        i += 1
    return i


def _is_ident_char(text: str, i: int) -> bool:
    return i < len(text) and (text[i].isalnum() or text[i] in "_$")


def _has_top_level_arrow(masked: str, start: int, end: int) -> bool:
    """True if ``=>`` occurs outside brackets in ``masked[start:end]``."""
    depth = 0
    for i in range(start, end):
        ch = masked[i]
        if ch in "<([{":
            depth += 1
        elif ch == ">" and masked[i - 1] == "=":
            if depth == 0:
                return True
        elif ch in ">)]}":
            depth = max(0, depth - 1)
    return False


def _is_empty_intersected_literal(masked: str, brace: int) -> bool:
    """True for a ``{}`` that is followed by ``&``."""
    close = find_matching_brace(masked, brace)
    if close == -1 or masked[brace + 1:close].strip():
        return False
    return _next_char(masked, close + 1) == "&"


def _find_statement_end(masked: str, start: int) -> int:
    """Index where the statement continuing at ``start`` ends."""
    depth = 0
    for i in range(start, len(masked)):
        ch = masked[i]
        prev = masked[i - 1] if i > 0 else ""
        if ch in "<([{":
            depth += 1
        elif ch in ">)]}":
            if not (ch == ">" and prev == "="):
                depth = max(0, depth - 1)
        elif depth == 0:
            if ch == ";":
                return i
            if ch == "\n" and _STATEMENT_START.match(masked, i + 1):
                return i
    return len(masked)


def _next_char(text: str, i: int) -> str:
    i = _skip_whitespace(text, i)
    return text[i] if i < len(text) else ""
