"""Locate the statement through which a component receives its properties.

The intake statement is a typed destructuring of the intake call::

    let { a, b = 1, ...rest }: Props & Other = $props();

An untyped destructuring (``const { a } = $props()``) does not count.
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Sequence

from propdoc_core.parsing.text import (
    find_matching_brace,
    mask_code,
    split_top_level,
    strip_comments,
)
from propdoc_core.utils import get_logger

logger = get_logger(__name__)

DESTRUCTURING_START = re.compile(r"(?<![\w$.])(?:let|const|var)\s*\{")


@dataclass(frozen=True)
class IntakeStatement:
    """The pieces of an intake statement needed by the pipeline.

    Attributes:
        pattern: Text between the destructuring braces, comments removed.
        type_annotation: Text between ``:`` and ``=``, trimmed.
        block_index: Index of the script block the statement was found in.
    """

    pattern: str
    type_annotation: str
    block_index: int


def find_intake_statement(
    blocks: Sequence[str], intake_call: str = "$props"
) -> Optional[IntakeStatement]:
    """Return the first intake statement across ``blocks``, or None."""
    call_pattern = re.compile(re.escape(intake_call) + r"\s*\(\s*\)")

    for block_index, content in enumerate(blocks):
        stripped = strip_comments(content)
        masked = mask_code(stripped)

        for match in DESTRUCTURING_START.finditer(masked):
            open_pos = match.end() - 1
            close_pos = find_matching_brace(masked, open_pos)
            if close_pos == -1:
                continue

            i = _skip_whitespace(masked, close_pos + 1)
            if i >= len(masked) or masked[i] != ":":
                continue

            type_start = i + 1
            assign_pos = _find_assignment(masked, type_start)
            if assign_pos == -1:
                continue

            annotation = stripped[type_start:assign_pos].strip()
            if not annotation:
                continue

            call_pos = _skip_whitespace(masked, assign_pos + 1)
            if not call_pattern.match(masked, call_pos):
                continue

            logger.debug("intake_found", block_index=block_index, type_annotation=annotation)
            return IntakeStatement(
                pattern=stripped[open_pos + 1:close_pos],
                type_annotation=annotation,
                block_index=block_index,
            )

    logger.debug("intake_not_found", block_count=len(blocks))
    return None


def parse_type_annotation(annotation: str) -> List[str]:
    """Split an intake annotation into the referenced type names.

    >>> parse_type_annotation("Props & HTMLAttributes<HTMLDivElement, 'a' | 'b'>")
    ['Props', "HTMLAttributes<HTMLDivElement, 'a' | 'b'>"]
    """
    return split_top_level(annotation, "|&")


def _find_assignment(masked: str, start: int) -> int:
    """Index of the first ``=`` at depth zero that is not part of ``=>``.

    Returns -1 if a top-level ``;`` or the end of text comes first.
    """
    depth = 0
    for i in range(start, len(masked)):
        ch = masked[i]
        nxt = masked[i + 1] if i + 1 < len(masked) else ""
        prev = masked[i - 1] if i > 0 else ""
        if ch in "<([{":
            depth += 1
        elif ch in ">)]}":
            if not (ch == ">" and prev == "="):
                depth = max(0, depth - 1)
        elif depth == 0:
            if ch == "=" and nxt != ">":
                return i
            if ch == ";":
                return -1
    return -1


def _skip_whitespace(text: str, i: int) -> int:
    while i < len(text) and text[i].isspace():
        i += 1
    return i
