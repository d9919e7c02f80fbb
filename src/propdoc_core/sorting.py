"""
Display ordering for extracted properties.

Extraction keeps declaration order; tooltips and generated docs pick one of
the ``PropOrder`` modes here.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

import re
from enum import IntEnum
from typing import List, Sequence, Tuple, Union

from propdoc_core.exceptions import ValidationError
from propdoc_core.models import PropertyRecord, PropOrder


class TypeCategory(IntEnum):
    """Rank of a type in ``type`` ordering (lower sorts first)."""

    PRIMITIVE = 0
    CUSTOM = 1
    ARRAY = 2
    OBJECT = 3
    FUNCTION = 4


PRIMITIVE_ORDER: List[str] = [
    "string",
    "number",
    "boolean",
    "null",
    "undefined",
    "symbol",
    "bigint",
]

_ARRAY_GENERIC = re.compile(r"Array\s*<")


def categorize_type(type_text: str) -> TypeCategory:
    """
    Categorize a type annotation.

    Checks run in order: primitive (case-insensitive exact match),
    function (``=>`` or a leading ``(``), array (``[]``, ``Array<`` or a
    leading ``[``), object-like (union, generic or object literal), and
    finally custom.

    >>> categorize_type("string[]")
    <TypeCategory.ARRAY: 2>
    >>> categorize_type("Promise<number>")
    <TypeCategory.OBJECT: 3>
    """
    normalized = type_text.strip().lower()
    stripped = type_text.lstrip()

    if normalized in PRIMITIVE_ORDER:
        return TypeCategory.PRIMITIVE
    if "=>" in type_text or stripped.startswith("("):
        return TypeCategory.FUNCTION
    if "[]" in type_text or _ARRAY_GENERIC.search(type_text) or stripped.startswith("["):
        return TypeCategory.ARRAY
    if "|" in type_text or "<" in type_text or "{" in type_text:
        return TypeCategory.OBJECT
    return TypeCategory.CUSTOM


def primitive_order(type_text: str) -> int:
    """Position of a primitive in PRIMITIVE_ORDER, or -1."""
    normalized = type_text.strip().lower()
    if normalized in PRIMITIVE_ORDER:
        return PRIMITIVE_ORDER.index(normalized)
    return -1


def sort_props(
    props: Sequence[PropertyRecord], order: Union[PropOrder, str]
) -> List[PropertyRecord]:
    """
    Return ``props`` sorted for display.

    Args:
        props: Records in declaration order
        order: A PropOrder or its string value

    Returns:
        A new list; the input is not modified

    Raises:
        ValidationError: If ``order`` is not a known ordering
    """
    try:
        mode = PropOrder(order)
    except ValueError as e:
        raise ValidationError(
            message=f"Unknown property order: {order!r}",
            error_code="VAL_002",
            details={"order": str(order), "allowed": [o.value for o in PropOrder]},
            original_exception=e,
        )

    if mode == PropOrder.NORMAL:
        return list(props)
    if mode == PropOrder.ALPHABETICAL:
        return sorted(props, key=lambda p: p.name.casefold())
    if mode == PropOrder.REQUIRED:
        return sorted(props, key=lambda p: (not p.required, p.name.casefold()))
    return sorted(props, key=_type_sort_key)


def _type_sort_key(prop: PropertyRecord) -> Tuple[int, int, str, str]:
    category = categorize_type(prop.type)
    rank = primitive_order(prop.type) if category == TypeCategory.PRIMITIVE else 0
    return (int(category), rank, prop.type.casefold(), prop.name.casefold())
