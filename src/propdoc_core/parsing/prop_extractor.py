"""
PropExtractor - merges declared types with the intake destructuring.

Pipeline for one component:

1. Locate the intake statement (``let { ... }: Props = $props()``).
2. Split its annotation into referenced type names.
3. Resolve each name against the local TypeMap; unresolved names are
   reported as ``inherits``.
4. Scan the destructuring pattern for names and default values.
5. Union both name sets into ``PropertyRecord`` objects.

Malformed source never raises: every failure degrades to a partial or
empty ``ExtractionResult``.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

import time
from typing import Dict, List, Optional, Sequence, Set, Tuple, Union

from propdoc_core.config import ExtractionOptions
from propdoc_core.exceptions import ValidationError
from propdoc_core.logging_service import LoggingService
from propdoc_core.models import (
    UNKNOWN_TYPE,
    DestructuredBinding,
    ExtractionResult,
    PropertyDeclaration,
    PropertyRecord,
    ScriptBlock,
    TypeMap,
)
from propdoc_core.parsing.intake import find_intake_statement, parse_type_annotation
from propdoc_core.parsing.script_blocks import extract_script_blocks
from propdoc_core.parsing.text import find_closing_paren
from propdoc_core.parsing.type_map import build_type_map
from propdoc_core.scanners.destructuring import DestructuringScanner
from propdoc_core.scanners.property_scanner import PropertyScanner
from propdoc_core.utils import get_logger

logger = get_logger(__name__)

BlockInput = Union[str, ScriptBlock]


class PropExtractor:
    """
    Extract component properties from script block text.

    The extractor holds only immutable options; every call builds fresh
    scanners, so one instance can be shared freely.

    Example:
        >>> extractor = PropExtractor()
        >>> result = extractor.extract([
        ...     "type Props = { label: string; size?: number };"
        ...     "let { label, size = 3 }: Props = $props();"
        ... ])
        >>> [(p.name, p.type, p.required, p.default_value) for p in result.props]
        [('label', 'string', True, None), ('size', 'number', False, '3')]
    """

    def __init__(self, options: Optional[ExtractionOptions] = None) -> None:
        self.options = options or ExtractionOptions()
        self._log = logger.bind(component="PropExtractor")

    def extract(self, blocks: Union[BlockInput, Sequence[BlockInput]]) -> ExtractionResult:
        """
        Extract properties from script blocks given in source order.

        Args:
            blocks: Script block contents or ScriptBlock models. A single
                string or ScriptBlock is treated as one block.

        Returns:
            ExtractionResult with merged props and unresolved parent types

        Raises:
            ValidationError: If a block is neither a string nor a ScriptBlock
        """
        start = time.perf_counter()
        contents = self._coerce_blocks(blocks)

        intake = find_intake_statement(contents, self.options.intake_call)
        if intake is None:
            self._log.debug("no_intake_statement", block_count=len(contents))
            return ExtractionResult()

        type_map = build_type_map(
            contents,
            normalise_comment=self.options.normalise_comment,
            normalise_type=self.options.normalise_type,
        )
        type_names = parse_type_annotation(intake.type_annotation)
        entries, inherits = self._resolve_types(type_names, type_map)

        bindings = DestructuringScanner(
            intake.pattern,
            normalise_default_value=self.options.normalise_default_value,
        ).scan()

        props = self._merge(entries, bindings)
        result = ExtractionResult(props=props, inherits=inherits)

        LoggingService.log_performance(
            "props_extracted",
            (time.perf_counter() - start) * 1000,
            logger=self._log,
            prop_count=len(result.props),
            inherits=result.inherits,
        )
        return result

    def extract_from_component(self, text: str) -> ExtractionResult:
        """Extract properties from a whole component file's text."""
        return self.extract(extract_script_blocks(text))

    # =========================================================================
    # Pipeline steps
    # =========================================================================

    def _coerce_blocks(self, blocks: Union[BlockInput, Sequence[BlockInput]]) -> List[str]:
        if isinstance(blocks, (str, ScriptBlock)):
            blocks = [blocks]

        contents: List[str] = []
        for index, block in enumerate(blocks):
            if isinstance(block, ScriptBlock):
                contents.append(block.content)
            elif isinstance(block, str):
                contents.append(block)
            else:
                raise ValidationError(
                    message=f"Script block must be str or ScriptBlock, got {type(block).__name__}",
                    error_code="VAL_001",
                    details={"block_index": index, "block_type": type(block).__name__},
                )
        return contents

    def _resolve_types(
        self, type_names: List[str], type_map: TypeMap
    ) -> Tuple[Dict[str, PropertyDeclaration], List[str]]:
        """
        Collect declarations for the referenced types.

        A later referenced type overrides an earlier one's entries. Within a
        type, its own entries take precedence over inherited ones. Inline
        object types (``{ a: string }``) are scanned directly.
        """
        entries: Dict[str, PropertyDeclaration] = {}
        inherits: List[str] = []

        for ref in type_names:
            if ref.startswith("{") and ref.endswith("}"):
                entries.update(
                    PropertyScanner(
                        ref[1:-1],
                        normalise_comment=self.options.normalise_comment,
                        normalise_type=self.options.normalise_type,
                    ).parse()
                )
                continue

            name = _base_name(ref)
            if name not in type_map:
                _append_unique(inherits, ref)
                continue

            collected: Dict[str, PropertyDeclaration] = {}
            self._collect(name, type_map, collected, inherits, visiting=set())
            entries.update(collected)

        return entries, inherits

    def _collect(
        self,
        name: str,
        type_map: TypeMap,
        collected: Dict[str, PropertyDeclaration],
        inherits: List[str],
        visiting: Set[str],
    ) -> None:
        visiting.add(name)
        definition = type_map[name]

        for prop_name, declaration in definition.entries.items():
            collected.setdefault(prop_name, declaration)

        for parent in definition.inherits:
            parent_name = _base_name(parent)
            if parent_name in visiting:
                continue
            if parent_name in type_map:
                self._collect(parent_name, type_map, collected, inherits, visiting)
            else:
                _append_unique(inherits, parent)

    def _merge(
        self,
        entries: Dict[str, PropertyDeclaration],
        bindings: List[DestructuredBinding],
    ) -> List[PropertyRecord]:
        records: Dict[str, PropertyRecord] = {}

        if not entries and bindings:
            self._log.debug("types_unresolved", binding_count=len(bindings))

        for name, declaration in entries.items():
            records[name] = PropertyRecord(
                name=name,
                type=declaration.type_text,
                required=declaration.required,
                comment=declaration.comment,
            )

        for binding in bindings:
            record = records.get(binding.name)
            if record is None:
                record = PropertyRecord(name=binding.name)
                records[binding.name] = record

            if binding.default_value is not None:
                default_value, bindable = unwrap_bindable(
                    binding.default_value, self.options.bindable_marker
                )
                record.default_value = default_value
                record.bindable = bindable

        for record in records.values():
            if record.type == UNKNOWN_TYPE and record.name in self.options.fallback_types:
                record.type = self.options.fallback_types[record.name]
                self._log.debug("fallback_type_applied", name=record.name, type=record.type)

        return list(records.values())


def unwrap_bindable(value: str, marker: str = "$bindable") -> Tuple[Optional[str], bool]:
    """
    Split a default value into ``(default, bindable)``.

    The marker only counts when its call spans the whole value.

    >>> unwrap_bindable("$bindable( 10 )")
    ('10', True)
    >>> unwrap_bindable("$bindable()")
    (None, True)
    >>> unwrap_bindable("$bindable(1) + 1")
    ('$bindable(1) + 1', False)
    """
    if not value.startswith(marker + "(") or not value.endswith(")"):
        return value, False

    if find_closing_paren(value, len(marker)) != len(value) - 1:
        return value, False

    inner = value[len(marker) + 1:-1].strip()
    return (inner or None), True


def extract_props(
    blocks: Union[BlockInput, Sequence[BlockInput]],
    options: Optional[ExtractionOptions] = None,
) -> ExtractionResult:
    """Extract properties with a one-off PropExtractor."""
    return PropExtractor(options).extract(blocks)


def _base_name(ref: str) -> str:
    """Strip a generic argument suffix: ``Base<T>`` -> ``Base``."""
    return ref.split("<", 1)[0].strip()


def _append_unique(items: List[str], value: str) -> None:
    if value not in items:
        items.append(value)
