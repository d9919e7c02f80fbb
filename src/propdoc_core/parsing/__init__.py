"""
Component-level parsing built on the scanners.

Key components:
- script_blocks: split a component file into script blocks
- type_map: collect local type aliases and interfaces
- intake: locate the typed ``$props()`` destructuring
- prop_extractor: merge declarations and bindings into PropertyRecords
"""

from propdoc_core.parsing.intake import (
    IntakeStatement,
    find_intake_statement,
    parse_type_annotation,
)
from propdoc_core.parsing.prop_extractor import PropExtractor, extract_props, unwrap_bindable
from propdoc_core.parsing.script_blocks import extract_script_blocks, parse_attributes
from propdoc_core.parsing.type_map import build_type_map, parse_parent_types

__all__ = [
    "IntakeStatement",
    "PropExtractor",
    "build_type_map",
    "extract_props",
    "extract_script_blocks",
    "find_intake_statement",
    "parse_attributes",
    "parse_parent_types",
    "parse_type_annotation",
    "unwrap_bindable",
]
