"""
propdoc - property extraction for Svelte 5 components.

Reads the ``<script>`` blocks of a component, finds the typed ``$props()``
destructuring and reports each property's type, requiredness, default
value, bindability and doc comment.

Example:
    ```python
    from propdoc_core import PropExtractor

    result = PropExtractor().extract_from_component(source)
    for prop in result.props:
        print(prop.name, prop.type, prop.required)
    ```

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

from propdoc_core.config import ExtractionOptions, PropdocSettings
from propdoc_core.exceptions import PropdocError, ValidationError
from propdoc_core.models import (
    UNKNOWN_TYPE,
    DestructuredBinding,
    ExtractionResult,
    PropertyDeclaration,
    PropertyRecord,
    PropOrder,
    ScriptBlock,
    TypeDefinition,
)
from propdoc_core.parsing import PropExtractor, extract_props, extract_script_blocks
from propdoc_core.sorting import sort_props

__version__ = "0.1.0"

__all__ = [
    # Extraction
    "PropExtractor",
    "extract_props",
    "extract_script_blocks",
    "sort_props",
    # Configuration
    "ExtractionOptions",
    "PropdocSettings",
    # Models
    "UNKNOWN_TYPE",
    "DestructuredBinding",
    "ExtractionResult",
    "PropOrder",
    "PropertyDeclaration",
    "PropertyRecord",
    "ScriptBlock",
    "TypeDefinition",
    # Exceptions
    "PropdocError",
    "ValidationError",
]
