"""
Character scanners for component script text.

- base: shared cursor and string-literal handling
- normalize: whitespace and doc comment normalisation
- destructuring: intake destructuring pattern scanner
- property_scanner: type alias / interface body state machine
"""

from propdoc_core.scanners.base import BaseScanner
from propdoc_core.scanners.destructuring import DestructuringScanner
from propdoc_core.scanners.property_scanner import PropertyScanner, ScannerContext

__all__ = [
    "BaseScanner",
    "DestructuringScanner",
    "PropertyScanner",
    "ScannerContext",
]
