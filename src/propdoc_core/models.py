"""Pydantic models for component property extraction."""

from enum import Enum
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

UNKNOWN_TYPE = "unknown"


class PropOrder(str, Enum):
    """Display order for extracted properties."""

    NORMAL = "normal"              # Declaration order
    ALPHABETICAL = "alphabetical"
    REQUIRED = "required"          # Required first, then by name
    TYPE = "type"                  # Primitives, custom, arrays, objects, functions


class ScriptBlock(BaseModel):
    """A raw ``<script>`` section of a component file.

    The content is kept verbatim; attributes are the parsed opening-tag
    attributes, with bare flags (``<script module>``) stored as ``True``.
    """

    model_config = ConfigDict(frozen=True)

    content: str = Field(default="", description="Text between the script tags")
    attributes: Dict[str, Union[str, bool]] = Field(
        default_factory=dict,
        description="Opening tag attributes (e.g., {'lang': 'ts', 'module': True})",
    )

    @property
    def lang(self) -> Optional[str]:
        value = self.attributes.get("lang")
        return value if isinstance(value, str) else None

    @property
    def is_module(self) -> bool:
        return self.attributes.get("module") is True or self.attributes.get("context") == "module"


class DestructuredBinding(BaseModel):
    """One item of the intake destructuring pattern.

    ``name`` is the external (consumer-visible) name even when the source
    used an alias such as ``{ class: className }``.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="External property name")
    default_value: Optional[str] = Field(
        default=None,
        description="Raw default value text, if any"
    )


class PropertyDeclaration(BaseModel):
    """A single property declared in a type alias or interface body."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Property name")
    type_text: str = Field(..., min_length=1, description="Type annotation text")
    optional: bool = Field(default=False, description="Declared with '?:'")
    comment: Optional[str] = Field(
        default=None,
        description="Doc comment immediately preceding the property"
    )

    @property
    def required(self) -> bool:
        return not self.optional


class TypeDefinition(BaseModel):
    """Properties and parent types of one local type alias or interface."""

    entries: Dict[str, PropertyDeclaration] = Field(
        default_factory=dict,
        description="Declared properties keyed by name, in declaration order"
    )
    inherits: List[str] = Field(
        default_factory=list,
        description="Extended or intersected type names, deduplicated"
    )


TypeMap = Dict[str, TypeDefinition]


class PropertyRecord(BaseModel):
    """Merged metadata for one component property."""

    model_config = ConfigDict(validate_assignment=True)

    name: str = Field(..., min_length=1, description="Property name")
    type: str = Field(default=UNKNOWN_TYPE, description="Type text or the unknown sentinel")
    required: bool = Field(default=False, description="Whether the property is required")
    bindable: bool = Field(default=False, description="Default wrapped in the bindable marker")
    default_value: Optional[str] = Field(default=None, description="Default value text")
    comment: Optional[str] = Field(default=None, description="Doc comment text")


class ExtractionResult(BaseModel):
    """Result of extracting properties from one component."""

    props: List[PropertyRecord] = Field(default_factory=list)
    inherits: List[str] = Field(
        default_factory=list,
        description="Parent types that could not be resolved locally"
    )

    @property
    def prop_names(self) -> List[str]:
        return [prop.name for prop in self.props]

    def get(self, name: str) -> Optional[PropertyRecord]:
        """Return the record named ``name``, or None."""
        for prop in self.props:
            if prop.name == name:
                return prop
        return None

    @property
    def is_empty(self) -> bool:
        return not self.props and not self.inherits
