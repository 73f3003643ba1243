"""
Core schema representation for code generation.

Converts raw OpenAPI v3 fragments (the subset used by Kubernetes
CustomResourceDefinitions) into an immutable, normalized tree that the
resolvers can work with consistently.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Optional, Tuple
from enum import Enum

from .errors import RecursionLimitError, UnsupportedSchemaShapeError

DEFAULT_MAX_DEPTH = 64

PRESERVE_UNKNOWN_FIELDS = "x-kubernetes-preserve-unknown-fields"
INT_OR_STRING = "x-kubernetes-int-or-string"


class SchemaKind(Enum):
    """Shapes a schema fragment can take."""

    OBJECT = "object"
    ARRAY = "array"
    MAP = "map"
    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ENUM = "enum"
    ANY = "any"  # No type information at all


PRIMITIVE_KINDS = frozenset(
    {SchemaKind.STRING, SchemaKind.INTEGER, SchemaKind.NUMBER, SchemaKind.BOOLEAN}
)


class AdditionalPropertiesPolicy(Enum):
    """How an object treats keys that are not declared in `properties`."""

    NONE = "none"
    ANY = "any"  # additionalProperties: true
    TYPED = "typed"  # additionalProperties: {schema}


@dataclass(frozen=True)
class SchemaNode:
    """Immutable view of one schema fragment."""

    kind: SchemaKind
    format: Optional[str] = None

    # Object members, in schema source order
    properties: Dict[str, "SchemaNode"] = field(default_factory=dict)
    required: FrozenSet[str] = frozenset()

    # Array element / map value
    items: Optional["SchemaNode"] = None

    # Enum values and the primitive kind backing them
    enum_values: Tuple[Any, ...] = ()
    enum_base: Optional[SchemaKind] = None

    default: Any = None
    has_default: bool = False
    nullable: Optional[bool] = None

    additional_properties: AdditionalPropertiesPolicy = AdditionalPropertiesPolicy.NONE
    additional_properties_schema: Optional["SchemaNode"] = None
    preserve_unknown_fields: bool = False
    int_or_string: bool = False

    description: Optional[str] = None

    # Validation metadata, passed through untouched
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    pattern: Optional[str] = None

    @property
    def is_primitive(self) -> bool:
        return self.kind in PRIMITIVE_KINDS

    @property
    def is_deprecated(self) -> bool:
        """Whether the description marks this fragment as deprecated."""
        return bool(self.description) and "deprecated" in self.description.lower()

    @classmethod
    def from_dict(
        cls,
        raw: Optional[Dict[str, Any]],
        path: str = "",
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> "SchemaNode":
        """
        Normalize a raw OpenAPI v3 schema fragment.

        Args:
            raw: The schema mapping (``None`` is treated as an untyped fragment)
            path: Dotted location of the fragment, used in error messages
            max_depth: Nesting limit guarding against cyclic input

        Returns:
            SchemaNode: Normalized fragment with all children converted
        """
        return _convert(raw or {}, path, 0, max_depth)


def _convert(raw: Dict[str, Any], path: str, depth: int, max_depth: int) -> SchemaNode:
    """Recursively convert a raw fragment."""
    if depth > max_depth:
        raise RecursionLimitError(max_depth, path or "<root>")

    if not isinstance(raw, dict):
        raise UnsupportedSchemaShapeError(
            f"Schema fragment must be a mapping, got {type(raw).__name__}", path
        )

    common = {
        "format": raw.get("format"),
        "default": raw.get("default"),
        "has_default": "default" in raw,
        "nullable": raw.get("nullable"),
        "description": raw.get("description"),
        "minimum": raw.get("minimum"),
        "maximum": raw.get("maximum"),
        "pattern": raw.get("pattern"),
        "preserve_unknown_fields": bool(raw.get(PRESERVE_UNKNOWN_FIELDS, False)),
        "int_or_string": bool(raw.get(INT_OR_STRING, False)),
    }

    raw_type = raw.get("type")

    # Enums
    if raw.get("enum") is not None:
        base = _primitive_kind(raw_type or "string", path)
        if base not in PRIMITIVE_KINDS:
            raise UnsupportedSchemaShapeError(
                f"Enum values require a primitive type, got '{raw_type}'", path
            )
        return SchemaNode(
            kind=SchemaKind.ENUM,
            enum_values=tuple(raw["enum"]),
            enum_base=base,
            **common,
        )

    if raw_type == "array":
        items = _convert(raw.get("items") or {}, _child(path, "[]"), depth + 1, max_depth)
        return SchemaNode(kind=SchemaKind.ARRAY, items=items, **common)

    if raw_type == "object" or (raw_type is None and "properties" in raw):
        return _convert_object(raw, path, depth, max_depth, common)

    if raw_type is None:
        if "additionalProperties" in raw:
            return _convert_object(raw, path, depth, max_depth, common)
        return SchemaNode(kind=SchemaKind.ANY, **common)

    return SchemaNode(kind=_primitive_kind(raw_type, path), **common)


def _convert_object(
    raw: Dict[str, Any], path: str, depth: int, max_depth: int, common: Dict[str, Any]
) -> SchemaNode:
    """Convert an object fragment, turning typed dictionaries into maps."""
    raw_properties = raw.get("properties") or {}
    additional = raw.get("additionalProperties")

    policy = AdditionalPropertiesPolicy.NONE
    additional_schema = None
    if isinstance(additional, dict):
        policy = AdditionalPropertiesPolicy.TYPED
        additional_schema = _convert(additional, _child(path, "{}"), depth + 1, max_depth)
    elif additional is True:
        policy = AdditionalPropertiesPolicy.ANY

    # A bare typed dictionary is a map, not a class
    if policy == AdditionalPropertiesPolicy.TYPED and not raw_properties:
        return SchemaNode(kind=SchemaKind.MAP, items=additional_schema, **common)

    properties = {
        name: _convert(child, _child(path, name), depth + 1, max_depth)
        for name, child in raw_properties.items()
    }

    return SchemaNode(
        kind=SchemaKind.OBJECT,
        properties=properties,
        required=frozenset(raw.get("required") or ()),
        additional_properties=policy,
        additional_properties_schema=additional_schema,
        **common,
    )


def _primitive_kind(raw_type: str, path: str) -> SchemaKind:
    """Map a raw primitive ``type`` value to its kind."""
    mapping = {
        "string": SchemaKind.STRING,
        "integer": SchemaKind.INTEGER,
        "number": SchemaKind.NUMBER,
        "boolean": SchemaKind.BOOLEAN,
    }
    if raw_type not in mapping:
        raise UnsupportedSchemaShapeError(f"Unsupported schema type '{raw_type}'", path)
    return mapping[raw_type]


def _child(path: str, name: str) -> str:
    return f"{path}.{name}" if path else name
