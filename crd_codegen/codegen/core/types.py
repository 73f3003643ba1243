"""
Language-agnostic primitive classification and the type mapper contract.

The core resolvers decide *what* a fragment is; a TypeMapper supplied by
a language backend decides how the resulting type is spelled.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional
from enum import Enum

from .errors import UnsupportedSchemaShapeError
from .schema import SchemaKind


class PrimitiveKind(Enum):
    """Scalar types a schema fragment can resolve to."""

    STRING = "string"
    INT32 = "int32"
    INT64 = "int64"
    BIG_INTEGER = "big_integer"
    FLOAT = "float"
    DOUBLE = "double"
    BOOLEAN = "boolean"


INTEGER_KINDS = frozenset({PrimitiveKind.INT32, PrimitiveKind.INT64, PrimitiveKind.BIG_INTEGER})
DECIMAL_KINDS = frozenset({PrimitiveKind.FLOAT, PrimitiveKind.DOUBLE})


def classify_primitive(kind: SchemaKind, fmt: Optional[str], path: str = "") -> PrimitiveKind:
    """
    Map a schema kind and format to a primitive kind.

    String formats (date-time, byte, ...) do not change the type. Integer
    and number formats must be known.

    Raises:
        UnsupportedSchemaShapeError: For unknown kind/format combinations
    """
    if kind == SchemaKind.STRING:
        return PrimitiveKind.STRING
    if kind == SchemaKind.BOOLEAN:
        return PrimitiveKind.BOOLEAN
    if kind == SchemaKind.INTEGER:
        formats = {None: PrimitiveKind.BIG_INTEGER, "int32": PrimitiveKind.INT32, "int64": PrimitiveKind.INT64}
        if fmt in formats:
            return formats[fmt]
    elif kind == SchemaKind.NUMBER:
        formats = {None: PrimitiveKind.DOUBLE, "double": PrimitiveKind.DOUBLE, "float": PrimitiveKind.FLOAT}
        if fmt in formats:
            return formats[fmt]
    else:
        raise UnsupportedSchemaShapeError(f"'{kind.value}' is not a primitive kind", path)

    raise UnsupportedSchemaShapeError(
        f"Unsupported format '{fmt}' for type '{kind.value}'", path
    )


def parse_enum_value(token: Any, primitive: PrimitiveKind, path: str = "") -> Any:
    """Convert a raw enum token into a value of the backing primitive."""
    try:
        if primitive == PrimitiveKind.STRING:
            return str(token)
        if primitive == PrimitiveKind.BOOLEAN:
            if isinstance(token, bool):
                return token
            lowered = str(token).lower()
            if lowered not in ("true", "false"):
                raise ValueError(token)
            return lowered == "true"
        if primitive in INTEGER_KINDS:
            if isinstance(token, bool) or (isinstance(token, float) and not token.is_integer()):
                raise ValueError(token)
            return int(token)
        return float(token)
    except (TypeError, ValueError):
        raise UnsupportedSchemaShapeError(
            f"Enum value {token!r} is not a valid {primitive.value}", path
        )


class TypeMapper(ABC):
    """Spells resolved types in a target language."""

    @abstractmethod
    def primitive_type(self, primitive: PrimitiveKind) -> str:
        """Qualified name of a scalar type."""
        pass

    @abstractmethod
    def array_type(self, element: str) -> str:
        pass

    @abstractmethod
    def map_type(self, value: str) -> str:
        pass

    @abstractmethod
    def inner_type(self, owner: str, simple_name: str) -> str:
        """Qualified name of a type declared inside another type."""
        pass

    @abstractmethod
    def enum_literal(self, value: Any, primitive: PrimitiveKind) -> str:
        """Render an enum value as a literal of its backing type."""
        pass

    @abstractmethod
    def custom_resource_type(self, spec: str, status: str) -> str:
        """Base type every custom resource extends."""
        pass

    @property
    @abstractmethod
    def opaque_type(self) -> str:
        """Type of values in a catch-all property map."""
        pass

    @property
    @abstractmethod
    def void_type(self) -> str:
        """Placeholder for a missing spec or status."""
        pass

    @property
    @abstractmethod
    def any_type(self) -> str:
        """Existing type holding arbitrary JSON."""
        pass

    @property
    @abstractmethod
    def int_or_string_type(self) -> str:
        pass

    @property
    @abstractmethod
    def namespaced_marker(self) -> str:
        """Interface implemented by namespace-scoped resources."""
        pass
