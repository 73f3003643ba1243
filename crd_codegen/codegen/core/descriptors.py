"""
Resolved type descriptors.

Each variant is a frozen dataclass tagged with a ``kind`` so resolvers
and renderers can dispatch over the closed set of variants. Descriptors
are built in one pass and never mutated afterwards.
"""

from dataclasses import dataclass
from typing import Any, ClassVar, NamedTuple, Optional, Tuple, Union
from enum import Enum

from .types import PrimitiveKind


class TypeKind(Enum):
    """Variants of the descriptor union."""

    PRIMITIVE = "primitive"
    ARRAY = "array"
    MAP = "map"
    OBJECT = "object"
    ENUM = "enum"
    CUSTOM_RESOURCE = "custom_resource"
    EXISTING = "existing"


@dataclass(frozen=True)
class PrimitiveType:
    """A scalar type with optional validation metadata."""

    qualified_name: str
    primitive: PrimitiveKind
    format: Optional[str] = None
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    pattern: Optional[str] = None
    package_path: Tuple[str, ...] = ()

    kind: ClassVar[TypeKind] = TypeKind.PRIMITIVE


@dataclass(frozen=True)
class ArrayType:
    qualified_name: str
    element: "TypeDescriptor"
    package_path: Tuple[str, ...] = ()

    kind: ClassVar[TypeKind] = TypeKind.ARRAY


@dataclass(frozen=True)
class MapType:
    qualified_name: str
    value: "TypeDescriptor"
    package_path: Tuple[str, ...] = ()

    kind: ClassVar[TypeKind] = TypeKind.MAP


@dataclass(frozen=True)
class ExistingType:
    """Reference to a type that is provided elsewhere and never generated."""

    qualified_name: str
    package_path: Tuple[str, ...] = ()

    kind: ClassVar[TypeKind] = TypeKind.EXISTING


@dataclass(frozen=True)
class FieldDescriptor:
    """A single field of a generated class."""

    identifier: str
    raw_name: str  # Original schema key, kept for serialization
    type: "TypeDescriptor"
    required: bool = False
    nullable: Optional[bool] = None
    default: Any = None
    has_default: bool = False
    deprecated: bool = False
    description: Optional[str] = None
    additional_properties: bool = False  # Catch-all map for undeclared keys


@dataclass(frozen=True)
class EnumEntryDescriptor:
    identifier: str
    value: Any  # Typed value (str, int, float or bool)
    literal: str  # Value rendered as a target language literal


@dataclass(frozen=True)
class EnumType:
    simple_name: str
    qualified_name: str
    entries: Tuple[EnumEntryDescriptor, ...]
    backing: PrimitiveType
    package_path: Tuple[str, ...] = ()
    owner: Optional[str] = None  # Qualified name of the enclosing class
    description: Optional[str] = None

    kind: ClassVar[TypeKind] = TypeKind.ENUM


@dataclass(frozen=True)
class ObjectType:
    """
    A generated class.

    ``nested`` holds every artifact discovered while resolving the fields,
    child artifacts first, in property order.
    """

    simple_name: str
    qualified_name: str
    fields: Tuple[FieldDescriptor, ...] = ()
    nested: Tuple["Artifact", ...] = ()
    package_path: Tuple[str, ...] = ()
    preserve_unknown_fields: bool = False
    description: Optional[str] = None

    kind: ClassVar[TypeKind] = TypeKind.OBJECT


@dataclass(frozen=True)
class CustomResourceType:
    """A top-level Kubernetes API type wrapping spec and status classes."""

    simple_name: str
    qualified_name: str
    group: str
    version: str
    scope: str
    spec_type: str
    status_type: str
    base_type: str
    interfaces: Tuple[str, ...] = ()
    singular: Optional[str] = None
    plural: Optional[str] = None
    storage: bool = True
    served: bool = True
    fields: Tuple[FieldDescriptor, ...] = ()
    nested: Tuple["Artifact", ...] = ()
    package_path: Tuple[str, ...] = ()
    description: Optional[str] = None

    kind: ClassVar[TypeKind] = TypeKind.CUSTOM_RESOURCE

    @property
    def namespaced(self) -> bool:
        return bool(self.interfaces)


TypeDescriptor = Union[
    PrimitiveType, ArrayType, MapType, ObjectType, EnumType, CustomResourceType, ExistingType
]

Artifact = Union[ObjectType, EnumType, CustomResourceType]


class Resolution(NamedTuple):
    """Outcome of resolving one schema fragment.

    ``artifacts`` lists every emittable type discovered, children before
    their parents; arrays, maps and primitives only forward what their
    element produced.
    """

    type: TypeDescriptor
    artifacts: Tuple[Artifact, ...] = ()
