"""
Java-specific type system for code generation.

Spells resolved descriptors as fully qualified Java types and renders
scalar values as Java literals.
"""

import json
from dataclasses import dataclass
from typing import Any, Optional

from ...core.descriptors import EnumType, TypeDescriptor, TypeKind
from ...core.types import PrimitiveKind, TypeMapper

KUBERNETES_MODEL_PACKAGE = "io.fabric8.kubernetes.api.model"


@dataclass(frozen=True)
class JavaTypeConfig:
    """Qualified names of the runtime types generated code depends on."""

    string_type: str = "java.lang.String"
    int_type: str = "java.lang.Integer"
    long_type: str = "java.lang.Long"
    big_integer_type: str = "java.math.BigInteger"
    float_type: str = "java.lang.Float"
    double_type: str = "java.lang.Double"
    bool_type: str = "java.lang.Boolean"
    list_type: str = "java.util.List"
    map_type: str = "java.util.Map"
    object_type: str = "java.lang.Object"
    void_type: str = "java.lang.Void"
    any_type: str = f"{KUBERNETES_MODEL_PACKAGE}.AnyType"
    int_or_string_type: str = f"{KUBERNETES_MODEL_PACKAGE}.IntOrString"
    namespaced_type: str = f"{KUBERNETES_MODEL_PACKAGE}.Namespaced"
    custom_resource_type: str = "io.fabric8.kubernetes.client.CustomResource"


class JavaTypeMapper(TypeMapper):
    """Maps resolved types onto the fabric8 Java model."""

    def __init__(self, config: Optional[JavaTypeConfig] = None):
        self.config = config or JavaTypeConfig()
        self._primitive_map = {
            PrimitiveKind.STRING: self.config.string_type,
            PrimitiveKind.INT32: self.config.int_type,
            PrimitiveKind.INT64: self.config.long_type,
            PrimitiveKind.BIG_INTEGER: self.config.big_integer_type,
            PrimitiveKind.FLOAT: self.config.float_type,
            PrimitiveKind.DOUBLE: self.config.double_type,
            PrimitiveKind.BOOLEAN: self.config.bool_type,
        }

    def primitive_type(self, primitive: PrimitiveKind) -> str:
        return self._primitive_map[primitive]

    def array_type(self, element: str) -> str:
        return f"{self.config.list_type}<{element}>"

    def map_type(self, value: str) -> str:
        return f"{self.config.map_type}<{self.config.string_type}, {value}>"

    def inner_type(self, owner: str, simple_name: str) -> str:
        return f"{owner}.{simple_name}"

    def custom_resource_type(self, spec: str, status: str) -> str:
        return f"{self.config.custom_resource_type}<{spec}, {status}>"

    @property
    def opaque_type(self) -> str:
        return self.config.object_type

    @property
    def void_type(self) -> str:
        return self.config.void_type

    @property
    def any_type(self) -> str:
        return self.config.any_type

    @property
    def int_or_string_type(self) -> str:
        return self.config.int_or_string_type

    @property
    def namespaced_marker(self) -> str:
        return self.config.namespaced_type

    def enum_literal(self, value: Any, primitive: PrimitiveKind) -> str:
        """
        Render a scalar as a Java literal of the given primitive kind.

        ``1`` becomes ``1`` for int32 and ``1L`` for int64.
        """
        if primitive == PrimitiveKind.STRING:
            return json.dumps(str(value))
        if primitive == PrimitiveKind.BOOLEAN:
            return "true" if value else "false"
        if primitive == PrimitiveKind.INT32:
            return str(int(value))
        if primitive in (PrimitiveKind.INT64, PrimitiveKind.BIG_INTEGER):
            return f"{int(value)}L"
        if primitive == PrimitiveKind.FLOAT:
            return f"{float(value)!r}F"
        return f"{float(value)!r}D"

    def default_initializer(self, descriptor: TypeDescriptor, value: Any) -> Optional[str]:
        """
        Java expression assigning a schema default to a field.

        Returns None when the default cannot be expressed for the type.
        """
        if value is None:
            return None

        if descriptor.kind == TypeKind.ENUM:
            return self._enum_default(descriptor, value)

        if descriptor.kind != TypeKind.PRIMITIVE:
            return None

        primitive = descriptor.primitive
        try:
            if primitive == PrimitiveKind.BIG_INTEGER:
                return f'new {descriptor.qualified_name}("{int(value)}")'
            if primitive == PrimitiveKind.BOOLEAN and not isinstance(value, bool):
                return None
            return self.enum_literal(value, primitive)
        except (TypeError, ValueError):
            return None

    def _enum_default(self, descriptor: EnumType, value: Any) -> Optional[str]:
        for entry in descriptor.entries:
            if entry.value == value or str(entry.value) == str(value):
                return f"{descriptor.qualified_name}.{entry.identifier}"
        return None
