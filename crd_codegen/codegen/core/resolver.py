"""
Schema resolution: turns SchemaNode trees into type descriptors.

Object, array and map resolution are mutually recursive. Every object
returns its own descriptor together with the artifacts discovered below
it, children before parents and in property order, so the emitted order
is deterministic for a given schema.
"""

from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Tuple

from ...logging_config import get_logger
from .config import GeneratorConfig
from .descriptors import (
    ArrayType,
    EnumEntryDescriptor,
    EnumType,
    ExistingType,
    FieldDescriptor,
    MapType,
    ObjectType,
    PrimitiveType,
    Resolution,
)
from .errors import (
    DuplicateEnumEntryError,
    DuplicateFieldError,
    DuplicateTypeError,
    RecursionLimitError,
    UnsupportedSchemaShapeError,
)
from .naming import NameSanitizer, qualified_name, reduce_collisions
from .schema import AdditionalPropertiesPolicy, SchemaKind, SchemaNode
from .types import PrimitiveKind, TypeMapper, classify_primitive, parse_enum_value

logger = get_logger(__name__)

ADDITIONAL_PROPERTIES = "additionalProperties"


class SchemaResolver:
    """Resolves schema fragments for one configuration and target language."""

    def __init__(
        self,
        config: GeneratorConfig,
        sanitizer: NameSanitizer,
        type_mapper: TypeMapper,
    ):
        self.config = config
        self.sanitizer = sanitizer
        self.type_mapper = type_mapper

    def resolve(
        self,
        node: SchemaNode,
        name: str,
        package_path: Tuple[str, ...] = (),
        owner: Optional[str] = None,
        path: str = "",
        depth: int = 0,
    ) -> Resolution:
        """
        Resolve any fragment found as a member of an object.

        Args:
            node: Fragment to resolve
            name: Simple type name to use if the fragment becomes a class or enum
            package_path: Package for generated classes
            owner: Qualified name of the class declaring the member
            path: Dotted schema location for diagnostics
            depth: Current nesting depth

        Returns:
            Resolution with the member type and discovered artifacts
        """
        if depth > self.config.max_depth:
            raise RecursionLimitError(self.config.max_depth, path)

        if node.int_or_string:
            return Resolution(ExistingType(self.type_mapper.int_or_string_type))

        kind = node.kind
        if kind == SchemaKind.OBJECT:
            if (
                not node.properties
                and node.additional_properties == AdditionalPropertiesPolicy.ANY
            ):
                return Resolution(ExistingType(self.type_mapper.any_type))
            return self.resolve_object(node, name, package_path, path, depth)
        elif kind == SchemaKind.ARRAY:
            return self.resolve_array(node, name, package_path, owner, path, depth)
        elif kind == SchemaKind.MAP:
            return self.resolve_map(node, name, package_path, owner, path, depth)
        elif kind == SchemaKind.ENUM:
            return self.resolve_enum(node, name, package_path, owner, path)
        elif kind == SchemaKind.ANY:
            return Resolution(ExistingType(self.type_mapper.any_type))
        elif node.is_primitive:
            return Resolution(self.resolve_primitive(node, path))

        raise UnsupportedSchemaShapeError(f"No resolver for schema kind '{kind.value}'", path)

    def resolve_primitive(self, node: SchemaNode, path: str = "") -> PrimitiveType:
        """Map a scalar fragment, carrying validation bounds through."""
        primitive = classify_primitive(node.kind, node.format, path)
        return PrimitiveType(
            qualified_name=self.type_mapper.primitive_type(primitive),
            primitive=primitive,
            format=node.format,
            minimum=node.minimum,
            maximum=node.maximum,
            pattern=node.pattern,
        )

    def resolve_enum(
        self,
        node: SchemaNode,
        name: str,
        package_path: Tuple[str, ...] = (),
        owner: Optional[str] = None,
        path: str = "",
    ) -> Resolution:
        """
        Build an enum with one entry per raw value, in schema order.

        A null value is allowed only when the fragment is nullable, and it
        does not produce a constant.

        Raises:
            UnsupportedSchemaShapeError: If there are no values, or null is
                listed by a fragment that is not nullable
            DuplicateEnumEntryError: If two values share a constant name
        """
        tokens = []
        for token in node.enum_values:
            if token is None:
                if not node.nullable:
                    raise UnsupportedSchemaShapeError(
                        "Enum lists null but the schema is not nullable", path
                    )
                continue
            tokens.append(token)
        if not tokens:
            raise UnsupportedSchemaShapeError("Enum has no values", path)

        base = SchemaNode(kind=node.enum_base or SchemaKind.STRING, format=node.format)
        backing = self.resolve_primitive(base, path)
        if backing.primitive == PrimitiveKind.BIG_INTEGER:
            # Enum constants need a fixed width literal
            backing = PrimitiveType(
                qualified_name=self.type_mapper.primitive_type(PrimitiveKind.INT64),
                primitive=PrimitiveKind.INT64,
            )

        entries: List[EnumEntryDescriptor] = []
        seen = {}
        for token in tokens:
            value = parse_enum_value(token, backing.primitive, path)
            identifier = self._enum_identifier(token, value, backing.primitive)
            if identifier in seen:
                raise DuplicateEnumEntryError(identifier, [seen[identifier], str(token)], path)
            seen[identifier] = str(token)
            entries.append(
                EnumEntryDescriptor(
                    identifier=identifier,
                    value=value,
                    literal=self.type_mapper.enum_literal(value, backing.primitive),
                )
            )

        if owner:
            enum_name = self.type_mapper.inner_type(owner, name)
        else:
            enum_name = qualified_name(package_path, name)

        descriptor = EnumType(
            simple_name=name,
            qualified_name=enum_name,
            entries=tuple(entries),
            backing=backing,
            package_path=tuple(package_path),
            owner=owner,
            description=node.description,
        )
        logger.debug("Resolved enum %s with %d entries", enum_name, len(entries))
        return Resolution(descriptor, (descriptor,))

    def _enum_identifier(self, token, value, primitive: PrimitiveKind) -> str:
        if primitive == PrimitiveKind.BOOLEAN:
            return "TRUE" if value else "FALSE"
        if primitive == PrimitiveKind.STRING:
            return self.sanitizer.enum_constant(value, uppercase=self.config.enum_uppercase)
        return self.sanitizer.enum_constant(str(token), uppercase=True)

    def resolve_array(
        self,
        node: SchemaNode,
        name: str,
        package_path: Tuple[str, ...] = (),
        owner: Optional[str] = None,
        path: str = "",
        depth: int = 0,
    ) -> Resolution:
        """Wrap the element type in a list; element artifacts are forwarded."""
        element = self.resolve(
            node.items or SchemaNode(kind=SchemaKind.ANY),
            name,
            package_path,
            owner,
            f"{path}[]",
            depth + 1,
        )
        array = ArrayType(
            qualified_name=self.type_mapper.array_type(element.type.qualified_name),
            element=element.type,
        )
        return Resolution(array, element.artifacts)

    def resolve_map(
        self,
        node: SchemaNode,
        name: str,
        package_path: Tuple[str, ...] = (),
        owner: Optional[str] = None,
        path: str = "",
        depth: int = 0,
    ) -> Resolution:
        """Wrap the value type in a string-keyed map; value artifacts are forwarded."""
        value = self.resolve(
            node.items or SchemaNode(kind=SchemaKind.ANY),
            name,
            package_path,
            owner,
            f"{path}{{}}",
            depth + 1,
        )
        mapping = MapType(
            qualified_name=self.type_mapper.map_type(value.type.qualified_name),
            value=value.type,
        )
        return Resolution(mapping, value.artifacts)

    def resolve_object(
        self,
        node: SchemaNode,
        name: str,
        package_path: Tuple[str, ...] = (),
        path: str = "",
        depth: int = 0,
    ) -> Resolution:
        """
        Resolve an object fragment into a class and everything below it.

        Args:
            node: Object fragment
            name: Simple class name
            package_path: Package of the class
            path: Dotted schema location for diagnostics
            depth: Current nesting depth

        Returns:
            Resolution whose artifacts end with the class itself

        Raises:
            DuplicateFieldError: If property names cannot be disambiguated
            DuplicateTypeError: If two properties generate the same class or enum
            RecursionLimitError: If nesting exceeds the configured limit
        """
        if depth > self.config.max_depth:
            raise RecursionLimitError(self.config.max_depth, path)

        if node.kind == SchemaKind.MAP:
            # A bare typed dictionary that must become a class keeps its value type
            node = replace(
                node,
                kind=SchemaKind.OBJECT,
                items=None,
                additional_properties=AdditionalPropertiesPolicy.TYPED,
                additional_properties_schema=node.items or SchemaNode(kind=SchemaKind.ANY),
            )

        package_path = tuple(package_path)
        class_name = qualified_name(package_path, name)
        path = path or class_name

        override = self.config.existing_java_types.get(class_name)
        if override:
            logger.debug("Using existing type %s for %s", override, class_name)
            return Resolution(ExistingType(override))

        members = reduce_collisions(self.sanitizer, node.properties, path)
        member_package = package_path + (self.sanitizer.package_segment(name),)

        fields: List[FieldDescriptor] = []
        artifacts = []
        claimed: Dict[str, str] = {}
        for identifier, raw_name, child in members:
            resolved = self.resolve(
                child,
                self.sanitizer.type_name(raw_name),
                member_package,
                owner=class_name,
                path=f"{path}.{raw_name}",
                depth=depth + 1,
            )
            fields.append(
                FieldDescriptor(
                    identifier=identifier,
                    raw_name=raw_name,
                    type=resolved.type,
                    required=raw_name in node.required,
                    nullable=child.nullable,
                    default=child.default,
                    has_default=child.has_default,
                    deprecated=child.is_deprecated,
                    description=child.description,
                )
            )
            _claim(claimed, raw_name, resolved.artifacts, path)
            artifacts.extend(resolved.artifacts)

        preserve = False
        if node.additional_properties == AdditionalPropertiesPolicy.TYPED:
            resolved = self.resolve(
                node.additional_properties_schema,
                self.sanitizer.type_name(ADDITIONAL_PROPERTIES),
                member_package,
                owner=class_name,
                path=f"{path}.{{}}",
                depth=depth + 1,
            )
            value_map = MapType(
                qualified_name=self.type_mapper.map_type(resolved.type.qualified_name),
                value=resolved.type,
            )
            fields.append(self._additional_properties_field(value_map, fields, path))
            _claim(claimed, ADDITIONAL_PROPERTIES, resolved.artifacts, path)
            artifacts.extend(resolved.artifacts)
        elif (
            node.preserve_unknown_fields
            or node.additional_properties == AdditionalPropertiesPolicy.ANY
            or self.config.preserve_unknown_fields
        ):
            opaque = ExistingType(self.type_mapper.opaque_type)
            value_map = MapType(
                qualified_name=self.type_mapper.map_type(opaque.qualified_name),
                value=opaque,
            )
            fields.append(self._additional_properties_field(value_map, fields, path))
            preserve = True

        descriptor = ObjectType(
            simple_name=name,
            qualified_name=class_name,
            fields=tuple(fields),
            nested=tuple(artifacts),
            package_path=package_path,
            preserve_unknown_fields=preserve,
            description=node.description,
        )
        logger.debug(
            "Resolved object %s (%d fields, %d nested artifacts)",
            class_name,
            len(fields),
            len(artifacts),
        )
        return Resolution(descriptor, tuple(artifacts) + (descriptor,))

    def _additional_properties_field(
        self, value_map: MapType, fields: List[FieldDescriptor], path: str
    ) -> FieldDescriptor:
        """Catch-all field for keys not declared in the schema."""
        for existing in fields:
            if existing.identifier == ADDITIONAL_PROPERTIES:
                raise DuplicateFieldError(
                    ADDITIONAL_PROPERTIES, [existing.raw_name, ADDITIONAL_PROPERTIES], path
                )
        return FieldDescriptor(
            identifier=ADDITIONAL_PROPERTIES,
            raw_name=ADDITIONAL_PROPERTIES,
            type=value_map,
            additional_properties=True,
        )


def _claim(claimed: Dict[str, str], raw_name: str, artifacts: Iterable, path: str):
    """Record which property generated each artifact, rejecting name clashes."""
    for artifact in artifacts:
        other = claimed.setdefault(artifact.qualified_name, raw_name)
        if other != raw_name:
            raise DuplicateTypeError(artifact.qualified_name, [other, raw_name], path)
