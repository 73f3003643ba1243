"""
Java code generator implementation.

Generates Jackson-annotated Java classes for the fabric8 Kubernetes
client from compiled CRD descriptors, one compilation unit per class.
"""

import json
from typing import Any, Dict, List, Optional
from pathlib import Path

from ....logging_config import get_logger
from ...core.config import GeneratorConfig
from ...core.descriptors import (
    Artifact,
    CustomResourceType,
    EnumType,
    FieldDescriptor,
    TypeKind,
)
from ...core.generator import CodeGenerator
from ...core.naming import NameSanitizer
from ...core.result import CompilationResult
from ...core.templates import TemplateError
from .naming import create_java_sanitizer
from .types import JavaTypeMapper

logger = get_logger(__name__)

ANNOTATION_PACKAGE = "io.fabric8.generator.annotation"
MODEL_ANNOTATION_PACKAGE = "io.fabric8.kubernetes.model.annotation"
GENERATOR_NAME = "crd_codegen"


class JavaGenerator(CodeGenerator):
    """Code generator for fabric8 Java model classes."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize Java generator with configuration."""
        super().__init__(config)
        self.type_mapper = JavaTypeMapper()

    def get_template_directory(self) -> Optional[Path]:
        """Return the Java templates directory."""
        template_dir = Path(__file__).parent / "templates"
        return template_dir if template_dir.exists() else None

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "java"

    @property
    def file_extension(self) -> str:
        """Return Java file extension."""
        return ".java"

    def create_sanitizer(self) -> NameSanitizer:
        return create_java_sanitizer()

    def create_type_mapper(self) -> JavaTypeMapper:
        return self.type_mapper

    def validate_result(self, result: CompilationResult) -> List[str]:
        """Add warnings for defaults that cannot be rendered as initializers."""
        warnings = super().validate_result(result)
        for artifact in result.top_level_artifacts:
            for field in artifact.fields:
                if field.has_default and self._initializer(field) is None:
                    warnings.append(
                        f"Default of {artifact.qualified_name}.{field.identifier} "
                        f"cannot be expressed as a Java initializer and is ignored"
                    )
        return warnings

    def generate_single_artifact(self, artifact: Artifact, result: CompilationResult) -> str:
        """Render one top-level class with its inner enums."""
        if artifact.kind not in (TypeKind.OBJECT, TypeKind.CUSTOM_RESOURCE):
            raise TemplateError(
                f"Cannot render '{artifact.kind.value}' as a compilation unit",
                artifact.qualified_name,
            )

        inner_enums = [
            self._render_enum(enum) for enum in result.inner_artifacts_of(artifact.qualified_name)
        ]

        context = {
            "package": ".".join(artifact.package_path),
            "class_name": artifact.simple_name,
            "description": artifact.description if self.config.add_comments else None,
            "class_annotations": [],
            "property_order": [f.raw_name for f in artifact.fields if not f.additional_properties],
            "generated": self.config.generated_annotations,
            "generator_name": GENERATOR_NAME,
            "extends": None,
            "implements": ["io.fabric8.kubernetes.api.model.KubernetesResource"],
            "fields": [self._field_context(field) for field in artifact.fields],
            "inner_enums": inner_enums,
        }

        if artifact.kind == TypeKind.CUSTOM_RESOURCE:
            context.update(self._custom_resource_context(artifact))

        logger.debug("Rendering %s", artifact.qualified_name)
        return self.render_template("class.java.j2", context)

    def _custom_resource_context(self, resource: CustomResourceType) -> Dict[str, Any]:
        annotations = [
            f"@{MODEL_ANNOTATION_PACKAGE}.Version(value = {json.dumps(resource.version)}, "
            f"storage = {_java_bool(resource.storage)}, served = {_java_bool(resource.served)})",
            f"@{MODEL_ANNOTATION_PACKAGE}.Group({json.dumps(resource.group)})",
        ]
        if resource.singular:
            annotations.append(f"@{MODEL_ANNOTATION_PACKAGE}.Singular({json.dumps(resource.singular)})")
        if resource.plural:
            annotations.append(f"@{MODEL_ANNOTATION_PACKAGE}.Plural({json.dumps(resource.plural)})")

        return {
            "class_annotations": annotations,
            "extends": resource.base_type,
            "implements": list(resource.interfaces),
        }

    def _field_context(self, field: FieldDescriptor) -> Dict[str, Any]:
        accessor = field.identifier[:1].upper() + field.identifier[1:]
        context = {
            "identifier": field.identifier,
            "type": field.type.qualified_name,
            "getter": f"get{accessor}",
            "setter": f"set{accessor}",
            "additional_properties": field.additional_properties,
            "description": field.description if self.config.add_comments else None,
            "initializer": self._initializer(field),
            "annotations": self._field_annotations(field),
        }
        if field.additional_properties:
            context["value_type"] = field.type.value.qualified_name
        return context

    def _field_annotations(self, field: FieldDescriptor) -> List[str]:
        """Jackson and validation annotations of a regular field."""
        annotations = []
        if field.deprecated:
            annotations.append("@java.lang.Deprecated")
        if field.required:
            annotations.append(f"@{ANNOTATION_PACKAGE}.Required")

        descriptor = field.type
        if descriptor.kind == TypeKind.PRIMITIVE:
            if descriptor.minimum is not None:
                annotations.append(f"@{ANNOTATION_PACKAGE}.Min({_number(descriptor.minimum)})")
            if descriptor.maximum is not None:
                annotations.append(f"@{ANNOTATION_PACKAGE}.Max({_number(descriptor.maximum)})")
            if descriptor.pattern is not None:
                annotations.append(f"@{ANNOTATION_PACKAGE}.Pattern({json.dumps(descriptor.pattern)})")

        annotations.append(f"@com.fasterxml.jackson.annotation.JsonProperty({json.dumps(field.raw_name)})")
        if field.description:
            annotations.append(
                "@com.fasterxml.jackson.annotation.JsonPropertyDescription("
                f"{json.dumps(field.description)})"
            )

        if field.nullable:
            annotations.append(f"@{ANNOTATION_PACKAGE}.Nullable")
            nulls = "SET"
        else:
            nulls = "SKIP"
        annotations.append(
            "@com.fasterxml.jackson.annotation.JsonSetter("
            f"nulls = com.fasterxml.jackson.annotation.Nulls.{nulls})"
        )
        return annotations

    def _initializer(self, field: FieldDescriptor) -> Optional[str]:
        if not field.has_default:
            return None
        return self.type_mapper.default_initializer(field.type, field.default)

    def _render_enum(self, enum: EnumType) -> str:
        context = {
            "enum_name": enum.simple_name,
            "backing": enum.backing.qualified_name,
            "description": enum.description if self.config.add_comments else None,
            "entries": [
                {
                    "identifier": entry.identifier,
                    "literal": entry.literal,
                    "json_name": _json_name(entry.value),
                }
                for entry in enum.entries
            ],
        }
        return self.render_template("enum.java.j2", context).rstrip("\n")


def _java_bool(value: bool) -> str:
    return "true" if value else "false"


def _number(value: float) -> str:
    """Render a bound as an integer when it has no fraction."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def _json_name(value: Any) -> str:
    if isinstance(value, bool):
        return _java_bool(value)
    return str(value)
