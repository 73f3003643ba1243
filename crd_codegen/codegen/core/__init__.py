"""
Core code generation components.

Provides the language-agnostic schema compiler and the base classes
used by all language generators.
"""

from .generator import CodeGenerator, GenerationResult, generate_code
from .errors import (
    GeneratorError,
    DuplicateFieldError,
    DuplicateEnumEntryError,
    DuplicateTypeError,
    UnsupportedSchemaShapeError,
    RecursionLimitError,
    ConfigurationError,
)
from .schema import SchemaNode, SchemaKind, AdditionalPropertiesPolicy
from .types import PrimitiveKind, TypeMapper
from .descriptors import (
    TypeKind,
    PrimitiveType,
    ArrayType,
    MapType,
    ExistingType,
    FieldDescriptor,
    EnumEntryDescriptor,
    EnumType,
    ObjectType,
    CustomResourceType,
    Resolution,
)
from .naming import NameSanitizer, NamingCase, group_to_package, reduce_collisions
from .resolver import SchemaResolver
from .crd import assemble_custom_resource, compile_crd
from .result import CompilationResult
from .config import GeneratorConfig, ConfigManager, load_config
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "GenerationResult",
    "generate_code",
    # Errors
    "GeneratorError",
    "DuplicateFieldError",
    "DuplicateEnumEntryError",
    "DuplicateTypeError",
    "UnsupportedSchemaShapeError",
    "RecursionLimitError",
    "ConfigurationError",
    # Schema input
    "SchemaNode",
    "SchemaKind",
    "AdditionalPropertiesPolicy",
    # Descriptors
    "PrimitiveKind",
    "TypeMapper",
    "TypeKind",
    "PrimitiveType",
    "ArrayType",
    "MapType",
    "ExistingType",
    "FieldDescriptor",
    "EnumEntryDescriptor",
    "EnumType",
    "ObjectType",
    "CustomResourceType",
    "Resolution",
    # Compiler
    "NameSanitizer",
    "NamingCase",
    "group_to_package",
    "reduce_collisions",
    "SchemaResolver",
    "assemble_custom_resource",
    "compile_crd",
    "CompilationResult",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
