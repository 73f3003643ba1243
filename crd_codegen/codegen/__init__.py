"""
CRD Code Generation Module

Compiles Kubernetes CustomResourceDefinition schemas into type
descriptors and renders them as source code.
"""

from typing import Any, Dict, List, Optional, Tuple, Union
from pathlib import Path

from .registry import GeneratorRegistry, get_generator, list_supported_languages
from .core.generator import CodeGenerator, GenerationResult, generate_code
from .core.config import GeneratorConfig, ConfigManager, load_config
from .core import crd as _crd
from .core.result import CompilationResult
from .core.schema import SchemaNode

ConfigLike = Optional[Union[GeneratorConfig, Dict[str, Any], str, Path]]


def compile_schema(
    schema: Dict[str, Any],
    name: str,
    package: Union[str, Tuple[str, ...]] = (),
    config: ConfigLike = None,
    language: str = "java",
) -> CompilationResult:
    """
    Compile a single object schema into a class and its nested artifacts.

    Args:
        schema: Raw OpenAPI v3 object schema
        name: Simple name of the root class
        package: Package as a dotted string or a tuple of segments
        config: Generator configuration
        language: Language whose naming and type rules apply

    Returns:
        CompilationResult whose last top-level artifact is the root class
    """
    generator = get_generator(language, config)
    resolver = generator.create_resolver()
    if isinstance(package, str):
        package = tuple(segment for segment in package.split(".") if segment)

    root = SchemaNode.from_dict(schema, name, resolver.config.max_depth)
    resolution = resolver.resolve_object(root, resolver.sanitizer.type_name(name), package)
    return CompilationResult.from_resolution(resolution)


def compile_crd(
    document: Dict[str, Any], config: ConfigLike = None, language: str = "java"
) -> List[CompilationResult]:
    """
    Compile every version of a CustomResourceDefinition document.

    Returns:
        One CompilationResult per version, in manifest order
    """
    generator = get_generator(language, config)
    return _crd.compile_crd(generator.create_resolver(), document)


def generate_from_crd(
    document: Dict[str, Any], language: str = "java", config: ConfigLike = None
) -> GenerationResult:
    """
    Compile and render a CRD document.

    Compilation errors propagate; rendering errors are reported through
    the returned GenerationResult.
    """
    generator = get_generator(language, config)
    results = _crd.compile_crd(generator.create_resolver(), document)
    return generate_code(generator, results)


__all__ = [
    "GeneratorRegistry",
    "CodeGenerator",
    "GenerationResult",
    "GeneratorConfig",
    "ConfigManager",
    "CompilationResult",
    "load_config",
    "generate_code",
    "get_generator",
    "list_supported_languages",
    "compile_schema",
    "compile_crd",
    "generate_from_crd",
]
