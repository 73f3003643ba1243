"""
Custom resource assembly.

Wraps the resolved spec and status classes of a CRD version into a
custom resource type carrying its API metadata.
"""

from typing import Any, Dict, List, Optional, Tuple

from ...logging_config import get_logger
from .descriptors import CustomResourceType, Resolution
from .errors import UnsupportedSchemaShapeError
from .naming import group_to_package, qualified_name
from .resolver import SchemaResolver
from .result import CompilationResult
from .schema import SchemaNode

logger = get_logger(__name__)

NAMESPACED = "Namespaced"


def assemble_custom_resource(
    resolver: SchemaResolver,
    name: str,
    package_path: Tuple[str, ...],
    group: str,
    version: str,
    scope: str = NAMESPACED,
    spec: Optional[SchemaNode] = None,
    status: Optional[SchemaNode] = None,
    singular: Optional[str] = None,
    plural: Optional[str] = None,
    storage: bool = True,
    served: bool = True,
    description: Optional[str] = None,
) -> Resolution:
    """
    Build the custom resource type for one CRD version.

    A missing spec or status is replaced by the void type. Only the
    ``Namespaced`` scope adds the namespaced marker interface.

    Returns:
        Resolution whose artifacts hold the spec and status classes
        (with their nested types) followed by the resource itself
    """
    mapper = resolver.type_mapper
    simple_name = resolver.sanitizer.type_name(name)
    package_path = tuple(package_path)
    resource_name = qualified_name(package_path, simple_name)

    artifacts = []
    type_names = []
    for suffix, node in (("Spec", spec), ("Status", status)):
        if node is None:
            type_names.append(mapper.void_type)
            continue
        resolved = resolver.resolve_object(
            node,
            f"{simple_name}{suffix}",
            package_path,
            path=f"{resource_name}.{suffix.lower()}",
            depth=1,
        )
        type_names.append(resolved.type.qualified_name)
        artifacts.extend(resolved.artifacts)

    spec_type, status_type = type_names
    descriptor = CustomResourceType(
        simple_name=simple_name,
        qualified_name=resource_name,
        group=group,
        version=version,
        scope=scope,
        spec_type=spec_type,
        status_type=status_type,
        base_type=mapper.custom_resource_type(spec_type, status_type),
        interfaces=(mapper.namespaced_marker,) if scope == NAMESPACED else (),
        singular=singular,
        plural=plural,
        storage=storage,
        served=served,
        nested=tuple(artifacts),
        package_path=package_path,
        description=description,
    )
    return Resolution(descriptor, tuple(artifacts) + (descriptor,))


def compile_crd(resolver: SchemaResolver, document: Dict[str, Any]) -> List[CompilationResult]:
    """
    Compile every version of a CustomResourceDefinition document.

    Args:
        resolver: Resolver configured for the target language
        document: Parsed CRD manifest

    Returns:
        One CompilationResult per version, in manifest order
    """
    crd_spec = document.get("spec") or {}
    names = crd_spec.get("names") or {}
    group = crd_spec.get("group")
    kind = names.get("kind")
    if not group or not kind:
        raise UnsupportedSchemaShapeError(
            "CustomResourceDefinition requires spec.group and spec.names.kind",
            (document.get("metadata") or {}).get("name"),
        )

    scope = crd_spec.get("scope", NAMESPACED)
    base_package = resolver.config.package_overrides.get(group) or group_to_package(group)
    shared_schema = (crd_spec.get("validation") or {}).get("openAPIV3Schema")

    results = []
    for version in _versions(crd_spec):
        version_name = version["name"]
        raw_schema = (version.get("schema") or {}).get("openAPIV3Schema") or shared_schema or {}
        root = SchemaNode.from_dict(raw_schema, kind, resolver.config.max_depth)

        package_path = tuple(
            resolver.sanitizer.package_segment(segment)
            for segment in f"{base_package}.{version_name}".split(".")
            if segment
        )
        resolution = assemble_custom_resource(
            resolver,
            kind,
            package_path,
            group=group,
            version=version_name,
            scope=scope,
            spec=root.properties.get("spec"),
            status=root.properties.get("status"),
            singular=names.get("singular"),
            plural=names.get("plural"),
            storage=bool(version.get("storage", True)),
            served=bool(version.get("served", True)),
            description=root.description,
        )
        result = CompilationResult.from_resolution(resolution)
        logger.info(
            "Compiled %s %s/%s: %d classes, %d enums",
            kind,
            group,
            version_name,
            len(result.top_level_artifacts),
            len(result.inner_artifacts),
        )
        results.append(result)

    return results


def _versions(crd_spec: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Versions of a CRD, accepting the legacy single-version layout."""
    versions = crd_spec.get("versions")
    if versions:
        return list(versions)
    if crd_spec.get("version"):
        return [{"name": crd_spec["version"], "served": True, "storage": True}]
    raise UnsupportedSchemaShapeError("CustomResourceDefinition declares no versions")
