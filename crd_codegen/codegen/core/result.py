"""
Compilation results.

Flattens a resolution into the ordered lists of artifacts a backend
renders: standalone classes and the enums embedded in them.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from .descriptors import Artifact, CustomResourceType, EnumType, Resolution, TypeDescriptor, TypeKind
from .errors import DuplicateTypeError, UnsupportedSchemaShapeError


@dataclass(frozen=True)
class CompilationResult:
    """Ordered artifacts of one top-level compilation."""

    root: TypeDescriptor
    top_level_artifacts: Tuple[Artifact, ...] = ()
    inner_artifacts: Tuple[EnumType, ...] = ()
    index: Dict[str, Artifact] = field(default_factory=dict)

    @classmethod
    def from_resolution(cls, resolution: Resolution) -> "CompilationResult":
        """
        Split a resolution's artifacts into top-level and inner artifacts.

        The relative order of the resolution is kept, so nested classes
        precede their parents and the root comes last.

        Raises:
            DuplicateTypeError: If two artifacts share a qualified name
        """
        top_level: List[Artifact] = []
        inner: List[EnumType] = []
        index: Dict[str, Artifact] = {}

        for artifact in resolution.artifacts:
            if artifact.qualified_name in index:
                raise DuplicateTypeError(artifact.qualified_name)
            if artifact.kind == TypeKind.ENUM:
                inner.append(artifact)
            elif artifact.kind in (TypeKind.OBJECT, TypeKind.CUSTOM_RESOURCE):
                top_level.append(artifact)
            else:
                raise UnsupportedSchemaShapeError(
                    f"'{artifact.kind.value}' descriptors are not emittable",
                    artifact.qualified_name,
                )
            index[artifact.qualified_name] = artifact

        return cls(
            root=resolution.type,
            top_level_artifacts=tuple(top_level),
            inner_artifacts=tuple(inner),
            index=index,
        )

    @property
    def artifacts(self) -> Tuple[Artifact, ...]:
        return self.top_level_artifacts + self.inner_artifacts

    @property
    def custom_resource(self) -> "CustomResourceType | None":
        """The wrapped custom resource, if this result came from a CRD."""
        if self.root.kind == TypeKind.CUSTOM_RESOURCE:
            return self.root
        return None

    def inner_artifacts_of(self, owner: str) -> Tuple[EnumType, ...]:
        """Enums declared inside the class with the given qualified name."""
        return tuple(enum for enum in self.inner_artifacts if enum.owner == owner)

    def summary(self) -> Dict[str, int]:
        return {
            "top_level": len(self.top_level_artifacts),
            "inner": len(self.inner_artifacts),
            "fields": sum(len(a.fields) for a in self.top_level_artifacts),
        }
