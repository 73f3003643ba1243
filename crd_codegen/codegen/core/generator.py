"""
Base generator interface for all code generation targets.

Defines the contract that all language backends must implement. A
backend receives compiled descriptors and emits one source unit per
top-level artifact; inner artifacts are embedded in their owner's unit.
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Any, Optional
from pathlib import Path

from ...logging_config import get_logger
from .config import GeneratorConfig, load_config
from .descriptors import Artifact, TypeKind
from .errors import GeneratorError
from .naming import NameSanitizer
from .resolver import SchemaResolver
from .result import CompilationResult
from .templates import TemplateEngine, create_template_engine
from .types import TypeMapper

logger = get_logger(__name__)


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or load_config(self.language_name)
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        self._template_engine = create_template_engine(self.get_template_directory())

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'java')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.java')."""
        pass

    @abstractmethod
    def create_sanitizer(self) -> NameSanitizer:
        """Return the name sanitizer matching this language's keywords."""
        pass

    @abstractmethod
    def create_type_mapper(self) -> TypeMapper:
        """Return the type mapper spelling types in this language."""
        pass

    def create_resolver(self) -> SchemaResolver:
        """Build a schema resolver targeting this language."""
        return SchemaResolver(self.config, self.create_sanitizer(), self.create_type_mapper())

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Subclasses should override this to provide their template directory.
        Return None to use in-memory templates only.
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    def generate(self, result: CompilationResult) -> Dict[str, str]:
        """
        Generate source files for a compilation result.

        Args:
            result: Compiled artifacts of one top-level schema

        Returns:
            Mapping of relative file path to source code, in artifact order
        """
        files = {}
        for artifact in result.top_level_artifacts:
            code = self.generate_single_artifact(artifact, result)
            files[self.get_file_path(artifact)] = self.format_code(code)
        return files

    @abstractmethod
    def generate_single_artifact(self, artifact: Artifact, result: CompilationResult) -> str:
        """
        Generate the source unit for one top-level artifact.

        Args:
            artifact: Class or custom resource to render
            result: Full result, used to look up the artifact's inner types

        Returns:
            Generated code for this artifact
        """
        pass

    def get_file_path(self, artifact: Artifact) -> str:
        """Relative path of the file holding a top-level artifact."""
        parts = [*artifact.package_path, f"{artifact.simple_name}{self.file_extension}"]
        return "/".join(parts)

    def validate_result(self, result: CompilationResult) -> List[str]:
        """
        Collect warnings about a compilation result.

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []

        for artifact in result.top_level_artifacts:
            if artifact.kind == TypeKind.OBJECT and not artifact.fields:
                warnings.append(f"Class '{artifact.qualified_name}' has no fields")
            for field in artifact.fields:
                if field.deprecated:
                    warnings.append(
                        f"Field {artifact.qualified_name}.{field.identifier} is deprecated"
                    )

        return warnings

    def format_code(self, code: str) -> str:
        """
        Apply language-specific formatting to generated code.

        Args:
            code: Raw generated code

        Returns:
            Formatted code
        """
        # Basic cleanup - remove excessive blank lines
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 1:
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return "\n".join(formatted_lines).strip("\n") + "\n"

    # Template helper methods

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a template with context."""
        return self.template_engine.render_template(template_name, context)

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        return self.template_engine.template_exists(template_name)


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self,
        files: Dict[str, str],
        warnings: List[str] = None,
        metadata: Dict[str, Any] = None,
    ):
        """
        Initialize generation result.

        Args:
            files: Generated sources keyed by relative path
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
        """
        self.files = files
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message: Optional[str] = None
        self.exception: Optional[Exception] = None

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(files={})
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def generate_code(
    generator: CodeGenerator, results: Iterable[CompilationResult]
) -> GenerationResult:
    """
    Render compilation results with error handling.

    A failure in any result discards every file, so callers never see
    partial output.

    Args:
        generator: Code generator instance
        results: Compilation results to render

    Returns:
        GenerationResult with files, warnings, and metadata
    """
    results = list(results)
    try:
        warnings = []
        files: Dict[str, str] = {}
        for result in results:
            warnings.extend(generator.validate_result(result))
            files.update(generator.generate(result))

        metadata = {
            "language": generator.language_name,
            "file_extension": generator.file_extension,
            "file_count": len(files),
            "top_level_artifacts": sum(len(r.top_level_artifacts) for r in results),
            "inner_artifacts": sum(len(r.inner_artifacts) for r in results),
        }
        return GenerationResult(files, warnings, metadata)

    except GeneratorError as e:
        logger.error("Code generation failed: %s", e)
        return GenerationResult.error(f"Code generation failed: {e}", exception=e)
