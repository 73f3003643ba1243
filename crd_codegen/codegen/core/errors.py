"""
Exception hierarchy for schema compilation.

Every failure raised while turning a schema into descriptors is fatal
for the top-level compilation that triggered it.
"""

from typing import Iterable, Optional


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        if path:
            message = f"{message} (at {path})"
        super().__init__(message)


class DuplicateFieldError(GeneratorError):
    """Raised when property names collapse onto the same identifier."""

    def __init__(self, identifier: str, names: Iterable[str], path: Optional[str] = None):
        self.identifier = identifier
        self.names = tuple(names)
        quoted = ", ".join(f"'{name}'" for name in self.names)
        super().__init__(
            f"Properties {quoted} all map to field '{identifier}' and cannot be "
            f"reduced to a single non-deprecated field",
            path,
        )


class DuplicateEnumEntryError(DuplicateFieldError):
    """Raised when two enum values produce the same constant name."""

    def __init__(self, identifier: str, names: Iterable[str], path: Optional[str] = None):
        self.identifier = identifier
        self.names = tuple(names)
        quoted = ", ".join(f"'{name}'" for name in self.names)
        GeneratorError.__init__(
            self, f"Enum values {quoted} all map to constant '{identifier}'", path
        )


class DuplicateTypeError(DuplicateFieldError):
    """Raised when two generated classes or enums share a qualified name."""

    def __init__(self, type_name: str, names: Iterable[str] = (), path: Optional[str] = None):
        self.identifier = type_name
        self.names = tuple(names)
        if self.names:
            quoted = ", ".join(f"'{name}'" for name in self.names)
            message = f"Properties {quoted} all generate type '{type_name}'"
        else:
            message = f"Type '{type_name}' is generated more than once"
        GeneratorError.__init__(self, message, path)


class UnsupportedSchemaShapeError(GeneratorError):
    """Raised for a kind/format combination without a resolver."""

    pass


class RecursionLimitError(GeneratorError):
    """Raised when schema nesting goes deeper than the configured limit."""

    def __init__(self, limit: int, path: Optional[str] = None):
        self.limit = limit
        super().__init__(
            f"Schema nesting exceeds {limit} levels; cyclic schema suspected", path
        )


class ConfigurationError(GeneratorError):
    """Exception raised for configuration-related errors."""

    pass
