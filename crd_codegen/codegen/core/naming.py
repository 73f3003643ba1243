"""
Naming utilities for safe code generation.

Handles identifier sanitization, type and package naming, enum constant
naming and the detection of property names that collapse onto the same
identifier.
"""

import re
from typing import Dict, Iterable, List, Set, Tuple
from enum import Enum

from .errors import DuplicateFieldError
from .schema import SchemaNode

_WORD_SPLIT = re.compile(r"[^A-Za-z0-9]+")
_INVALID_CONSTANT_CHARS = re.compile(r"[^A-Za-z0-9_]")


class NamingCase(Enum):
    """Naming styles produced by the sanitizer."""

    FIELD = "field"  # preserved case, e.g. testDup
    TYPE = "type"  # capitalized, e.g. TestDup
    PACKAGE = "package"  # lower case, e.g. testdup


class NameSanitizer:
    """Turns raw schema names into identifiers for a target language."""

    def __init__(self, reserved_words: Set[str] = None, builtin_types: Set[str] = None):
        """
        Initialize name sanitizer.

        Args:
            reserved_words: Set of language reserved words
            builtin_types: Set of builtin type names that might conflict
        """
        self.reserved_words = frozenset(reserved_words or ())
        self.builtin_types = frozenset(builtin_types or ())

    def sanitize_name(self, name: str, target_case: NamingCase = NamingCase.FIELD) -> str:
        """
        Sanitize a name for safe use in the target language.

        Two names that only differ in punctuation or whitespace normalize
        to the same identifier; collision detection relies on this.

        Args:
            name: Original name to sanitize
            target_case: Desired naming style

        Returns:
            Sanitized name safe for use
        """
        identifier = self.to_identifier(name)

        if target_case == NamingCase.TYPE:
            # Drop the reserved-word escape, a capitalized keyword is safe
            if identifier.startswith("_") and identifier[1:2].isalpha():
                identifier = identifier[1:]
            return self._escape(identifier[:1].upper() + identifier[1:])
        if target_case == NamingCase.PACKAGE:
            return self._escape(identifier.lower())
        return identifier

    def to_identifier(self, name: str) -> str:
        """Normalize a raw field name, preserving its case."""
        parts = [part for part in _WORD_SPLIT.split(str(name)) if part]
        if not parts:
            return "field"

        identifier = parts[0] + "".join(part[0].upper() + part[1:] for part in parts[1:])
        if identifier[0].isdigit():
            identifier = f"_{identifier}"
        return self._escape(identifier)

    def type_name(self, name: str) -> str:
        """Capitalized identifier for a generated type."""
        return self.sanitize_name(name, NamingCase.TYPE)

    def package_segment(self, name: str) -> str:
        """Lower-cased identifier for a package path segment."""
        return self.sanitize_name(name, NamingCase.PACKAGE)

    def enum_constant(self, token: str, uppercase: bool = True) -> str:
        """
        Build an enum constant name from a raw literal token.

        Numeric tokens are not valid identifiers and receive a ``V__`` prefix.
        """
        name = _INVALID_CONSTANT_CHARS.sub("_", str(token))
        if not name:
            name = "EMPTY"
        if uppercase:
            name = name.upper()
        if name[0].isdigit() or (name[0] == "_" and str(token)[:1] in "-+"):
            name = f"V__{name}"
        return self._escape(name)

    def _escape(self, name: str) -> str:
        if name in self.reserved_words or name in self.builtin_types:
            return f"_{name}"
        return name


def qualified_name(package_path: Iterable[str], simple_name: str) -> str:
    """Join a package path and a simple name with dots."""
    return ".".join([*package_path, simple_name])


def group_to_package(group: str) -> str:
    """Reverse an API group into a package name (``test.org`` -> ``org.test``)."""
    return ".".join(reversed([segment for segment in group.split(".") if segment]))


def reduce_collisions(
    sanitizer: NameSanitizer, properties: Dict[str, SchemaNode], path: str = ""
) -> List[Tuple[str, str, SchemaNode]]:
    """
    Group properties by identifier and keep exactly one member per group.

    A pair of colliding names is accepted only when exactly one of them is
    marked deprecated; the deprecated member is dropped. Larger groups are
    never accepted.

    Args:
        sanitizer: Sanitizer producing the field identifiers
        properties: Raw property names mapped to their schemas, in order
        path: Location of the owning object, used in error messages

    Returns:
        (identifier, raw_name, schema) triples in property order

    Raises:
        DuplicateFieldError: If a group cannot be reduced to one field
    """
    groups: Dict[str, List[str]] = {}
    for raw_name in properties:
        groups.setdefault(sanitizer.to_identifier(raw_name), []).append(raw_name)

    dropped: Set[str] = set()
    for identifier, names in groups.items():
        if len(names) == 1:
            continue
        survivors = [name for name in names if not properties[name].is_deprecated]
        if len(names) > 2 or len(survivors) != 1:
            raise DuplicateFieldError(identifier, names, path)
        dropped.update(name for name in names if name not in survivors)

    return [
        (sanitizer.to_identifier(raw_name), raw_name, schema)
        for raw_name, schema in properties.items()
        if raw_name not in dropped
    ]
