"""
Java code generator module.

Generates fabric8 Kubernetes model classes from compiled CRD descriptors.
"""

from .generator import JavaGenerator
from .naming import JAVA_RESERVED_WORDS, create_java_sanitizer
from .types import JavaTypeConfig, JavaTypeMapper

__all__ = [
    "JavaGenerator",
    "JavaTypeConfig",
    "JavaTypeMapper",
    "JAVA_RESERVED_WORDS",
    "create_java_sanitizer",
    "create_generator",
]


def create_generator(**options):
    """
    Create a Java generator from keyword options.

    Args:
        **options: GeneratorConfig fields or their camelCase names

    Returns:
        Configured JavaGenerator instance
    """
    from ...core.config import load_config

    return JavaGenerator(load_config("java", custom_config=options))
