"""
Configuration management for code generation.

Handles loading and merging configuration from JSON files,
providing defaults and validation for generator settings.
"""

import json
import re
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union
from dataclasses import dataclass, field, fields, replace

from .errors import ConfigurationError
from .schema import DEFAULT_MAX_DEPTH

_QUALIFIED_NAME = re.compile(r"^[A-Za-z_$][\w$]*(\.[A-Za-z_$][\w$]*)*(<.+>)?$")

# camelCase option names accepted from config files and callers
OPTION_ALIASES = {
    "existingJavaTypes": "existing_java_types",
    "preserveUnknownFields": "preserve_unknown_fields",
    "alwaysPreserveUnknownFields": "preserve_unknown_fields",
    "enumUppercase": "enum_uppercase",
    "uppercaseEnums": "enum_uppercase",
    "generatedAnnotations": "generated_annotations",
    "packageOverrides": "package_overrides",
    "maxDepth": "max_depth",
    "addComments": "add_comments",
    "indentSize": "indent_size",
}


@dataclass(frozen=True)
class GeneratorConfig:
    """Immutable settings threaded through every resolution call."""

    # Compiler settings
    existing_java_types: Mapping[str, str] = field(default_factory=dict)
    preserve_unknown_fields: bool = False
    enum_uppercase: bool = True
    package_overrides: Mapping[str, str] = field(default_factory=dict)
    max_depth: int = DEFAULT_MAX_DEPTH

    # Rendering settings (not interpreted by the compiler)
    generated_annotations: bool = True
    add_comments: bool = True
    indent_size: int = 4

    # Custom settings (language-specific)
    custom: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        for name in ("existing_java_types", "package_overrides", "custom"):
            value = getattr(self, name)
            if not isinstance(value, Mapping):
                raise ConfigurationError(
                    f"{name} must be a mapping, got {type(value).__name__}"
                )
            object.__setattr__(self, name, MappingProxyType(dict(value)))

        for source, target in self.existing_java_types.items():
            for name in (source, target):
                if not isinstance(name, str) or not _QUALIFIED_NAME.match(name):
                    raise ConfigurationError(
                        f"Invalid qualified type name in existing_java_types: {name!r}"
                    )

        for group, package in self.package_overrides.items():
            if not isinstance(package, str) or not _QUALIFIED_NAME.match(package):
                raise ConfigurationError(
                    f"Invalid package override for group {group!r}: {package!r}"
                )

        if not isinstance(self.max_depth, int) or self.max_depth < 1:
            raise ConfigurationError(f"max_depth must be a positive integer: {self.max_depth!r}")

    def with_overrides(self, **changes: Any) -> "GeneratorConfig":
        """Return a copy with the given settings replaced."""
        return replace(self, **changes)


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._configs: Dict[str, Dict[str, Any]] = {}
        self._load_defaults()

    def _load_defaults(self):
        """Load default configurations for supported languages."""
        self._configs["java"] = {
            "enum_uppercase": True,
            "generated_annotations": True,
            "add_comments": True,
            "indent_size": 4,
        }

    def get_config(
        self,
        language: str = "java",
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GeneratorConfig:
        """
        Get complete configuration for a language.

        Args:
            language: Target language name
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration for the language
        """
        # Start with defaults
        base_config = dict(self._configs.get(language, {}))

        # Load from file if provided
        if config_file:
            base_config.update(normalize_keys(self._load_config_file(config_file)))

        # Apply custom overrides
        if custom_config:
            base_config.update(normalize_keys(custom_config))

        return self._dict_to_config(base_config)

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigurationError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == ".json":
            raise ConfigurationError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Failed to load configuration file {path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigurationError(f"Configuration file must contain a JSON object: {path}")

        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        known_fields = {f.name for f in fields(GeneratorConfig)}

        config_args: Dict[str, Any] = {}
        custom_args: Dict[str, Any] = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        # Unknown keys end up in the custom dict
        if custom_args:
            existing_custom = dict(config_args.get("custom", {}))
            existing_custom.update(custom_args)
            config_args["custom"] = existing_custom

        return GeneratorConfig(**config_args)

    def save_config(self, config: GeneratorConfig, output_path: Union[str, Path]):
        """Save configuration to JSON file."""
        path = Path(output_path)

        config_dict = {
            "existingJavaTypes": dict(config.existing_java_types),
            "preserveUnknownFields": config.preserve_unknown_fields,
            "enumUppercase": config.enum_uppercase,
            "packageOverrides": dict(config.package_overrides),
            "maxDepth": config.max_depth,
            "generatedAnnotations": config.generated_annotations,
            "addComments": config.add_comments,
            "indentSize": config.indent_size,
        }
        config_dict.update(config.custom)

        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(config_dict, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigurationError(f"Failed to save configuration to {path}: {e}") from e

    def list_languages(self) -> list[str]:
        """Get list of languages with default settings."""
        return list(self._configs.keys())


def normalize_keys(options: Mapping[str, Any]) -> Dict[str, Any]:
    """Translate camelCase option names into GeneratorConfig field names."""
    return {OPTION_ALIASES.get(key, key): value for key, value in options.items()}


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(
    language: str = "java",
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        language: Target language name
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration for the language
    """
    manager = get_config_manager()
    return manager.get_config(language, custom_config, config_file)
