"""Tests for generator configuration."""

import json

import pytest

from crd_codegen.codegen.core.config import ConfigManager, GeneratorConfig, load_config
from crd_codegen.codegen.core.errors import ConfigurationError


class TestGeneratorConfig:
    """The immutable configuration object."""

    def test_defaults(self):
        config = GeneratorConfig()
        assert config.enum_uppercase is True
        assert config.preserve_unknown_fields is False
        assert config.generated_annotations is True
        assert config.max_depth == 64
        assert dict(config.existing_java_types) == {}

    def test_mappings_are_read_only(self):
        config = GeneratorConfig(existing_java_types={"v1.T": "org.test.T"})
        with pytest.raises(TypeError):
            config.existing_java_types["v1.U"] = "org.test.U"

    def test_caller_mapping_is_copied(self):
        overrides = {"v1.T": "org.test.T"}
        config = GeneratorConfig(existing_java_types=overrides)
        overrides["v1.U"] = "org.test.U"
        assert "v1.U" not in config.existing_java_types

    def test_generic_override_is_valid(self):
        config = GeneratorConfig(existing_java_types={"v1.T": "java.util.Map<java.lang.String, java.lang.Object>"})
        assert config.existing_java_types["v1.T"].startswith("java.util.Map")

    @pytest.mark.parametrize(
        "options",
        [
            {"existing_java_types": {"v1.T": "not a type"}},
            {"existing_java_types": {"1v.T": "org.test.T"}},
            {"existing_java_types": ["v1.T"]},
            {"package_overrides": {"test.org": "org..test"}},
            {"max_depth": 0},
        ],
    )
    def test_invalid_values(self, options):
        with pytest.raises(ConfigurationError):
            GeneratorConfig(**options)

    def test_with_overrides(self):
        config = GeneratorConfig()
        changed = config.with_overrides(enum_uppercase=False)
        assert changed.enum_uppercase is False
        assert config.enum_uppercase is True


class TestConfigManager:
    """Merging defaults, files and overrides."""

    def test_camel_case_options(self):
        config = load_config(
            custom_config={
                "existingJavaTypes": {"v1.T": "org.test.T"},
                "uppercaseEnums": False,
                "alwaysPreserveUnknownFields": True,
                "maxDepth": 10,
            }
        )
        assert dict(config.existing_java_types) == {"v1.T": "org.test.T"}
        assert config.enum_uppercase is False
        assert config.preserve_unknown_fields is True
        assert config.max_depth == 10

    def test_unknown_options_go_to_custom(self):
        config = load_config(custom_config={"licenseHeader": "MIT"})
        assert config.custom["licenseHeader"] == "MIT"

    def test_file_then_overrides(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"enumUppercase": False, "generatedAnnotations": False}), encoding="utf-8")
        config = load_config(config_file=path, custom_config={"generatedAnnotations": True})
        assert config.enum_uppercase is False
        assert config.generated_annotations is True

    def test_save_and_reload(self, tmp_path):
        manager = ConfigManager()
        original = GeneratorConfig(existing_java_types={"v1.T": "org.test.T"}, max_depth=12)
        path = tmp_path / "saved.json"
        manager.save_config(original, path)
        assert manager.get_config(config_file=path) == original

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_config(config_file=tmp_path / "absent.json")

    def test_non_json_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("enumUppercase: false", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_config(config_file=path)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_config(config_file=path)

    def test_list_languages(self):
        assert ConfigManager().list_languages() == ["java"]
