"""Tests for the Java rendering backend and the generator registry."""

import pytest

from crd_codegen.codegen import compile_crd, compile_schema, generate_from_crd, get_generator
from crd_codegen.codegen.core.errors import DuplicateTypeError
from crd_codegen.codegen.core.generator import generate_code
from crd_codegen.codegen.core.templates import TemplateError
from crd_codegen.codegen.languages.java import JavaGenerator
from crd_codegen.codegen.registry import (
    GeneratorRegistry,
    RegistryError,
    get_language_info,
    list_supported_languages,
)


@pytest.fixture
def files(crontab_crd):
    result = generate_from_crd(crontab_crd)
    assert result.success, result.error_message
    return result.files


class TestRegistry:
    """Looking up generators by name."""

    def test_java_is_registered(self):
        assert "java" in list_supported_languages()
        assert isinstance(get_generator("java"), JavaGenerator)

    def test_aliases(self):
        assert isinstance(get_generator("fabric8"), JavaGenerator)
        assert get_language_info("JVM")["name"] == "java"

    def test_unknown_language(self):
        with pytest.raises(RegistryError):
            get_generator("cobol")

    def test_config_dict(self):
        generator = get_generator("java", {"generatedAnnotations": False})
        assert generator.config.generated_annotations is False

    def test_alias_cannot_shadow_language(self):
        registry = GeneratorRegistry()
        registry.register("java", JavaGenerator)
        with pytest.raises(RegistryError):
            registry.register("kotlin", JavaGenerator, aliases=["java"])

    def test_rejects_non_generator(self):
        with pytest.raises(RegistryError):
            GeneratorRegistry().register("java", dict)


class TestFileLayout:
    """One compilation unit per top-level class."""

    def test_paths_follow_packages(self, files):
        assert list(files) == [
            "org/test/v1/CronTabSpec.java",
            "org/test/v1/CronTabStatus.java",
            "org/test/v1/CronTab.java",
        ]

    def test_nested_classes_get_their_own_files(self, nested_schema):
        generator = get_generator("java")
        generated = generator.generate(compile_schema(nested_schema, "T", "v1alpha1"))
        assert "v1alpha1/t/o2/O3.java" in generated
        assert generated["v1alpha1/t/o2/O3.java"].startswith("package v1alpha1.t.o2;")

    def test_metadata(self, crontab_crd):
        result = generate_from_crd(crontab_crd)
        assert result.metadata["language"] == "java"
        assert result.metadata["file_count"] == 3
        assert result.metadata["inner_artifacts"] == 1


class TestCustomResourceClass:
    """Rendering of the custom resource class."""

    def test_declaration(self, files):
        code = files["org/test/v1/CronTab.java"]
        assert "package org.test.v1;" in code
        assert (
            "public class CronTab extends io.fabric8.kubernetes.client.CustomResource"
            "<org.test.v1.CronTabSpec, org.test.v1.CronTabStatus>"
            " implements io.fabric8.kubernetes.api.model.Namespaced {"
        ) in code

    def test_annotations(self, files):
        code = files["org/test/v1/CronTab.java"]
        assert '@io.fabric8.kubernetes.model.annotation.Version(value = "v1", storage = true, served = true)' in code
        assert '@io.fabric8.kubernetes.model.annotation.Group("test.org")' in code
        assert '@io.fabric8.kubernetes.model.annotation.Singular("crontab")' in code
        assert '@io.fabric8.kubernetes.model.annotation.Plural("crontabs")' in code

    def test_cluster_scoped_resource(self, crontab_crd):
        crontab_crd["spec"]["scope"] = "Cluster"
        code = generate_from_crd(crontab_crd).files["org/test/v1/CronTab.java"]
        assert "Namespaced" not in code

    def test_generated_annotation_toggle(self, crontab_crd, files):
        assert '@javax.annotation.processing.Generated("crd_codegen")' in files["org/test/v1/CronTab.java"]
        result = generate_from_crd(crontab_crd, config={"generatedAnnotations": False})
        assert "Generated" not in result.files["org/test/v1/CronTab.java"]


class TestFields:
    """Rendering of fields and their annotations."""

    def test_property_and_accessors(self, files):
        code = files["org/test/v1/CronTabSpec.java"]
        assert '@com.fasterxml.jackson.annotation.JsonProperty("cronSpec")' in code
        assert "private java.lang.String cronSpec;" in code
        assert "public java.lang.String getCronSpec() {" in code
        assert "public void setCronSpec(java.lang.String cronSpec) {" in code

    def test_property_order(self, files):
        code = files["org/test/v1/CronTabSpec.java"]
        assert (
            '@com.fasterxml.jackson.annotation.JsonPropertyOrder({ "cronSpec", "replicas", "mode", "suspend" })'
        ) in code

    def test_required_and_bounds(self, files):
        code = files["org/test/v1/CronTabSpec.java"]
        assert "@io.fabric8.generator.annotation.Required" in code
        assert "@io.fabric8.generator.annotation.Min(0)" in code

    def test_nullable(self, files):
        code = files["org/test/v1/CronTabSpec.java"]
        assert "@io.fabric8.generator.annotation.Nullable" in code
        assert "nulls = com.fasterxml.jackson.annotation.Nulls.SET" in code
        assert "nulls = com.fasterxml.jackson.annotation.Nulls.SKIP" in code

    def test_defaults(self, files):
        code = files["org/test/v1/CronTabSpec.java"]
        assert "private java.lang.Integer replicas = 1;" in code
        assert (
            "private org.test.v1.CronTabSpec.Mode mode = org.test.v1.CronTabSpec.Mode.FOO;"
        ) in code

    def test_big_integer_default(self):
        result = compile_schema(
            {"type": "object", "properties": {"size": {"type": "integer", "default": 5}}}, "T", "v1"
        )
        code = get_generator("java").generate(result)["v1/T.java"]
        assert 'private java.math.BigInteger size = new java.math.BigInteger("5");' in code

    def test_unrenderable_default_warns(self):
        result = compile_schema(
            {"type": "object", "properties": {"tags": {"type": "array", "items": {"type": "string"}, "default": []}}},
            "T",
            "v1",
        )
        generation = generate_code(get_generator("java"), [result])
        assert generation.success
        assert any("v1.T.tags" in warning for warning in generation.warnings)
        assert "private java.util.List<java.lang.String> tags;" in generation.files["v1/T.java"]

    def test_additional_properties_accessors(self):
        result = compile_schema(
            {"type": "object", "x-kubernetes-preserve-unknown-fields": True, "properties": {"a": {"type": "string"}}},
            "T",
            "v1",
        )
        code = get_generator("java").generate(result)["v1/T.java"]
        assert "@com.fasterxml.jackson.annotation.JsonAnyGetter" in code
        assert "public void setAdditionalProperty(java.lang.String key, java.lang.Object value) {" in code
        assert "new java.util.LinkedHashMap<>()" in code

    def test_description_comment(self):
        result = compile_schema(
            {"type": "object", "properties": {"a": {"type": "string", "description": "The a value"}}}, "T", "v1"
        )
        code = get_generator("java").generate(result)["v1/T.java"]
        assert "     * The a value" in code
        code = get_generator("java", {"addComments": False}).generate(result)["v1/T.java"]
        assert "/**" not in code


class TestEnums:
    """Inner enums rendered inside their owner."""

    def test_inner_enum(self, files):
        code = files["org/test/v1/CronTabSpec.java"]
        assert "    public enum Mode {" in code
        assert '        FOO("foo"),' in code
        assert '        BAR("bar");' in code
        assert "private final java.lang.String value;" in code

    def test_enum_only_in_owner_file(self, files):
        assert "enum Mode" not in files["org/test/v1/CronTab.java"]
        assert "enum Mode" not in files["org/test/v1/CronTabStatus.java"]

    def test_long_enum(self):
        result = compile_schema(
            {"type": "object", "properties": {"level": {"type": "integer", "format": "int64", "enum": [1, 2]}}},
            "T",
            "v1",
        )
        code = get_generator("java").generate(result)["v1/T.java"]
        assert "V__1(1L)," in code
        assert "private final java.lang.Long value;" in code


class TestGenerateCode:
    """Error handling around rendering."""

    def test_failure_returns_no_files(self, crontab_crd):
        class BrokenGenerator(JavaGenerator):
            def generate_single_artifact(self, artifact, result):
                raise TemplateError("boom", artifact.qualified_name)

        results = compile_crd(crontab_crd)
        generation = generate_code(BrokenGenerator(), results)
        assert generation.success is False
        assert generation.files == {}
        assert "boom" in generation.error_message
        assert isinstance(generation.exception, TemplateError)

    def test_format_code_collapses_blank_lines(self):
        generator = get_generator("java")
        assert generator.format_code("a  \n\n\n\nb\n\n") == "a\n\nb\n"

    def test_enum_name_clash_stops_before_rendering(self, crontab_crd):
        spec = crontab_crd["spec"]["versions"][0]["schema"]["openAPIV3Schema"]["properties"]["spec"]
        spec["properties"]["Mode"] = {"type": "string", "enum": ["baz"]}
        with pytest.raises(DuplicateTypeError) as exc_info:
            generate_from_crd(crontab_crd)
        assert exc_info.value.identifier == "org.test.v1.CronTabSpec.Mode"
