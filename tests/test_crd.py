"""Tests for compiling CustomResourceDefinition documents."""

import pytest

from crd_codegen.codegen import compile_crd
from crd_codegen.codegen.core.crd import assemble_custom_resource
from crd_codegen.codegen.core.errors import UnsupportedSchemaShapeError
from crd_codegen.codegen.core.result import CompilationResult
from crd_codegen.codegen.core.schema import SchemaNode


class TestCustomResource:
    """The custom resource wrapping spec and status."""

    def test_names_and_package(self, crontab_crd):
        (result,) = compile_crd(crontab_crd)
        resource = result.custom_resource
        assert resource.qualified_name == "org.test.v1.CronTab"
        assert resource.package_path == ("org", "test", "v1")
        assert resource.spec_type == "org.test.v1.CronTabSpec"
        assert resource.status_type == "org.test.v1.CronTabStatus"
        assert (resource.group, resource.version) == ("test.org", "v1")
        assert (resource.singular, resource.plural) == ("crontab", "crontabs")

    def test_base_type(self, crontab_crd):
        (result,) = compile_crd(crontab_crd)
        assert result.custom_resource.base_type == (
            "io.fabric8.kubernetes.client.CustomResource"
            "<org.test.v1.CronTabSpec, org.test.v1.CronTabStatus>"
        )

    def test_artifact_order(self, crontab_crd):
        (result,) = compile_crd(crontab_crd)
        assert [a.qualified_name for a in result.top_level_artifacts] == [
            "org.test.v1.CronTabSpec",
            "org.test.v1.CronTabStatus",
            "org.test.v1.CronTab",
        ]
        assert [a.qualified_name for a in result.inner_artifacts] == ["org.test.v1.CronTabSpec.Mode"]

    def test_namespaced_scope_adds_marker(self, crontab_crd):
        (result,) = compile_crd(crontab_crd)
        assert result.custom_resource.interfaces == ("io.fabric8.kubernetes.api.model.Namespaced",)
        assert result.custom_resource.namespaced

    def test_cluster_scope_has_no_marker(self, crontab_crd):
        crontab_crd["spec"]["scope"] = "Cluster"
        (result,) = compile_crd(crontab_crd)
        assert result.custom_resource.interfaces == ()
        assert not result.custom_resource.namespaced

    def test_missing_status_is_void(self, crontab_crd):
        schema = crontab_crd["spec"]["versions"][0]["schema"]["openAPIV3Schema"]
        del schema["properties"]["status"]
        (result,) = compile_crd(crontab_crd)
        assert result.custom_resource.status_type == "java.lang.Void"
        assert "org.test.v1.CronTabStatus" not in result.index

    def test_package_override(self, crontab_crd):
        (result,) = compile_crd(crontab_crd, {"packageOverrides": {"test.org": "com.example"}})
        assert result.custom_resource.qualified_name == "com.example.v1.CronTab"

    def test_existing_spec_type(self, crontab_crd):
        (result,) = compile_crd(
            crontab_crd, {"existingJavaTypes": {"org.test.v1.CronTabSpec": "com.example.Spec"}}
        )
        assert result.custom_resource.spec_type == "com.example.Spec"
        assert "org.test.v1.CronTabSpec" not in result.index


class TestVersions:
    """Version handling across manifest layouts."""

    def test_one_result_per_version(self, crontab_crd):
        v2 = dict(crontab_crd["spec"]["versions"][0], name="v2", storage=False)
        crontab_crd["spec"]["versions"].append(v2)
        results = compile_crd(crontab_crd)
        assert [r.custom_resource.version for r in results] == ["v1", "v2"]
        assert results[1].custom_resource.qualified_name == "org.test.v2.CronTab"
        assert results[1].custom_resource.storage is False

    def test_legacy_single_version_layout(self, crontab_crd):
        schema = crontab_crd["spec"]["versions"][0]["schema"]
        del crontab_crd["spec"]["versions"]
        crontab_crd["spec"]["version"] = "v1beta1"
        crontab_crd["spec"]["validation"] = schema
        (result,) = compile_crd(crontab_crd)
        assert result.custom_resource.qualified_name == "org.test.v1beta1.CronTab"
        assert result.custom_resource.spec_type == "org.test.v1beta1.CronTabSpec"

    def test_no_versions(self, crontab_crd):
        del crontab_crd["spec"]["versions"]
        with pytest.raises(UnsupportedSchemaShapeError):
            compile_crd(crontab_crd)

    def test_missing_group(self, crontab_crd):
        del crontab_crd["spec"]["group"]
        with pytest.raises(UnsupportedSchemaShapeError):
            compile_crd(crontab_crd)


class TestAssembler:
    """Assembling a custom resource from already parsed fragments."""

    def test_without_spec_or_status(self, resolver):
        resolution = assemble_custom_resource(
            resolver, "Widget", ("com", "example", "v1"), group="example.com", version="v1", scope="Cluster"
        )
        result = CompilationResult.from_resolution(resolution)
        resource = result.custom_resource
        assert resource.base_type == (
            "io.fabric8.kubernetes.client.CustomResource<java.lang.Void, java.lang.Void>"
        )
        assert [a.qualified_name for a in result.top_level_artifacts] == ["com.example.v1.Widget"]

    def test_spec_only(self, resolver):
        spec = SchemaNode.from_dict({"type": "object", "properties": {"size": {"type": "integer"}}})
        resolution = assemble_custom_resource(
            resolver, "Widget", ("com", "example", "v1"), group="example.com", version="v1", spec=spec
        )
        assert resolution.type.spec_type == "com.example.v1.WidgetSpec"
        assert resolution.type.status_type == "java.lang.Void"
        assert resolution.type.namespaced

    def test_map_only_spec_keeps_value_type(self, resolver):
        spec = SchemaNode.from_dict({"type": "object", "additionalProperties": {"type": "string"}})
        resolution = assemble_custom_resource(
            resolver, "Widget", ("com", "example", "v1"), group="example.com", version="v1", spec=spec
        )
        result = CompilationResult.from_resolution(resolution)
        spec_class = result.index["com.example.v1.WidgetSpec"]
        assert [f.identifier for f in spec_class.fields] == ["additionalProperties"]
        assert spec_class.fields[0].additional_properties is True
        assert spec_class.fields[0].type.qualified_name == (
            "java.util.Map<java.lang.String, java.lang.String>"
        )
