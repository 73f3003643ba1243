"""Shared fixtures for the CRD code generator tests."""

from __future__ import annotations

import copy
from typing import Any

import pytest

from crd_codegen.codegen.core.config import GeneratorConfig
from crd_codegen.codegen.core.resolver import SchemaResolver
from crd_codegen.codegen.languages.java import JavaTypeMapper, create_java_sanitizer


# ---------------------------------------------------------------------------
# Resolvers
# ---------------------------------------------------------------------------

@pytest.fixture
def sanitizer():
    return create_java_sanitizer()


@pytest.fixture
def make_resolver():
    """Build a Java resolver for a config built from keyword options."""

    def factory(**options: Any) -> SchemaResolver:
        return SchemaResolver(GeneratorConfig(**options), create_java_sanitizer(), JavaTypeMapper())

    return factory


@pytest.fixture
def resolver(make_resolver):
    return make_resolver()


# ---------------------------------------------------------------------------
# Sample schemas and manifests
# ---------------------------------------------------------------------------

NESTED_SCHEMA = {
    "type": "object",
    "properties": {
        "o1": {"type": "object", "properties": {"p1": {"type": "string"}}},
        "o2": {
            "type": "object",
            "properties": {
                "o1": {"type": "object", "properties": {"p1": {"type": "string"}}},
                "o2": {"type": "object", "properties": {"p1": {"type": "string"}}},
                "o3": {"type": "object", "properties": {"p1": {"type": "string"}}},
            },
        },
    },
}

CRONTAB_CRD = {
    "apiVersion": "apiextensions.k8s.io/v1",
    "kind": "CustomResourceDefinition",
    "metadata": {"name": "crontabs.test.org"},
    "spec": {
        "group": "test.org",
        "scope": "Namespaced",
        "names": {"kind": "CronTab", "singular": "crontab", "plural": "crontabs"},
        "versions": [
            {
                "name": "v1",
                "served": True,
                "storage": True,
                "schema": {
                    "openAPIV3Schema": {
                        "type": "object",
                        "properties": {
                            "spec": {
                                "type": "object",
                                "required": ["cronSpec"],
                                "properties": {
                                    "cronSpec": {"type": "string"},
                                    "replicas": {
                                        "type": "integer",
                                        "format": "int32",
                                        "minimum": 0,
                                        "default": 1,
                                    },
                                    "mode": {"type": "string", "enum": ["foo", "bar"], "default": "foo"},
                                    "suspend": {"type": "boolean", "nullable": True},
                                },
                            },
                            "status": {
                                "type": "object",
                                "properties": {"ready": {"type": "boolean"}},
                            },
                        },
                    }
                },
            }
        ],
    },
}


@pytest.fixture
def nested_schema():
    return copy.deepcopy(NESTED_SCHEMA)


@pytest.fixture
def crontab_crd():
    return copy.deepcopy(CRONTAB_CRD)
