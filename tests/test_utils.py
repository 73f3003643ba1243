"""Tests for manifest loading."""

import pytest
import requests
import yaml

from crd_codegen import utils
from crd_codegen.utils import (
    CRDLoaderError,
    iter_crds,
    load_crds,
    load_manifests,
    load_manifests_from_url,
    parse_manifests,
)


class FakeResponse:
    def __init__(self, text="", status_code=200):
        self.text = text
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code}", response=self)


@pytest.fixture
def crd_file(tmp_path, crontab_crd):
    path = tmp_path / "crontab.yaml"
    path.write_text(yaml.safe_dump_all([crontab_crd, {"kind": "ConfigMap"}]), encoding="utf-8")
    return path


class TestParsing:
    """Multi-document YAML parsing."""

    def test_multiple_documents(self):
        documents = parse_manifests("a: 1\n---\nb: 2\n---\n")
        assert documents == [{"a": 1}, {"b": 2}]

    def test_json_is_accepted(self):
        assert parse_manifests('{"kind": "List", "items": []}') == [{"kind": "List", "items": []}]

    def test_invalid_yaml(self):
        with pytest.raises(CRDLoaderError):
            parse_manifests("a: [1, 2")


class TestSelection:
    """Picking CRDs out of arbitrary documents."""

    def test_skips_other_kinds(self, crontab_crd):
        assert list(iter_crds([{"kind": "Service"}, crontab_crd, "text"])) == [crontab_crd]

    def test_unwraps_lists(self, crontab_crd):
        documents = [{"kind": "CustomResourceDefinitionList", "items": [crontab_crd, crontab_crd]}]
        assert len(list(iter_crds(documents))) == 2


class TestFiles:
    """Loading from the local filesystem."""

    def test_file(self, crd_file, crontab_crd):
        ((source, document),) = load_crds([crd_file])
        assert source == str(crd_file)
        assert document == crontab_crd

    def test_directory_is_sorted(self, tmp_path, crontab_crd):
        (tmp_path / "b.yml").write_text(yaml.safe_dump(crontab_crd), encoding="utf-8")
        (tmp_path / "a.json").write_text('{"kind": "Namespace"}', encoding="utf-8")
        (tmp_path / "notes.txt").write_text("ignored", encoding="utf-8")
        loaded = load_manifests(tmp_path)
        assert [source for source, _ in loaded] == [str(tmp_path / "a.json"), str(tmp_path / "b.yml")]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_crds([tmp_path / "absent.yaml"])


class TestUrls:
    """Loading over HTTP."""

    def test_url(self, monkeypatch, crontab_crd):
        calls = []

        def fake_get(url, timeout):
            calls.append((url, timeout))
            return FakeResponse(yaml.safe_dump(crontab_crd))

        monkeypatch.setattr(utils.requests, "get", fake_get)
        ((source, document),) = load_crds(["https://example.com/crd.yaml"], timeout=5)
        assert source == "https://example.com/crd.yaml"
        assert document["spec"]["group"] == "test.org"
        assert calls == [("https://example.com/crd.yaml", 5)]

    def test_http_error(self, monkeypatch):
        monkeypatch.setattr(utils.requests, "get", lambda url, timeout: FakeResponse(status_code=404))
        with pytest.raises(CRDLoaderError, match="404"):
            load_manifests_from_url("https://example.com/missing.yaml")

    def test_timeout(self, monkeypatch):
        def fake_get(url, timeout):
            raise requests.exceptions.Timeout()

        monkeypatch.setattr(utils.requests, "get", fake_get)
        with pytest.raises(CRDLoaderError, match="timeout"):
            load_manifests_from_url("https://example.com/slow.yaml")

    def test_invalid_url(self):
        with pytest.raises(CRDLoaderError):
            load_manifests_from_url("not-a-url")
