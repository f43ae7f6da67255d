"""Tests for SOURCES manifest discovery, decoding and validation."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from pinwatch.engines.manifest.loader import (
    MANIFEST_NAME,
    discover_manifests,
    load_manifest,
    parse_manifest,
)
from pinwatch.engines.manifest.models import SourceEntry, SourcesConfig
from pinwatch.exceptions import ManifestError

VALID_MANIFEST = """\
Sources:
  - Repo: github.com/foo/bar
    Tag: 1.0.0
  - URL: https://example.com/archive.tar.gz
  - Repo: github.com/baz/qux
    Tag: v2.3
"""


# ── SourceEntry / SourcesConfig ──────────────────────────────────────────


class TestSourceEntry:
    def test_repo_and_tag(self):
        entry = SourceEntry.model_validate({"Repo": "github.com/foo/bar", "Tag": "1.0"})
        assert entry.repo == "github.com/foo/bar"
        assert entry.tag == "1.0"
        assert entry.url is None

    def test_populate_by_field_name(self):
        entry = SourceEntry(url="https://example.com/x")
        assert entry.url == "https://example.com/x"

    def test_rejects_repo_and_url(self):
        with pytest.raises(ValidationError, match="pick one"):
            SourceEntry.model_validate({"Repo": "x", "URL": "y", "Tag": "1"})

    def test_rejects_repo_without_tag(self):
        with pytest.raises(ValidationError, match="must also define a tag"):
            SourceEntry.model_validate({"Repo": "x"})

    def test_rejects_repo_with_empty_tag(self):
        with pytest.raises(ValidationError, match="must also define a tag"):
            SourceEntry.model_validate({"Repo": "x", "Tag": ""})

    def test_rejects_empty_entry(self):
        with pytest.raises(ValidationError, match="either a repo or a url"):
            SourceEntry.model_validate({})

    def test_whitespace_stripped(self):
        entry = SourceEntry.model_validate({"Repo": " github.com/a/b ", "Tag": " 1.0 "})
        assert entry.repo == "github.com/a/b"
        assert entry.tag == "1.0"

    def test_frozen(self):
        entry = SourceEntry(url="https://example.com/x")
        with pytest.raises(ValidationError):
            entry.url = "https://example.com/y"

    def test_tag_only_with_url_is_allowed(self):
        entry = SourceEntry.model_validate({"URL": "https://example.com/x", "Tag": "1.0"})
        assert entry.url == "https://example.com/x"


class TestSourcesConfig:
    def test_defaults_to_empty(self):
        assert SourcesConfig().sources == ()

    def test_null_sources(self):
        assert SourcesConfig.model_validate({"Sources": None}).sources == ()

    def test_preserves_order(self):
        config = SourcesConfig.model_validate(
            {"Sources": [{"URL": "a"}, {"URL": "b"}, {"URL": "c"}]}
        )
        assert [e.url for e in config.sources] == ["a", "b", "c"]


# ── parse_manifest ───────────────────────────────────────────────────────


class TestParseManifest:
    def test_valid(self):
        config = parse_manifest(VALID_MANIFEST)
        assert len(config.sources) == 3
        assert config.sources[0].repo == "github.com/foo/bar"
        assert config.sources[0].tag == "1.0.0"
        assert config.sources[1].url == "https://example.com/archive.tar.gz"
        assert config.sources[2].tag == "v2.3"

    def test_empty_document(self):
        assert parse_manifest("").sources == ()

    def test_lowercase_keys(self):
        content = (
            "sources:\n"
            "  - repo: github.com/foo/bar\n"
            "    tag: 1.0.0\n"
            "  - url: https://example.com/x.tar.gz\n"
        )
        config = parse_manifest(content)
        assert config.sources[0].repo == "github.com/foo/bar"
        assert config.sources[0].tag == "1.0.0"
        assert config.sources[1].url == "https://example.com/x.tar.gz"

    def test_lowercase_keys_still_validated(self):
        with pytest.raises(ManifestError, match="pick one"):
            parse_manifest("sources:\n  - repo: github.com/a/b\n    tag: v1.0\n    url: https://x\n")

    def test_unknown_keys_ignored(self):
        config = parse_manifest("Owner: me\nSources:\n  - URL: https://x\n    Note: hi\n")
        assert config.sources[0].url == "https://x"

    def test_invalid_yaml(self):
        with pytest.raises(ManifestError, match="invalid yaml") as exc_info:
            parse_manifest("Sources: [\n", source="a/SOURCES")
        assert exc_info.value.source == "a/SOURCES"

    def test_top_level_list(self):
        with pytest.raises(ManifestError, match="expected a mapping"):
            parse_manifest("- Repo: x\n")

    def test_sources_not_a_list(self):
        with pytest.raises(ManifestError, match="invalid config"):
            parse_manifest("Sources: 5\n")

    def test_numeric_tag_rejected(self):
        """Unquoted 1.5 is a YAML float; silently stringifying it would lose 1.50."""
        with pytest.raises(ManifestError, match="Sources.0"):
            parse_manifest("Sources:\n  - Repo: github.com/a/b\n    Tag: 1.5\n")

    def test_validation_error_names_entry(self):
        content = "Sources:\n  - URL: https://x\n  - Repo: github.com/a/b\n    URL: https://y\n"
        with pytest.raises(ManifestError) as exc_info:
            parse_manifest(content, source="SOURCES")
        assert "Sources.1" in exc_info.value.reason
        assert "pick one" in exc_info.value.reason

    def test_repo_without_tag(self):
        with pytest.raises(ManifestError, match="must also define a tag"):
            parse_manifest("Sources:\n  - Repo: x\n")


# ── load_manifest / discover_manifests ───────────────────────────────────


class TestLoadManifest:
    def test_load(self, write_manifest):
        path = write_manifest(VALID_MANIFEST)
        assert len(load_manifest(path).sources) == 3

    def test_missing_file(self, tmp_path):
        with pytest.raises(ManifestError, match="unable to read"):
            load_manifest(tmp_path / "SOURCES")

    def test_error_names_path(self, write_manifest):
        path = write_manifest("Sources: [\n")
        with pytest.raises(ManifestError) as exc_info:
            load_manifest(path)
        assert exc_info.value.source == path


class TestDiscoverManifests:
    def test_finds_nested(self, tmp_path, write_manifest):
        write_manifest("", subdir="")
        write_manifest("", subdir="a/b")
        write_manifest("", subdir="c")
        found = discover_manifests(tmp_path)
        assert found == sorted(found)
        assert {p.relative_to(tmp_path).as_posix() for p in found} == {
            "SOURCES",
            "a/b/SOURCES",
            "c/SOURCES",
        }

    def test_exact_name_only(self, tmp_path):
        (tmp_path / "MYSOURCES").write_text("")
        (tmp_path / "SOURCES.bak").write_text("")
        (tmp_path / "sources").mkdir()
        assert discover_manifests(tmp_path) == []

    def test_directories_not_returned(self, tmp_path):
        (tmp_path / MANIFEST_NAME).mkdir()
        (tmp_path / MANIFEST_NAME / MANIFEST_NAME).write_text("")
        found = discover_manifests(tmp_path)
        assert found == [tmp_path / MANIFEST_NAME / MANIFEST_NAME]

    def test_root_is_manifest_file(self, write_manifest):
        path = Path(write_manifest(""))
        assert discover_manifests(path) == [path]

    def test_root_is_other_file(self, tmp_path):
        other = tmp_path / "README"
        other.write_text("")
        assert discover_manifests(other) == []

    def test_missing_root(self, tmp_path):
        with pytest.raises(ManifestError, match="no such file"):
            discover_manifests(tmp_path / "nope")

    def test_empty_tree(self, tmp_path):
        assert discover_manifests(tmp_path) == []
