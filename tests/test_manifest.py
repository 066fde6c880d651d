"""Tests for YAML manifest loading and the one-shot ``declare`` helper."""

from __future__ import annotations

from pathlib import Path

import pytest

from depindex.core.index import LibraryIndex, Version, parse_key
from depindex.exceptions import ManifestError, UnknownLibraryError
from depindex.manifest import build_index, declare, load_manifest


def _v(text: str) -> Version:
    return Version.parse(text)


_MANIFEST = """\
libraries:
  Root:
    1.0.0:
      - A:1.0.0
    1.0.1:
      - A:1.0.1
  A:
    1.0.0:
    1.0.1:
      - Root:1.0.1
"""


class TestDeclare:
    """Tests for declare(index, spec, *pins)."""

    def test_registers_source_and_targets(self, index: LibraryIndex) -> None:
        key = declare(index, "Root:1.0.0", "A:1.0.0", "B:2.0.0")
        assert key == parse_key("Root:1.0.0")
        assert index.contains("A", _v("1.0.0"))
        assert index.contains("B", _v("2.0.0"))
        assert [str(k) for k in index.dependencies("Root", _v("1.0.0"))] == ["A:1.0.0", "B:2.0.0"]

    def test_without_pins_only_registers(self, index: LibraryIndex) -> None:
        declare(index, "Root:1.0.0")
        assert index.node_count == 1
        assert index.edge_count == 0

    def test_repeated_declaration_is_idempotent(self, index: LibraryIndex) -> None:
        declare(index, "Root:1.0.0", "A:1.0.0")
        declare(index, "Root:1.0.0", "A:1.0.0")
        assert index.node_count == 2
        assert index.edge_count == 1

    def test_invalid_spec_leaves_index_empty(self, index: LibraryIndex) -> None:
        with pytest.raises(ValueError):
            declare(index, "Root:1.0.0", "A:one")
        assert index.node_count == 0


class TestBuildIndex:
    """Tests for building an index from a parsed manifest document."""

    def test_basic_document(self) -> None:
        index = build_index({"libraries": {"Root": {"1.0.0": ["A:1.0.0"]}, "A": {"1.0.0": []}}})
        assert index.libraries == ["A", "Root"]
        assert index.edge_count == 1
        assert index.resolve("Root")["A"] == _v("1.0.0")

    def test_forward_references_allowed(self) -> None:
        index = build_index(
            {"libraries": {"Root": {"1.0.0": ["A:2.0.0"]}, "A": {"2.0.0": None}}},
            strict=True,
        )
        assert index.contains("A", _v("2.0.0"))

    def test_single_pin_string(self) -> None:
        index = build_index({"libraries": {"Root": {"1.0.0": "A:1.0.0"}}})
        assert index.dependencies("Root", _v("1.0.0")) == [parse_key("A:1.0.0")]

    def test_undeclared_target_registered_with_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level("WARNING", logger="depindex.manifest"):
            index = build_index({"libraries": {"Root": {"1.0.0": ["A:1.0.0"]}}})
        assert index.contains("A", _v("1.0.0"))
        assert "undeclared A:1.0.0" in caplog.text

    def test_undeclared_target_rejected_in_strict_mode(self) -> None:
        with pytest.raises(ManifestError, match="A:1.0.0"):
            build_index({"libraries": {"Root": {"1.0.0": ["A:1.0.0"]}}}, strict=True)

    def test_strict_failure_leaves_index_unchanged(self, index: LibraryIndex) -> None:
        """A pin rejected in strict mode is caught before anything is registered."""
        index.add_library("Seed", _v("0.1.0"))
        data = {
            "libraries": {
                "Root": {"1.0.0": ["A:1.0.0", "B:1.0.0"]},
                "A": {"1.0.0": []},
            }
        }
        with pytest.raises(ManifestError, match="B:1.0.0"):
            build_index(data, index=index, strict=True)
        assert index.libraries == ["Seed"]
        assert index.node_count == 1
        assert index.edge_count == 0

    def test_strict_accepts_pin_already_in_index(self, index: LibraryIndex) -> None:
        index.add_library("B", _v("1.0.0"))
        build_index({"libraries": {"Root": {"1.0.0": ["B:1.0.0"]}}}, index=index, strict=True)
        assert index.dependencies("Root", _v("1.0.0")) == [parse_key("B:1.0.0")]

    def test_populates_existing_index(self, index: LibraryIndex) -> None:
        index.add_library("B", _v("1.0.0"))
        result = build_index({"libraries": {"Root": {"1.0.0": ["B:1.0.0"]}}}, index=index)
        assert result is index
        assert index.edge_count == 1

    def test_empty_libraries(self) -> None:
        assert build_index({"libraries": None}).node_count == 0

    @pytest.mark.parametrize(
        "data",
        [
            None,
            [],
            {"packages": {}},
            {"libraries": ["Root:1.0.0"]},
            {"libraries": {"Root": ["1.0.0"]}},
            {"libraries": {"Root": {"1.0.0": {"A": "1.0.0"}}}},
            {"libraries": {"Root": {"1.0.0": [42]}}},
        ],
    )
    def test_bad_structure_rejected(self, data: object) -> None:
        with pytest.raises(ManifestError):
            build_index(data)

    @pytest.mark.parametrize("version", [1.0, 1, "1.0", "latest"])
    def test_bad_version_rejected(self, version: object) -> None:
        with pytest.raises(ManifestError, match="Root"):
            build_index({"libraries": {"Root": {version: []}}})

    def test_bad_pin_rejected(self) -> None:
        with pytest.raises(ManifestError, match="Root:1.0.0"):
            build_index({"libraries": {"Root": {"1.0.0": ["A-1.0.0"]}}})

    def test_manifest_error_is_not_unknown_library(self) -> None:
        with pytest.raises(ManifestError) as exc_info:
            build_index({"libraries": {"Root": {"1.0.0": ["A:1.0.0"]}}}, strict=True)
        assert not isinstance(exc_info.value, UnknownLibraryError)


class TestLoadManifest:
    """Tests for reading manifest files from disk."""

    def test_load_yaml_file(self, tmp_path: Path) -> None:
        path = tmp_path / "deps.yaml"
        path.write_text(_MANIFEST)
        index = load_manifest(path)
        assert index.versions("Root") == [_v("1.0.0"), _v("1.0.1")]
        assert index.edge_count == 3
        assert index.resolve("Root") == {"Root": _v("1.0.0"), "A": _v("1.0.0")}

    def test_accepts_string_path(self, tmp_path: Path) -> None:
        path = tmp_path / "deps.yaml"
        path.write_text(_MANIFEST)
        assert load_manifest(str(path)).node_count == 4

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ManifestError, match="Cannot read"):
            load_manifest(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "deps.yaml"
        path.write_text("libraries: [unclosed\n")
        with pytest.raises(ManifestError, match="Invalid YAML"):
            load_manifest(path)

    def test_undecodable_file(self, tmp_path: Path) -> None:
        path = tmp_path / "deps.yaml"
        path.write_bytes(b"libraries:\n  Root:\n    1.0.0: [\xff\xfe]\n")
        with pytest.raises(ManifestError, match="Cannot read"):
            load_manifest(path)
