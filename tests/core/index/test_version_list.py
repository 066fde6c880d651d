"""Tests for VersionList ordering, membership and read-only behaviour."""

from __future__ import annotations

import pytest

from depindex.core.index import Version, VersionList


def _v(text: str) -> Version:
    return Version.parse(text)


class TestVersionList:
    """Tests for the ordered, duplicate-free version container."""

    def test_empty(self) -> None:
        vl = VersionList()
        assert len(vl) == 0
        assert list(vl) == []
        assert vl.latest is None
        assert _v("1.0.0") not in vl

    def test_canonical_ascending_order(self) -> None:
        """Versions are kept in ascending precedence regardless of input order."""
        vl = VersionList([_v("2.0.0"), _v("1.0.0-rc.1"), _v("1.0.0"), _v("0.9.5")])
        assert [str(v) for v in vl] == ["0.9.5", "1.0.0-rc.1", "1.0.0", "2.0.0"]
        assert vl.latest == _v("2.0.0")

    def test_duplicates_collapsed(self) -> None:
        vl = VersionList([_v("1.0.0"), _v("1.0.0"), _v("1.0.0+build.1")])
        assert len(vl) == 1

    def test_contains(self) -> None:
        vl = VersionList([_v("1.0.0"), _v("1.0.1")])
        assert _v("1.0.1") in vl
        assert _v("1.0.1+meta") in vl
        assert _v("1.0.2") not in vl
        assert "1.0.1" not in vl

    def test_indexing_and_slicing(self) -> None:
        vl = VersionList([_v("3.0.0"), _v("1.0.0"), _v("2.0.0")])
        assert vl[0] == _v("1.0.0")
        assert vl[-1] == _v("3.0.0")
        assert vl[1:] == [_v("2.0.0"), _v("3.0.0")]

    def test_equality_with_lists_and_version_lists(self) -> None:
        vl = VersionList([_v("1.0.0")])
        assert vl == VersionList([_v("1.0.0")])
        assert vl == [_v("1.0.0")]
        assert vl == (_v("1.0.0"),)
        assert vl != [_v("1.0.1")]

    def test_unhashable(self) -> None:
        with pytest.raises(TypeError):
            hash(VersionList())

    def test_no_public_mutators(self) -> None:
        """The list offers no append/insert/remove to callers."""
        vl = VersionList()
        for attr in ("append", "insert", "remove", "extend", "add"):
            assert not hasattr(vl, attr)

    def test_repr(self) -> None:
        assert repr(VersionList([_v("1.0.0"), _v("0.1.0")])) == "VersionList([0.1.0, 1.0.0])"
