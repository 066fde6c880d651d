"""Value types shared by the library index and the resolver.

Defines the graph node (``LibraryVersionKey``), the graph edge
(``DependencyEdge``), the per-library version container (``VersionList``)
and the resolver's output (``Configuration``). These are plain data holders
with no resolution logic, safe to import from anywhere in the package.
"""

from __future__ import annotations

import bisect
import json
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, overload

from depindex.core.index.version import Version

# ---------------------------------------------------------------------------
# LibraryVersionKey & DependencyEdge: Nodes and edges of the pin graph
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LibraryVersionKey:
    """One published artifact: a library name at an exact version.

    Attributes:
        name: Case-sensitive library name.
        version: The exact published version.
    """

    name: str
    version: Version

    def __str__(self) -> str:
        return f"{self.name}:{self.version}"


@dataclass(frozen=True)
class DependencyEdge:
    """A pin: ``source`` requires exactly ``target``.

    Attributes:
        source: The requiring artifact.
        target: The required artifact.
    """

    source: LibraryVersionKey
    target: LibraryVersionKey

    def __str__(self) -> str:
        return f"{self.source} -> {self.target}"


def parse_key(text: str) -> LibraryVersionKey:
    """Parse ``"Name:Version"`` text into a ``LibraryVersionKey``.

    Args:
        text: Library spec such as ``"Root:1.0.0"``.

    Returns:
        The parsed key.

    Raises:
        ValueError: If the text is not exactly one name and one valid
            semantic version separated by a colon.
    """
    parts = text.split(":")
    if len(parts) != 2 or not parts[0].strip():
        raise ValueError(f"Invalid library spec: {text!r}")
    return LibraryVersionKey(parts[0].strip(), Version.parse(parts[1]))


# ---------------------------------------------------------------------------
# VersionList: Registered versions of one library
# ---------------------------------------------------------------------------


class VersionList(Sequence[Version]):
    """Ordered, duplicate-free versions of one library, ascending by precedence.

    Callers receive instances from ``LibraryIndex.versions`` as a read-only
    view; only the index inserts into them.
    """

    __slots__ = ("_items",)

    def __init__(self, versions: Sequence[Version] = ()) -> None:
        self._items: list[Version] = []
        for version in versions:
            self._insert(version)

    def _insert(self, version: Version) -> bool:
        """Insert *version* at its sorted position. Returns False if present."""
        pos = bisect.bisect_left(self._items, version)
        if pos < len(self._items) and self._items[pos] == version:
            return False
        self._items.insert(pos, version)
        return True

    def _find(self, version: Version) -> Version | None:
        """Return the stored version equal to *version*, or None."""
        pos = bisect.bisect_left(self._items, version)
        if pos < len(self._items) and self._items[pos] == version:
            return self._items[pos]
        return None

    def __len__(self) -> int:
        return len(self._items)

    @overload
    def __getitem__(self, index: int) -> Version: ...

    @overload
    def __getitem__(self, index: slice) -> list[Version]: ...

    def __getitem__(self, index):
        return self._items[index]

    def __iter__(self) -> Iterator[Version]:
        return iter(self._items)

    def __contains__(self, version: object) -> bool:
        return isinstance(version, Version) and self._find(version) is not None

    def __eq__(self, other: object) -> bool:
        if isinstance(other, VersionList):
            return self._items == other._items
        if isinstance(other, (list, tuple)):
            return self._items == list(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    @property
    def latest(self) -> Version | None:
        """The highest registered version, or None if the list is empty."""
        return self._items[-1] if self._items else None

    def __repr__(self) -> str:
        return f"VersionList([{', '.join(str(v) for v in self._items)}])"


# ---------------------------------------------------------------------------
# Configuration: The resolver's output
# ---------------------------------------------------------------------------


class Configuration(Mapping[str, Version]):
    """An immutable library-name -> version assignment from one resolution.

    Contains exactly the libraries reachable from the chosen root version,
    one version each.

    Example::

        config = index.resolve("Root")
        config["A"]          # Version('1.0.0')
        config.root_version  # the chosen candidate
    """

    __slots__ = ("_root", "_assignment")

    def __init__(self, root: str, assignment: Mapping[str, Version]) -> None:
        if root not in assignment:
            raise ValueError(f"Configuration does not assign its root {root!r}")
        self._root = root
        self._assignment: dict[str, Version] = dict(assignment)

    @property
    def root(self) -> str:
        """Name of the library this configuration was resolved for."""
        return self._root

    @property
    def root_version(self) -> Version:
        """The candidate root version that produced this configuration."""
        return self._assignment[self._root]

    def key_for(self, name: str) -> LibraryVersionKey:
        """Return the ``LibraryVersionKey`` chosen for *name*."""
        return LibraryVersionKey(name, self._assignment[name])

    def __getitem__(self, name: str) -> Version:
        return self._assignment[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._assignment)

    def __len__(self) -> int:
        return len(self._assignment)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a dict with libraries sorted by name and versions as text."""
        return {
            "root": self._root,
            "libraries": {
                name: str(self._assignment[name]) for name in sorted(self._assignment)
            },
        }

    def to_json(self, indent: int = 2) -> str:
        """Serialize to deterministic JSON (sorted keys)."""
        return json.dumps(self.to_dict(), indent=indent, sort_keys=True)

    def __repr__(self) -> str:
        pairs = ", ".join(f"{n}: {self._assignment[n]}" for n in sorted(self._assignment))
        return f"Configuration(root={self._root!r}, {{{pairs}}})"
