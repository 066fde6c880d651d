"""LibraryIndex: the mutable registry of library versions and pinned edges.

The index is a directed graph whose nodes are ``LibraryVersionKey`` values
(grouped by library name into ``VersionList`` containers) and whose edges
are exact-version pins. All registration invariants are enforced here:

- registering a key twice is a no-op;
- an edge may only join keys that are already registered, and a rejected
  edge leaves the index untouched;
- adding the same edge twice is a no-op;
- cycles, including cycles back into another version of the same library,
  are allowed.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from depindex.core.index.models import (
    Configuration,
    DependencyEdge,
    LibraryVersionKey,
    VersionList,
)
from depindex.core.index.version import Version
from depindex.exceptions import UnknownLibraryError

if TYPE_CHECKING:
    from depindex.core.index.resolver import Resolution

logger = logging.getLogger(__name__)


class _ReadWriteLock:
    """Many concurrent readers or one writer.

    Readers are admitted whenever no writer holds the lock, so a reader may
    re-enter ``read()`` from inside another read section. Writers must not
    take ``read()`` or ``write()`` while holding ``write()``.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writing = False

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writing:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if not self._readers:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            while self._writing or self._readers:
                self._cond.wait()
            self._writing = True
        try:
            yield
        finally:
            with self._cond:
                self._writing = False
                self._cond.notify_all()


class LibraryIndex:
    """Registry of library versions and the pins between them.

    Typical use::

        index = LibraryIndex()
        index.add_library("Root", Version.parse("1.0.0"))
        index.add_library("A", Version.parse("1.0.0"))
        index.add_dependency("Root", Version.parse("1.0.0"), "A", Version.parse("1.0.0"))
        config = index.resolve("Root")

    Thread safety: ``add_library`` and ``add_dependency`` take the write side
    of an internal reader/writer lock. ``resolve``, ``attempt`` and the
    query methods take the read side, so resolutions over a stable index
    run in parallel while registration waits for them to finish.
    ``versions`` returns a live view; iterate it under ``resolve`` or copy
    it if other threads may be registering.
    """

    def __init__(self) -> None:
        self._versions: dict[str, VersionList] = {}
        # Outgoing pins per source key. Dict values are unused; the dict acts
        # as an insertion-ordered set of targets.
        self._edges: dict[LibraryVersionKey, dict[LibraryVersionKey, None]] = {}
        self._edge_count = 0
        self._lock = _ReadWriteLock()

    # -- Registration -------------------------------------------------------

    def add_library(self, name: str, version: Version) -> bool:
        """Register ``name`` at ``version``.

        Args:
            name: Library name.
            version: Published version.

        Returns:
            True if the key was newly registered, False if it was already
            present (in which case nothing changes).
        """
        with self._lock.write():
            versions = self._versions.get(name)
            if versions is None:
                versions = self._versions[name] = VersionList()
            added = versions._insert(version)
        if added:
            logger.debug("Registered %s:%s", name, version)
        return added

    def add_dependency(
        self,
        from_name: str,
        from_version: Version,
        to_name: str,
        to_version: Version,
    ) -> bool:
        """Declare that ``from_name@from_version`` requires exactly ``to_name@to_version``.

        Both endpoints are stored with the version spelling they were
        registered under, so build metadata on a pin never leaks into a
        ``Configuration``.

        Args:
            from_name: Name of the requiring library.
            from_version: Version of the requiring library.
            to_name: Name of the required library.
            to_version: The exact required version.

        Returns:
            True if the edge is new, False if it was already recorded.

        Raises:
            UnknownLibraryError: If either endpoint is not registered. The
                index is not modified.
        """
        with self._lock.write():
            requested = (
                LibraryVersionKey(from_name, from_version),
                LibraryVersionKey(to_name, to_version),
            )
            found = [self._registered(key) for key in requested]
            missing = tuple(key for key, hit in zip(requested, found) if hit is None)
            if missing:
                raise UnknownLibraryError(missing)
            source, target = found
            targets = self._edges.setdefault(source, {})
            if target in targets:
                return False
            targets[target] = None
            self._edge_count += 1
        logger.debug("Pinned %s -> %s", source, target)
        return True

    # -- Queries ------------------------------------------------------------

    def _registered(self, key: LibraryVersionKey) -> LibraryVersionKey | None:
        """Return *key* as registered, or None. Caller holds the lock."""
        versions = self._versions.get(key.name)
        if versions is None:
            return None
        version = versions._find(key.version)
        return None if version is None else LibraryVersionKey(key.name, version)

    def contains(self, name: str, version: Version) -> bool:
        """Return True if ``name`` is registered at exactly ``version``."""
        with self._lock.read():
            return self._registered(LibraryVersionKey(name, version)) is not None

    def versions(self, name: str) -> VersionList:
        """Return the registered versions of ``name``, ascending.

        The returned list is a read-only view owned by the index. Unknown
        names yield an empty list.
        """
        with self._lock.read():
            versions = self._versions.get(name)
        return versions if versions is not None else VersionList()

    def dependencies(self, name: str, version: Version) -> list[LibraryVersionKey]:
        """Return the pins declared by ``name@version``, in declaration order.

        Empty for keys with no outgoing edges and for unregistered keys.
        """
        with self._lock.read():
            return list(self._edges.get(LibraryVersionKey(name, version), ()))

    def edges(self) -> Iterator[DependencyEdge]:
        """Iterate every recorded pin as a ``DependencyEdge``.

        The edges are snapshotted when iteration starts.
        """
        with self._lock.read():
            snapshot = [
                DependencyEdge(source, target)
                for source, targets in self._edges.items()
                for target in targets
            ]
        return iter(snapshot)

    @property
    def libraries(self) -> list[str]:
        """Sorted names of every library with at least one registered version."""
        with self._lock.read():
            return sorted(name for name, versions in self._versions.items() if versions)

    @property
    def node_count(self) -> int:
        """Total number of registered (name, version) keys."""
        with self._lock.read():
            return sum(len(versions) for versions in self._versions.values())

    @property
    def edge_count(self) -> int:
        """Total number of distinct pins."""
        return self._edge_count

    def __len__(self) -> int:
        return self.node_count

    def __contains__(self, key: object) -> bool:
        return isinstance(key, LibraryVersionKey) and self.contains(key.name, key.version)

    def __repr__(self) -> str:
        with self._lock.read():
            return (
                f"LibraryIndex(libraries={len(self.libraries)}, "
                f"nodes={self.node_count}, edges={self.edge_count})"
            )

    # -- Resolution ---------------------------------------------------------

    def resolve(self, root: str) -> Configuration:
        """Resolve a consistent configuration rooted at ``root``.

        Holds the read side of the index lock: other resolutions proceed in
        parallel, registration waits. See ``Resolver.resolve`` for the
        algorithm and the errors raised.
        """
        from depindex.core.index.resolver import Resolver

        with self._lock.read():
            return Resolver(self).resolve(root)

    def attempt(self, root: str) -> Resolution:
        """Like ``resolve`` but report unsatisfiability as a ``Resolution``."""
        from depindex.core.index.resolver import Resolver

        with self._lock.read():
            return Resolver(self).attempt(root)
