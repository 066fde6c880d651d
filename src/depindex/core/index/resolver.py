"""Single-root configuration resolution over a ``LibraryIndex``.

Because every edge is an exact pin, the only real choice in the whole graph
is which version of the root to start from. Every other library's version is
forced the first time a pin reaches it. Resolution therefore runs one
breadth-first traversal per candidate root version, in ascending order, and
returns the first candidate whose closure is consistent.

Within one candidate the assignment map doubles as the visited set: a
library is expanded exactly once, when it is first assigned. A pin into an
already-assigned library either agrees (nothing to do, which is what
terminates cycles) or disagrees (the candidate is abandoned). There is no
backtracking inside a candidate, so the worst case is O(V * E) over all
candidates.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field

from depindex.core.index.graph import LibraryIndex
from depindex.core.index.models import Configuration, LibraryVersionKey
from depindex.core.index.version import Version
from depindex.exceptions import NoSuchLibraryError, UnsatisfiableGraphError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# CandidateConflict & Resolution: Outcome records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CandidateConflict:
    """Why one candidate root version was rejected.

    Attributes:
        candidate: The root key the traversal started from.
        requirer: The key whose pin could not be honoured.
        library: The library that was pinned to two different versions.
        assigned: The version already chosen for ``library``.
        required: The version ``requirer`` demands.
    """

    candidate: LibraryVersionKey
    requirer: LibraryVersionKey
    library: str
    assigned: Version
    required: Version

    def describe(self) -> str:
        """Human-readable one-line explanation."""
        return (
            f"candidate {self.candidate}: {self.requirer} requires "
            f"{self.library}:{self.required} but {self.library} is already "
            f"pinned to {self.assigned}"
        )


@dataclass
class Resolution:
    """Result of a resolution attempt.

    Attributes:
        root: The library that was resolved.
        success: True if a consistent configuration was found.
        configuration: The configuration, or None on failure.
        conflicts: One entry per candidate rejected before the outcome was
            reached, in the order tried.
    """

    root: str
    success: bool
    configuration: Configuration | None = None
    conflicts: list[CandidateConflict] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Resolver
# ---------------------------------------------------------------------------


class Resolver:
    """Finds one consistent version per reachable library for a root.

    Candidates are tried in ascending version order and the first consistent
    one wins. When several root versions would each resolve, the lowest is
    returned.

    The resolver only reads the index. It keeps no state between calls, so
    concurrent resolutions over an index that is not being modified are
    safe. ``LibraryIndex.resolve`` additionally excludes concurrent
    registration.

    Args:
        index: The registry to resolve against.
    """

    def __init__(self, index: LibraryIndex) -> None:
        self._index = index

    def resolve(self, root: str) -> Configuration:
        """Resolve ``root`` into a ``Configuration``.

        Raises:
            NoSuchLibraryError: If ``root`` has no registered versions.
            UnsatisfiableGraphError: If every candidate root version leads
                to a library being pinned to two different versions.
        """
        resolution = self.attempt(root)
        if resolution.configuration is None:
            raise UnsatisfiableGraphError(root, resolution.conflicts)
        return resolution.configuration

    def attempt(self, root: str) -> Resolution:
        """Resolve ``root``, reporting unsatisfiability instead of raising.

        Raises:
            NoSuchLibraryError: If ``root`` has no registered versions.
        """
        candidates = list(self._index.versions(root))
        if not candidates:
            raise NoSuchLibraryError(root)

        conflicts: list[CandidateConflict] = []
        for candidate in candidates:
            assignment, conflict = self._traverse(root, candidate)
            if conflict is None:
                logger.debug(
                    "Resolved %s at %s (%d libraries)", root, candidate, len(assignment)
                )
                return Resolution(
                    root=root,
                    success=True,
                    configuration=Configuration(root, assignment),
                    conflicts=conflicts,
                )
            logger.debug("Rejected %s", conflict.describe())
            conflicts.append(conflict)

        logger.debug("No consistent configuration for %s", root)
        return Resolution(root=root, success=False, conflicts=conflicts)

    def _traverse(
        self, root: str, candidate: Version
    ) -> tuple[dict[str, Version], CandidateConflict | None]:
        """Expand the closure of ``root@candidate``.

        Returns:
            The assignment built so far and the first conflict found, or
            None if the closure is consistent.
        """
        start = LibraryVersionKey(root, candidate)
        assignment: dict[str, Version] = {root: candidate}
        queue: deque[LibraryVersionKey] = deque([start])

        while queue:
            current = queue.popleft()
            for dep in self._index.dependencies(current.name, current.version):
                assigned = assignment.get(dep.name)
                if assigned is None:
                    assignment[dep.name] = dep.version
                    queue.append(dep)
                elif assigned != dep.version:
                    return assignment, CandidateConflict(
                        candidate=start,
                        requirer=current,
                        library=dep.name,
                        assigned=assigned,
                        required=dep.version,
                    )

        return assignment, None
