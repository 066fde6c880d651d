"""depindex exception hierarchy.

All public exceptions inherit from DepIndexError, giving callers a single
base class to catch when they want to handle any depindex-specific failure
without swallowing unrelated errors.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from depindex.core.index.models import LibraryVersionKey
    from depindex.core.index.resolver import CandidateConflict


class DepIndexError(Exception):
    """Base exception for all depindex errors."""


class UnknownLibraryError(DepIndexError):
    """Raised when a dependency names a library version that is not registered.

    The index is left unchanged. Register the missing keys with
    ``add_library`` and retry.

    Attributes:
        missing: Every unregistered endpoint of the rejected edge.
    """

    def __init__(self, missing: tuple[LibraryVersionKey, ...]) -> None:
        self.missing = missing
        names = ", ".join(str(key) for key in missing)
        super().__init__(f"Unknown library version(s): {names}")


class ResolutionError(DepIndexError):
    """Raised when dependency resolution fails.

    Covers roots with no registered versions and dependency graphs in
    which no candidate root version yields a consistent configuration.
    """


class NoSuchLibraryError(ResolutionError):
    """Raised when the resolution root has no registered versions."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"No versions registered for library {name!r}")


class UnsatisfiableGraphError(ResolutionError):
    """Raised when every candidate root version leads to a version conflict.

    Attributes:
        root: The library that was being resolved.
        conflicts: One ``CandidateConflict`` per rejected candidate, in the
            order the candidates were tried.
    """

    def __init__(self, root: str, conflicts: list[CandidateConflict]) -> None:
        self.root = root
        self.conflicts = conflicts
        super().__init__(
            f"No consistent configuration exists for {root!r} "
            f"({len(conflicts)} candidate version(s) rejected)"
        )


class ManifestError(DepIndexError):
    """Raised when a dependency manifest cannot be loaded.

    Covers unreadable files, malformed YAML, unexpected structure and
    version strings that are not valid semantic versions.
    """
