"""Shared fixtures for depindex tests."""

from __future__ import annotations

import pytest

from depindex.core.index import LibraryIndex
from depindex.manifest import declare


@pytest.fixture
def index() -> LibraryIndex:
    """An empty library index."""
    return LibraryIndex()


@pytest.fixture
def divergent_cycle_index() -> LibraryIndex:
    """Two Root and two A versions whose pins always loop back to the other Root.

        Root 1.0.0 -> A 1.0.0 -> Root 1.0.1
        Root 1.0.1 -> A 1.0.1 -> Root 1.0.0
    """
    idx = LibraryIndex()
    declare(idx, "Root:1.0.0", "A:1.0.0")
    declare(idx, "A:1.0.0", "Root:1.0.1")
    declare(idx, "Root:1.0.1", "A:1.0.1")
    declare(idx, "A:1.0.1", "Root:1.0.0")
    return idx
