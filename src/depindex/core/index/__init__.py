"""Library index and pinned-dependency resolution.

This package implements the registry of published library versions, the
directed graph of exact-version pins between them, and the resolver that
turns that graph into one consistent configuration for a root library. All
public names are re-exported here, so ``from depindex.core.index import X``
is the supported import path.

Formal Definition
-----------------
An index is a pair I = (K, E) where:

- **K** = set of registered keys (name, version), grouped by name
- **E** ⊆ K x K = pins, (k1, k2) meaning "k1 requires exactly k2"

A configuration for root r is a map C: names -> versions with r in C such
that for every (n, C(n)) and every pin ((n, C(n)), (m, w)) in E, C(m) = w,
and whose domain is exactly the names reachable from (r, C(r)).
"""

from depindex.core.index.version import Version, parse_version
from depindex.core.index.models import (
    Configuration,
    DependencyEdge,
    LibraryVersionKey,
    VersionList,
    parse_key,
)
from depindex.core.index.graph import LibraryIndex
from depindex.core.index.resolver import (
    CandidateConflict,
    Resolution,
    Resolver,
)

__all__ = [
    "Version",
    "parse_version",
    "LibraryVersionKey",
    "DependencyEdge",
    "VersionList",
    "Configuration",
    "parse_key",
    "LibraryIndex",
    "CandidateConflict",
    "Resolution",
    "Resolver",
]
