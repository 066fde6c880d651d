"""Dependency manifest loading.

Turns declared pins into ``add_library`` / ``add_dependency`` calls on a
``LibraryIndex``. The manifest format is YAML, mapping library names to
versions to the exact pins each version requires::

    libraries:
      Root:
        1.0.0: [A:1.0.0]
        1.0.1:
          - A:1.0.1
      A:
        1.0.0: []
        1.0.1: [Root:1.0.0]

A version with no pins may map to an empty list or to nothing at all.
Every declared version is registered before any pin is added, so pins may
refer to libraries declared further down the file.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from depindex.core.index import LibraryIndex, LibraryVersionKey, Version, parse_key
from depindex.exceptions import ManifestError

logger = logging.getLogger(__name__)


def declare(index: LibraryIndex, spec: str, *pins: str) -> LibraryVersionKey:
    """Register a library and its pins in one shot.

    The library named by *spec* is registered, each pin target is registered
    if it is not already known, and an edge is added for every pin.

    Args:
        index: The index to populate.
        spec: The requiring library as ``"Name:Version"``.
        *pins: Required libraries as ``"Name:Version"``.

    Returns:
        The key parsed from *spec*.

    Raises:
        ValueError: If any spec is not a valid ``Name:Version`` string.
    """
    source = parse_key(spec)
    targets = [parse_key(pin) for pin in pins]
    index.add_library(source.name, source.version)
    for target in targets:
        if not index.contains(target.name, target.version):
            index.add_library(target.name, target.version)
        index.add_dependency(source.name, source.version, target.name, target.version)
    return source


def _parse_version_key(name: str, raw: Any) -> Version:
    # YAML reads ``1.0`` as a float and ``1`` as an int; neither is semver.
    text = str(raw)
    try:
        return Version.parse(text)
    except ValueError as exc:
        raise ManifestError(f"Library {name!r}: {exc}") from exc


def _parse_pins(source: LibraryVersionKey, raw: Any) -> list[LibraryVersionKey]:
    if raw is None:
        return []
    if isinstance(raw, str):
        raw = [raw]
    if not isinstance(raw, list):
        raise ManifestError(
            f"{source}: pins must be a list of 'Name:Version' strings, got {type(raw).__name__}"
        )
    pins: list[LibraryVersionKey] = []
    for item in raw:
        if not isinstance(item, str):
            raise ManifestError(f"{source}: pin {item!r} is not a 'Name:Version' string")
        try:
            pins.append(parse_key(item))
        except ValueError as exc:
            raise ManifestError(f"{source}: {exc}") from exc
    return pins


def build_index(
    data: Any,
    index: LibraryIndex | None = None,
    strict: bool = False,
) -> LibraryIndex:
    """Populate a ``LibraryIndex`` from an already-parsed manifest document.

    Args:
        data: The manifest as loaded from YAML (a mapping with a
            ``libraries`` key).
        index: Index to populate. A new one is created if omitted.
        strict: If True, a pin to a version that no library entry declares
            is an error, raised before the index is touched. Otherwise the target is registered on the fly and
            a warning is logged.

    Returns:
        The populated index.

    Raises:
        ManifestError: If the document structure is invalid, a version is
            not a valid semantic version, or (in strict mode) a pin targets
            an undeclared version.
    """
    if index is None:
        index = LibraryIndex()
    if not isinstance(data, dict) or "libraries" not in data:
        raise ManifestError("Manifest must be a mapping with a 'libraries' key")
    libraries = data["libraries"] or {}
    if not isinstance(libraries, dict):
        raise ManifestError("'libraries' must map library names to versions")

    declared: list[tuple[LibraryVersionKey, list[LibraryVersionKey]]] = []
    for name, versions in libraries.items():
        name = str(name)
        if versions is None:
            versions = {}
        if not isinstance(versions, dict):
            raise ManifestError(f"Library {name!r}: versions must be a mapping")
        for raw_version, raw_pins in versions.items():
            key = LibraryVersionKey(name, _parse_version_key(name, raw_version))
            declared.append((key, _parse_pins(key, raw_pins)))

    if strict:
        known = {key for key, _ in declared}
        for source, pins in declared:
            for target in pins:
                if target not in known and not index.contains(target.name, target.version):
                    raise ManifestError(
                        f"{source} pins {target}, which no library entry declares"
                    )

    for key, _ in declared:
        index.add_library(key.name, key.version)

    for source, pins in declared:
        for target in pins:
            if not index.contains(target.name, target.version):
                logger.warning("%s pins undeclared %s; registering it", source, target)
                index.add_library(target.name, target.version)
            index.add_dependency(source.name, source.version, target.name, target.version)

    logger.debug("Loaded manifest: %r", index)
    return index


def load_manifest(path: str | Path, strict: bool = False) -> LibraryIndex:
    """Read a YAML manifest file into a new ``LibraryIndex``.

    Raises:
        ManifestError: If the file cannot be read or parsed, or its
            contents are invalid (see ``build_index``).
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ManifestError(f"Cannot read manifest {path}: {exc}") from exc
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ManifestError(f"Invalid YAML in {path}: {exc}") from exc
    return build_index(data, strict=strict)
