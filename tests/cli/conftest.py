"""Shared fixtures for CLI tests.

Provides manifests describing resolvable, unsatisfiable and malformed
dependency graphs.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click CliRunner for invoking commands."""
    return CliRunner()


@pytest.fixture
def chain_manifest(tmp_path: Path) -> Path:
    """Root 1.0.0 -> A 1.0.0 -> B 2.0.0, plus an unrelated library."""
    path = tmp_path / "deps.yaml"
    path.write_text(
        "libraries:\n"
        "  Root:\n"
        "    1.0.0:\n"
        "      - A:1.0.0\n"
        "  A:\n"
        "    1.0.0:\n"
        "      - B:2.0.0\n"
        "  B:\n"
        "    2.0.0: []\n"
        "  Unrelated:\n"
        "    0.1.0: []\n"
    )
    return path


@pytest.fixture
def cycle_manifest(tmp_path: Path) -> Path:
    """Root and A pin each other so that every Root version loops to the other."""
    path = tmp_path / "cycle.yaml"
    path.write_text(
        "libraries:\n"
        "  Root:\n"
        "    1.0.0:\n"
        "      - A:1.0.0\n"
        "    1.0.1:\n"
        "      - A:1.0.1\n"
        "  A:\n"
        "    1.0.0:\n"
        "      - Root:1.0.1\n"
        "    1.0.1:\n"
        "      - Root:1.0.0\n"
    )
    return path


@pytest.fixture
def broken_manifest(tmp_path: Path) -> Path:
    """A manifest whose version key is not a semantic version."""
    path = tmp_path / "broken.yaml"
    path.write_text("libraries:\n  Root:\n    latest: []\n")
    return path
