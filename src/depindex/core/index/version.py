"""Semantic version values and the text parser that produces them.

Versions follow Semantic Versioning 2.0.0: ``MAJOR.MINOR.PATCH`` with
optional pre-release identifiers (``-alpha.1``) and optional build metadata
(``+build.5``). Precedence follows section 11 of the SemVer document:

- major, minor and patch compare numerically;
- a pre-release version has lower precedence than its release;
- pre-release identifiers compare left to right, numeric identifiers
  numerically, alphanumeric ones lexically in ASCII order, numeric below
  alphanumeric, and a shorter identifier list sorts first when all shared
  identifiers are equal;
- build metadata never affects precedence.

Equality and hashing use the same precedence key, so ``1.0.0+a`` and
``1.0.0+b`` are the same version as far as the index is concerned.

References
----------
.. [SemVer] Preston-Werner, T. (2013). "Semantic Versioning 2.0.0."
   https://semver.org/
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import total_ordering

# ---------------------------------------------------------------------------
# Text parsing
# ---------------------------------------------------------------------------

_SEMVER_RE = re.compile(
    r"^(?P<major>0|[1-9]\d*)\.(?P<minor>0|[1-9]\d*)\.(?P<patch>0|[1-9]\d*)"
    r"(?:-(?P<pre>[0-9A-Za-z\-.]+))?"
    r"(?:\+(?P<build>[0-9A-Za-z\-.]+))?$"
)

_IDENTIFIER_RE = re.compile(r"^[0-9A-Za-z\-]+$")


def _split_identifiers(text: str | None, what: str, numeric_strict: bool) -> tuple[str, ...]:
    if text is None:
        return ()
    parts = tuple(text.split("."))
    for part in parts:
        if not _IDENTIFIER_RE.match(part):
            raise ValueError(f"Invalid {what} identifier: {part!r}")
        if numeric_strict and part.isdigit() and len(part) > 1 and part[0] == "0":
            raise ValueError(f"Numeric {what} identifier has a leading zero: {part!r}")
    return parts


def _identifier_key(identifier: str) -> tuple[int, int, str]:
    """Sort key for one pre-release identifier (numeric below alphanumeric)."""
    if identifier.isdigit():
        return (0, int(identifier), "")
    return (1, 0, identifier)


# ---------------------------------------------------------------------------
# Version: An immutable semantic version value
# ---------------------------------------------------------------------------


@total_ordering
@dataclass(frozen=True, eq=False)
class Version:
    """A semantic version, totally ordered by SemVer precedence.

    Attributes:
        major: Major version number.
        minor: Minor version number.
        patch: Patch version number.
        prerelease: Pre-release identifiers (``("rc", "1")`` for ``-rc.1``).
        build: Build metadata identifiers. Ignored by comparison,
            equality and hashing.
    """

    major: int
    minor: int
    patch: int
    prerelease: tuple[str, ...] = ()
    build: tuple[str, ...] = ()
    _key: tuple = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        for label, number in (("major", self.major), ("minor", self.minor), ("patch", self.patch)):
            if not isinstance(number, int) or isinstance(number, bool) or number < 0:
                raise ValueError(f"{label} must be a non-negative integer, got {number!r}")
        object.__setattr__(self, "prerelease", tuple(self.prerelease))
        object.__setattr__(self, "build", tuple(self.build))
        for part in self.prerelease:
            if not _IDENTIFIER_RE.match(part):
                raise ValueError(f"Invalid pre-release identifier: {part!r}")
        for part in self.build:
            if not _IDENTIFIER_RE.match(part):
                raise ValueError(f"Invalid build identifier: {part!r}")

        # A release sorts above every one of its pre-releases.
        if self.prerelease:
            pre_key: tuple = (0, tuple(_identifier_key(p) for p in self.prerelease))
        else:
            pre_key = (1, ())
        object.__setattr__(self, "_key", (self.major, self.minor, self.patch, pre_key))

    @classmethod
    def parse(cls, text: str) -> Version:
        """Parse a semantic version string such as ``"1.2.3-rc.1+build.7"``.

        Args:
            text: Version text. Surrounding whitespace is ignored.

        Returns:
            The parsed ``Version``.

        Raises:
            ValueError: If *text* is not a valid semantic version.
        """
        if not isinstance(text, str):
            raise ValueError(f"Invalid semantic version: {text!r}")
        m = _SEMVER_RE.match(text.strip())
        if not m:
            raise ValueError(f"Invalid semantic version: {text!r}")
        return cls(
            int(m.group("major")),
            int(m.group("minor")),
            int(m.group("patch")),
            _split_identifiers(m.group("pre"), "pre-release", numeric_strict=True),
            _split_identifiers(m.group("build"), "build", numeric_strict=False),
        )

    @property
    def is_prerelease(self) -> bool:
        """True if this version carries pre-release identifiers."""
        return bool(self.prerelease)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key == other._key

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key < other._key

    def __hash__(self) -> int:
        return hash(self._key)

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += "-" + ".".join(self.prerelease)
        if self.build:
            text += "+" + ".".join(self.build)
        return text

    def __repr__(self) -> str:
        return f"Version({str(self)!r})"


def parse_version(text: str) -> Version:
    """Parse version text into a ``Version`` (alias of ``Version.parse``)."""
    return Version.parse(text)
