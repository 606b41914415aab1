"""Gradle version parsing and comparison.

Versions form a total order on ``major.minor[.patch]``; qualifiers such as
``-rc-1`` or ``-milestone-3`` are ignored. ``UNKNOWN`` sorts before every
known version, so an undetectable Gradle version is always treated as older
than any migration target.
"""

from __future__ import annotations

import functools
import re
from dataclasses import dataclass
from typing import Optional

from ..exceptions import VersionParseError
from ..logging_config import get_logger

logger = get_logger(__name__)

UNKNOWN_VERSION = "unknown"

_VERSION_RE = re.compile(r"^(\d+)\.(\d+)(?:\.(\d+))?(?:[-+][0-9A-Za-z.\-+]*)?$")


@functools.total_ordering
@dataclass(frozen=True)
class GradleVersion:
    major: int = 0
    minor: int = 0
    patch: int = 0
    known: bool = True

    @property
    def _key(self) -> tuple[int, ...]:
        if not self.known:
            return (0,)
        return (1, self.major, self.minor, self.patch)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, GradleVersion):
            return NotImplemented
        return self._key < other._key

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GradleVersion):
            return NotImplemented
        return self._key == other._key

    def __hash__(self) -> int:
        return hash(self._key)

    def __str__(self) -> str:
        if not self.known:
            return UNKNOWN_VERSION
        if self.patch:
            return f"{self.major}.{self.minor}.{self.patch}"
        return f"{self.major}.{self.minor}"


UNKNOWN = GradleVersion(known=False)


def parse_version(text: str) -> GradleVersion:
    """Parse a Gradle version string.

    ``"unknown"`` parses to ``UNKNOWN``; anything else that is not
    ``major.minor[.patch]`` raises VersionParseError.
    """
    value = text.strip()
    if value == UNKNOWN_VERSION:
        return UNKNOWN
    m = _VERSION_RE.match(value)
    if m is None:
        raise VersionParseError(text)
    return GradleVersion(int(m.group(1)), int(m.group(2)), int(m.group(3) or 0))


def parse_version_lenient(text: str, warnings: Optional[list[str]] = None) -> GradleVersion:
    """Parse ``text``, degrading to UNKNOWN with a warning when malformed."""
    try:
        return parse_version(text)
    except VersionParseError as e:
        message = f"{e}; treating the Gradle version as unknown (older than any target)"
        logger.warning(message)
        if warnings is not None:
            warnings.append(message)
        return UNKNOWN


def is_older_than(version: GradleVersion, target: GradleVersion) -> bool:
    if not version.known:
        logger.debug(f"Gradle version unknown, assuming older than {target}")
    return version < target


def major_gaps(
    version: GradleVersion, target: GradleVersion, unknown_gap: int = 2
) -> list[tuple[int, int]]:
    """Major-version hops needed to reach ``target``.

    An unknown version is assumed to sit ``unknown_gap`` majors behind.

    >>> major_gaps(parse_version("7.6"), parse_version("9.2.1"))
    [(7, 8), (8, 9)]
    """
    start = version.major if version.known else target.major - unknown_gap
    start = max(start, 0)
    return [(major, major + 1) for major in range(start, target.major)]
