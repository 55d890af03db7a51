from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import total_ordering

from grel.release.model import VersionBump


# https://semver.org/#is-there-a-suggested-regular-expression-regex-to-check-a-semver-string
_SEMVER_RE = re.compile(
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-((?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+([0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$"
)


@total_ordering
@dataclass(frozen=True, slots=True)
class SemVer:
    major: int
    minor: int
    patch: int
    prerelease: str | None = None
    # Ignored by equality and ordering.
    build: str | None = field(default=None, compare=False)

    def __str__(self) -> str:
        out = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            out += f"-{self.prerelease}"
        if self.build:
            out += f"+{self.build}"
        return out

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, SemVer):
            return NotImplemented
        return self._precedence() < other._precedence()

    def to_tag(self) -> str:
        return f"v{self}"

    def bump(self, kind: VersionBump) -> SemVer:
        """Next version for ``kind``; pre-release and build data are dropped."""
        match kind:
            case VersionBump.MAJOR:
                return SemVer(self.major + 1, 0, 0)
            case VersionBump.MINOR:
                return SemVer(self.major, self.minor + 1, 0)
            case VersionBump.PATCH:
                return SemVer(self.major, self.minor, self.patch + 1)
            case VersionBump.NONE:
                return SemVer(self.major, self.minor, self.patch)
            case _:
                raise AssertionError(f"unexpected bump kind: {kind}")

    def _precedence(self) -> tuple[int, int, int, int, tuple[tuple[int, int, str], ...]]:
        # A release outranks any of its pre-releases; build metadata never counts.
        if self.prerelease is None:
            return (self.major, self.minor, self.patch, 1, ())
        idents: list[tuple[int, int, str]] = []
        for part in self.prerelease.split("."):
            if part.isdigit():
                idents.append((0, int(part), ""))
            else:
                idents.append((1, 0, part))
        return (self.major, self.minor, self.patch, 0, tuple(idents))


ZERO = SemVer(0, 0, 0)


def parse_version(text: str) -> SemVer | None:
    """Parse ``MAJOR.MINOR.PATCH[-pre][+build]``, with an optional leading ``v``."""
    candidate = text
    if candidate.startswith("v"):
        candidate = candidate[1:]
    m = _SEMVER_RE.fullmatch(candidate)
    if m is None:
        return None
    return SemVer(
        int(m.group(1)),
        int(m.group(2)),
        int(m.group(3)),
        prerelease=m.group(4),
        build=m.group(5),
    )


def parse_release_tag(tag: str) -> SemVer | None:
    """Parse a ledger tag; unlike parse_version the ``v`` prefix is required."""
    if not tag.startswith("v"):
        return None
    return parse_version(tag)
