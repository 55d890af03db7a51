"""Conventional-commit classification and version bumping.

Only three markers are recognized: breaking changes (``BREAKING CHANGE`` or
``!:`` anywhere in the summary), ``feat`` and ``fix`` prefixes. Everything
else is ignored for both the changelog and the bump.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from grel.release.model import CommitCategory, CommitRecord, VersionBump
from grel.release.semver import SemVer

# Bump applied when the range holds no feat/fix/breaking commit.
# Set to VersionBump.NONE to re-use the base version instead.
EMPTY_RANGE_BUMP = VersionBump.PATCH

_BUMP_FOR_CATEGORY = {
    CommitCategory.BREAKING: VersionBump.MAJOR,
    CommitCategory.FEATURE: VersionBump.MINOR,
    CommitCategory.FIX: VersionBump.PATCH,
    CommitCategory.UNCLASSIFIED: VersionBump.NONE,
}


def classify(summary: str) -> CommitCategory:
    if "BREAKING CHANGE" in summary or "!:" in summary:
        return CommitCategory.BREAKING
    if summary.startswith("feat"):
        return CommitCategory.FEATURE
    if summary.startswith("fix"):
        return CommitCategory.FIX
    return CommitCategory.UNCLASSIFIED


@dataclass(frozen=True, slots=True)
class ClassifiedCommits:
    """Qualifying commits grouped by category, each group in walk order."""

    breaking: tuple[CommitRecord, ...] = ()
    features: tuple[CommitRecord, ...] = ()
    fixes: tuple[CommitRecord, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (self.breaking or self.features or self.fixes)


def group_commits(commits: Iterable[CommitRecord]) -> ClassifiedCommits:
    breaking: list[CommitRecord] = []
    features: list[CommitRecord] = []
    fixes: list[CommitRecord] = []
    for commit in commits:
        match classify(commit.summary):
            case CommitCategory.BREAKING:
                breaking.append(commit)
            case CommitCategory.FEATURE:
                features.append(commit)
            case CommitCategory.FIX:
                fixes.append(commit)
            case CommitCategory.UNCLASSIFIED:
                pass
    return ClassifiedCommits(
        breaking=tuple(breaking),
        features=tuple(features),
        fixes=tuple(fixes),
    )


def bump_for(categories: Iterable[CommitCategory]) -> VersionBump:
    """Most severe bump implied by ``categories`` (NONE if nothing qualifies)."""
    return max((_BUMP_FOR_CATEGORY[c] for c in categories), default=VersionBump.NONE)


def bump_for_groups(groups: ClassifiedCommits) -> VersionBump:
    present: list[CommitCategory] = []
    if groups.breaking:
        present.append(CommitCategory.BREAKING)
    if groups.features:
        present.append(CommitCategory.FEATURE)
    if groups.fixes:
        present.append(CommitCategory.FIX)
    return bump_for(present)


def next_version(base: SemVer, bump: VersionBump) -> SemVer:
    if bump is VersionBump.NONE:
        bump = EMPTY_RANGE_BUMP
    return base.bump(bump)
