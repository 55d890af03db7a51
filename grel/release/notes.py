from __future__ import annotations

from collections.abc import Sequence

from grel.core.result import Err, Ok, Result
from grel.release.conventional import ClassifiedCommits, bump_for_groups, group_commits, next_version
from grel.release.errors import InvalidVersionError
from grel.release.model import CommitRecord, ReleaseInfo
from grel.release.semver import SemVer, parse_version

BREAKING_HEADER = "## ⚠ BREAKING CHANGES"
FEATURES_HEADER = "## ✨ Features"
FIXES_HEADER = "## 🐛 Bug Fixes"


def commit_url_base(remote_url: str) -> str:
    """Browser URL of the repository, used to link commits.

    ``git@host:owner/repo.git`` becomes ``https://host/owner/repo``; HTTP(S)
    URLs only lose a trailing ``.git``; anything else is returned unchanged.
    """
    if remote_url.startswith("git@"):
        host, sep, path = remote_url.removeprefix("git@").partition(":")
        if not sep:
            return remote_url
        return f"https://{host}/{path.removesuffix('.git')}"
    if remote_url.startswith("http"):
        return remote_url.removesuffix(".git")
    return remote_url


def _commit_line(commit: CommitRecord, url_base: str) -> str:
    return f"- {commit.summary} ([{commit.short_sha}]({url_base}/commit/{commit.sha}))"


def render_body(groups: ClassifiedCommits, url_base: str) -> str:
    """Markdown changelog; sections without commits are left out entirely."""
    if groups.is_empty:
        return ""

    sections: list[str] = []
    for header, commits in (
        (BREAKING_HEADER, groups.breaking),
        (FEATURES_HEADER, groups.features),
        (FIXES_HEADER, groups.fixes),
    ):
        if not commits:
            continue
        lines = [header, *(_commit_line(c, url_base) for c in commits)]
        sections.append("\n".join(lines))

    return "\n\n".join(sections) + "\n"


def generate(
    *,
    base: SemVer,
    commits: Sequence[CommitRecord],
    manual_version: str | None,
    url_base: str,
) -> Result[ReleaseInfo, InvalidVersionError]:
    """Derive the next release from the commits since ``base``.

    A ``manual_version`` replaces the computed bump entirely.
    """
    groups = group_commits(commits)

    if manual_version is not None:
        version = parse_version(manual_version)
        if version is None:
            return Err(InvalidVersionError(value=manual_version))
    else:
        version = next_version(base, bump_for_groups(groups))

    return Ok(
        ReleaseInfo(
            tag_name=version.to_tag(),
            name=f"Release {version}",
            body=render_body(groups, url_base),
        )
    )
