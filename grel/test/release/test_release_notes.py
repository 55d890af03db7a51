from __future__ import annotations

import pytest

from grel.core.result import Err, Ok
from grel.release.errors import InvalidVersionError
from grel.release.model import CommitRecord
from grel.release.notes import (
    BREAKING_HEADER,
    FEATURES_HEADER,
    FIXES_HEADER,
    commit_url_base,
    generate,
)
from grel.release.publisher import validate_tag
from grel.release.semver import ZERO, SemVer

URL = "https://gitee.com/acme/widgets"


def _commit(n: int, summary: str) -> CommitRecord:
    return CommitRecord(sha=f"{n:x}".rjust(40, "a"), summary=summary)


@pytest.mark.parametrize(
    ("remote", "expected"),
    [
        ("git@gitee.com:acme/widgets.git", "https://gitee.com/acme/widgets"),
        ("git@gitee.com:acme/widgets", "https://gitee.com/acme/widgets"),
        ("https://gitee.com/acme/widgets.git", "https://gitee.com/acme/widgets"),
        ("http://git.local/acme/widgets", "http://git.local/acme/widgets"),
        ("ssh://git@gitee.com/acme/widgets.git", "ssh://git@gitee.com/acme/widgets.git"),
        ("/srv/git/widgets.git", "/srv/git/widgets.git"),
        ("git@no-colon", "git@no-colon"),
    ],
)
def test_commit_url_base(remote: str, expected: str) -> None:
    assert commit_url_base(remote) == expected


def test_first_release_with_feature_and_fix() -> None:
    feat = _commit(1, "feat: add X")
    fix = _commit(2, "fix: correct Y")

    result = generate(base=ZERO, commits=[feat, fix], manual_version=None, url_base=URL)

    assert isinstance(result, Ok)
    info = result.value
    assert info.tag_name == "v0.1.0"
    assert info.name == "Release 0.1.0"
    assert info.body == (
        f"{FEATURES_HEADER}\n"
        f"- feat: add X ([{feat.sha[:7]}]({URL}/commit/{feat.sha}))\n"
        "\n"
        f"{FIXES_HEADER}\n"
        f"- fix: correct Y ([{fix.sha[:7]}]({URL}/commit/{fix.sha}))\n"
    )
    assert BREAKING_HEADER not in info.body


def test_breaking_change_wins_over_fix() -> None:
    commits = [_commit(1, "feat!: remove old API"), _commit(2, "fix: minor patch")]

    result = generate(base=SemVer(1, 2, 3), commits=commits, manual_version=None, url_base=URL)

    assert isinstance(result, Ok)
    assert result.value.tag_name == "v2.0.0"
    body = result.value.body
    assert body.index(BREAKING_HEADER) < body.index(FIXES_HEADER)
    assert FEATURES_HEADER not in body


def test_manual_version_overrides_bump() -> None:
    commits = [_commit(1, "feat!: huge change")]

    result = generate(base=SemVer(1, 0, 0), commits=commits, manual_version="v9.9.9", url_base=URL)

    assert isinstance(result, Ok)
    assert result.value.tag_name == "v9.9.9"
    assert result.value.name == "Release 9.9.9"
    assert BREAKING_HEADER in result.value.body


def test_manual_version_must_parse() -> None:
    result = generate(base=ZERO, commits=[], manual_version="next", url_base=URL)
    assert result == Err(InvalidVersionError(value="next"))


def test_empty_range_still_advances_patch() -> None:
    result = generate(base=SemVer(0, 3, 7), commits=[], manual_version=None, url_base=URL)

    assert isinstance(result, Ok)
    assert result.value.tag_name == "v0.3.8"
    assert result.value.body == ""


def test_unclassified_commits_are_left_out() -> None:
    commits = [_commit(1, "docs: tweak"), _commit(2, "chore: deps")]

    result = generate(base=SemVer(1, 0, 0), commits=commits, manual_version=None, url_base=URL)

    assert isinstance(result, Ok)
    assert result.value.tag_name == "v1.0.1"
    assert result.value.body == ""


def test_generation_is_deterministic() -> None:
    commits = [_commit(1, "feat: a"), _commit(2, "fix: b"), _commit(3, "feat: c")]
    first = generate(base=ZERO, commits=commits, manual_version=None, url_base=URL)
    second = generate(base=ZERO, commits=commits, manual_version=None, url_base=URL)
    assert first == second


@pytest.mark.parametrize(
    "summaries",
    [[], ["fix: a"], ["feat: a"], ["feat!: a"], ["docs: a"]],
)
def test_generated_tag_passes_validation(summaries: list[str]) -> None:
    commits = [_commit(i + 1, s) for i, s in enumerate(summaries)]
    result = generate(base=SemVer(4, 5, 6), commits=commits, manual_version=None, url_base=URL)
    assert isinstance(result, Ok)
    assert isinstance(validate_tag(result.value.tag_name), Ok)
