from __future__ import annotations

from pathlib import Path

from grel.core.result import Err, Ok, Result
from grel.git.credentials import CredentialProvider, ambient_credentials
from grel.git.repository import GitError, Repository
from grel.release.errors import RepositoryAccessError, UnknownTagError
from grel.release.ledger import build_ledger, load_tags, resolve_base
from grel.release.semver import ZERO, SemVer


class FakeRepository(Repository):
    def __init__(
        self,
        path: Path,
        *,
        tags: list[str],
        fetch_error: str | None = None,
        is_repo: bool = True,
    ) -> None:
        super().__init__(path)
        self._tags = tags
        self._fetch_error = fetch_error
        self._is_repo = is_repo
        self.calls: list[str] = []

    def exists(self) -> bool:
        return self._is_repo

    def fetch_tags(
        self,
        remote: str,
        *,
        credentials: CredentialProvider = ambient_credentials,
    ) -> Result[None, GitError]:
        self.calls.append(f"fetch {remote}")
        if self._fetch_error is not None:
            return Err(GitError(command="fetch", message=self._fetch_error))
        return Ok(None)

    def tag_names(self) -> Result[list[str], GitError]:
        self.calls.append("tags")
        return Ok(list(self._tags))


def test_build_ledger_skips_unparsable_tags() -> None:
    ledger = build_ledger(["v1.0.0", "nightly", "2.0.0", "v0.9.1", "v1.0.0-rc.1", "vX"])
    assert [e.name for e in ledger] == ["v0.9.1", "v1.0.0-rc.1", "v1.0.0"]


def test_build_ledger_unique_by_name() -> None:
    ledger = build_ledger(["v1.0.0", "v1.0.0"])
    assert len(ledger) == 1


def test_load_tags_fetches_before_reading(tmp_path: Path) -> None:
    repo = FakeRepository(tmp_path, tags=["v0.1.0", "v0.2.0"])

    result = load_tags(repo, remote="origin")

    assert isinstance(result, Ok)
    assert [e.version for e in result.value] == [SemVer(0, 1, 0), SemVer(0, 2, 0)]
    assert repo.calls == ["fetch origin", "tags"]


def test_load_tags_fetch_failure(tmp_path: Path) -> None:
    repo = FakeRepository(tmp_path, tags=[], fetch_error="could not read from remote")

    result = load_tags(repo, remote="origin")

    assert result == Err(
        RepositoryAccessError(path=tmp_path, detail="could not read from remote")
    )
    assert repo.calls == ["fetch origin"]


def test_load_tags_not_a_repository(tmp_path: Path) -> None:
    repo = FakeRepository(tmp_path, tags=[], is_repo=False)

    result = load_tags(repo, remote="origin")

    assert isinstance(result, Err)
    assert isinstance(result.error, RepositoryAccessError)
    assert repo.calls == []


def test_resolve_base_defaults_to_latest() -> None:
    ledger = build_ledger(["v0.10.0", "v0.9.0", "v0.2.0"])
    assert resolve_base(ledger, None) == Ok((SemVer(0, 10, 0), "v0.10.0"))


def test_resolve_base_empty_ledger_is_root() -> None:
    assert resolve_base((), None) == Ok((ZERO, ""))


def test_resolve_base_previous_tag() -> None:
    ledger = build_ledger(["v1.0.0", "v1.1.0"])
    assert resolve_base(ledger, "v1.0.0") == Ok((SemVer(1, 0, 0), "v1.0.0"))


def test_resolve_base_unknown_previous_tag() -> None:
    ledger = build_ledger(["v1.0.0"])
    assert resolve_base(ledger, "v0.0.1") == Err(UnknownTagError(tag="v0.0.1"))
    assert resolve_base((), "v1.0.0") == Err(UnknownTagError(tag="v1.0.0"))
