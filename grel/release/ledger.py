"""Version ledger: the release tags known to the remote.

Tags are fetched from the remote before they are read, so the ledger never
reflects a stale local cache.
"""

from __future__ import annotations

from grel.core.result import Err, Ok, Result
from grel.git.credentials import CredentialProvider, ambient_credentials
from grel.git.repository import Repository
from grel.release.errors import RepositoryAccessError, UnknownTagError
from grel.release.model import TagEntry
from grel.release.semver import ZERO, SemVer, parse_release_tag

# Base name meaning "no previous release, walk from the repository root".
ROOT_TAG = ""


def load_tags(
    repo: Repository,
    *,
    remote: str,
    credentials: CredentialProvider = ambient_credentials,
) -> Result[tuple[TagEntry, ...], RepositoryAccessError]:
    """Fetch tags from ``remote`` and return the parseable ones, ascending."""
    if not repo.exists():
        return Err(RepositoryAccessError(path=repo.path, detail="not a git repository"))

    fetched = repo.fetch_tags(remote, credentials=credentials)
    if isinstance(fetched, Err):
        return Err(RepositoryAccessError(path=repo.path, detail=fetched.error.message))

    names = repo.tag_names()
    if isinstance(names, Err):
        return Err(RepositoryAccessError(path=repo.path, detail=names.error.message))

    return Ok(build_ledger(names.value))


def build_ledger(names: list[str]) -> tuple[TagEntry, ...]:
    entries: dict[str, TagEntry] = {}
    for name in names:
        version = parse_release_tag(name)
        if version is None:
            continue
        entries[name] = TagEntry(version=version, name=name)
    return tuple(sorted(entries.values(), key=lambda e: (e.version, e.name)))


def find_tag(tags: tuple[TagEntry, ...], name: str) -> TagEntry | None:
    for entry in tags:
        if entry.name == name:
            return entry
    return None


def resolve_base(
    tags: tuple[TagEntry, ...],
    previous_tag: str | None,
) -> Result[tuple[SemVer, str], UnknownTagError]:
    """Pick the version and tag name the next release builds on."""
    if previous_tag is not None:
        entry = find_tag(tags, previous_tag)
        if entry is None:
            return Err(UnknownTagError(tag=previous_tag))
        return Ok((entry.version, entry.name))

    if not tags:
        return Ok((ZERO, ROOT_TAG))

    latest = max(tags, key=lambda e: e.version)
    return Ok((latest.version, latest.name))
