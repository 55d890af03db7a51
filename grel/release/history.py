"""History walker: commits between the base tag and the release target."""

from __future__ import annotations

from grel.core.result import Err, Ok, Result
from grel.git.repository import Repository
from grel.release.errors import RevisionRangeError
from grel.release.ledger import ROOT_TAG
from grel.release.model import CommitRecord


def revision_for(base_tag: str, target_ref: str) -> str:
    """Revision argument selecting ``(base_tag, target_ref]``, or all of target."""
    if base_tag == ROOT_TAG:
        return target_ref
    return f"{base_tag}..{target_ref}"


def walk(
    repo: Repository,
    base_tag: str,
    target_ref: str,
) -> Result[tuple[CommitRecord, ...], RevisionRangeError]:
    """Commits reachable from ``target_ref`` but not ``base_tag``, oldest first."""
    endpoints = [target_ref] if base_tag == ROOT_TAG else [base_tag, target_ref]
    for rev in endpoints:
        resolved = repo.resolve_commit(rev)
        if isinstance(resolved, Err):
            return Err(RevisionRangeError(revision=rev, detail=resolved.error.message))

    revision = revision_for(base_tag, target_ref)
    log = repo.log_oldest_first(revision)
    if isinstance(log, Err):
        return Err(RevisionRangeError(revision=revision, detail=log.error.message))

    return Ok(tuple(CommitRecord(sha=e.sha, summary=e.summary) for e in log.value))
