"""One-shot release orchestration.

Resolves the release description (supplied by hand, or generated from the
commit history) and hands it to the publisher.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from grel.core.config import DEFAULT_REMOTE
from grel.core.result import Err, Ok, Result
from grel.git.credentials import CredentialProvider, ambient_credentials
from grel.git.repository import Repository
from grel.output.console import ConsoleProtocol, Style
from grel.output.messages import Messages
from grel.release.api import HttpClient
from grel.release.errors import ReleaseError, RepositoryAccessError
from grel.release.history import walk
from grel.release.ledger import load_tags, resolve_base
from grel.release.model import ArtifactRef, PublishTarget, ReleaseInfo
from grel.release.notes import commit_url_base, generate
from grel.release.publisher import PublishReport, publish, validate_tag


@dataclass(frozen=True, slots=True)
class ReleaseInputs:
    """Everything a single run needs, already merged from flags and config."""

    target: PublishTarget
    tag_name: str | None = None
    name: str | None = None
    body: str | None = None
    auto_gen_notes: bool = False
    repo_path: Path = Path(".")
    previous_tag: str | None = None
    remote: str = DEFAULT_REMOTE
    artifacts: tuple[ArtifactRef, ...] = field(default_factory=tuple)
    dry_run: bool = False


@dataclass(frozen=True, slots=True)
class RunOutcome:
    info: ReleaseInfo
    # None for dry runs.
    report: PublishReport | None = None


def generate_release_info(
    *,
    repo_path: Path,
    previous_tag: str | None,
    target_ref: str,
    manual_version: str | None,
    remote: str,
    credentials: CredentialProvider = ambient_credentials,
) -> Result[ReleaseInfo, ReleaseError]:
    """Derive tag, name and changelog from the history since the last release."""
    repo = Repository(repo_path)

    tags = load_tags(repo, remote=remote, credentials=credentials)
    if isinstance(tags, Err):
        return tags

    base = resolve_base(tags.value, previous_tag)
    if isinstance(base, Err):
        return base
    base_version, base_tag = base.value

    commits = walk(repo, base_tag, target_ref)
    if isinstance(commits, Err):
        return commits

    url = repo.remote_url(remote)
    if isinstance(url, Err):
        return Err(RepositoryAccessError(path=repo_path, detail=url.error.message))

    return generate(
        base=base_version,
        commits=commits.value,
        manual_version=manual_version,
        url_base=commit_url_base(url.value),
    )


def resolve_release_info(
    inputs: ReleaseInputs,
    *,
    console: ConsoleProtocol,
    messages: Messages,
    credentials: CredentialProvider = ambient_credentials,
) -> Result[ReleaseInfo, ReleaseError]:
    if inputs.auto_gen_notes:
        console.info("Auto-generating release notes...")
        return generate_release_info(
            repo_path=inputs.repo_path,
            previous_tag=inputs.previous_tag,
            target_ref=inputs.target.target_commitish,
            manual_version=inputs.tag_name,
            remote=inputs.remote,
            credentials=credentials,
        )

    info = ReleaseInfo(
        tag_name=inputs.tag_name or "",
        name=inputs.name or "",
        body=inputs.body or "",
    )
    if not (info.tag_name and info.name and info.body):
        console.error(messages.empty_manual_fields)
    return Ok(info)


def run_release(
    inputs: ReleaseInputs,
    *,
    http: HttpClient,
    console: ConsoleProtocol,
    messages: Messages,
    credentials: CredentialProvider = ambient_credentials,
) -> Result[RunOutcome, ReleaseError]:
    info = resolve_release_info(
        inputs, console=console, messages=messages, credentials=credentials
    )
    if isinstance(info, Err):
        return info

    if inputs.dry_run:
        valid = validate_tag(info.value.tag_name)
        if isinstance(valid, Err):
            return valid
        console.print(f"dry run: {info.value.tag_name} not published", Style.DIM)
        return Ok(RunOutcome(info=info.value))

    report = publish(
        info.value,
        target=inputs.target,
        artifacts=inputs.artifacts,
        http=http,
        console=console,
        messages=messages,
    )
    if isinstance(report, Err):
        return report
    return Ok(RunOutcome(info=info.value, report=report.value))
