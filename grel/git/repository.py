"""Git repository abstraction.

The release engine only needs a handful of read operations plus one fetch,
all implemented on top of the git CLI. Every method returns a Result.

Usage:
    repo = Repository(Path("/path/to/repo"))

    match repo.tag_names():
        case Ok(names):
            print(", ".join(names))
        case Err(e):
            print(f"Error: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from grel.core.result import Err, Ok, Result
from grel.git.credentials import CredentialProvider, ambient_credentials, git_config_args
from grel.platform.process import ProcessError
from grel.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0
_GIT_NETWORK_TIMEOUT_SECONDS = 3 * 60.0

# Never block on an interactive username/password prompt.
_GIT_ENV = {"GIT_TERMINAL_PROMPT": "0"}

_FIELD_SEP = "\x1f"
_LOG_FORMAT = f"%H{_FIELD_SEP}%s"

__all__ = [
    "GitError",
    "LogEntry",
    "Repository",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git command that failed
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


@dataclass(frozen=True, slots=True)
class LogEntry:
    """One commit from ``git log``: full sha and subject line."""

    sha: str
    summary: str


class Repository:
    """Read-mostly view of a local git repository.

    Attributes:
        path: Path to the repository root (or any directory inside it)
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def exists(self) -> bool:
        """Check if git recognizes this path as a work tree."""
        result = self._run(["rev-parse", "--is-inside-work-tree"])
        return isinstance(result, Ok) and result.value.strip() == "true"

    def remote_url(self, remote: str) -> Result[str, GitError]:
        """Configured fetch URL of ``remote``."""
        result = self._run(["remote", "get-url", remote])
        match result:
            case Err(e):
                return Err(self._error(f"remote get-url {remote}", e))
            case Ok(stdout):
                return Ok(stdout.strip())

    def fetch_tags(
        self,
        remote: str,
        *,
        credentials: CredentialProvider = ambient_credentials,
    ) -> Result[None, GitError]:
        """Fetch every tag from ``remote``, overwriting stale local tags."""
        url = self.remote_url(remote)
        if isinstance(url, Err):
            return url

        extra = git_config_args(url.value, credentials)
        result = self._run(
            [*extra, "fetch", "--quiet", remote, "+refs/tags/*:refs/tags/*"],
            timeout=_GIT_NETWORK_TIMEOUT_SECONDS,
        )
        if isinstance(result, Err):
            return Err(self._error(f"fetch {remote}", result.error))
        return Ok(None)

    def tag_names(self) -> Result[list[str], GitError]:
        """All local tag names."""
        result = self._run(["tag", "--list"])
        match result:
            case Err(e):
                return Err(self._error("tag --list", e))
            case Ok(stdout):
                return Ok([line.strip() for line in stdout.splitlines() if line.strip()])

    def resolve_commit(self, rev: str) -> Result[str, GitError]:
        """Resolve a commit-ish to its full sha."""
        result = self._run(["rev-parse", "--verify", "--quiet", f"{rev}^{{commit}}"])
        match result:
            case Err(e):
                return Err(
                    GitError(
                        command=f"rev-parse {rev}",
                        message=e.stderr.strip() or f"unknown revision: {rev}",
                        returncode=e.returncode,
                    )
                )
            case Ok(stdout):
                return Ok(stdout.strip())

    def log_oldest_first(self, revision: str) -> Result[list[LogEntry], GitError]:
        """Commits selected by ``revision``, parents before children.

        Commits with no ancestry between them come in author-date order.

        ``revision`` is anything ``git log`` accepts as a single revision
        argument, e.g. ``main`` or ``v1.0.0..main``.
        """
        result = self._run(
            [
                "-c",
                "log.showSignature=false",
                "log",
                "--author-date-order",
                "--reverse",
                "--no-color",
                f"--format={_LOG_FORMAT}",
                revision,
                "--",
            ]
        )
        match result:
            case Err(e):
                return Err(self._error(f"log {revision}", e))
            case Ok(stdout):
                return Ok(self._parse_log(stdout))

    def _run(
        self,
        args: list[str],
        *,
        timeout: float = _GIT_TIMEOUT_SECONDS,
    ) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        return run_process(
            ["git", "-C", str(self.path), *args],
            cwd=self.path,
            env=_GIT_ENV,
            timeout=timeout,
        )

    def _error(self, command: str, e: ProcessError) -> GitError:
        return GitError(
            command=command,
            message=e.detail or f"git {command} failed",
            returncode=e.returncode,
        )

    def _parse_log(self, output: str) -> list[LogEntry]:
        entries: list[LogEntry] = []
        for line in output.splitlines():
            sha, sep, summary = line.partition(_FIELD_SEP)
            if not sep or len(sha) != 40:
                continue
            entries.append(LogEntry(sha=sha, summary=summary))
        return entries
