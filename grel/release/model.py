from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from pathlib import Path
from typing import TYPE_CHECKING

from grel.core.config import DEFAULT_API_BASE_URL

if TYPE_CHECKING:
    from grel.release.semver import SemVer


class CommitCategory(Enum):
    BREAKING = "breaking"
    FEATURE = "feature"
    FIX = "fix"
    UNCLASSIFIED = "unclassified"


class VersionBump(IntEnum):
    """Size of a version increment; larger values win."""

    NONE = 0
    PATCH = 1
    MINOR = 2
    MAJOR = 3


@dataclass(frozen=True, slots=True)
class TagEntry:
    """A tag whose name parses as ``v<semver>``."""

    version: SemVer
    name: str


@dataclass(frozen=True, slots=True)
class CommitRecord:
    sha: str
    summary: str

    @property
    def short_sha(self) -> str:
        return self.sha[:7]


@dataclass(frozen=True, slots=True)
class ReleaseInfo:
    """Fully resolved release description, generated or supplied verbatim."""

    tag_name: str
    name: str
    body: str


@dataclass(frozen=True, slots=True)
class ReleaseRequest:
    """JSON payload for release creation."""

    tag_name: str
    target_commitish: str
    name: str
    body: str
    draft: bool
    prerelease: bool

    def to_json(self) -> dict[str, object]:
        return {
            "tag_name": self.tag_name,
            "target_commitish": self.target_commitish,
            "name": self.name,
            "body": self.body,
            "draft": self.draft,
            "prerelease": self.prerelease,
        }


@dataclass(frozen=True, slots=True)
class RemoteRelease:
    id: int
    # Only used for the success message.
    url: str | None = None


@dataclass(frozen=True, slots=True)
class ArtifactRef:
    path: Path


@dataclass(frozen=True, slots=True)
class PublishTarget:
    """Where and how a release is published."""

    owner: str
    repo: str
    token: str = field(repr=False)
    target_commitish: str
    draft: bool = False
    prerelease: bool = False
    api_base_url: str = DEFAULT_API_BASE_URL

    def releases_url(self) -> str:
        return f"{self.api_base_url}/api/v5/repos/{self.owner}/{self.repo}/releases"

    def attach_files_url(self, release_id: int) -> str:
        return f"{self.releases_url()}/{release_id}/attach_files"
