"""Error types for the release pipeline.

Fatal errors form the ``ReleaseError`` union and abort a run. Artifact
conditions are reported per artifact and never abort anything.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class RepositoryAccessError:
    path: Path
    detail: str


@dataclass(frozen=True, slots=True)
class UnknownTagError:
    tag: str


@dataclass(frozen=True, slots=True)
class RevisionRangeError:
    revision: str
    detail: str


@dataclass(frozen=True, slots=True)
class InvalidVersionError:
    value: str


@dataclass(frozen=True, slots=True)
class InvalidTagError:
    tag: str


@dataclass(frozen=True, slots=True)
class RemoteApiError:
    """Non-2xx answer to the release creation request."""

    status: int
    reason: str
    body: str


@dataclass(frozen=True, slots=True)
class RemoteTransportError:
    """The creation request never got an HTTP answer."""

    url: str
    detail: str


@dataclass(frozen=True, slots=True)
class ResponseDecodeError:
    detail: str


ReleaseError = (
    RepositoryAccessError
    | UnknownTagError
    | RevisionRangeError
    | InvalidVersionError
    | InvalidTagError
    | RemoteApiError
    | RemoteTransportError
    | ResponseDecodeError
)


@dataclass(frozen=True, slots=True)
class ArtifactSkipped:
    path: Path
    reason: str


@dataclass(frozen=True, slots=True)
class ArtifactUploadFailed:
    path: Path
    filename: str
    detail: str
