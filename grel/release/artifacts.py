"""Artifact upload stage.

Each artifact yields exactly one outcome. Nothing in here fails the run:
missing files, read errors and rejected uploads are reported on the console
and recorded in the outcome tuple.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from grel.core.result import Err
from grel.output.console import ConsoleProtocol, Style
from grel.output.messages import Messages
from grel.release.api import HttpClient, UploadFile
from grel.release.errors import ArtifactSkipped, ArtifactUploadFailed
from grel.release.model import ArtifactRef, PublishTarget

FILE_FIELD = "file"
TOKEN_FIELD = "access_token"


@dataclass(frozen=True, slots=True)
class ArtifactUploaded:
    path: Path
    filename: str


ArtifactOutcome = ArtifactUploaded | ArtifactSkipped | ArtifactUploadFailed


def parse_artifact_list(values: Sequence[str]) -> tuple[ArtifactRef, ...]:
    """Split comma-delimited CLI values into artifact refs, keeping order."""
    refs: list[ArtifactRef] = []
    for value in values:
        for item in value.split(","):
            item = item.strip()
            if item:
                refs.append(ArtifactRef(path=Path(item)))
    return tuple(refs)


def upload_artifacts(
    *,
    release_id: int,
    artifacts: Sequence[ArtifactRef],
    target: PublishTarget,
    http: HttpClient,
    console: ConsoleProtocol,
    messages: Messages,
) -> tuple[ArtifactOutcome, ...]:
    """Upload ``artifacts`` one after another, in the order given."""
    return tuple(
        upload_artifact(
            release_id=release_id,
            artifact=artifact,
            target=target,
            http=http,
            console=console,
            messages=messages,
        )
        for artifact in artifacts
    )


def upload_artifact(
    *,
    release_id: int,
    artifact: ArtifactRef,
    target: PublishTarget,
    http: HttpClient,
    console: ConsoleProtocol,
    messages: Messages,
) -> ArtifactOutcome:
    path = artifact.path
    if not path.is_file():
        console.warning(f"{messages.not_a_file}: {path}")
        return ArtifactSkipped(path=path, reason="not a regular file")

    filename = path.name
    if not filename:
        console.warning(f"{messages.no_filename}: {path}")
        return ArtifactSkipped(path=path, reason="no file name")

    console.info(f"{messages.upload_start}: {filename}")

    try:
        content = path.read_bytes()
    except OSError as e:
        console.error(f"{messages.file_read_error}: {path} - {e}")
        return ArtifactSkipped(path=path, reason=f"read failed: {e}")

    url = target.attach_files_url(release_id)
    console.print(f"Uploading to: {url}", Style.DIM)

    result = http.post_multipart(
        url,
        {TOKEN_FIELD: target.token},
        UploadFile(field_name=FILE_FIELD, filename=filename, content=content),
        {
            "Authorization": f"token {target.token}",
            "Accept": "application/json",
        },
    )
    if isinstance(result, Err):
        console.error(f"{messages.upload_failure}: {filename} - {result.error.message}")
        return ArtifactUploadFailed(path=path, filename=filename, detail=result.error.message)

    response = result.value
    if not response.is_success:
        details = response.text or "Could not read error body"
        console.error(
            f"{messages.upload_failure}: {filename} - "
            f"Status: {response.status_line}, Details: {details}"
        )
        return ArtifactUploadFailed(
            path=path,
            filename=filename,
            detail=f"{response.status_line}: {details}",
        )

    console.success(f"{messages.upload_success}: {filename}")
    return ArtifactUploaded(path=path, filename=filename)
