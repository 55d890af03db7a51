"""Release publication.

Three steps, strictly in order:
1. validate the tag (no request is made for an invalid one)
2. create the release record
3. upload artifacts against the new release id

Only steps 1 and 2 can fail the run. Once the release exists the result is
Ok, whatever happens to the artifacts.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import dataclass

from grel.core.result import Err, Ok, Result
from grel.core.structured import as_str_dict, get_int, get_str
from grel.output.console import ConsoleProtocol, Style
from grel.output.messages import Messages
from grel.release.api import ApiResponse, HttpClient
from grel.release.artifacts import ArtifactOutcome, ArtifactUploaded, upload_artifacts
from grel.release.errors import (
    ArtifactSkipped,
    ArtifactUploadFailed,
    InvalidTagError,
    ReleaseError,
    RemoteApiError,
    RemoteTransportError,
    ResponseDecodeError,
)
from grel.release.model import ArtifactRef, PublishTarget, ReleaseInfo, ReleaseRequest, RemoteRelease
from grel.release.semver import SemVer, parse_version


@dataclass(frozen=True, slots=True)
class PublishReport:
    release: RemoteRelease
    artifacts: tuple[ArtifactOutcome, ...] = ()

    @property
    def uploaded(self) -> int:
        return sum(1 for a in self.artifacts if isinstance(a, ArtifactUploaded))

    @property
    def skipped(self) -> int:
        return sum(1 for a in self.artifacts if isinstance(a, ArtifactSkipped))

    @property
    def failed(self) -> int:
        return sum(1 for a in self.artifacts if isinstance(a, ArtifactUploadFailed))


def validate_tag(tag_name: str) -> Result[SemVer, InvalidTagError]:
    version = parse_version(tag_name)
    if version is None:
        return Err(InvalidTagError(tag=tag_name))
    return Ok(version)


def decode_release(text: str) -> Result[RemoteRelease, ResponseDecodeError]:
    try:
        obj: object = json.loads(text)
    except json.JSONDecodeError as e:
        return Err(ResponseDecodeError(detail=str(e)))

    data = as_str_dict(obj)
    if data is None:
        return Err(ResponseDecodeError(detail="expected a JSON object"))

    release_id = get_int(data, "id")
    if release_id is None:
        return Err(ResponseDecodeError(detail="missing or non-integer field: id"))

    return Ok(RemoteRelease(id=release_id, url=get_str(data, "html_url")))


def create_release(
    request: ReleaseRequest,
    *,
    target: PublishTarget,
    http: HttpClient,
    console: ConsoleProtocol,
    messages: Messages,
) -> Result[RemoteRelease, ReleaseError]:
    url = target.releases_url()
    console.print(f"Sending request to Gitee API: {url}", Style.DIM)

    result = http.post_json(
        url,
        request.to_json(),
        {
            "Authorization": f"token {target.token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        },
    )
    if isinstance(result, Err):
        return Err(RemoteTransportError(url=url, detail=result.error.message))

    response: ApiResponse = result.value
    if not response.is_success:
        console.error(f"{messages.failure}: {response.status_line}")
        return Err(
            RemoteApiError(status=response.status, reason=response.reason, body=response.text)
        )

    decoded = decode_release(response.text)
    if isinstance(decoded, Err):
        return decoded

    release = decoded.value
    if release.url:
        console.success(f"{messages.success}: {release.url}")
    else:
        console.success(messages.success)
    return Ok(release)


def publish(
    info: ReleaseInfo,
    *,
    target: PublishTarget,
    artifacts: Sequence[ArtifactRef] = (),
    http: HttpClient,
    console: ConsoleProtocol,
    messages: Messages,
) -> Result[PublishReport, ReleaseError]:
    """Create the release described by ``info`` and attach ``artifacts``."""
    valid = validate_tag(info.tag_name)
    if isinstance(valid, Err):
        return valid

    request = ReleaseRequest(
        tag_name=info.tag_name,
        target_commitish=target.target_commitish,
        name=info.name,
        body=info.body,
        draft=target.draft,
        prerelease=target.prerelease,
    )
    created = create_release(
        request, target=target, http=http, console=console, messages=messages
    )
    if isinstance(created, Err):
        return created

    release = created.value
    if not artifacts:
        return Ok(PublishReport(release=release))

    outcomes = upload_artifacts(
        release_id=release.id,
        artifacts=artifacts,
        target=target,
        http=http,
        console=console,
        messages=messages,
    )
    return Ok(PublishReport(release=release, artifacts=outcomes))
