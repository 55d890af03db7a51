from __future__ import annotations

from pathlib import Path

import pytest

from grel.output.console import MockConsole, Style
from grel.output.messages import load_messages
from grel.release.api import ApiResponse, MockHttpClient
from grel.release.artifacts import (
    ArtifactUploaded,
    parse_artifact_list,
    upload_artifact,
    upload_artifacts,
)
from grel.release.errors import ArtifactSkipped
from grel.release.model import ArtifactRef, PublishTarget

TARGET = PublishTarget(
    owner="acme",
    repo="widgets",
    token="t0k",
    target_commitish="main",
    api_base_url="https://gitee.test",
)
UPLOAD_URL = "https://gitee.test/api/v5/repos/acme/widgets/releases/7/attach_files"


def test_parse_artifact_list_splits_commas_and_keeps_order() -> None:
    refs = parse_artifact_list(["dist/a.zip,dist/b.zip", " c.tar.gz ", ",,"])
    assert refs == (
        ArtifactRef(path=Path("dist/a.zip")),
        ArtifactRef(path=Path("dist/b.zip")),
        ArtifactRef(path=Path("c.tar.gz")),
    )


def test_parse_artifact_list_empty() -> None:
    assert parse_artifact_list([]) == ()


def test_missing_file_is_skipped_without_request(tmp_path: Path) -> None:
    http = MockHttpClient()
    console = MockConsole()
    missing = tmp_path / "nope.zip"

    outcome = upload_artifact(
        release_id=7,
        artifact=ArtifactRef(path=missing),
        target=TARGET,
        http=http,
        console=console,
        messages=load_messages("zh-cn"),
    )

    assert outcome == ArtifactSkipped(path=missing, reason="not a regular file")
    assert http.requests == []
    assert console.find("artifact 路径不是文件或不存在，已跳过")
    assert console.has_warning()


def test_read_error_is_skipped(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    artifact = tmp_path / "locked.bin"
    artifact.write_bytes(b"x")

    def deny(self: Path) -> bytes:
        raise PermissionError("permission denied")

    monkeypatch.setattr(Path, "read_bytes", deny)
    http = MockHttpClient()
    console = MockConsole()

    outcome = upload_artifact(
        release_id=7,
        artifact=ArtifactRef(path=artifact),
        target=TARGET,
        http=http,
        console=console,
        messages=load_messages("en-us"),
    )

    assert isinstance(outcome, ArtifactSkipped)
    assert outcome.reason.startswith("read failed")
    assert http.requests == []
    assert console.find("Failed to read artifact file")


def test_upload_sends_token_form_field(tmp_path: Path) -> None:
    artifact = tmp_path / "app-1.0.0.zip"
    artifact.write_bytes(b"\x00\x01payload")
    http = MockHttpClient()
    http.queue(UPLOAD_URL, ApiResponse(status=201, reason="Created", text='{"id": 1}'))
    console = MockConsole()

    outcome = upload_artifact(
        release_id=7,
        artifact=ArtifactRef(path=artifact),
        target=TARGET,
        http=http,
        console=console,
        messages=load_messages("en-us"),
    )

    assert outcome == ArtifactUploaded(path=artifact, filename="app-1.0.0.zip")
    [request] = http.requests
    assert request.url == UPLOAD_URL
    assert request.fields == {"access_token": "t0k"}
    assert request.file is not None
    assert request.file.content == b"\x00\x01payload"
    assert request.file.content_type == "application/octet-stream"
    assert console.messages[0] == "info: Uploading artifact: app-1.0.0.zip"
    assert console.find(f"Uploading to: {UPLOAD_URL}")[0].style == Style.DIM
    assert console.messages[-1] == "OK Successfully uploaded artifact: app-1.0.0.zip"


def test_uploads_run_in_given_order(tmp_path: Path) -> None:
    names = ["z.bin", "a.bin", "m.bin"]
    refs = []
    http = MockHttpClient()
    for name in names:
        (tmp_path / name).write_bytes(name.encode())
        refs.append(ArtifactRef(path=tmp_path / name))
        http.queue(UPLOAD_URL, ApiResponse(status=200, reason="OK", text="{}"))

    outcomes = upload_artifacts(
        release_id=7,
        artifacts=refs,
        target=TARGET,
        http=http,
        console=MockConsole(),
        messages=load_messages("en-us"),
    )

    assert [o.path.name for o in outcomes] == names
    assert all(isinstance(o, ArtifactUploaded) for o in outcomes)
    assert [r.file.filename for r in http.requests if r.file] == names
