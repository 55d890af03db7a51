from __future__ import annotations

import pytest

from grel.output.console import MockConsole, QuietConsole, RichConsole, Style


def test_mock_console_records_styles() -> None:
    console = MockConsole()
    console.print("plain")
    console.success("done")
    console.error("broken")
    console.warning("careful")
    console.info("fyi")
    console.header("Title")
    console.newline()

    assert console.messages == [
        "plain",
        "OK done",
        "error: broken",
        "warning: careful",
        "info: fyi",
        "Title",
        "",
    ]
    assert console.has_error()
    assert console.has_warning()
    assert console.count(Style.HEADER) == 1
    assert [o.message for o in console.find("b")] == ["error: broken"]


def test_quiet_console_drops_progress_only() -> None:
    inner = MockConsole()
    console = QuietConsole(inner)

    console.print("Sending request", Style.DIM)
    console.info("Auto-generating release notes...")
    console.print("body text")
    console.warning("skipped")
    console.error("failed")
    console.success("created")

    assert inner.messages == ["body text", "warning: skipped", "error: failed", "OK created"]


def test_rich_console_splits_streams(capsys: pytest.CaptureFixture[str]) -> None:
    console = RichConsole()
    console.print("- feat: [scope] stays literal")
    console.error("nope")

    captured = capsys.readouterr()
    assert "- feat: [scope] stays literal" in captured.out
    assert "nope" in captured.err
    assert "nope" not in captured.out
