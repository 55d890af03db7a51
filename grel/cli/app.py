from __future__ import annotations

from pathlib import Path

import typer

from grel import __version__
from grel.core.config import CONFIG_FILE_NAME, Config, load_config, load_config_or_default
from grel.core.errors import ErrorCode
from grel.core.result import Err
from grel.output.console import ConsoleProtocol, QuietConsole, RichConsole
from grel.output.errors import print_release_error, release_error_exit_code
from grel.output.messages import load_messages
from grel.release.api import RealHttpClient
from grel.release.artifacts import parse_artifact_list
from grel.release.flow import ReleaseInputs, run_release
from grel.release.model import PublishTarget


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
    help="Create a Gitee release, optionally generating notes from Conventional Commits.",
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


def _load_config(config_path: Path | None, repo_path: Path) -> Config:
    if config_path is not None:
        result = load_config(config_path)
    else:
        result = load_config_or_default(repo_path / CONFIG_FILE_NAME)
    if isinstance(result, Err):
        typer.echo(f"error: {result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))
    return result.value


@app.command()
def release(
    owner: str = typer.Option(..., "--owner", help="Repository owner"),
    repo: str = typer.Option(..., "--repo", help="Repository name"),
    token: str = typer.Option(
        ..., "--token", envvar="GITEE_TOKEN", help="Gitee personal access token"
    ),
    tag_name: str | None = typer.Option(
        None,
        "--tag-name",
        help="Tag name (e.g. v1.0.0). With --auto-gen-notes it overrides the computed version.",
    ),
    name: str | None = typer.Option(None, "--name", help="Release name"),
    body: str | None = typer.Option(None, "--body", help="Release description"),
    repo_path: Path = typer.Option(
        Path("."), "--repo-path", help="Local repository used for --auto-gen-notes"
    ),
    previous_tag: str | None = typer.Option(
        None, "--previous-tag", help="Tag to start the changelog from (default: latest)"
    ),
    target_commitish: str | None = typer.Option(
        None, "--target-commitish", help="Target commit or branch (default: main)"
    ),
    draft: bool = typer.Option(False, "--draft/--no-draft", help="Is draft release"),
    prerelease: bool = typer.Option(
        False, "--prerelease/--no-prerelease", help="Is prerelease"
    ),
    lang: str | None = typer.Option(
        None, "--lang", envvar="GREL_LANG", help="Language for messages (en-us, zh-cn)"
    ),
    artifacts: list[str] = typer.Option(
        [], "--artifacts", help="Comma-separated paths of files to attach"
    ),
    auto_gen_notes: bool = typer.Option(
        False, "--auto-gen-notes", help="Generate tag, name and body from commit history"
    ),
    api_base_url: str | None = typer.Option(
        None, "--api-base-url", envvar="GREL_API_BASE_URL", help="Gitee API host"
    ),
    remote: str | None = typer.Option(None, "--remote", help="Remote to fetch tags from"),
    config_path: Path | None = typer.Option(
        None, "--config", help=f"Config file (default: <repo-path>/{CONFIG_FILE_NAME})"
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only print outcomes"),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Resolve and print the release without publishing"
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Create a release and upload its artifacts."""
    del version
    config = _load_config(config_path, repo_path).release
    messages = load_messages(lang or config.lang)

    console: ConsoleProtocol = RichConsole()
    if quiet:
        console = QuietConsole(console)

    inputs = ReleaseInputs(
        target=PublishTarget(
            owner=owner,
            repo=repo,
            token=token,
            target_commitish=target_commitish or config.target_commitish,
            draft=draft,
            prerelease=prerelease,
            api_base_url=(api_base_url or config.api_base_url).rstrip("/"),
        ),
        tag_name=tag_name,
        name=name,
        body=body,
        auto_gen_notes=auto_gen_notes,
        repo_path=repo_path,
        previous_tag=previous_tag,
        remote=remote or config.remote,
        artifacts=parse_artifact_list(artifacts),
        dry_run=dry_run,
    )

    with RealHttpClient(timeout=config.timeout) as http:
        result = run_release(inputs, http=http, console=console, messages=messages)

    if isinstance(result, Err):
        print_release_error(result.error, console, messages)
        raise typer.Exit(code=release_error_exit_code(result.error))

    outcome = result.value
    if outcome.report is None:
        console.header(f"{outcome.info.tag_name} - {outcome.info.name}")
        console.print(outcome.info.body)


def main() -> None:
    app()
