from __future__ import annotations

from pathlib import Path

import typer

from relsuite.cli.commands.release_common import (
    exit_config_error,
    exit_release,
    exit_release_error,
)
from relsuite.cli.context import build_context
from relsuite.core.errors import ErrorCode
from relsuite.core.result import Err
from relsuite.services.release.config import load_draft_env
from relsuite.services.release.pipeline import run_release_suite

DEFAULT_ARTIFACTS_DIR = "artifacts"


def draft(
    tag: str | None = typer.Option(None, "--tag", help="Release tag (default: from $GITHUB_REF)"),
    skip_artifacts: bool = typer.Option(
        False, "--skip-artifacts", help="Do not download build artifacts"
    ),
    artifacts_dir: Path | None = typer.Option(
        None,
        "--artifacts-dir",
        help=f"Artifact download dir (default: <repo-dir>/{DEFAULT_ARTIFACTS_DIR})",
    ),
    fetch: bool = typer.Option(True, "--fetch/--no-fetch", help="Fetch full history and tags"),
    body_out: Path | None = typer.Option(None, "--body-out", help="Also save the rendered body"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Render only; create nothing"),
) -> None:
    """Draft a GitHub release for a version tag."""
    if skip_artifacts and artifacts_dir is not None:
        exit_release("--skip-artifacts conflicts with --artifacts-dir", code=ErrorCode.USER_ERROR)

    cli = build_context()
    env = load_draft_env(cli.environ)
    if isinstance(env, Err):
        exit_config_error(env.error)

    dest: Path | None = None
    if not skip_artifacts:
        dest = artifacts_dir if artifacts_dir is not None else cli.repo_dir / DEFAULT_ARTIFACTS_DIR

    result = run_release_suite(
        tag=tag,
        workspace_root=cli.repo_dir,
        draft_env=env.value,
        suite=cli.suite,
        console=cli.console,
        artifacts_dir=dest,
        fetch_history=fetch,
        body_out=body_out,
        dry_run=dry_run,
    )
    if isinstance(result, Err):
        exit_release_error(result.error)
