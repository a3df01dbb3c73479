from __future__ import annotations

import os
from pathlib import Path

import typer

from relsuite.cli.commands.release_common import exit_release, exit_release_error
from relsuite.core.errors import ErrorCode
from relsuite.core.result import Err
from relsuite.services.release.version import resolve_version, write_step_output

STEP_OUTPUT_ENV = "GITHUB_OUTPUT"
STEP_OUTPUT_NAME = "VERSION"


def version(
    ref: str | None = typer.Option(
        None, "--ref", help="Tag reference (default: $GITHUB_REF)", show_default=False
    ),
    github_output: bool = typer.Option(
        False, "--github-output", help="Also append VERSION=<version> to $GITHUB_OUTPUT"
    ),
) -> None:
    """Print the version extracted from a tag reference."""
    tag_ref = ref if ref is not None else os.environ.get("GITHUB_REF")
    ctx = resolve_version(tag=None, tag_ref=tag_ref)
    if isinstance(ctx, Err):
        exit_release_error(ctx.error)

    if github_output:
        out_path = os.environ.get(STEP_OUTPUT_ENV)
        if not out_path:
            exit_release(f"--github-output requires ${STEP_OUTPUT_ENV}", code=ErrorCode.ENV_ERROR)
        written = write_step_output(Path(out_path), name=STEP_OUTPUT_NAME, value=ctx.value.version)
        if isinstance(written, Err):
            exit_release_error(written.error)

    typer.echo(ctx.value.version)
