from __future__ import annotations

from typing import NoReturn

import typer

from relsuite.core.config import ConfigError
from relsuite.core.errors import ErrorCode
from relsuite.services.release.errors import ReleaseError


def exit_release(err: str, *, code: ErrorCode) -> NoReturn:
    typer.echo(f"error: {err}", err=True)
    raise typer.Exit(code=int(code))


def release_error_code(kind: str) -> ErrorCode:
    if kind in {"gh_missing", "gh_auth_required", "config_invalid"}:
        return ErrorCode.ENV_ERROR
    if kind in {"release_failed", "artifacts_failed"}:
        return ErrorCode.NETWORK_ERROR
    if kind in {"history_failed"}:
        return ErrorCode.IO_ERROR
    return ErrorCode.USER_ERROR


def exit_release_error(error: ReleaseError) -> NoReturn:
    exit_release(error.pretty(), code=release_error_code(error.kind))


def exit_config_error(error: ConfigError) -> NoReturn:
    exit_release(error.message, code=ErrorCode.ENV_ERROR)
