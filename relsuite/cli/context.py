from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

import typer

from relsuite.core.config import CONFIG_FILE_NAME
from relsuite.core.errors import ErrorCode
from relsuite.core.result import Err
from relsuite.output.console import ConsoleProtocol, RichConsole
from relsuite.services.release.config import SuiteConfig, load_suite_config_or_default

REPO_DIR_ENV = "RELSUITE_REPO_DIR"
CONFIG_PATH_ENV = "RELSUITE_CONFIG"


@dataclass(frozen=True, slots=True)
class CLIContext:
    repo_dir: Path
    config_path: Path
    suite: SuiteConfig
    console: ConsoleProtocol
    environ: Mapping[str, str]


def build_context(*, stderr: bool = False) -> CLIContext:
    """Resolve the checkout, load template config and pick a console.

    Args:
        stderr: Send console output to stderr so stdout carries only the
            command result.
    """
    repo_dir = Path(os.environ.get(REPO_DIR_ENV) or Path.cwd())
    config_path = Path(os.environ.get(CONFIG_PATH_ENV) or repo_dir / CONFIG_FILE_NAME)

    suite = load_suite_config_or_default(config_path)
    if isinstance(suite, Err):
        typer.echo(f"error: {suite.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    return CLIContext(
        repo_dir=repo_dir,
        config_path=config_path,
        suite=suite.value,
        console=RichConsole(stderr=stderr),
        environ=os.environ,
    )
