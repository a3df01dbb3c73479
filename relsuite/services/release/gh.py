from __future__ import annotations

import os
import shutil
from collections.abc import Mapping
from pathlib import Path
from time import sleep

from relsuite.core.result import Err, Ok, Result
from relsuite.platform.process import ProcessError
from relsuite.platform.process import run as run_process
from relsuite.services.release.config import DraftEnv
from relsuite.services.release.errors import ReleaseError, ReleaseErrorKind
from relsuite.services.release.model import DraftRelease
from relsuite.services.release.timeouts import (
    GH_DOWNLOAD_TIMEOUT_SECONDS,
    GH_READ_RETRY_ATTEMPTS,
    GH_READ_RETRY_DELAY_SECONDS,
    GH_TIMEOUT_SECONDS,
)


def _is_transient_gh_error(error: ProcessError) -> bool:
    text = f"{error.stderr}\n{error.stdout}".lower()
    markers = (
        "timed out",
        "timeout",
        "connection reset",
        "connection refused",
        "temporarily unavailable",
        "service unavailable",
        "bad gateway",
        "gateway timeout",
        "tls handshake timeout",
        "network is unreachable",
        "http 429",
        "http 500",
        "http 502",
        "http 503",
        "http 504",
    )
    return any(marker in text for marker in markers)


def gh_env(draft_env: DraftEnv, base: Mapping[str, str] | None = None) -> dict[str, str]:
    """Environment for gh: the caller's environment plus release credentials."""
    env = dict(os.environ if base is None else base)
    env["GH_TOKEN"] = draft_env.token
    env["GITHUB_TOKEN"] = draft_env.token
    env["GITHUB_USER"] = draft_env.account
    # Never block on an interactive prompt inside a pipeline.
    env["GH_PROMPT_DISABLED"] = "1"
    return env


def run_gh_read(
    *,
    workspace_root: Path,
    cmd: list[str],
    env: dict[str, str] | None,
    kind: ReleaseErrorKind,
    message: str,
    hint: str | None = None,
    timeout: float = GH_TIMEOUT_SECONDS,
    retry_attempts: int = GH_READ_RETRY_ATTEMPTS,
) -> Result[str, ReleaseError]:
    """Run an idempotent gh command, retrying transient network failures."""
    attempts = max(1, retry_attempts)
    for attempt in range(attempts):
        result = run_process(cmd, cwd=workspace_root, env=env, timeout=timeout)
        if isinstance(result, Ok):
            return result

        error = result.error
        # Local timeouts are final.
        if attempt < attempts - 1 and not error.timed_out and _is_transient_gh_error(error):
            sleep(GH_READ_RETRY_DELAY_SECONDS * (attempt + 1))
            continue

        return Err(ReleaseError(kind=kind, message=message, hint=error.stderr.strip() or hint))

    return Err(ReleaseError(kind=kind, message=message, hint=hint))


def ensure_gh_available() -> Result[None, ReleaseError]:
    if shutil.which("gh") is None:
        return Err(
            ReleaseError(
                kind="gh_missing",
                message="gh: missing",
                hint="Install GitHub CLI: https://cli.github.com/",
            )
        )
    return Ok(None)


def ensure_gh_auth(*, workspace_root: Path, env: dict[str, str]) -> Result[None, ReleaseError]:
    result = run_process(
        ["gh", "auth", "status"], cwd=workspace_root, env=env, timeout=GH_TIMEOUT_SECONDS
    )
    if isinstance(result, Err):
        return Err(
            ReleaseError(
                kind="gh_auth_required",
                message="gh auth failed for the configured token",
                hint=result.error.stderr.strip() or "Check GITHUB_TOKEN",
            )
        )
    return Ok(None)


def download_artifacts(
    *,
    workspace_root: Path,
    env: dict[str, str],
    repo: str,
    run_id: str,
    dest: Path,
) -> Result[Path, ReleaseError]:
    """Download every artifact bundle of a workflow run into dest."""
    try:
        dest.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        return Err(
            ReleaseError(
                kind="artifacts_failed",
                message=f"failed to create artifacts dir: {e}",
                hint=str(dest),
            )
        )

    result = run_gh_read(
        workspace_root=workspace_root,
        cmd=["gh", "run", "download", run_id, "--repo", repo, "--dir", str(dest)],
        env=env,
        kind="artifacts_failed",
        message=f"failed to download artifacts of run {run_id}",
        hint=repo,
        timeout=GH_DOWNLOAD_TIMEOUT_SECONDS,
    )
    if isinstance(result, Err):
        return result
    return Ok(dest)


def create_draft_release(
    *,
    workspace_root: Path,
    env: dict[str, str],
    repo: str,
    tag: str,
    title: str,
    body: str,
    assets: tuple[Path, ...] = (),
) -> Result[DraftRelease, ReleaseError]:
    """Create a draft release with the body streamed on stdin.

    `title` is the release name shown on the host, kept apart from the body.
    Runs exactly once: creation is not idempotent, so it is never retried.
    """
    cmd = [
        "gh",
        "release",
        "create",
        tag,
        "--repo",
        repo,
        "--draft",
        "--verify-tag",
        "--title",
        title,
        "--notes-file",
        "-",
        *(str(a) for a in assets),
    ]
    result = run_process(cmd, cwd=workspace_root, env=env, timeout=GH_TIMEOUT_SECONDS, input=body)
    if isinstance(result, Err):
        return Err(
            ReleaseError(
                kind="release_failed",
                message=f"failed to create draft release {tag}",
                hint=result.error.stderr.strip() or None,
            )
        )

    url = result.value.strip().splitlines()[-1] if result.value.strip() else ""
    return Ok(DraftRelease(tag=tag, url=url, assets=assets))
