"""The two-stage release suite.

Stage 1 extracts the version. Stage 2 drafts the release from it. The
version travels as an explicit VersionContext, and any failing step aborts
the run before a draft is created.
"""

from __future__ import annotations

from pathlib import Path

from relsuite.core.result import Err, Ok, Result
from relsuite.git.repository import Repository
from relsuite.output.console import ConsoleProtocol, Style
from relsuite.services.release.changelog import generate_changelog
from relsuite.services.release.config import DraftEnv, SuiteConfig
from relsuite.services.release.errors import ReleaseError
from relsuite.services.release.gh import (
    create_draft_release,
    download_artifacts,
    ensure_gh_auth,
    ensure_gh_available,
    gh_env,
)
from relsuite.services.release.model import DraftResult, VersionContext
from relsuite.services.release.notes import render_release_body, write_release_body
from relsuite.services.release.version import resolve_version

# Assets are attached by hand after review; the draft is created without any.
RELEASE_ASSETS: tuple[Path, ...] = ()


def extract_stage(
    *, tag: str | None, tag_ref: str | None, console: ConsoleProtocol
) -> Result[VersionContext, ReleaseError]:
    console.header("Extract version")
    ctx = resolve_version(tag=tag, tag_ref=tag_ref)
    if isinstance(ctx, Ok):
        console.success(f"version: {ctx.value.version}")
    return ctx


def prepare_history(
    *, repo: Repository, console: ConsoleProtocol
) -> Result[None, ReleaseError]:
    if not repo.exists():
        return Err(
            ReleaseError(
                kind="invalid_input",
                message=f"not a git repository: {repo.path}",
                hint="Pass --repo-dir pointing at the checkout",
            )
        )

    console.print("git fetch --tags (full history)", Style.DIM)
    fetched = repo.fetch_full_history()
    if isinstance(fetched, Err):
        return Err(
            ReleaseError(
                kind="history_failed",
                message="failed to fetch full history",
                hint=fetched.error.message,
            )
        )
    return Ok(None)


def draft_stage(
    ctx: VersionContext,
    *,
    workspace_root: Path,
    draft_env: DraftEnv,
    suite: SuiteConfig,
    console: ConsoleProtocol,
    artifacts_dir: Path | None,
    fetch_history: bool = True,
    body_out: Path | None = None,
    dry_run: bool = False,
) -> Result[DraftResult, ReleaseError]:
    """Draft a release for ctx.version.

    Steps run in a fixed order: history, artifacts, changelog, body, draft.
    History must come first because a checkout can clear the workspace.

    Args:
        artifacts_dir: Where to download artifacts of draft_env.run_id;
            None skips the download.
        fetch_history: Fetch full history and tags before the changelog.
        body_out: Also write the rendered body to this file.
        dry_run: Stop after rendering; nothing is created.
    """
    version = ctx.version
    repo = Repository(workspace_root)
    env = gh_env(draft_env)

    needs_gh = artifacts_dir is not None or not dry_run
    if needs_gh:
        available = ensure_gh_available()
        if isinstance(available, Err):
            return available
        auth = ensure_gh_auth(workspace_root=workspace_root, env=env)
        if isinstance(auth, Err):
            return auth
        console.print(f"gh account: {draft_env.account}", Style.DIM)

    console.header("Checkout history")
    if fetch_history:
        prepared = prepare_history(repo=repo, console=console)
        if isinstance(prepared, Err):
            return prepared
    else:
        console.print("skipped (--no-fetch)", Style.DIM)

    console.header("Download artifacts")
    if artifacts_dir is None:
        console.print("skipped", Style.DIM)
    else:
        if draft_env.run_id is None:
            return Err(
                ReleaseError(
                    kind="config_invalid",
                    message="no run to download artifacts from",
                    hint="Set GITHUB_RUN_ID or pass --skip-artifacts",
                )
            )
        downloaded = download_artifacts(
            workspace_root=workspace_root,
            env=env,
            repo=draft_env.repo_name,
            run_id=draft_env.run_id,
            dest=artifacts_dir,
        )
        if isinstance(downloaded, Err):
            return downloaded
        console.success(f"artifacts: {downloaded.value}")

    console.header("Generate changelog")
    changelog = generate_changelog(repo=repo, version=version)
    if isinstance(changelog, Err):
        return changelog
    console.info(f"{len(changelog.value.lines)} commits since {changelog.value.previous_tag}")

    body = render_release_body(
        version=version,
        changelog=changelog.value,
        repo_name=draft_env.repo_name,
        image_name=draft_env.image_name,
        suite=suite,
    )
    if body_out is not None:
        written = write_release_body(path=body_out, body=body)
        if isinstance(written, Err):
            return written
        console.print(f"body: {written.value}", Style.DIM)

    console.header("Create release draft")
    if dry_run:
        console.warning(f"dry-run: draft {version} not created on {draft_env.repo_name}")
        return Ok(
            DraftResult(
                context=ctx,
                changelog=changelog.value,
                body=body,
                release=None,
                artifacts_dir=artifacts_dir,
            )
        )

    created = create_draft_release(
        workspace_root=workspace_root,
        env=env,
        repo=draft_env.repo_name,
        tag=version,
        title=suite.name_placeholder,
        body=body,
        assets=RELEASE_ASSETS,
    )
    if isinstance(created, Err):
        return created
    console.success(f"draft release: {created.value.url or version}")

    return Ok(
        DraftResult(
            context=ctx,
            changelog=changelog.value,
            body=body,
            release=created.value,
            artifacts_dir=artifacts_dir,
        )
    )


def run_release_suite(
    *,
    tag: str | None,
    workspace_root: Path,
    draft_env: DraftEnv,
    suite: SuiteConfig,
    console: ConsoleProtocol,
    artifacts_dir: Path | None,
    fetch_history: bool = True,
    body_out: Path | None = None,
    dry_run: bool = False,
) -> Result[DraftResult, ReleaseError]:
    ctx = extract_stage(tag=tag, tag_ref=draft_env.tag_ref, console=console)
    if isinstance(ctx, Err):
        return ctx

    return draft_stage(
        ctx.value,
        workspace_root=workspace_root,
        draft_env=draft_env,
        suite=suite,
        console=console,
        artifacts_dir=artifacts_dir,
        fetch_history=fetch_history,
        body_out=body_out,
        dry_run=dry_run,
    )
