from __future__ import annotations

from relsuite.core.result import Err, Ok, Result
from relsuite.git.repository import Repository
from relsuite.services.release.errors import ReleaseError
from relsuite.services.release.model import Changelog


def generate_changelog(*, repo: Repository, version: str) -> Result[Changelog, ReleaseError]:
    """Collect commit subjects in (previous tag, version].

    The previous tag's own commit is excluded and the version's commit is
    included. Lines keep `git log` order (newest first).
    """
    previous = repo.previous_tag(version)
    if isinstance(previous, Err):
        return Err(
            ReleaseError(
                kind="no_previous_tag",
                message=f"no tag found before {version}",
                hint=previous.error.message,
            )
        )

    subjects = repo.log_subjects(previous.value, version)
    if isinstance(subjects, Err):
        return Err(
            ReleaseError(
                kind="history_failed",
                message=f"git log {previous.value}..{version} failed",
                hint=subjects.error.message,
            )
        )

    return Ok(Changelog(previous_tag=previous.value, version=version, lines=subjects.value))
