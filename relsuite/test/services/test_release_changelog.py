from __future__ import annotations

from typing import TYPE_CHECKING

from relsuite.core.result import Err, Ok
from relsuite.git.repository import GitError, Repository
from relsuite.services.release.changelog import generate_changelog
from relsuite.services.release.model import Changelog

if TYPE_CHECKING:
    from relsuite.test.conftest import TaggedRepo


def test_changelog_between_tags(tagged_repo: TaggedRepo) -> None:
    result = generate_changelog(repo=Repository(tagged_repo.path), version="v1.1.0")

    assert result == Ok(
        Changelog(
            previous_tag="v1.0.0",
            version="v1.1.0",
            lines=("- add feature", "- fix bug"),
        )
    )


def test_changelog_excludes_previous_tag_commit(tagged_repo: TaggedRepo) -> None:
    result = generate_changelog(repo=Repository(tagged_repo.path), version="v1.1.0")

    assert isinstance(result, Ok)
    assert "- initial commit" not in result.value.lines
    assert result.value.lines[0] == "- add feature"


def test_changelog_is_deterministic(tagged_repo: TaggedRepo) -> None:
    repo = Repository(tagged_repo.path)
    first = generate_changelog(repo=repo, version="v1.1.0")
    second = generate_changelog(repo=repo, version="v1.1.0")
    assert first == second


def test_changelog_ignores_later_commits(tagged_repo: TaggedRepo) -> None:
    tagged_repo.commit("after release")
    result = generate_changelog(repo=Repository(tagged_repo.path), version="v1.1.0")

    assert isinstance(result, Ok)
    assert "- after release" not in result.value.lines


def test_changelog_without_previous_tag_fails(tagged_repo: TaggedRepo) -> None:
    result = generate_changelog(repo=Repository(tagged_repo.path), version="v1.0.0")

    assert isinstance(result, Err)
    assert result.error.kind == "no_previous_tag"


class _BrokenLogRepo:
    def previous_tag(self, ref: str) -> Ok[str]:
        return Ok("v1.0.0")

    def log_subjects(self, base: str, head: str) -> Err[GitError]:
        return Err(GitError(command="log", message="bad object"))


def test_changelog_log_failure() -> None:
    repo = _BrokenLogRepo()

    result = generate_changelog(repo=repo, version="v1.1.0")  # type: ignore[arg-type]
    assert isinstance(result, Err)
    assert result.error.kind == "history_failed"
    assert result.error.hint == "bad object"


def test_markdown_joins_lines() -> None:
    log = Changelog(previous_tag="v1", version="v2", lines=("- fix bug", "- add feature"))
    assert log.markdown() == "- fix bug\n- add feature"
