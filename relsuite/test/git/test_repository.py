"""Tests for git/repository.py against real throwaway repositories."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import TYPE_CHECKING

from relsuite.core.result import Err, Ok
from relsuite.git.repository import Repository

if TYPE_CHECKING:
    from relsuite.test.conftest import TaggedRepo


def _clone(src: Path, dst: Path, *extra: str) -> Repository:
    subprocess.run(
        ["git", "clone", "-q", *extra, f"file://{src}", str(dst)],
        capture_output=True,
        check=True,
    )
    return Repository(dst)


class TestPreviousTag:
    def test_skips_tag_on_ref_itself(self, tagged_repo: TaggedRepo) -> None:
        repo = Repository(tagged_repo.path)
        assert repo.previous_tag("v1.1.0") == Ok("v1.0.0")

    def test_works_from_untagged_commit(self, tagged_repo: TaggedRepo) -> None:
        tagged_repo.commit("unreleased work")
        repo = Repository(tagged_repo.path)
        assert repo.previous_tag("HEAD") == Ok("v1.1.0")

    def test_first_release_has_no_previous_tag(self, tagged_repo: TaggedRepo) -> None:
        repo = Repository(tagged_repo.path)
        result = repo.previous_tag("v1.0.0")
        assert isinstance(result, Err)
        assert result.error.returncode != 0

    def test_unknown_ref(self, tagged_repo: TaggedRepo) -> None:
        repo = Repository(tagged_repo.path)
        assert isinstance(repo.previous_tag("v9.9.9"), Err)


class TestLogSubjects:
    def test_range_is_exclusive_inclusive(self, tagged_repo: TaggedRepo) -> None:
        repo = Repository(tagged_repo.path)
        result = repo.log_subjects("v1.0.0", "v1.1.0")
        assert result == Ok(("- add feature", "- fix bug"))

    def test_custom_format(self, tagged_repo: TaggedRepo) -> None:
        repo = Repository(tagged_repo.path)
        result = repo.log_subjects("v1.0.0", "v1.1.0", fmt="* %s")
        assert result == Ok(("* add feature", "* fix bug"))

    def test_empty_range(self, tagged_repo: TaggedRepo) -> None:
        repo = Repository(tagged_repo.path)
        assert repo.log_subjects("v1.1.0", "v1.1.0") == Ok(())

    def test_bad_range(self, tagged_repo: TaggedRepo) -> None:
        repo = Repository(tagged_repo.path)
        result = repo.log_subjects("v0.0.1", "v1.1.0")
        assert isinstance(result, Err)
        assert result.error.command == "log v0.0.1..v1.1.0"


class TestHistory:
    def test_exists(self, tagged_repo: TaggedRepo, tmp_path: Path) -> None:
        assert Repository(tagged_repo.path).exists()
        assert not Repository(tmp_path / "nowhere").exists()

    def test_full_clone_is_not_shallow(self, tagged_repo: TaggedRepo) -> None:
        assert Repository(tagged_repo.path).is_shallow() == Ok(False)

    def test_fetch_unshallows_clone(self, tagged_repo: TaggedRepo, tmp_path: Path) -> None:
        repo = _clone(tagged_repo.path, tmp_path / "shallow", "--depth", "1", "--no-tags")
        assert repo.is_shallow() == Ok(True)

        fetched = repo.fetch_full_history()
        assert isinstance(fetched, Ok)
        assert repo.is_shallow() == Ok(False)
        assert repo.previous_tag("v1.1.0") == Ok("v1.0.0")

    def test_fetch_picks_up_new_tags(self, tagged_repo: TaggedRepo, tmp_path: Path) -> None:
        repo = _clone(tagged_repo.path, tmp_path / "clone")
        tagged_repo.commit("next")
        tagged_repo.tag("v1.2.0")

        assert isinstance(repo.fetch_full_history(), Ok)
        assert repo.log_subjects("v1.1.0", "v1.2.0") == Ok(("- next",))

    def test_fetch_without_remote_fails(self, tagged_repo: TaggedRepo) -> None:
        result = Repository(tagged_repo.path).fetch_full_history()
        assert isinstance(result, Err)
        assert result.error.command.startswith("fetch")
