from __future__ import annotations

import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

import pytest

_GIT = ["git", "-c", "commit.gpgsign=false", "-c", "tag.gpgsign=false"]


@dataclass(frozen=True, slots=True)
class TaggedRepo:
    """A throwaway repository with two releases.

    History (oldest first):
        "initial commit"      tagged v1.0.0
        "fix bug"
        "add feature"         tagged v1.1.0
    """

    path: Path

    def git(self, *args: str) -> str:
        proc = subprocess.run(
            [*_GIT, "-C", str(self.path), *args],
            capture_output=True,
            text=True,
            check=True,
        )
        return proc.stdout

    def commit(self, subject: str) -> None:
        self.git("commit", "--allow-empty", "-q", "-m", subject)

    def tag(self, name: str) -> None:
        self.git("tag", "-a", name, "-m", f"release {name}")


def make_tagged_repo(path: Path) -> TaggedRepo:
    path.mkdir(parents=True, exist_ok=True)
    repo = TaggedRepo(path)
    repo.git("init", "-q")
    repo.git("config", "user.name", "Release Bot")
    repo.git("config", "user.email", "release-bot@example.com")

    repo.commit("initial commit")
    repo.tag("v1.0.0")
    repo.commit("fix bug")
    repo.commit("add feature")
    repo.tag("v1.1.0")
    return repo


@pytest.fixture
def tagged_repo(tmp_path: Path) -> TaggedRepo:
    if shutil.which("git") is None:
        pytest.skip("git not installed")
    return make_tagged_repo(tmp_path / "repo")
