"""Git operations used to build changelogs."""

from .repository import SUBJECT_FORMAT, GitError, Repository

__all__ = ["GitError", "Repository", "SUBJECT_FORMAT"]
