"""Git repository abstraction for release history queries.

All operations return Result types.

Usage:
    repo = Repository(Path("/path/to/checkout"))

    match repo.previous_tag("v1.2.3"):
        case Ok(tag):
            subjects = repo.log_subjects(tag, "v1.2.3")
        case Err(e):
            print(f"describe failed: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from relsuite.core.result import Err, Ok, Result
from relsuite.platform.process import ProcessError
from relsuite.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0
_GIT_NETWORK_TIMEOUT_SECONDS = 10 * 60.0

__all__ = ["GitError", "Repository", "SUBJECT_FORMAT"]

# One changelog line per commit.
SUBJECT_FORMAT = "- %s"


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git command that failed
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


class Repository:
    """A local git checkout.

    Attributes:
        path: Path to the repository root
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def exists(self) -> bool:
        """Check if this is a valid git repository."""
        return (self.path / ".git").exists()

    def is_shallow(self) -> Result[bool, GitError]:
        result = self._run(["rev-parse", "--is-shallow-repository"])
        match result:
            case Err(e):
                return Err(self._error("rev-parse --is-shallow-repository", e))
            case Ok(stdout):
                return Ok(stdout.strip() == "true")

    def fetch_full_history(self) -> Result[str, GitError]:
        """Make the whole commit history and all tags available locally.

        Unshallows the clone when needed; otherwise only refreshes tags.
        """
        shallow = self.is_shallow()
        if isinstance(shallow, Err):
            return shallow

        args = ["fetch", "--tags", "--force"]
        if shallow.value:
            args.insert(1, "--unshallow")

        result = self._run(args)
        match result:
            case Err(e):
                return Err(self._error(" ".join(args), e))
            case Ok(stdout):
                return Ok(stdout.strip())

    def previous_tag(self, ref: str) -> Result[str, GitError]:
        """Find the nearest tag reachable from the parent of `ref`.

        The tag on `ref` itself is never returned, so the result bounds a
        changelog range that excludes the previous release.
        """
        cmd = ["describe", "--tags", "--abbrev=0", f"{ref}^"]
        result = self._run(cmd)
        match result:
            case Err(e):
                return Err(self._error(" ".join(cmd), e))
            case Ok(stdout):
                tag = stdout.strip()
                if not tag:
                    return Err(GitError(command=" ".join(cmd), message="no tag found"))
                return Ok(tag)

    def log_subjects(
        self, base: str, head: str, *, fmt: str = SUBJECT_FORMAT
    ) -> Result[tuple[str, ...], GitError]:
        """List formatted commit subjects in base..head, newest first."""
        cmd = ["log", f"--pretty=format:{fmt}", f"{base}..{head}"]
        result = self._run(cmd)
        match result:
            case Err(e):
                return Err(self._error(f"log {base}..{head}", e))
            case Ok(stdout):
                return Ok(tuple(ln for ln in stdout.splitlines() if ln.strip()))

    def _error(self, command: str, e: ProcessError) -> GitError:
        return GitError(
            command=command,
            message=e.stderr.strip() or e.stdout.strip() or f"git {command} failed",
            returncode=e.returncode,
        )

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        command = args[0] if args else ""
        timeout = (
            _GIT_NETWORK_TIMEOUT_SECONDS if command in {"fetch", "pull"} else _GIT_TIMEOUT_SECONDS
        )
        return run_process(["git", "-C", str(self.path), *args], cwd=self.path, timeout=timeout)
