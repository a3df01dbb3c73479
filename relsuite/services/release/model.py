from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True, slots=True)
class VersionContext:
    """Output of the version stage, handed to the drafting stage."""

    version: str
    tag_ref: str | None = None


@dataclass(frozen=True, slots=True)
class Changelog:
    previous_tag: str
    version: str
    lines: tuple[str, ...]

    def markdown(self) -> str:
        return "\n".join(self.lines)


@dataclass(frozen=True, slots=True)
class DraftRelease:
    """A draft release as created on the host."""

    tag: str
    url: str
    assets: tuple[Path, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class DraftResult:
    context: VersionContext
    changelog: Changelog
    body: str
    # None when the run was a dry run
    release: DraftRelease | None
    artifacts_dir: Path | None
