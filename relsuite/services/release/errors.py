from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ReleaseErrorKind = Literal[
    "gh_missing",
    "gh_auth_required",
    "invalid_input",
    "config_invalid",
    "history_failed",
    "no_previous_tag",
    "artifacts_failed",
    "release_failed",
]


@dataclass(frozen=True, slots=True)
class ReleaseError:
    """Failure of a release suite step.

    Every kind aborts the run; the CLI maps kinds to exit codes.
    """

    kind: ReleaseErrorKind
    message: str
    hint: str | None = None

    def pretty(self) -> str:
        if self.hint:
            return f"{self.message} (hint: {self.hint})"
        return self.message
