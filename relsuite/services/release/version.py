"""Version extraction from tag references."""

from __future__ import annotations

from pathlib import Path

from relsuite.core.result import Err, Ok, Result
from relsuite.services.release.errors import ReleaseError
from relsuite.services.release.model import VersionContext

TAG_REF_PREFIX = "refs/tags/"


def extract_version(tag_ref: str) -> str:
    """Strip the `refs/tags/` prefix from a tag reference.

    No normalization or validation: `refs/tags/v1.2.3` gives `v1.2.3` and
    a value without the prefix is returned unchanged.
    """
    return tag_ref.removeprefix(TAG_REF_PREFIX)


def resolve_version(*, tag: str | None, tag_ref: str | None) -> Result[VersionContext, ReleaseError]:
    """Pick the release version from an explicit tag or a tag reference.

    An explicit tag wins. The only check is that the version is not blank;
    the value is otherwise used exactly as given.
    """
    if tag is not None and tag.strip():
        return Ok(VersionContext(version=tag, tag_ref=tag_ref))

    if tag_ref is None or not tag_ref.strip():
        return Err(
            ReleaseError(
                kind="invalid_input",
                message="no tag reference to extract a version from",
                hint="Pass --tag or set GITHUB_REF=refs/tags/<version>",
            )
        )

    version = extract_version(tag_ref)
    if not version.strip():
        return Err(
            ReleaseError(
                kind="invalid_input",
                message=f"empty version extracted from: {tag_ref}",
            )
        )
    return Ok(VersionContext(version=version, tag_ref=tag_ref))


def write_step_output(path: Path, *, name: str, value: str) -> Result[None, ReleaseError]:
    """Append `name=value` to a runner step-output file ($GITHUB_OUTPUT)."""
    if "\n" in value:
        return Err(
            ReleaseError(kind="invalid_input", message=f"step output {name} must be one line")
        )

    try:
        with path.open("a", encoding="utf-8") as f:
            f.write(f"{name}={value}\n")
    except OSError as e:
        return Err(
            ReleaseError(
                kind="invalid_input",
                message=f"failed to write step output: {e}",
                hint=str(path),
            )
        )
    return Ok(None)
