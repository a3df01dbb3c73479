from __future__ import annotations

from pathlib import Path

from relsuite.core.result import Err, Ok, Result
from relsuite.services.release.binaries import render_binary_table
from relsuite.services.release.config import SuiteConfig
from relsuite.services.release.errors import ReleaseError
from relsuite.services.release.model import Changelog


def _checklist(title: str, items: tuple[str, ...]) -> list[str]:
    if not items:
        return []
    lines = [f"## {title} (DELETE ME)", ""]
    lines.extend(f"- [ ] {item}" for item in items)
    lines.append("")
    return lines


def render_release_body(
    *,
    version: str,
    changelog: Changelog,
    repo_name: str,
    image_name: str,
    suite: SuiteConfig,
) -> str:
    """Render the draft release description.

    Sections: checklists, summary, all changes and the binary table.
    `version` is substituted wherever the release is named. The release
    name placeholder is not part of the body; it is the draft title.
    """
    lines: list[str] = []
    lines.extend(_checklist("Testing Checklist", suite.testing_checklist))
    lines.extend(_checklist("Release Checklist", suite.release_checklist))

    lines.append("## Summary")
    lines.append("")
    lines.append("Add a summary.")
    lines.append("")

    lines.append("## All Changes")
    lines.append("")
    lines.extend(changelog.lines)
    lines.append("")

    lines.append("## Binaries")
    lines.append("")
    lines.append(f"[See pre-built binaries documentation.]({suite.docs_url})")
    lines.append("")
    lines.append(f"The binaries are signed with {suite.signer}'s PGP key: `{suite.pgp_fingerprint}`")
    lines.append("")
    lines.extend(
        render_binary_table(
            binary=suite.binary_name,
            version=version,
            repo_name=repo_name,
            image_name=image_name,
            docker_hub_url=suite.docker_hub_url,
            targets=suite.targets,
        )
    )

    return "\n".join(lines).rstrip() + "\n"


def write_release_body(*, path: Path, body: str) -> Result[Path, ReleaseError]:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(body, encoding="utf-8")
    except OSError as e:
        return Err(
            ReleaseError(
                kind="invalid_input",
                message=f"failed to write release body: {e}",
                hint=str(path),
            )
        )
    return Ok(path)
