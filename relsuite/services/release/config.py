"""Typed release configuration.

`DraftEnv` holds the runtime values the hosting runner injects (token,
account, repository, image). They are all required and checked up front.

`SuiteConfig` holds the release-notes template data. It is read from an
optional `relsuite.toml`; every field defaults to the Lighthouse release
template.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from relsuite.core.config import ConfigError, parse_toml, require_env
from relsuite.core.result import Err, Ok, Result
from relsuite.core.structured import (
    StrDict,
    as_str_dict,
    get_bool,
    get_list,
    get_str,
    get_str_list,
    get_table,
)
from relsuite.services.release.binaries import DEFAULT_TARGETS, BinaryTarget

_REPO_SLUG_RE = re.compile(r"^[A-Za-z0-9_.-]+/[A-Za-z0-9_.-]+$")


def _check_repo_slug(repo_name: str) -> Result[str, ConfigError]:
    if not _REPO_SLUG_RE.match(repo_name):
        return Err(ConfigError(f"invalid repository name (expected owner/name): {repo_name}"))
    return Ok(repo_name)


# Field -> accepted environment variables, first non-empty wins.
REQUIRED_ENV: dict[str, tuple[str, ...]] = {
    "token": ("GITHUB_TOKEN", "GH_TOKEN"),
    "account": ("GITHUB_USER",),
    "repo_name": ("REPO_NAME", "GITHUB_REPOSITORY"),
    "image_name": ("IMAGE_NAME",),
}

DEFAULT_BINARY_NAME = "lighthouse"
DEFAULT_DOCS_URL = "https://lighthouse-book.sigmaprime.io/installation-binaries.html"
DEFAULT_SIGNER = "Sigma Prime"
DEFAULT_PGP_FINGERPRINT = "15E66D941F697E28F49381F426416DC3F30674B0"
DEFAULT_DOCKER_HUB_URL = "https://hub.docker.com/r"
DEFAULT_NAME_PLACEHOLDER = "<Rick and Morty character>"

DEFAULT_TESTING_CHECKLIST: tuple[str, ...] = (
    "Run on synced Pyrmont Sigma Prime nodes.",
    "Run on synced Prater Sigma Prime nodes.",
    "Run on synced Canary (mainnet) Sigma Prime nodes.",
    "Resync a Pyrmont node.",
    "Resync a Prater node.",
    "Resync a mainnet node.",
)

DEFAULT_RELEASE_CHECKLIST: tuple[str, ...] = (
    "Merge `unstable` -> `stable`.",
    "Ensure docker images are published (check `latest` and the version tag).",
    "Prepare Discord post.",
    "Prepare Twitter post.",
    "Prepare mailing list email.",
)


@dataclass(frozen=True, slots=True)
class DraftEnv:
    """Runtime values needed to draft a release."""

    token: str
    account: str
    repo_name: str  # owner/name
    image_name: str
    tag_ref: str | None = None
    run_id: str | None = None


def load_draft_env(environ: Mapping[str, str]) -> Result[DraftEnv, ConfigError]:
    """Build DraftEnv from an environment mapping.

    Every missing variable is reported in a single error.
    """
    required = require_env(environ, REQUIRED_ENV)
    if isinstance(required, Err):
        return required

    values = required.value
    slug = _check_repo_slug(values["repo_name"])
    if isinstance(slug, Err):
        return slug

    return Ok(
        DraftEnv(
            token=values["token"],
            account=values["account"],
            repo_name=values["repo_name"],
            image_name=values["image_name"],
            tag_ref=environ.get("GITHUB_REF") or None,
            run_id=environ.get("GITHUB_RUN_ID", "").strip() or None,
        )
    )


@dataclass(frozen=True, slots=True)
class NotesEnv:
    """The subset of DraftEnv needed to render notes without touching the API."""

    repo_name: str
    image_name: str
    tag_ref: str | None = None


def load_notes_env(environ: Mapping[str, str]) -> Result[NotesEnv, ConfigError]:
    names = {k: REQUIRED_ENV[k] for k in ("repo_name", "image_name")}
    required = require_env(environ, names)
    if isinstance(required, Err):
        return required

    slug = _check_repo_slug(required.value["repo_name"])
    if isinstance(slug, Err):
        return slug

    return Ok(
        NotesEnv(
            repo_name=required.value["repo_name"],
            image_name=required.value["image_name"],
            tag_ref=environ.get("GITHUB_REF") or None,
        )
    )


@dataclass(frozen=True, slots=True)
class SuiteConfig:
    """Release notes template data."""

    binary_name: str = DEFAULT_BINARY_NAME
    name_placeholder: str = DEFAULT_NAME_PLACEHOLDER
    docs_url: str = DEFAULT_DOCS_URL
    signer: str = DEFAULT_SIGNER
    pgp_fingerprint: str = DEFAULT_PGP_FINGERPRINT
    docker_hub_url: str = DEFAULT_DOCKER_HUB_URL
    testing_checklist: tuple[str, ...] = DEFAULT_TESTING_CHECKLIST
    release_checklist: tuple[str, ...] = DEFAULT_RELEASE_CHECKLIST
    targets: tuple[BinaryTarget, ...] = DEFAULT_TARGETS

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> SuiteConfig:
        """Create SuiteConfig from a parsed TOML mapping.

        Raises:
            ValueError: If a binaries.targets entry is incomplete.
        """
        notes: StrDict = get_table(data, "notes") or {}
        binaries: StrDict = get_table(data, "binaries") or {}

        targets = DEFAULT_TARGETS
        raw_targets = get_list(binaries, "targets")
        if raw_targets is not None:
            targets = tuple(_parse_target(item) for item in raw_targets)

        return cls(
            binary_name=get_str(binaries, "name") or DEFAULT_BINARY_NAME,
            name_placeholder=get_str(notes, "name_placeholder") or DEFAULT_NAME_PLACEHOLDER,
            docs_url=get_str(binaries, "docs_url") or DEFAULT_DOCS_URL,
            signer=get_str(binaries, "signer") or DEFAULT_SIGNER,
            pgp_fingerprint=get_str(binaries, "pgp_fingerprint") or DEFAULT_PGP_FINGERPRINT,
            docker_hub_url=(get_str(binaries, "docker_hub_url") or DEFAULT_DOCKER_HUB_URL).rstrip(
                "/"
            ),
            testing_checklist=_checklist(notes, "testing_checklist", DEFAULT_TESTING_CHECKLIST),
            release_checklist=_checklist(notes, "release_checklist", DEFAULT_RELEASE_CHECKLIST),
            targets=targets,
        )


def _checklist(table: StrDict, key: str, default: tuple[str, ...]) -> tuple[str, ...]:
    items = get_str_list(table, key)
    return default if items is None else items


def _parse_target(item: object) -> BinaryTarget:
    d = as_str_dict(item)
    if d is None:
        raise ValueError("binaries.targets entries must be tables")

    icon = get_str(d, "icon")
    arch = get_str(d, "arch")
    triple = get_str(d, "triple")
    if icon is None or arch is None or triple is None:
        raise ValueError("binaries.targets entries need icon, arch and triple")
    return BinaryTarget(icon=icon, arch=arch, triple=triple, portable=bool(get_bool(d, "portable")))


def load_suite_config(path: Path) -> Result[SuiteConfig, ConfigError]:
    """Load template data from a TOML file."""
    parsed = parse_toml(path)
    if isinstance(parsed, Err):
        return parsed

    try:
        return Ok(SuiteConfig.from_dict(parsed.value))
    except ValueError as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_suite_config_or_default(path: Path) -> Result[SuiteConfig, ConfigError]:
    """Load template data, or defaults when the file does not exist.

    A file that exists but is invalid is still an error.
    """
    if not path.exists():
        return Ok(SuiteConfig())
    return load_suite_config(path)
