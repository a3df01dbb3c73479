"""Data-driven binary download table for release notes."""

from __future__ import annotations

from dataclasses import dataclass

ICON_BASE_URL = "https://simpleicons.org/icons"
ARCHIVE_SUFFIX = ".tar.gz"
SIGNATURE_SUFFIX = ".asc"

ICON_STYLE = (
    "<style> .icon {width: 32px;} @media (prefers-color-scheme: dark) "
    "{ .icon {filter: invert(1);} } "
    '[data-color-mode="light"][data-light-theme*="dark"] .icon, '
    '[data-color-mode="dark"][data-dark-theme*="dark"] .icon '
    "{ filter: invert(1); } </style>"
)


@dataclass(frozen=True, slots=True)
class BinaryTarget:
    """One row of the binary table."""

    icon: str  # simpleicons slug
    arch: str
    triple: str  # target name used in the archive file name
    portable: bool = False

    @property
    def suffix(self) -> str:
        return f"{self.triple}-portable" if self.portable else self.triple


def _pair(icon: str, arch: str, triple: str) -> tuple[BinaryTarget, BinaryTarget]:
    return (
        BinaryTarget(icon=icon, arch=arch, triple=triple),
        BinaryTarget(icon=icon, arch=arch, triple=triple, portable=True),
    )


DEFAULT_TARGETS: tuple[BinaryTarget, ...] = (
    *_pair("apple", "x86_64", "x86_64-apple-darwin"),
    *_pair("linux", "x86_64", "x86_64-unknown-linux-gnu"),
    *_pair("raspberrypi", "aarch64", "aarch64-unknown-linux-gnu"),
    *_pair("windows", "x86_64", "x86_64-windows"),
)


def artifact_name(*, binary: str, version: str, target: BinaryTarget) -> str:
    return f"{binary}-{version}-{target.suffix}{ARCHIVE_SUFFIX}"


def download_url(*, repo_name: str, version: str, file_name: str) -> str:
    return f"https://github.com/{repo_name}/releases/download/{version}/{file_name}"


def _icon(slug: str) -> str:
    return f'<img src="{ICON_BASE_URL}/{slug}.svg" class="icon"/>'


def render_binary_table(
    *,
    binary: str,
    version: str,
    repo_name: str,
    image_name: str,
    docker_hub_url: str,
    targets: tuple[BinaryTarget, ...] = DEFAULT_TARGETS,
) -> list[str]:
    """Render the binary table as Markdown lines.

    One row per target with archive and PGP signature links, followed by a
    separator and the Docker image row.
    """
    lines = [
        ICON_STYLE,
        "| System | Architecture | Binary | PGP Signature |",
        "|:---:|:---:|:---:|:---|",
    ]
    for target in targets:
        name = artifact_name(binary=binary, version=version, target=target)
        url = download_url(repo_name=repo_name, version=version, file_name=name)
        lines.append(
            f"| {_icon(target.icon)} | {target.arch} | [{name}]({url}) "
            f"| [PGP Signature]({url}{SIGNATURE_SUFFIX}) |"
        )

    image_url = f"{docker_hub_url}/{image_name}"
    tags_url = f"{image_url}/tags?page=1&ordering=last_updated&name={version}"
    lines.append("| | | | |")
    lines.append("| **System** | **Option** | - | **Resource** |")
    lines.append(
        f"| {_icon('docker')} | Docker | [{version}]({tags_url}) | [{image_name}]({image_url}) |"
    )
    return lines
