from __future__ import annotations

from pathlib import Path

import pytest

from relsuite.core.result import Err, Ok
from relsuite.services.release.model import VersionContext
from relsuite.services.release.version import (
    extract_version,
    resolve_version,
    write_step_output,
)


@pytest.mark.parametrize(
    ("ref", "expected"),
    [
        ("refs/tags/v1.2.3", "v1.2.3"),
        ("refs/tags/v0.0.1", "v0.0.1"),
        ("refs/tags/v2.0.0-rc.1", "v2.0.0-rc.1"),
    ],
)
def test_extract_version_strips_prefix(ref: str, expected: str) -> None:
    assert extract_version(ref) == expected


@pytest.mark.parametrize("ref", ["v1.2.3", "refs/heads/main", "tags/v1.2.3", ""])
def test_extract_version_without_prefix_is_unchanged(ref: str) -> None:
    assert extract_version(ref) == ref


def test_extract_version_only_strips_leading_prefix() -> None:
    assert extract_version("refs/tags/refs/tags/v1") == "refs/tags/v1"


def test_resolve_version_from_ref() -> None:
    result = resolve_version(tag=None, tag_ref="refs/tags/v1.2.3")
    assert result == Ok(VersionContext(version="v1.2.3", tag_ref="refs/tags/v1.2.3"))


def test_resolve_version_explicit_tag_wins() -> None:
    result = resolve_version(tag="v9.0.0", tag_ref="refs/tags/v1.2.3")
    assert isinstance(result, Ok)
    assert result.value.version == "v9.0.0"


def test_resolve_version_malformed_ref_passes_through() -> None:
    result = resolve_version(tag=None, tag_ref="not-a-tag")
    assert isinstance(result, Ok)
    assert result.value.version == "not-a-tag"


@pytest.mark.parametrize("ref", [None, "", "   ", "refs/tags/"])
def test_resolve_version_rejects_empty(ref: str | None) -> None:
    result = resolve_version(tag=None, tag_ref=ref)
    assert isinstance(result, Err)
    assert result.error.kind == "invalid_input"


def test_write_step_output_appends(tmp_path: Path) -> None:
    out = tmp_path / "github_output"
    out.write_text("OTHER=1\n", encoding="utf-8")

    assert write_step_output(out, name="VERSION", value="v1.2.3") == Ok(None)
    assert out.read_text(encoding="utf-8") == "OTHER=1\nVERSION=v1.2.3\n"


def test_write_step_output_rejects_multiline(tmp_path: Path) -> None:
    result = write_step_output(tmp_path / "out", name="VERSION", value="v1\nv2")
    assert isinstance(result, Err)


def test_resolve_version_keeps_surrounding_whitespace() -> None:
    assert resolve_version(tag=None, tag_ref=" v1 ") == Ok(
        VersionContext(version=" v1 ", tag_ref=" v1 ")
    )
    result = resolve_version(tag=" v2 ", tag_ref=None)
    assert isinstance(result, Ok)
    assert result.value.version == " v2 "
