"""Configuration loading primitives.

Parses TOML files and environment mappings into untyped tables. Typed
views over those tables live next to the code that consumes them.
"""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict

__all__ = [
    "CONFIG_FILE_NAME",
    "ConfigError",
    "parse_toml",
    "require_env",
]

CONFIG_FILE_NAME = "relsuite.toml"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when configuration cannot be loaded or is incomplete.

    Attributes:
        message: Human readable description.
        path: Config file involved, if any.
        missing: Names of required values that were not provided.
    """

    message: str
    path: Path | None = None
    missing: tuple[str, ...] = field(default_factory=tuple)


def parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file into a string-keyed table."""
    try:
        content = path.read_bytes()
        data = as_str_dict(tomllib.loads(content.decode("utf-8")))
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(data)


def require_env(
    environ: Mapping[str, str],
    names: Mapping[str, tuple[str, ...]],
) -> Result[dict[str, str], ConfigError]:
    """Resolve required environment values.

    Args:
        environ: Environment mapping (usually os.environ).
        names: Field name -> candidate variable names, first non-empty wins.

    Returns:
        Ok(field -> value), or Err(ConfigError) naming every missing variable.
    """
    out: dict[str, str] = {}
    missing: list[str] = []
    for key, candidates in names.items():
        value = next(
            (environ[c].strip() for c in candidates if environ.get(c, "").strip()),
            None,
        )
        if value is None:
            missing.append(" or ".join(candidates))
            continue
        out[key] = value

    if missing:
        return Err(
            ConfigError(
                f"missing required environment: {', '.join(missing)}",
                missing=tuple(missing),
            )
        )
    return Ok(out)
