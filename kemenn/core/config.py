"""Typed configuration loading and access.

The user configuration file supplies defaults for the announce command.
Every key is optional; command-line options always take precedence.

Example config.toml:

    emitter = "Jane Doe <jane@example.com>"
    changelog = "CHANGELOG.md"
    template = "~/.config/kemenn/announce.mustache"
    signature = "~/.signature-work"
    loose = false
    recipients = ["dev@lists.example.com"]

    [parameters]
    prefix = "RELEASE"
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import (
    StrDict,
    as_str_dict,
    get_bool,
    get_str,
    get_str_list,
    get_table,
)

__all__ = [
    "Config",
    "ConfigError",
    "load_config",
    "load_config_or_default",
]


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


def _expand(value: str | None) -> Path | None:
    if value is None:
        return None
    return Path(value).expanduser()


@dataclass(frozen=True, slots=True)
class Config:
    """User defaults for the announce command."""

    emitter: str | None = None
    changelog: str | None = None
    template: Path | None = None
    signature: Path | None = None
    loose: bool = False
    recipients: tuple[str, ...] = ()
    parameters: dict[str, str] = field(default_factory=dict[str, str])

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML).

        Raises:
            ValueError: If a key holds a value of the wrong type.
        """
        if "loose" in data and get_bool(data, "loose") is None:
            raise ValueError("'loose' must be a boolean")
        if "recipients" in data and get_str_list(data, "recipients") is None:
            raise ValueError("'recipients' must be a list of strings")

        params: StrDict = get_table(data, "parameters") or {}
        parameters: dict[str, str] = {}
        for key, value in params.items():
            if not isinstance(value, str):
                raise ValueError(f"parameter '{key}' must be a string")
            parameters[key] = value

        return cls(
            emitter=get_str(data, "emitter"),
            changelog=get_str(data, "changelog"),
            template=_expand(get_str(data, "template")),
            signature=_expand(get_str(data, "signature")),
            loose=get_bool(data, "loose") or False,
            recipients=tuple(get_str_list(data, "recipients") or ()),
            parameters=parameters,
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))
    except OSError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to config.toml file

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Result[Config, ConfigError]:
    """Load config, returning the default config when the file does not exist.

    A file that exists but cannot be parsed is still an error.
    """
    if not path.exists():
        return Ok(Config())
    return load_config(path)
