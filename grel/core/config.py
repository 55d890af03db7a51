"""Typed configuration loading.

An optional ``.grel.toml`` file in the repository supplies defaults for the
release command:

    [release]
    api_base_url = "https://gitee.com"
    lang = "en-us"
    remote = "origin"
    target_commitish = "main"
    timeout = 60
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_number, get_str, get_table

__all__ = [
    "CONFIG_FILE_NAME",
    "Config",
    "ConfigError",
    "DEFAULT_API_BASE_URL",
    "DEFAULT_HTTP_TIMEOUT_SECONDS",
    "DEFAULT_LANG",
    "DEFAULT_REMOTE",
    "DEFAULT_TARGET_COMMITISH",
    "ReleaseConfig",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILE_NAME = ".grel.toml"

DEFAULT_API_BASE_URL = "https://gitee.com"
DEFAULT_LANG = "zh-cn"
DEFAULT_REMOTE = "origin"
DEFAULT_TARGET_COMMITISH = "main"
DEFAULT_HTTP_TIMEOUT_SECONDS = 60.0


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    """Defaults for the release command."""

    api_base_url: str = DEFAULT_API_BASE_URL
    lang: str = DEFAULT_LANG
    remote: str = DEFAULT_REMOTE
    target_commitish: str = DEFAULT_TARGET_COMMITISH
    timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    release: ReleaseConfig = field(default_factory=ReleaseConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML)."""
        release: StrDict = get_table(data, "release") or {}

        timeout = get_number(release, "timeout")
        if timeout is not None and timeout <= 0:
            raise ValueError(f"release.timeout must be positive, got {timeout}")

        return cls(
            release=ReleaseConfig(
                api_base_url=(get_str(release, "api_base_url") or DEFAULT_API_BASE_URL).rstrip(
                    "/"
                ),
                lang=get_str(release, "lang") or DEFAULT_LANG,
                remote=get_str(release, "remote") or DEFAULT_REMOTE,
                target_commitish=get_str(release, "target_commitish")
                or DEFAULT_TARGET_COMMITISH,
                timeout=timeout or DEFAULT_HTTP_TIMEOUT_SECONDS,
            )
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


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to the config file

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
    """Load config if the file exists, defaults otherwise.

    A file that exists but cannot be parsed is still an error.
    """
    if not path.exists():
        return Ok(Config())
    return load_config(path)
