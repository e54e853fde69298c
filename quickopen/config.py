"""Configuration loading for QuickOpen.

Settings come from built-in defaults, then a TOML file, then
``QUICKOPEN_*`` environment variables.

Example ``config.toml``::

    candidates_file = "~/projects/files.txt"

    [ranking]
    max_results = 30
    workers = 0
    matcher = "dp"

    [display]
    placeholder = "."
    show_grid = false
    debounce_delay = 0.15
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Mapping, Optional

from .matching.matcher import MATCHERS

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "Config",
    "ConfigError",
    "DisplayConfig",
    "RankingConfig",
    "load_candidates",
    "load_config",
]

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "quickopen" / "config.toml"
CONFIG_ENV_VAR = "QUICKOPEN_CONFIG"

# Environment variable -> (section, key)
ENV_OVERRIDES = {
    "QUICKOPEN_MAX_RESULTS": ("ranking", "max_results"),
    "QUICKOPEN_WORKERS": ("ranking", "workers"),
    "QUICKOPEN_MATCHER": ("ranking", "matcher"),
    "QUICKOPEN_PLACEHOLDER": ("display", "placeholder"),
}

_TRUE_WORDS = {"1", "true", "yes", "on"}
_FALSE_WORDS = {"0", "false", "no", "off"}


class ConfigError(Exception):
    """Invalid or unreadable configuration."""


@dataclass
class RankingConfig:
    """How candidates are scored and cut off."""

    max_results: int = 30
    workers: int = 0
    matcher: str = "dp"


@dataclass
class DisplayConfig:
    """Presentation settings for the CLI and TUI."""

    placeholder: str = "."
    show_grid: bool = False
    debounce_delay: float = 0.15


@dataclass
class Config:
    """Top-level configuration."""

    ranking: RankingConfig = field(default_factory=RankingConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    candidates_file: Optional[Path] = None


def _coerce(section: str, key: str, value: Any, expected: type) -> Any:
    """Convert ``value`` to ``expected``, accepting strings from the environment."""
    where = f"{section}.{key}" if section else key
    if expected is bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.lower() in _TRUE_WORDS | _FALSE_WORDS:
            return value.lower() in _TRUE_WORDS
        raise ConfigError(f"{where} must be a boolean, got {value!r}")
    if expected is int:
        if isinstance(value, bool):
            raise ConfigError(f"{where} must be an integer, got {value!r}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError:
                pass
        raise ConfigError(f"{where} must be an integer, got {value!r}")
    if expected is float:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
        if isinstance(value, str):
            try:
                return float(value.strip())
            except ValueError:
                pass
        raise ConfigError(f"{where} must be a number, got {value!r}")
    if not isinstance(value, str):
        raise ConfigError(f"{where} must be a string, got {value!r}")
    return value


def _apply_section(target: Any, section: str, values: Mapping[str, Any]) -> None:
    if not isinstance(values, Mapping):
        raise ConfigError(f"[{section}] must be a table")
    types = {f.name: type(getattr(target, f.name)) for f in fields(target)}
    for key, value in values.items():
        if key in types:
            setattr(target, key, _coerce(section, key, value, types[key]))


def _validate(config: Config) -> None:
    if config.ranking.max_results <= 0:
        raise ConfigError(f"ranking.max_results must be positive, got {config.ranking.max_results}")
    if config.ranking.workers < 0:
        raise ConfigError(f"ranking.workers must be non-negative, got {config.ranking.workers}")
    if config.ranking.matcher not in MATCHERS:
        raise ConfigError(
            f"ranking.matcher must be one of {', '.join(MATCHERS)}, got {config.ranking.matcher!r}"
        )
    if len(config.display.placeholder) != 1:
        raise ConfigError(
            f"display.placeholder must be a single character, got {config.display.placeholder!r}"
        )
    if config.display.debounce_delay < 0:
        raise ConfigError(
            f"display.debounce_delay must be non-negative, got {config.display.debounce_delay}"
        )


def _resolve_path(path: Optional[Path], environ: Mapping[str, str]) -> Optional[Path]:
    if path is not None:
        if not path.is_file():
            raise ConfigError(f"Config file not found: {path}")
        return path
    from_env = environ.get(CONFIG_ENV_VAR)
    if from_env:
        env_path = Path(from_env).expanduser()
        if not env_path.is_file():
            raise ConfigError(f"Config file not found: {env_path} (from {CONFIG_ENV_VAR})")
        return env_path
    if DEFAULT_CONFIG_PATH.is_file():
        return DEFAULT_CONFIG_PATH
    return None


def load_config(
    path: Optional[Path] = None, environ: Optional[Mapping[str, str]] = None
) -> Config:
    """Load configuration from a TOML file and the environment.

    Args:
        path: Explicit config file. Must exist when given.
        environ: Environment mapping, defaults to ``os.environ``.

    Returns:
        Validated Config.

    Raises:
        ConfigError: Missing explicit file, unparsable TOML, or bad values.
    """
    environ = os.environ if environ is None else environ
    config = Config()

    config_path = _resolve_path(path, environ)
    if config_path is not None:
        try:
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML in {config_path}: {e}") from e

        if "ranking" in data:
            _apply_section(config.ranking, "ranking", data["ranking"])
        if "display" in data:
            _apply_section(config.display, "display", data["display"])
        if "candidates_file" in data:
            value = _coerce("", "candidates_file", data["candidates_file"], str)
            candidates = Path(value).expanduser()
            if not candidates.is_absolute():
                candidates = config_path.parent / candidates
            config.candidates_file = candidates

    for env_key, (section, key) in ENV_OVERRIDES.items():
        if env_key in environ:
            _apply_section(getattr(config, section), section, {key: environ[env_key]})

    _validate(config)
    return config


def load_candidates(path: Path) -> list[str]:
    """Read one candidate per line, skipping blank lines."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read candidates file {path}: {e}") from e
    return [line for line in text.splitlines() if line.strip()]
