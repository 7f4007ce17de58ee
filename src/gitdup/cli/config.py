"""TOML configuration for default flag values.

Two optional files are read:

- ``$XDG_CONFIG_HOME/gitdup/config.toml`` (default ``~/.config/gitdup/config.toml``)
- ``.gitdup.toml`` in the project being duplicated

Example:
  remote = "upstream"
  clean = true
  install = false

Precedence: CLI flags > project file > global file > built-in defaults.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from gitdup.core.errors import ConfigError
from gitdup.core.types import DEFAULT_REMOTE

PROJECT_CONFIG_NAME = ".gitdup.toml"


@dataclass(frozen=True)
class PartialConfig:
    """Values read from one config file; None means "not set here"."""

    remote: str | None
    clean: bool | None
    install: bool | None

    @staticmethod
    def empty() -> PartialConfig:
        return PartialConfig(remote=None, clean=None, install=None)


@dataclass(frozen=True)
class GitDupConfig:
    """Effective defaults after merging every config layer."""

    remote: str
    clean: bool
    install: bool

    @staticmethod
    def defaults() -> GitDupConfig:
        return GitDupConfig(remote=DEFAULT_REMOTE, clean=False, install=True)


def global_config_path() -> Path:
    """Location of the user-wide config file."""
    xdg = os.environ.get("XDG_CONFIG_HOME", "")
    config_home = Path(xdg) if xdg else Path.home() / ".config"
    return config_home / "gitdup" / "config.toml"


def _typed(data: dict[str, Any], key: str, expected: type, path: Path) -> Any:
    if key not in data:
        return None
    value = data[key]
    if not isinstance(value, expected):
        raise ConfigError(
            f"Invalid value for '{key}' in {path}: expected {expected.__name__}, "
            f"got {type(value).__name__}"
        )
    return value


def load_config(path: Path) -> PartialConfig:
    """Read a single config file. A missing file yields an empty PartialConfig.

    Unknown keys are ignored.

    Raises:
        ConfigError: If the file is not valid TOML or a value has the wrong type
    """
    if not path.exists():
        return PartialConfig.empty()

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    return PartialConfig(
        remote=_typed(data, "remote", str, path),
        clean=_typed(data, "clean", bool, path),
        install=_typed(data, "install", bool, path),
    )


def load_global_config() -> PartialConfig:
    return load_config(global_config_path())


def load_project_config(project_root: Path) -> PartialConfig:
    return load_config(project_root / PROJECT_CONFIG_NAME)


def merge_configs(global_config: PartialConfig, project_config: PartialConfig) -> GitDupConfig:
    """Overlay the project layer on the global layer on the built-in defaults."""
    merged = GitDupConfig.defaults()
    for layer in (global_config, project_config):
        merged = GitDupConfig(
            remote=layer.remote if layer.remote is not None else merged.remote,
            clean=layer.clean if layer.clean is not None else merged.clean,
            install=layer.install if layer.install is not None else merged.install,
        )
    return merged
