"""Typed build configuration.

The defaults describe the stock Oasis checkout (``frontend/`` built with npm,
``backend/`` built with cargo). A project may override any of them with an
``oasis-build.toml`` file at its root.
"""

from __future__ import annotations

import shlex
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_table

__all__ = [
    "BackendConfig",
    "BuildConfig",
    "CONFIG_FILENAME",
    "ConfigError",
    "DEFAULT_CROSS_TARGET",
    "FrontendConfig",
    "ReleaseConfig",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILENAME = "oasis-build.toml"

DEFAULT_APP_NAME = "oasis"
DEFAULT_CROSS_TARGET = "x86_64-pc-windows-gnu"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when the config file cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class FrontendConfig:
    """Frontend sub-project: directory, commands and output folder."""

    dir: str = "frontend"
    install: tuple[str, ...] = ("npm", "i")
    build: tuple[str, ...] = ("npm", "run", "build")
    output: str = "public"


@dataclass(frozen=True, slots=True)
class BackendConfig:
    """Backend sub-project: directory, compiler command and artifacts."""

    dir: str = "backend"
    build: tuple[str, ...] = ("cargo", "build", "--release")
    target_dir: str = "target"
    config_sample: str = "assets/oasis.conf.sample"


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    dir: str = "release"
    cross_target: str = DEFAULT_CROSS_TARGET


@dataclass(frozen=True, slots=True)
class BuildConfig:
    """Main configuration container."""

    app_name: str = DEFAULT_APP_NAME
    frontend: FrontendConfig = field(default_factory=FrontendConfig)
    backend: BackendConfig = field(default_factory=BackendConfig)
    release: ReleaseConfig = field(default_factory=ReleaseConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> BuildConfig:
        """Create a BuildConfig from parsed TOML, falling back to defaults per key.

        Raises:
            ValueError: If a command string cannot be split into arguments.
        """
        project: StrDict = get_table(data, "project") or {}
        frontend: StrDict = get_table(data, "frontend") or {}
        backend: StrDict = get_table(data, "backend") or {}
        release: StrDict = get_table(data, "release") or {}

        fe = FrontendConfig()
        be = BackendConfig()
        rel = ReleaseConfig()

        return cls(
            app_name=get_str(project, "name") or DEFAULT_APP_NAME,
            frontend=FrontendConfig(
                dir=get_str(frontend, "dir") or fe.dir,
                install=_get_command(frontend, "install") or fe.install,
                build=_get_command(frontend, "build") or fe.build,
                output=get_str(frontend, "output") or fe.output,
            ),
            backend=BackendConfig(
                dir=get_str(backend, "dir") or be.dir,
                build=_get_command(backend, "build") or be.build,
                target_dir=get_str(backend, "target_dir") or be.target_dir,
                config_sample=get_str(backend, "config_sample") or be.config_sample,
            ),
            release=ReleaseConfig(
                dir=get_str(release, "dir") or rel.dir,
                cross_target=get_str(release, "cross_target") or rel.cross_target,
            ),
        )


def _get_command(table: Mapping[str, object], key: str) -> tuple[str, ...] | None:
    """Split a command string (``"npm run build"``) into argv."""
    raw = get_str(table, key)
    if raw is None:
        return None
    argv = tuple(shlex.split(raw))
    return argv or None


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        data_obj: object = tomllib.loads(path.read_bytes().decode("utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(data)


def load_config(path: Path) -> Result[BuildConfig, ConfigError]:
    """Load and parse configuration from a TOML file.

    Returns:
        Ok(BuildConfig) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(BuildConfig.from_dict(result.value))
    except ValueError as e:
        return Err(ConfigError(f"Invalid config value: {e}", path=path))


def load_config_or_default(path: Path) -> Result[BuildConfig, ConfigError]:
    """Load config from file, or return the defaults if the file doesn't exist.

    A file that exists but fails to parse is still an error.
    """
    if not path.exists():
        return Ok(BuildConfig())
    return load_config(path)
