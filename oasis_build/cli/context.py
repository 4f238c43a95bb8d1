from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from oasis_build.core.config import CONFIG_FILENAME, BuildConfig, load_config_or_default
from oasis_build.core.errors import ErrorCode
from oasis_build.core.result import Err
from oasis_build.output.console import ConsoleProtocol, RichConsole
from oasis_build.platform.detection import PlatformInfo, detect


@dataclass(frozen=True, slots=True)
class CLIContext:
    project_root: Path
    platform: PlatformInfo
    config: BuildConfig
    console: ConsoleProtocol


def build_context(*, project: Path | None, config_path: Path | None) -> CLIContext:
    """Resolve the project root and load its config, exiting on user errors."""
    console = RichConsole()

    try:
        root = (project or Path.cwd()).expanduser().resolve()
    except OSError as e:
        console.error(f"invalid --project: {e}")
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    if not root.is_dir():
        console.error(f"project root is not a directory: {root}")
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    path = config_path if config_path is not None else root / CONFIG_FILENAME
    config_result = load_config_or_default(path)
    if isinstance(config_result, Err):
        console.error(config_result.error.message)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    return CLIContext(
        project_root=root,
        platform=detect(),
        config=config_result.value,
        console=console,
    )
