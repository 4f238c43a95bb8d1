"""Build step descriptors.

A release build is an ordered tuple of steps, each carrying every input it
needs (absolute paths, explicit working directory). ``StepExecutor``
interprets them one by one.
"""

from __future__ import annotations

import shlex
from dataclasses import dataclass
from pathlib import Path

from oasis_build.core.config import BuildConfig
from oasis_build.platform.files import EXECUTABLE_MODE
from oasis_build.services.layout import ReleasePlan
from oasis_build.services.target import TargetSpec

__all__ = ["CopyTree", "RunCommand", "SetPermissions", "Step", "plan_steps"]


@dataclass(frozen=True, slots=True)
class RunCommand:
    label: str
    argv: tuple[str, ...]
    cwd: Path

    def describe(self) -> str:
        return f"(cd {self.cwd}) {shlex.join(self.argv)}"


@dataclass(frozen=True, slots=True)
class CopyTree:
    """Stage ``source`` into the release.

    A missing source aborts the build unless ``required`` is False, in which
    case the step only warns. The stock pipeline stages nothing optional; the
    flag is for call sites that add optional artifacts to the release.
    """

    label: str
    source: Path
    destination: Path
    required: bool = True

    def describe(self) -> str:
        return f"copy {self.source} -> {self.destination}"


@dataclass(frozen=True, slots=True)
class SetPermissions:
    label: str
    path: Path
    mode: int = EXECUTABLE_MODE

    def describe(self) -> str:
        return f"chmod {self.mode:o} {self.path}"


Step = RunCommand | CopyTree | SetPermissions


def plan_steps(
    plan: ReleasePlan,
    target: TargetSpec,
    config: BuildConfig,
    project_root: Path,
) -> tuple[Step, ...]:
    frontend_dir = project_root / config.frontend.dir
    backend_dir = project_root / config.backend.dir

    return (
        RunCommand("Install frontend dependencies", config.frontend.install, frontend_dir),
        RunCommand("Build frontend", config.frontend.build, frontend_dir),
        CopyTree(
            "Stage frontend assets",
            frontend_dir / config.frontend.output,
            plan.assets_dir,
        ),
        RunCommand("Compile backend", target.compile_command, backend_dir),
        CopyTree(
            "Stage backend binary",
            backend_dir / target.artifact_dir / target.binary_name,
            plan.binary_path,
        ),
        CopyTree(
            "Stage sample configuration",
            backend_dir / config.backend.config_sample,
            plan.config_sample_path,
        ),
        SetPermissions("Make backend executable", plan.binary_path),
    )
