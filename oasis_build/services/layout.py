"""Release layout planning and reset."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from oasis_build.core.config import BuildConfig
from oasis_build.core.result import Err, Ok, Result
from oasis_build.platform.files import reset_dir
from oasis_build.services.build_errors import LayoutFailed
from oasis_build.services.target import TargetSpec

__all__ = ["ReleasePlan", "plan_release", "prepare_layout"]


@dataclass(frozen=True, slots=True)
class ReleasePlan:
    """Where every artifact lands inside the release directory."""

    root: Path
    assets_subpath: str
    binary_subpath: str
    config_sample_subpath: str
    binary_name: str

    @property
    def assets_dir(self) -> Path:
        return self.root / self.assets_subpath

    @property
    def binary_path(self) -> Path:
        return self.root / self.binary_subpath

    @property
    def config_sample_path(self) -> Path:
        return self.root / self.config_sample_subpath


def plan_release(target: TargetSpec, config: BuildConfig, project_root: Path) -> ReleasePlan:
    """Compute the release layout.

    Cross builds get their own ``<app>-<triple>`` root next to the native
    ``<app>`` one, so building both never mixes artifacts.
    """
    dirname = config.app_name if target.triple is None else f"{config.app_name}-{target.triple}"
    return ReleasePlan(
        root=project_root / config.release.dir / dirname,
        assets_subpath=config.frontend.output,
        binary_subpath=target.binary_name,
        config_sample_subpath=PurePosixPath(config.backend.config_sample).name,
        binary_name=target.binary_name,
    )


def prepare_layout(root: Path) -> Result[Path, LayoutFailed]:
    """Guarantee ``root`` exists and is empty, wiping any previous release."""
    try:
        reset_dir(root)
    except OSError as e:
        return Err(LayoutFailed(path=root, reason=e.strerror or str(e)))
    return Ok(root)
