"""Target resolution: which compiler invocation to issue and where it puts the binary.

Pure functions of the invocation mode, the host platform and the config;
nothing here touches the filesystem.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum, auto
from pathlib import PurePosixPath

from oasis_build.core.config import BuildConfig
from oasis_build.platform.detection import Platform

__all__ = ["InvocationMode", "TargetSpec", "platform_for_triple", "resolve_target"]

CROSS_ARG = "cross"


class InvocationMode(Enum):
    NATIVE = auto()
    CROSS = auto()

    def __str__(self) -> str:
        return self.name.lower()

    @classmethod
    def from_args(cls, args: Sequence[str]) -> InvocationMode:
        """Pick the mode from positional arguments.

        Only ``cross`` selects cross-compilation; anything else, including no
        argument at all, falls back to a native build.
        """
        return cls.CROSS if CROSS_ARG in args else cls.NATIVE


@dataclass(frozen=True, slots=True)
class TargetSpec:
    """Resolved backend target.

    Attributes:
        artifact_dir: Directory holding the compiled binary, relative to the
            backend project (``target/release`` or ``target/<triple>/release``).
        binary_name: Expected executable filename.
        compile_command: Full compiler argv.
        triple: Foreign target triple when cross-compiling.
    """

    artifact_dir: PurePosixPath
    binary_name: str
    compile_command: tuple[str, ...]
    triple: str | None = None

    @property
    def is_cross(self) -> bool:
        return self.triple is not None


def platform_for_triple(triple: str) -> Platform:
    """Map a target triple (arch-vendor-os[-abi]) onto a Platform."""
    parts = triple.lower().split("-")
    if "windows" in parts:
        return Platform.WINDOWS
    if "darwin" in parts or "apple" in parts:
        return Platform.MACOS
    if "linux" in parts:
        return Platform.LINUX
    return Platform.UNKNOWN


def resolve_target(mode: InvocationMode, host: Platform, config: BuildConfig) -> TargetSpec:
    backend = config.backend
    if mode == InvocationMode.CROSS:
        triple = config.release.cross_target
        return TargetSpec(
            artifact_dir=PurePosixPath(backend.target_dir, triple, "release"),
            binary_name=platform_for_triple(triple).exe_name(config.app_name),
            compile_command=(*backend.build, "--target", triple),
            triple=triple,
        )
    return TargetSpec(
        artifact_dir=PurePosixPath(backend.target_dir, "release"),
        binary_name=host.exe_name(config.app_name),
        compile_command=backend.build,
    )
