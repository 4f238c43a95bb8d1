"""Error presentation: one line per failure plus exit code mapping."""

from __future__ import annotations

from typing import TYPE_CHECKING

from oasis_build.core.errors import ErrorCode
from oasis_build.output.console import Style
from oasis_build.services.build_errors import (
    ArtifactMissing,
    BuildError,
    CommandFailed,
    CopyFailed,
    LayoutFailed,
    PermissionFailed,
    PrereqMissing,
)

if TYPE_CHECKING:
    from oasis_build.output.console import ConsoleProtocol

__all__ = ["build_error_exit_code", "print_build_error"]


def print_build_error(error: BuildError, console: ConsoleProtocol) -> None:
    match error:
        case LayoutFailed(path=path, reason=reason):
            console.error(f"cannot reset release dir {path}: {reason}")
        case CommandFailed(label=label, returncode=rc, detail=detail) if rc == -1:
            console.error(f"{label}: command could not be started: {detail}")
        case CommandFailed():
            # The command already wrote its own diagnostics to our streams.
            pass
        case ArtifactMissing(label=label, path=path):
            console.error(f"{label}: not found: {path}")
        case CopyFailed(label=label, source=source, reason=reason):
            console.error(f"{label}: copying {source} failed: {reason}")
        case PermissionFailed(path=path, reason=reason):
            console.error(f"cannot make {path} executable: {reason}")
        case PrereqMissing(name=name, hint=hint):
            console.error(f"{name}: missing")
            console.print(f"hint: {hint}", Style.DIM)


def build_error_exit_code(error: BuildError) -> int:
    """Exit code for a failed build.

    A failing command propagates its own exit status when it has one.
    """
    match error:
        case CommandFailed(returncode=rc) if rc > 0:
            return rc
        case CommandFailed():
            return int(ErrorCode.BUILD_ERROR)
        case PrereqMissing():
            return int(ErrorCode.ENV_ERROR)
        case LayoutFailed() | ArtifactMissing() | CopyFailed() | PermissionFailed():
            return int(ErrorCode.IO_ERROR)
