"""Single interpreter loop over build steps."""

from __future__ import annotations

from collections.abc import Sequence

from oasis_build.core.result import Err, Ok, Result
from oasis_build.output.console import ConsoleProtocol, Style
from oasis_build.platform.files import copy_tree, make_executable
from oasis_build.platform.process import run_streamed
from oasis_build.services.build_errors import (
    ArtifactMissing,
    BuildError,
    CommandFailed,
    CopyFailed,
    PermissionFailed,
)
from oasis_build.services.steps import CopyTree, RunCommand, SetPermissions, Step

__all__ = ["StepExecutor"]


class StepExecutor:
    """Run steps in order, stopping at the first failure.

    Nothing is retried or rolled back: whatever was staged before the
    failing step stays on disk.
    """

    def __init__(
        self,
        *,
        console: ConsoleProtocol,
        env: dict[str, str] | None = None,
        dry_run: bool = False,
    ) -> None:
        self._console = console
        self._env = env
        self._dry_run = dry_run

    def execute(self, steps: Sequence[Step]) -> Result[None, BuildError]:
        total = len(steps)
        for index, step in enumerate(steps, start=1):
            self._console.step(index, total, step.label)
            self._console.print(step.describe(), Style.DIM)
            if self._dry_run:
                continue

            result = self._execute_one(step)
            if isinstance(result, Err):
                return result

        return Ok(None)

    def _execute_one(self, step: Step) -> Result[None, BuildError]:
        match step:
            case RunCommand():
                return self._run_command(step)
            case CopyTree():
                return self._copy_tree(step)
            case SetPermissions():
                return self._set_permissions(step)

    def _run_command(self, step: RunCommand) -> Result[None, BuildError]:
        result = run_streamed(step.argv, cwd=step.cwd, env=self._env)
        if isinstance(result, Err):
            error = result.error
            return Err(
                CommandFailed(
                    label=step.label,
                    command=step.argv,
                    returncode=error.returncode,
                    detail=error.stderr,
                )
            )
        return Ok(None)

    def _copy_tree(self, step: CopyTree) -> Result[None, BuildError]:
        if step.required and not step.source.exists():
            return Err(ArtifactMissing(label=step.label, path=step.source))

        try:
            copied = copy_tree(step.source, step.destination)
        except OSError as e:
            return Err(CopyFailed(label=step.label, source=step.source, reason=str(e)))

        if not copied:
            self._console.warning(f"{step.source} not found, skipped")
        return Ok(None)

    def _set_permissions(self, step: SetPermissions) -> Result[None, BuildError]:
        try:
            make_executable(step.path, step.mode)
        except OSError as e:
            return Err(PermissionFailed(path=step.path, reason=e.strerror or str(e)))
        return Ok(None)
