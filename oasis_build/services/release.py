"""Release build orchestration.

One fixed, linear pipeline per invocation:

    reset release dir -> frontend install + build -> stage assets
    -> backend compile -> stage binary + sample config -> chmod binary

Every step gets its working directory explicitly; the process-wide current
directory is never changed.
"""

from __future__ import annotations

from pathlib import Path

from oasis_build.core.config import BuildConfig
from oasis_build.core.result import Err, Ok, Result
from oasis_build.output.console import ConsoleProtocol, Style
from oasis_build.platform.detection import PlatformInfo
from oasis_build.services.build_errors import BuildError
from oasis_build.services.executor import StepExecutor
from oasis_build.services.layout import ReleasePlan, plan_release, prepare_layout
from oasis_build.services.steps import plan_steps
from oasis_build.services.target import InvocationMode, TargetSpec, resolve_target

__all__ = ["ReleaseService"]


class ReleaseService:
    """Build the frontend and backend and assemble the release directory."""

    def __init__(
        self,
        *,
        project_root: Path,
        platform: PlatformInfo,
        config: BuildConfig,
        console: ConsoleProtocol,
        env: dict[str, str] | None = None,
    ) -> None:
        self._root = project_root
        self._platform = platform
        self._config = config
        self._console = console
        self._env = env

    def resolve(self, mode: InvocationMode) -> TargetSpec:
        return resolve_target(mode, self._platform.platform, self._config)

    def build(
        self, mode: InvocationMode, *, dry_run: bool = False
    ) -> Result[ReleasePlan, BuildError]:
        """Run the whole pipeline.

        Returns:
            Ok(plan) once the release directory is complete, or the first
            error. A failed build leaves the partial release dir in place.
        """
        target = self.resolve(mode)
        plan = plan_release(target, self._config, self._root)
        steps = plan_steps(plan, target, self._config, self._root)

        self._console.info(f"mode: {mode} ({target.triple or self._platform})")
        self._console.print(f"release dir: {plan.root}", Style.DIM)

        if dry_run:
            self._console.print(f"reset {plan.root}", Style.DIM)
        else:
            prepared = prepare_layout(plan.root)
            if isinstance(prepared, Err):
                return prepared

        executor = StepExecutor(console=self._console, env=self._env, dry_run=dry_run)
        result = executor.execute(steps)
        if isinstance(result, Err):
            return result

        if dry_run:
            self._console.success("Dry run complete, nothing was built.")
        else:
            self._console.success(f"Build complete. Please check the '{plan.root}' directory.")
        return Ok(plan)
