from __future__ import annotations

from pathlib import Path

import typer

from oasis_build import __version__
from oasis_build.cli.context import build_context
from oasis_build.core.result import Err
from oasis_build.output.errors import build_error_exit_code, print_build_error
from oasis_build.services.prereqs import PrereqService
from oasis_build.services.release import ReleaseService
from oasis_build.services.target import InvocationMode

app = typer.Typer(
    add_completion=False,
    no_args_is_help=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.command()
def build(
    mode: str | None = typer.Argument(
        None,
        help="Pass 'cross' to cross-compile the backend (default target x86_64-pc-windows-gnu).",
        show_default=False,
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print the steps without running them."),
    project: Path | None = typer.Option(
        None,
        "--project",
        help="Project root containing the frontend and backend (default: current directory).",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        help="Config file (default: <project>/oasis-build.toml, optional).",
    ),
    skip_checks: bool = typer.Option(
        False, "--skip-checks", help="Do not check for npm, cargo and the cross toolchain."
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Build the frontend and backend and assemble a release directory."""
    ctx = build_context(project=project, config_path=config)
    invocation = InvocationMode.from_args([mode] if mode else [])

    service = ReleaseService(
        project_root=ctx.project_root,
        platform=ctx.platform,
        config=ctx.config,
        console=ctx.console,
    )

    if not (skip_checks or dry_run):
        prereqs = PrereqService(
            platform=ctx.platform, config=ctx.config, console=ctx.console
        )
        checked = prereqs.check(service.resolve(invocation), cwd=ctx.project_root)
        if isinstance(checked, Err):
            print_build_error(checked.error, ctx.console)
            raise typer.Exit(code=build_error_exit_code(checked.error))

    result = service.build(invocation, dry_run=dry_run)
    if isinstance(result, Err):
        print_build_error(result.error, ctx.console)
        raise typer.Exit(code=build_error_exit_code(result.error))


def main() -> None:
    app()
