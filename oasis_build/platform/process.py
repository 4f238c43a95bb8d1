"""Subprocess execution with Result-based error handling.

Build commands run with an explicit working directory and inherit the
caller's stdout/stderr, so npm and cargo output reaches the terminal as it
is produced. Probes (``rustup target list``) use the capturing variant.

Usage:
    match run_streamed(["cargo", "build", "--release"], cwd=backend_dir):
        case Ok(_):
            ...
        case Err(error):
            console.error(str(error))
"""

from __future__ import annotations

import shutil
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from oasis_build.core.result import Err, Ok, Result

__all__ = ["ProcessError", "resolve_program", "run", "run_streamed"]


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed subprocess execution.

    Attributes:
        command: The command that was executed.
        returncode: The exit code of the process (-1 if it never started).
        stdout: Captured standard output (empty when streamed).
        stderr: Captured standard error, or the launch failure message.
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        if self.returncode == -1:
            return f"{cmd_str} could not be started: {self.stderr}"
        return f"{cmd_str} failed (exit {self.returncode})"


def resolve_program(cmd: Sequence[str]) -> list[str]:
    """Resolve the program through PATH.

    Lets ``npm`` find ``npm.cmd`` on Windows without going through a shell.
    Unresolvable programs are left as-is so the launch error names them.
    """
    argv = list(cmd)
    if argv:
        found = shutil.which(argv[0])
        if found is not None:
            argv[0] = found
    return argv


def run(
    cmd: Sequence[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[str, ProcessError]:
    """Execute a command and return its stdout.

    Args:
        cmd: Command and arguments to execute.
        cwd: Working directory for the command.
        env: Environment variables (uses current env if None).
        timeout: Maximum seconds to wait (None for no limit).

    Returns:
        Ok(stdout) on success, Err(ProcessError) on failure.
    """
    try:
        proc = subprocess.run(
            resolve_program(cmd),
            cwd=str(cwd),
            env=env,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=-1,
                stdout="",
                stderr=f"Command timed out after {timeout}s",
            )
        )
    except OSError as e:
        return Err(ProcessError(command=tuple(cmd), returncode=-1, stdout="", stderr=str(e)))

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=proc.returncode,
                stdout=proc.stdout,
                stderr=proc.stderr,
            )
        )

    return Ok(proc.stdout)


def run_streamed(
    cmd: Sequence[str],
    cwd: Path,
    env: dict[str, str] | None = None,
) -> Result[None, ProcessError]:
    """Execute a command, blocking until it exits, with output inherited.

    Nothing is captured: the sub-process writes straight to our stdout and
    stderr, so its diagnostics are the failure detail.

    Returns:
        Ok(None) on exit status 0, Err(ProcessError) otherwise.
    """
    try:
        proc = subprocess.run(resolve_program(cmd), cwd=str(cwd), env=env, check=False)
    except OSError as e:
        return Err(ProcessError(command=tuple(cmd), returncode=-1, stdout="", stderr=str(e)))

    if proc.returncode != 0:
        return Err(
            ProcessError(command=tuple(cmd), returncode=proc.returncode, stdout="", stderr="")
        )

    return Ok(None)
