"""Toolchain checks run before a release build starts.

Catches the usual setup gaps (a configured program not on PATH, a missing
rust cross target or mingw linker) before the release directory is wiped.
"""

from __future__ import annotations

import shutil
from pathlib import Path

from oasis_build.core.config import CONFIG_FILENAME, BuildConfig
from oasis_build.core.result import Err, Ok, Result
from oasis_build.output.console import ConsoleProtocol
from oasis_build.platform.detection import LinuxDistro, Platform, PlatformInfo
from oasis_build.platform.process import run
from oasis_build.services.build_errors import PrereqMissing
from oasis_build.services.target import TargetSpec, platform_for_triple

__all__ = ["MINGW_LINKER", "PrereqService"]

MINGW_LINKER = "x86_64-w64-mingw32-gcc"

_RUSTUP_TIMEOUT_SECONDS = 30.0


def _mingw_hint(platform: PlatformInfo) -> str:
    if platform.distro == LinuxDistro.FEDORA:
        return "Run: sudo dnf install mingw64-gcc"
    if platform.distro == LinuxDistro.ARCH:
        return "Run: sudo pacman -S mingw-w64-gcc"
    return "Run: sudo apt install mingw-w64"


_HINTS = {
    "npm": "Install Node.js: https://nodejs.org",
    "cargo": "Install rustup: https://rustup.rs",
}


def _program_hint(program: str) -> str:
    return _HINTS.get(program, f"Install {program} or fix the command in {CONFIG_FILENAME}")


def _program_name(argv: tuple[str, ...]) -> str:
    return Path(argv[0]).stem.lower()


def _program_available(argv: tuple[str, ...], cwd: Path) -> bool:
    """True if the program of ``argv`` can be launched from ``cwd``.

    Bare names are looked up on PATH; paths (``./build.sh``) are relative to
    the directory the command runs in.
    """
    program = argv[0]
    if Path(program).name != program:
        return (cwd / program).is_file()
    return shutil.which(program) is not None


class PrereqService:
    def __init__(
        self,
        *,
        platform: PlatformInfo,
        config: BuildConfig,
        console: ConsoleProtocol,
    ) -> None:
        self._platform = platform
        self._config = config
        self._console = console

    def check(self, target: TargetSpec, *, cwd: Path) -> Result[None, PrereqMissing]:
        """Return the first missing prerequisite for building ``target``.

        ``cwd`` is the project root; each configured command is checked
        against the directory it will run in.
        """
        frontend_dir = cwd / self._config.frontend.dir
        backend_dir = cwd / self._config.backend.dir
        commands = (
            (self._config.frontend.install, frontend_dir),
            (self._config.frontend.build, frontend_dir),
            (target.compile_command, backend_dir),
        )
        for argv, command_cwd in commands:
            if argv and not _program_available(argv, command_cwd):
                name = _program_name(argv)
                return Err(PrereqMissing(argv[0], _program_hint(name)))

        if target.triple is None or _program_name(target.compile_command) != "cargo":
            return Ok(None)

        if not self._platform.is_linux:
            self._console.warning(
                f"cross-compiling is only supported on Linux hosts (host: {self._platform})"
            )

        installed = self._check_rust_target(target.triple, cwd=cwd)
        if isinstance(installed, Err):
            return installed

        needs_mingw = platform_for_triple(target.triple) == Platform.WINDOWS and (
            target.triple.endswith("-gnu")
        )
        if needs_mingw and shutil.which(MINGW_LINKER) is None:
            return Err(PrereqMissing(MINGW_LINKER, _mingw_hint(self._platform)))

        return Ok(None)

    def _check_rust_target(self, triple: str, *, cwd: Path) -> Result[None, PrereqMissing]:
        hint = f"Run: rustup target add {triple}"
        if shutil.which("rustup") is None:
            self._console.warning(f"rustup not found; cannot verify that {triple} is installed")
            return Ok(None)

        result = run(
            ["rustup", "target", "list", "--installed"],
            cwd=cwd,
            timeout=_RUSTUP_TIMEOUT_SECONDS,
        )
        if isinstance(result, Err):
            # Let cargo report the real problem.
            self._console.warning(f"could not list rust targets: {result.error}")
            return Ok(None)

        if triple not in result.value.split():
            return Err(PrereqMissing(f"rust target {triple}", hint))
        return Ok(None)
