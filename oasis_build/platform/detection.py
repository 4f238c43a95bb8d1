"""Host platform detection.

Detection is done lazily and cached; the host never changes during a run.
"""

from __future__ import annotations

import sys as _sys
from dataclasses import dataclass
from enum import Enum, auto
from functools import lru_cache
from pathlib import Path

__all__ = [
    "LinuxDistro",
    "Platform",
    "PlatformInfo",
    "detect",
    "detect_linux_distro",
    "detect_platform",
]


class Platform(Enum):
    """Operating system platform."""

    LINUX = auto()
    MACOS = auto()
    WINDOWS = auto()
    UNKNOWN = auto()

    def __str__(self) -> str:
        return self.name.lower()

    @property
    def exe_suffix(self) -> str:
        """Executable file suffix for this platform."""
        return ".exe" if self == Platform.WINDOWS else ""

    def exe_name(self, name: str) -> str:
        """Executable name with platform-appropriate suffix.

        Example: exe_name("oasis") -> "oasis.exe" on Windows, "oasis" elsewhere.
        """
        return f"{name}{self.exe_suffix}"


class LinuxDistro(Enum):
    """Linux distribution family."""

    DEBIAN = auto()  # Debian, Ubuntu, Mint, Pop!_OS, etc.
    FEDORA = auto()  # Fedora, RHEL, CentOS, Rocky, etc.
    ARCH = auto()  # Arch, Manjaro, EndeavourOS, etc.
    UNKNOWN = auto()

    def __str__(self) -> str:
        return self.name.lower()


@dataclass(frozen=True, slots=True)
class PlatformInfo:
    """Detected host information. Use `detect()` to get an instance."""

    platform: Platform
    distro: LinuxDistro

    @property
    def is_linux(self) -> bool:
        return self.platform == Platform.LINUX

    def __str__(self) -> str:
        if self.platform == Platform.LINUX and self.distro != LinuxDistro.UNKNOWN:
            return f"{self.platform}-{self.distro}"
        return str(self.platform)


@lru_cache(maxsize=1)
def detect_platform() -> Platform:
    """Detect the current operating system (cached)."""
    # NOTE: sys.platform rather than platform.system(), which may query WMI on Windows.
    system = _sys.platform.lower()
    if system.startswith("linux"):
        return Platform.LINUX
    if system.startswith("darwin"):
        return Platform.MACOS
    if system.startswith(("win32", "cygwin", "msys")):
        return Platform.WINDOWS
    return Platform.UNKNOWN


def _read_os_release() -> str | None:
    try:
        return Path("/etc/os-release").read_text().lower()
    except OSError:
        return None


@lru_cache(maxsize=1)
def detect_linux_distro() -> LinuxDistro:
    """Detect Linux distribution family (cached).

    Returns LinuxDistro.UNKNOWN off Linux, when /etc/os-release is unreadable,
    or when the distribution is not recognized.
    """
    if detect_platform() != Platform.LINUX:
        return LinuxDistro.UNKNOWN

    content = _read_os_release()
    if content is None:
        return LinuxDistro.UNKNOWN

    # Order matters for some derivatives
    if any(x in content for x in ("fedora", "rhel", "centos", "rocky", "almalinux")):
        return LinuxDistro.FEDORA
    if any(x in content for x in ("ubuntu", "debian", "mint", "pop")):
        return LinuxDistro.DEBIAN
    if any(x in content for x in ("arch", "manjaro", "endeavour")):
        return LinuxDistro.ARCH

    return LinuxDistro.UNKNOWN


@lru_cache(maxsize=1)
def detect() -> PlatformInfo:
    """Detect complete host information (cached)."""
    return PlatformInfo(platform=detect_platform(), distro=detect_linux_distro())
