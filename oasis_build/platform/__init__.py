"""Platform abstraction layer."""

from .detection import (
    LinuxDistro,
    Platform,
    PlatformInfo,
    detect,
)
from .files import (
    EXECUTABLE_MODE,
    copy_tree,
    make_executable,
    reset_dir,
)
from .process import (
    ProcessError,
    run,
    run_streamed,
)

__all__ = [
    # detection
    "LinuxDistro",
    "Platform",
    "PlatformInfo",
    "detect",
    # files
    "EXECUTABLE_MODE",
    "copy_tree",
    "make_executable",
    "reset_dir",
    # process
    "ProcessError",
    "run",
    "run_streamed",
]
