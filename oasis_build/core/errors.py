"""Exit codes for the oasis-build command.

Sub-process failures exit with the failing command's own status; everything
else maps onto one of these stable codes.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Process exit codes.

    - 0: Success
    - 1: User error (bad config file, invalid project path)
    - 2: Environment error (npm/cargo/linker missing)
    - 3: Build error (a build command failed without a usable exit status)
    - 5: I/O error (layout reset, missing artifact, copy or chmod failure)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    BUILD_ERROR = 3
    IO_ERROR = 5
