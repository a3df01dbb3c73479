"""Error codes for CLI exit status.

These values are used as process exit codes and should remain stable.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    - 0: Success
    - 1: User error (bad tag, invalid arguments)
    - 2: Environment error (missing gh, missing config values, no auth)
    - 4: Network error (API unreachable, release creation failed)
    - 5: I/O error (git or filesystem failure)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    NETWORK_ERROR = 4
    IO_ERROR = 5
