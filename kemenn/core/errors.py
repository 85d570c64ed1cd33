"""Error codes for CLI exit status.

The announce command maps every failure kind onto one of these codes so
scripts wrapping it can tell a bad tag from a broken repository.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for the CLI.

    These values are used as process exit codes and should remain stable:
    - 0: Success
    - 1: User error (bad tag, bad template, missing emitter, bad config)
    - 2: Environment error (git failed, not a repository, no tags)
    - 5: I/O error (changelog, template or output file unusable)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    IO_ERROR = 5
