"""Error codes for CLI exit status.

The release command maps every fatal outcome onto one of these codes:
- 0: Success
- 1: User error (bad tag, bad version, unknown previous tag)
- 2: Environment error (repository unreadable, bad revision, bad config)
- 4: Network error (API unreachable, rejected, or unreadable response)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for the CLI. Values are stable."""

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    NETWORK_ERROR = 4

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK
