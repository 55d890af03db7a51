"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from grel.core.errors import ErrorCode
from grel.release.errors import (
    InvalidTagError,
    InvalidVersionError,
    ReleaseError,
    RemoteApiError,
    RemoteTransportError,
    RepositoryAccessError,
    ResponseDecodeError,
    RevisionRangeError,
    UnknownTagError,
)

if TYPE_CHECKING:
    from grel.output.console import ConsoleProtocol
    from grel.output.messages import Messages

__all__ = ["describe_release_error", "print_release_error", "release_error_exit_code"]


def describe_release_error(error: ReleaseError, messages: Messages) -> str:
    """Localized prefix followed by the underlying detail."""
    match error:
        case InvalidTagError(tag=tag):
            return f"{messages.invalid_tag}: {tag}"
        case InvalidVersionError(value=value):
            return f"{messages.invalid_version}: {value}"
        case UnknownTagError(tag=tag):
            return f"{messages.unknown_tag}: {tag}"
        case RepositoryAccessError(path=path, detail=detail):
            return f"{messages.repository_access}: {path} - {detail}"
        case RevisionRangeError(revision=revision, detail=detail):
            return f"{messages.revision_range}: {revision} - {detail}"
        case RemoteApiError(status=status, reason=reason, body=body):
            status_line = f"{status} {reason}".rstrip()
            return f"{messages.api_error}: {status_line} - {body}"
        case RemoteTransportError(url=url, detail=detail):
            return f"{messages.transport_error}: {url} - {detail}"
        case ResponseDecodeError(detail=detail):
            return f"{messages.decode_error}: {detail}"


def print_release_error(error: ReleaseError, console: ConsoleProtocol, messages: Messages) -> None:
    console.error(describe_release_error(error, messages))


def release_error_exit_code(error: ReleaseError) -> int:
    match error:
        case InvalidTagError() | InvalidVersionError() | UnknownTagError():
            return int(ErrorCode.USER_ERROR)
        case RepositoryAccessError() | RevisionRangeError():
            return int(ErrorCode.ENV_ERROR)
        case RemoteApiError() | RemoteTransportError() | ResponseDecodeError():
            return int(ErrorCode.NETWORK_ERROR)
