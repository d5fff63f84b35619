"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING

from pewsetup.core.errors import (
    AssetNotFound,
    ErrorCode,
    FilesystemError,
    MalformedRange,
    MissingInput,
    NoMatchingRelease,
    ProviderError,
    UnsupportedPlatform,
)
from pewsetup.output.actions import error_command

if TYPE_CHECKING:
    from pewsetup.core.errors import SetupError
    from pewsetup.output.console import ConsoleProtocol

__all__ = ["print_setup_error", "setup_error_exit_code"]


def print_setup_error(
    error: SetupError,
    console: ConsoleProtocol,
    *,
    environ: Mapping[str, str],
    echo: Callable[[str], None],
) -> None:
    """Print a failed run; also annotate the job when on a runner."""
    console.error(error.message)
    if environ.get("GITHUB_ACTIONS") == "true":
        echo(error_command(error.message))


def setup_error_exit_code(error: SetupError) -> int:
    match error:
        case MalformedRange() | NoMatchingRelease() | MissingInput():
            return int(ErrorCode.USER_ERROR)
        case UnsupportedPlatform() | AssetNotFound():
            return int(ErrorCode.ENV_ERROR)
        case ProviderError():
            return int(ErrorCode.NETWORK_ERROR)
        case FilesystemError():
            return int(ErrorCode.IO_ERROR)
