"""Error kinds and exit codes for the setup step.

Every failure of a run is one of the frozen dataclasses below. They are
carried inside ``Err`` values and rendered once, at the CLI boundary,
by ``pewsetup.output.errors``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path

__all__ = [
    "ErrorCode",
    "UnsupportedPlatform",
    "MalformedRange",
    "ProviderError",
    "NoMatchingRelease",
    "AssetNotFound",
    "FilesystemError",
    "MissingInput",
    "SetupError",
]


class ErrorCode(IntEnum):
    """Process exit codes.

    These values are used as process exit codes and should remain stable.
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    NETWORK_ERROR = 4
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK


@dataclass(frozen=True, slots=True)
class UnsupportedPlatform:
    """The host OS is not the one the binary is built for."""

    current: str
    required: str

    @property
    def message(self) -> str:
        return f"pewbuild is only supported on {self.required}. Current platform: {self.current}"


@dataclass(frozen=True, slots=True)
class MalformedRange:
    """A ``^``/``~`` specifier whose major/minor could not be parsed."""

    raw: str
    reason: str

    @property
    def message(self) -> str:
        return f"Malformed version range '{self.raw}': {self.reason}"


@dataclass(frozen=True, slots=True)
class ProviderError:
    """A release provider call failed.

    Attributes:
        operation: Provider call that failed (e.g. "list releases")
        detail: Message passed through from the transport
    """

    operation: str
    detail: str

    @property
    def message(self) -> str:
        return f"Failed to {self.operation}: {self.detail}"


@dataclass(frozen=True, slots=True)
class NoMatchingRelease:
    spec: str

    @property
    def message(self) -> str:
        return f"No release found matching version range {self.spec}"


@dataclass(frozen=True, slots=True)
class AssetNotFound:
    asset: str
    tag: str

    @property
    def message(self) -> str:
        return f"{self.asset} not found in release {self.tag}"


@dataclass(frozen=True, slots=True)
class FilesystemError:
    path: Path
    detail: str

    @property
    def message(self) -> str:
        return f"{self.detail}: {self.path}"


@dataclass(frozen=True, slots=True)
class MissingInput:
    """A required input was not supplied."""

    name: str

    @property
    def message(self) -> str:
        return f"Input required and not supplied: {self.name}"


SetupError = (
    UnsupportedPlatform
    | MalformedRange
    | ProviderError
    | NoMatchingRelease
    | AssetNotFound
    | FilesystemError
    | MissingInput
)
