"""Core domain types: results, errors and configuration."""

from .config import DEFAULT_VERSION, PEWBUILD, Settings, ToolTarget, load_settings
from .errors import (
    AssetNotFound,
    ErrorCode,
    FilesystemError,
    MalformedRange,
    MissingInput,
    NoMatchingRelease,
    ProviderError,
    SetupError,
    UnsupportedPlatform,
)
from .result import Err, Ok, Result, is_err, is_ok

__all__ = [
    # config
    "DEFAULT_VERSION",
    "PEWBUILD",
    "Settings",
    "ToolTarget",
    "load_settings",
    # errors
    "AssetNotFound",
    "ErrorCode",
    "FilesystemError",
    "MalformedRange",
    "MissingInput",
    "NoMatchingRelease",
    "ProviderError",
    "SetupError",
    "UnsupportedPlatform",
    # result
    "Err",
    "Ok",
    "Result",
    "is_err",
    "is_ok",
]
