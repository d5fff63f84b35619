"""Platform abstraction layer."""

from .detection import (
    Arch,
    Platform,
    PlatformInfo,
    detect,
    detect_arch,
    detect_platform,
)
from .files import atomic_write_text, make_executable

__all__ = [
    # detection
    "Arch",
    "Platform",
    "PlatformInfo",
    "detect",
    "detect_arch",
    "detect_platform",
    # files
    "atomic_write_text",
    "make_executable",
]
