"""Host OS and CPU detection for the platform gate.

Results are cached for the life of the process.
"""

from __future__ import annotations

import os as _os
import platform as _platform
import sys as _sys
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache

__all__ = [
    "Platform",
    "Arch",
    "PlatformInfo",
    "detect",
    "detect_arch",
    "detect_platform",
]


class Platform(Enum):
    LINUX = "linux"
    MACOS = "macos"
    WINDOWS = "windows"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        """Human-readable name used in messages."""
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES = {
    Platform.LINUX: "Linux",
    Platform.MACOS: "macOS",
    Platform.WINDOWS: "Windows",
    Platform.UNKNOWN: "unknown",
}

# sys.platform prefix -> Platform
_SYS_PLATFORMS = (
    ("linux", Platform.LINUX),
    ("darwin", Platform.MACOS),
    ("win32", Platform.WINDOWS),
    ("cygwin", Platform.WINDOWS),
    ("msys", Platform.WINDOWS),
)


class Arch(Enum):
    X64 = "x64"
    ARM64 = "arm64"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value


_MACHINES = {
    "x86_64": Arch.X64,
    "amd64": Arch.X64,
    "aarch64": Arch.ARM64,
    "arm64": Arch.ARM64,
}


@dataclass(frozen=True, slots=True)
class PlatformInfo:
    platform: Platform
    arch: Arch

    def __str__(self) -> str:
        return f"{self.platform}-{self.arch}"


@lru_cache(maxsize=1)
def detect_platform() -> Platform:
    """Map ``sys.platform`` to a Platform (cached)."""
    # platform.system() may query WMI on Windows; sys.platform is free.
    system = _sys.platform.lower()
    for prefix, found in _SYS_PLATFORMS:
        if system.startswith(prefix):
            return found
    return Platform.UNKNOWN


@lru_cache(maxsize=1)
def detect_arch() -> Arch:
    """Detect the CPU architecture (cached).

    On Windows a 32-bit interpreter reports the emulated machine, so the
    WOW64 environment variables take precedence there.
    """
    if detect_platform() == Platform.WINDOWS:
        machine = _os.environ.get("PROCESSOR_ARCHITEW6432") or _os.environ.get(
            "PROCESSOR_ARCHITECTURE", ""
        )
    else:
        machine = _platform.machine()
    return _MACHINES.get(machine.lower(), Arch.UNKNOWN)


@lru_cache(maxsize=1)
def detect() -> PlatformInfo:
    return PlatformInfo(platform=detect_platform(), arch=detect_arch())
