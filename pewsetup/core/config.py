"""Typed configuration for a setup run.

Inputs arrive from the CI runner (``INPUT_*`` and ``RUNNER_*``
environment variables, surfaced as CLI options). ``load_settings``
validates them into an immutable ``Settings``.
"""

from __future__ import annotations

import tempfile
from dataclasses import dataclass, field
from pathlib import Path

from pewsetup.platform.detection import Arch, Platform

from .errors import MissingInput
from .result import Err, Ok, Result

__all__ = [
    "DEFAULT_VERSION",
    "PEWBUILD",
    "Settings",
    "ToolTarget",
    "load_settings",
]

DEFAULT_VERSION = "latest"


@dataclass(frozen=True, slots=True)
class ToolTarget:
    """The released binary this step installs.

    Attributes:
        owner: GitHub organization publishing the releases
        repo: GitHub repository name
        tool_name: Tool cache name
        binary_name: Exact asset name, also the installed filename
        platform: The only host OS the binary runs on
        arch: Architecture key used in the tool cache
    """

    owner: str
    repo: str
    tool_name: str
    binary_name: str
    platform: Platform
    arch: Arch

    @property
    def full_repo(self) -> str:
        return f"{self.owner}/{self.repo}"


PEWBUILD = ToolTarget(
    owner="PlayEveryWare",
    repo="pewbuild",
    tool_name="pewbuild",
    binary_name="pewbuild.exe",
    platform=Platform.WINDOWS,
    arch=Arch.X64,
)


@dataclass(frozen=True, slots=True)
class Settings:
    version: str
    token: str
    tool_cache: Path
    temp_dir: Path
    target: ToolTarget = field(default=PEWBUILD)


def load_settings(
    *,
    version: str | None,
    token: str | None,
    tool_cache: Path | None,
    temp_dir: Path | None,
    target: ToolTarget = PEWBUILD,
) -> Result[Settings, MissingInput]:
    """Validate raw inputs.

    An empty or missing version means "latest". The token and the tool
    cache root are required; the scratch directory falls back to the
    system temp directory.
    """
    if not token or not token.strip():
        return Err(MissingInput(name="token"))
    if tool_cache is None or not str(tool_cache).strip():
        return Err(MissingInput(name="tool-cache"))

    raw_version = (version or "").strip() or DEFAULT_VERSION
    scratch = temp_dir if temp_dir is not None and str(temp_dir).strip() else None

    return Ok(
        Settings(
            version=raw_version,
            token=token.strip(),
            tool_cache=tool_cache.expanduser().absolute(),
            temp_dir=(scratch or Path(tempfile.gettempdir())).expanduser().absolute(),
            target=target,
        )
    )
