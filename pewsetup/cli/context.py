"""Composition root: wires real dependencies into a SetupService."""

from __future__ import annotations

import os
from collections.abc import MutableMapping
from pathlib import Path

from pewsetup.core.config import load_settings
from pewsetup.core.errors import SetupError
from pewsetup.core.result import Err, Ok, Result
from pewsetup.output.actions import StepOutputs
from pewsetup.output.console import ConsoleProtocol
from pewsetup.platform.detection import PlatformInfo, detect
from pewsetup.services.setup import SetupService
from pewsetup.tools.cache import LocalToolCache
from pewsetup.tools.github import GitHubReleaseProvider
from pewsetup.tools.http import RealHttpClient


def build_service(
    *,
    version: str | None,
    token: str | None,
    tool_cache: Path | None,
    temp_dir: Path | None,
    console: ConsoleProtocol,
    environ: MutableMapping[str, str] = os.environ,
    platform: PlatformInfo | None = None,
) -> Result[SetupService, SetupError]:
    settings = load_settings(
        version=version,
        token=token,
        tool_cache=tool_cache,
        temp_dir=temp_dir,
    )
    if isinstance(settings, Err):
        return settings

    return Ok(
        SetupService(
            settings=settings.value,
            platform=platform or detect(),
            provider=GitHubReleaseProvider(RealHttpClient(settings.value.token)),
            cache=LocalToolCache(settings.value.tool_cache),
            console=console,
            outputs=StepOutputs.from_env(environ),
        )
    )
