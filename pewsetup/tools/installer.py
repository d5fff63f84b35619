"""Binary installation into the tool cache.

This module provides a BinaryInstaller that:
- Downloads a release asset as raw bytes
- Stages it in the run's scratch directory under a time-stamped name
- Copies it into <cache>/<tool>/<version>/<arch>/<binary> and marks it
  executable
- Commits the directory to the tool cache
"""

from __future__ import annotations

import shutil
import time
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

from pewsetup.core.errors import FilesystemError, ProviderError
from pewsetup.core.result import Err, Ok, Result
from pewsetup.platform.files import make_executable

if TYPE_CHECKING:
    from pewsetup.tools.cache import CacheKey, ToolCache
    from pewsetup.tools.github import ReleaseAsset, ReleaseProvider

__all__ = ["BinaryInstaller"]


def _millis() -> int:
    return time.time_ns() // 1_000_000


class BinaryInstaller:
    """Installs a single-file binary release asset.

    The staged download is left in the scratch directory; scratch
    directories are run-scoped and cleaned up by the runner.

    Usage:
        installer = BinaryInstaller(provider, cache, scratch_dir, "pewbuild.exe")
        result = installer.install(asset, CacheKey("pewbuild", "v1.2.0", "x64"))
        if is_ok(result):
            print(f"Installed into {result.value}")
    """

    def __init__(
        self,
        provider: ReleaseProvider,
        cache: ToolCache,
        scratch_dir: Path,
        binary_name: str,
        *,
        clock: Callable[[], int] = _millis,
    ) -> None:
        """Initialize installer.

        Args:
            provider: Release provider used for the download
            cache: Tool cache the install is committed to
            scratch_dir: Run-scoped temporary directory
            binary_name: Filename of the installed binary
            clock: Millisecond timestamp source for staged file names
        """
        self._provider = provider
        self._cache = cache
        self._scratch_dir = scratch_dir
        self._binary_name = binary_name
        self._clock = clock

    def staging_path(self) -> Path:
        return self._scratch_dir / f"{self._binary_name}-{self._clock()}"

    def install(
        self, asset: ReleaseAsset, key: CacheKey
    ) -> Result[Path, ProviderError | FilesystemError]:
        """Download ``asset`` and commit it to the cache under ``key``.

        Returns:
            Ok with the committed directory holding the binary, or Err
        """
        content = self._provider.request_asset(asset)
        if isinstance(content, Err):
            return content

        staged = self.staging_path()
        try:
            staged.parent.mkdir(parents=True, exist_ok=True)
            staged.write_bytes(content.value)
        except OSError as e:
            return Err(FilesystemError(path=staged, detail=f"Failed to write download ({e})"))

        tool_dir = self._cache.entry_dir(key)
        final_path = tool_dir / self._binary_name
        try:
            tool_dir.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(staged, final_path)
            make_executable(final_path)
        except OSError as e:
            return Err(FilesystemError(path=final_path, detail=f"Failed to install binary ({e})"))

        return self._cache.cache_dir(tool_dir, key)
