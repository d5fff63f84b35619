"""Persistent tool cache.

Layout (shared with other setup steps on the runner):

    <root>/<tool>/<version>/<arch>/          installed files
    <root>/<tool>/<version>/<arch>.complete  commit marker

An entry is visible to ``find`` only once its marker exists, so a
half-copied directory is never reported as installed. Entries are
never deleted here; concurrent installs of the same key overwrite each
other and the last commit wins.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable

from pewsetup.core.errors import FilesystemError
from pewsetup.core.result import Err, Ok, Result
from pewsetup.platform.files import atomic_write_text

__all__ = ["CacheKey", "LocalToolCache", "ToolCache", "probe"]


@dataclass(frozen=True, slots=True)
class CacheKey:
    tool: str
    version: str
    arch: str

    def __str__(self) -> str:
        return f"{self.tool}-{self.version}-{self.arch}"


@runtime_checkable
class ToolCache(Protocol):
    """Key-value store mapping (tool, version, arch) to a directory."""

    def entry_dir(self, key: CacheKey) -> Path:
        """Directory an entry for ``key`` lives in, committed or not."""
        ...

    def find(self, key: CacheKey) -> Path | None:
        """Committed directory for ``key``, or None."""
        ...

    def cache_dir(self, source: Path, key: CacheKey) -> Result[Path, FilesystemError]:
        """Commit ``source`` as the entry for ``key``."""
        ...


class LocalToolCache:
    """ToolCache on the local filesystem.

    Usage:
        cache = LocalToolCache(Path(os.environ["RUNNER_TOOL_CACHE"]))
        path = cache.find(CacheKey("pewbuild", "v1.2.0", "x64"))
    """

    def __init__(self, root: Path) -> None:
        self._root = root

    @property
    def root(self) -> Path:
        return self._root

    def entry_dir(self, key: CacheKey) -> Path:
        return self._root / key.tool / key.version / key.arch

    def _marker(self, key: CacheKey) -> Path:
        return self._root / key.tool / key.version / f"{key.arch}.complete"

    def find(self, key: CacheKey) -> Path | None:
        entry = self.entry_dir(key)
        if entry.is_dir() and self._marker(key).is_file():
            return entry
        return None

    def cache_dir(self, source: Path, key: CacheKey) -> Result[Path, FilesystemError]:
        """Copy ``source`` into the entry directory and write the marker.

        When ``source`` already is the entry directory only the marker
        is written. Existing files are overwritten.
        """
        entry = self.entry_dir(key)
        try:
            if not source.is_dir():
                return Err(FilesystemError(path=source, detail="Cache source is not a directory"))
            entry.mkdir(parents=True, exist_ok=True)
            if source.resolve() != entry.resolve():
                shutil.copytree(source, entry, dirs_exist_ok=True)
            atomic_write_text(self._marker(key), "")
        except OSError as e:
            return Err(FilesystemError(path=entry, detail=f"Failed to commit cache entry ({e})"))
        return Ok(entry)


def probe(cache: ToolCache, key: CacheKey) -> Path | None:
    """Look up a previously installed entry. Pure read, no network."""
    return cache.find(key)
