"""Setup orchestration.

One run walks:

    platform check -> resolve -> probe cache
        hit:  publish
        miss: fetch release -> locate asset -> install -> publish

Any failing step ends the run with a single SetupError and nothing is
published. The cleanup phase currently has nothing to tear down.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from pewsetup.core.config import PEWBUILD
from pewsetup.core.errors import UnsupportedPlatform
from pewsetup.core.result import Err, Ok, Result
from pewsetup.output.console import Style
from pewsetup.tools.cache import CacheKey, probe
from pewsetup.tools.fetcher import ReleaseFetcher
from pewsetup.tools.installer import BinaryInstaller
from pewsetup.tools.resolver import ReleaseResolver
from pewsetup.tools.versions import parse_spec

if TYPE_CHECKING:
    from pewsetup.core.config import Settings, ToolTarget
    from pewsetup.core.errors import FilesystemError, SetupError
    from pewsetup.output.actions import OutputSink
    from pewsetup.output.console import ConsoleProtocol
    from pewsetup.platform.detection import PlatformInfo
    from pewsetup.tools.cache import ToolCache
    from pewsetup.tools.github import ReleaseProvider

__all__ = ["InstalledTool", "Phase", "SetupService", "check_platform", "run_phase"]


class Phase(Enum):
    """Lifecycle phase chosen by the calling harness."""

    SETUP = "setup"
    CLEANUP = "cleanup"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class InstalledTool:
    """Published result of a setup run.

    Attributes:
        path: Absolute path to the binary
        version: Resolved release tag
        from_cache: True if no download was needed
    """

    path: Path
    version: str
    from_cache: bool

    @property
    def directory(self) -> Path:
        return self.path.parent


class SetupService:
    def __init__(
        self,
        *,
        settings: Settings,
        platform: PlatformInfo,
        provider: ReleaseProvider,
        cache: ToolCache,
        console: ConsoleProtocol,
        outputs: OutputSink,
    ) -> None:
        self._settings = settings
        self._target = settings.target
        self._platform = platform
        self._provider = provider
        self._cache = cache
        self._console = console
        self._outputs = outputs

    def setup(self, *, dry_run: bool = False) -> Result[InstalledTool | None, SetupError]:
        """Locate or install the requested version and publish it.

        With ``dry_run`` the run stops after the cache probe: nothing is
        downloaded and no outputs are published.
        """
        gate = check_platform(self._platform, self._target)
        if isinstance(gate, Err):
            return gate

        tool = self._target.tool_name
        self._console.info(f"Setting up {tool} version: {self._settings.version}")

        spec = parse_spec(self._settings.version)
        if isinstance(spec, Err):
            return spec

        resolver = ReleaseResolver(self._provider, self._target.owner, self._target.repo)
        resolved = resolver.resolve(spec.value)
        if isinstance(resolved, Err):
            return resolved
        tag = resolved.value
        self._console.info(f"Resolved version: {tag}")

        key = CacheKey(tool=tool, version=tag, arch=str(self._target.arch))
        cached = probe(self._cache, key)

        if dry_run:
            if cached is not None:
                self._console.print(f"{tool} {tag} already cached at {cached}", Style.DIM)
            else:
                target_dir = self._cache.entry_dir(key)
                self._console.print(f"would install {tool} {tag} into {target_dir}", Style.DIM)
            return Ok(None)

        if cached is not None:
            self._console.info(f"Found cached {tool} at {cached}")
            return self._publish(InstalledTool(cached / self._target.binary_name, tag, True))

        self._console.info(f"Fetching release information for {tag}...")
        fetcher = ReleaseFetcher(self._provider, self._target.owner, self._target.repo)
        asset = fetcher.fetch_asset(tag, self._target.binary_name)
        if isinstance(asset, Err):
            return asset

        self._console.info(f"Downloading {tool} from {asset.value.url}")
        installer = BinaryInstaller(
            self._provider,
            self._cache,
            self._settings.temp_dir,
            self._target.binary_name,
        )
        installed = installer.install(asset.value, key)
        if isinstance(installed, Err):
            return installed

        published = self._publish(InstalledTool(installed.value / self._target.binary_name, tag, False))
        if isinstance(published, Err):
            return published
        self._console.success(f"Successfully installed {tool} {tag} to {published.value.path}")
        return published

    def _publish(self, tool: InstalledTool) -> Result[InstalledTool, FilesystemError]:
        name = self._target.tool_name
        outputs = {f"{name}-path": str(tool.path), f"{name}-version": tool.version}
        published = self._outputs.publish(outputs, tool.directory)
        if isinstance(published, Err):
            return published
        return Ok(tool)


def check_platform(
    platform: PlatformInfo, target: ToolTarget
) -> Result[None, UnsupportedPlatform]:
    if platform.platform != target.platform:
        return Err(
            UnsupportedPlatform(
                current=str(platform.platform),
                required=target.platform.display_name,
            )
        )
    return Ok(None)


def run_phase(
    phase: Phase,
    service_factory: Callable[[], Result[SetupService, SetupError]],
    *,
    platform: PlatformInfo,
    target: ToolTarget = PEWBUILD,
    dry_run: bool = False,
) -> Result[InstalledTool | None, SetupError]:
    """Run one lifecycle phase.

    The platform is checked before the service is built, so an
    unsupported host fails the same way whatever the inputs. Cleanup
    has nothing to tear down yet and needs no inputs.
    """
    match phase:
        case Phase.SETUP:
            gate = check_platform(platform, target)
            if isinstance(gate, Err):
                return gate
            built = service_factory()
            if isinstance(built, Err):
                return built
            return built.value.setup(dry_run=dry_run)
        case Phase.CLEANUP:
            return Ok(None)
