"""Release manifest lookup for a resolved tag."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pewsetup.core.errors import AssetNotFound, ProviderError
from pewsetup.core.result import Err, Ok, Result

if TYPE_CHECKING:
    from pewsetup.tools.github import ReleaseAsset, ReleaseProvider

__all__ = ["ReleaseFetcher"]


class ReleaseFetcher:
    """Locates a named asset in a release.

    The manifest is only fetched after resolution, which is also where a
    non-existent exact tag surfaces (as a ProviderError).
    """

    def __init__(self, provider: ReleaseProvider, owner: str, repo: str) -> None:
        self._provider = provider
        self._owner = owner
        self._repo = repo

    def fetch_asset(
        self, tag: str, asset_name: str
    ) -> Result[ReleaseAsset, AssetNotFound | ProviderError]:
        """Return the asset named exactly ``asset_name`` in release ``tag``.

        Args:
            tag: Resolved release tag
            asset_name: Exact, case-sensitive asset filename

        Returns:
            Ok with the asset handle, or Err if the release cannot be
            fetched or carries no such asset
        """
        release = self._provider.release_by_tag(self._owner, self._repo, tag)
        if isinstance(release, Err):
            return release

        asset = release.value.find_asset(asset_name)
        if asset is None:
            return Err(AssetNotFound(asset=asset_name, tag=tag))
        return Ok(asset)
