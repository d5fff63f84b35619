"""GitHub Releases as the release provider.

The resolver, fetcher and installer only see the ``ReleaseProvider``
protocol. ``GitHubReleaseProvider`` implements it on top of an
``HttpClient`` against the REST API:

- GET /repos/{owner}/{repo}/releases/latest
- GET /repos/{owner}/{repo}/releases?per_page=N
- GET /repos/{owner}/{repo}/releases/tags/{tag}
- GET {asset.url} with ``Accept: application/octet-stream``
"""

from __future__ import annotations

import json
import urllib.parse
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from pewsetup.core.errors import ProviderError
from pewsetup.core.result import Err, Ok, Result
from pewsetup.core.structured import as_obj_list, as_str_dict, get_list, get_str
from pewsetup.tools.http import ACCEPT_OCTET_STREAM
from pewsetup.tools.versions import release_triple

if TYPE_CHECKING:
    from pewsetup.tools.http import HttpClient, HttpError

__all__ = [
    "GITHUB_API_URL",
    "MAX_PAGE_SIZE",
    "GitHubReleaseProvider",
    "ReleaseAsset",
    "ReleaseDetail",
    "ReleaseProvider",
    "ReleaseSummary",
]

GITHUB_API_URL = "https://api.github.com"
MAX_PAGE_SIZE = 100


@dataclass(frozen=True, slots=True)
class ReleaseSummary:
    """A release listing entry.

    Attributes:
        tag: Release tag name, verbatim
        parts: (major, minor, patch) when the tag is a plain three-part
            version, None otherwise
    """

    tag: str
    parts: tuple[int, int, int] | None

    @classmethod
    def from_tag(cls, tag: str) -> ReleaseSummary:
        return cls(tag=tag, parts=release_triple(tag))


@dataclass(frozen=True, slots=True)
class ReleaseAsset:
    """A downloadable file attached to a release.

    ``url`` is the API handle for the asset, not the browser download URL.
    """

    name: str
    url: str


@dataclass(frozen=True, slots=True)
class ReleaseDetail:
    tag: str
    assets: tuple[ReleaseAsset, ...]

    def find_asset(self, name: str) -> ReleaseAsset | None:
        """Return the first asset whose name matches exactly (case-sensitive)."""
        for asset in self.assets:
            if asset.name == name:
                return asset
        return None


@runtime_checkable
class ReleaseProvider(Protocol):
    """Remote service exposing releases and their assets."""

    def latest_release(self, owner: str, repo: str) -> Result[ReleaseSummary, ProviderError]: ...

    def list_releases(
        self, owner: str, repo: str, per_page: int = MAX_PAGE_SIZE
    ) -> Result[list[ReleaseSummary], ProviderError]: ...

    def release_by_tag(
        self, owner: str, repo: str, tag: str
    ) -> Result[ReleaseDetail, ProviderError]: ...

    def request_asset(self, asset: ReleaseAsset) -> Result[bytes, ProviderError]: ...


def _provider_error(operation: str, error: HttpError) -> ProviderError:
    return ProviderError(operation=operation, detail=str(error))


class GitHubReleaseProvider:
    """ReleaseProvider backed by the GitHub REST API.

    Usage:
        provider = GitHubReleaseProvider(RealHttpClient(token))
        result = provider.latest_release("PlayEveryWare", "pewbuild")
        if is_ok(result):
            print(result.value.tag)
    """

    def __init__(self, http: HttpClient, api_url: str = GITHUB_API_URL) -> None:
        self._http = http
        self._api_url = api_url.rstrip("/")

    def releases_url(self, owner: str, repo: str) -> str:
        return f"{self._api_url}/repos/{owner}/{repo}/releases"

    def latest_release(self, owner: str, repo: str) -> Result[ReleaseSummary, ProviderError]:
        """Fetch the release GitHub marks as latest."""
        operation = "get latest release"
        result = self._http.get_json(f"{self.releases_url(owner, repo)}/latest")
        if isinstance(result, Err):
            return Err(_provider_error(operation, result.error))

        tag = get_str(result.value, "tag_name")
        if tag is None:
            return Err(ProviderError(operation=operation, detail="Missing tag_name in response"))
        return Ok(ReleaseSummary.from_tag(tag))

    def list_releases(
        self, owner: str, repo: str, per_page: int = MAX_PAGE_SIZE
    ) -> Result[list[ReleaseSummary], ProviderError]:
        """List the most recent releases, newest first.

        Only the first page is requested; ``per_page`` is clamped to
        the API maximum of 100.
        """
        operation = "list releases"
        size = max(1, min(per_page, MAX_PAGE_SIZE))
        result = self._http.get_text(f"{self.releases_url(owner, repo)}?per_page={size}")
        if isinstance(result, Err):
            return Err(_provider_error(operation, result.error))

        try:
            raw: object = json.loads(result.value)
        except json.JSONDecodeError as e:
            return Err(ProviderError(operation=operation, detail=f"JSON parse error: {e}"))

        entries = as_obj_list(raw)
        if entries is None:
            return Err(ProviderError(operation=operation, detail="Expected JSON array"))

        releases: list[ReleaseSummary] = []
        for entry in entries:
            data = as_str_dict(entry)
            tag = get_str(data, "tag_name") if data is not None else None
            if tag is None:
                return Err(ProviderError(operation=operation, detail="Release without tag_name"))
            releases.append(ReleaseSummary.from_tag(tag))
        return Ok(releases)

    def release_by_tag(self, owner: str, repo: str, tag: str) -> Result[ReleaseDetail, ProviderError]:
        """Fetch the full manifest (assets included) for one tag."""
        operation = f"get release {tag}"
        quoted = urllib.parse.quote(tag, safe="")
        result = self._http.get_json(f"{self.releases_url(owner, repo)}/tags/{quoted}")
        if isinstance(result, Err):
            return Err(_provider_error(operation, result.error))

        data = result.value
        tag_name = get_str(data, "tag_name")
        if tag_name is None:
            return Err(ProviderError(operation=operation, detail="Missing tag_name in response"))

        assets: list[ReleaseAsset] = []
        for entry in get_list(data, "assets") or []:
            asset = as_str_dict(entry)
            name = get_str(asset, "name") if asset is not None else None
            url = get_str(asset, "url") if asset is not None else None
            if name is None or url is None:
                return Err(ProviderError(operation=operation, detail="Malformed asset entry"))
            assets.append(ReleaseAsset(name=name, url=url))

        return Ok(ReleaseDetail(tag=tag_name, assets=tuple(assets)))

    def request_asset(self, asset: ReleaseAsset) -> Result[bytes, ProviderError]:
        """Download asset content as raw bytes."""
        result = self._http.get_bytes(asset.url, accept=ACCEPT_OCTET_STREAM)
        if isinstance(result, Err):
            return Err(_provider_error(f"download {asset.name}", result.error))
        return Ok(result.value)
