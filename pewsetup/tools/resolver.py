"""Release resolution - turning a version specifier into one tag.

- Latest: ask the provider for its latest release
- Exact: returned verbatim; existence is checked when the manifest
  is fetched, not here
- Range: scan one page (at most 100) of the most recent releases and
  pick the highest matching (major, minor, patch)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pewsetup.core.errors import NoMatchingRelease, ProviderError
from pewsetup.core.result import Err, Ok, Result
from pewsetup.tools.github import MAX_PAGE_SIZE
from pewsetup.tools.versions import Exact, Latest, Range

if TYPE_CHECKING:
    from pewsetup.tools.github import ReleaseProvider, ReleaseSummary
    from pewsetup.tools.versions import VersionSpec

__all__ = ["ReleaseResolver", "best_match"]


def best_match(spec: Range, releases: list[ReleaseSummary]) -> str | None:
    """Return the tag of the highest release matching ``spec``.

    Releases without a three-part numeric version never match.
    """
    best: tuple[tuple[int, int, int], str] | None = None
    for release in releases:
        if release.parts is None or not spec.matches(release.parts):
            continue
        if best is None or release.parts > best[0]:
            best = (release.parts, release.tag)
    return best[1] if best is not None else None


class ReleaseResolver:
    """Resolves version specifiers against one repository's releases.

    Usage:
        resolver = ReleaseResolver(provider, "PlayEveryWare", "pewbuild")
        result = resolver.resolve(Range(op="^", major=1, minor=0))
        if is_ok(result):
            print(result.value)  # e.g. "v1.4.2"
    """

    def __init__(self, provider: ReleaseProvider, owner: str, repo: str) -> None:
        self._provider = provider
        self._owner = owner
        self._repo = repo

    def resolve(self, spec: VersionSpec) -> Result[str, NoMatchingRelease | ProviderError]:
        match spec:
            case Latest():
                latest = self._provider.latest_release(self._owner, self._repo)
                if isinstance(latest, Err):
                    return latest
                return Ok(latest.value.tag)
            case Exact(tag=tag):
                return Ok(tag)
            case Range():
                return self._resolve_range(spec)

    def _resolve_range(self, spec: Range) -> Result[str, NoMatchingRelease | ProviderError]:
        listing = self._provider.list_releases(self._owner, self._repo, per_page=MAX_PAGE_SIZE)
        if isinstance(listing, Err):
            return listing

        tag = best_match(spec, listing.value)
        if tag is None:
            return Err(NoMatchingRelease(spec=str(spec)))
        return Ok(tag)
