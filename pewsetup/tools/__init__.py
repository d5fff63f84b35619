"""Release resolution and acquisition.

This package provides:
- Version specifier parsing (versions.py)
- HTTP client and GitHub release provider (http.py, github.py)
- Release resolution (resolver.py)
- Tool cache store and probe (cache.py)
- Asset lookup (fetcher.py)
- Download and install (installer.py)
"""

from pewsetup.tools.cache import CacheKey, LocalToolCache, ToolCache, probe
from pewsetup.tools.fetcher import ReleaseFetcher
from pewsetup.tools.github import (
    GitHubReleaseProvider,
    ReleaseAsset,
    ReleaseDetail,
    ReleaseProvider,
    ReleaseSummary,
)
from pewsetup.tools.http import HttpClient, HttpError, MockHttpClient, RealHttpClient
from pewsetup.tools.installer import BinaryInstaller
from pewsetup.tools.resolver import ReleaseResolver
from pewsetup.tools.versions import Exact, Latest, Range, VersionSpec, parse_spec

__all__ = [
    # Specifiers
    "Exact",
    "Latest",
    "Range",
    "VersionSpec",
    "parse_spec",
    # HTTP
    "HttpClient",
    "HttpError",
    "MockHttpClient",
    "RealHttpClient",
    # Provider
    "GitHubReleaseProvider",
    "ReleaseAsset",
    "ReleaseDetail",
    "ReleaseProvider",
    "ReleaseSummary",
    # Pipeline
    "ReleaseResolver",
    "ReleaseFetcher",
    "BinaryInstaller",
    # Cache
    "CacheKey",
    "LocalToolCache",
    "ToolCache",
    "probe",
]
