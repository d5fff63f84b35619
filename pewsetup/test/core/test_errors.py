"""Tests for pewsetup.core.errors module."""

from pathlib import Path

import pytest

from pewsetup.core.errors import (
    ErrorCode,
    FilesystemError,
    MalformedRange,
    NoMatchingRelease,
    ProviderError,
)


class TestErrorCode:
    def test_values_are_stable(self) -> None:
        assert int(ErrorCode.OK) == 0
        assert int(ErrorCode.USER_ERROR) == 1
        assert int(ErrorCode.ENV_ERROR) == 2
        assert int(ErrorCode.NETWORK_ERROR) == 4
        assert int(ErrorCode.IO_ERROR) == 5

    def test_str(self) -> None:
        assert str(ErrorCode.NETWORK_ERROR) == "network error"

    def test_is_success(self) -> None:
        assert ErrorCode.OK.is_success
        assert not ErrorCode.IO_ERROR.is_success


class TestMessages:
    def test_no_matching_release(self) -> None:
        assert NoMatchingRelease(spec="^3.0").message == (
            "No release found matching version range ^3.0"
        )

    def test_provider_error_passes_detail_through(self) -> None:
        error = ProviderError(operation="list releases", detail="HTTP 403: rate limited (url)")

        assert error.message == "Failed to list releases: HTTP 403: rate limited (url)"

    def test_malformed_range(self) -> None:
        error = MalformedRange(raw="^x", reason="expected at least major.minor")

        assert "^x" in error.message

    def test_filesystem_error(self) -> None:
        error = FilesystemError(path=Path("cache") / "pewbuild.exe", detail="Failed to install binary")

        assert error.message.startswith("Failed to install binary: ")
        assert "pewbuild.exe" in error.message

    def test_errors_are_frozen(self) -> None:
        error = NoMatchingRelease(spec="^3.0")
        with pytest.raises(AttributeError):
            error.spec = "^4.0"  # type: ignore[misc]
