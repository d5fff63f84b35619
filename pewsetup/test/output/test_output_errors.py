"""Tests for pewsetup.output.errors module."""

from __future__ import annotations

from pathlib import Path

import pytest

from pewsetup.core.errors import (
    AssetNotFound,
    ErrorCode,
    FilesystemError,
    MalformedRange,
    MissingInput,
    NoMatchingRelease,
    ProviderError,
    SetupError,
    UnsupportedPlatform,
)
from pewsetup.output.console import MockConsole
from pewsetup.output.errors import print_setup_error, setup_error_exit_code


@pytest.mark.parametrize(
    ("error", "expected"),
    [
        (MalformedRange(raw="^a", reason="bad"), ErrorCode.USER_ERROR),
        (NoMatchingRelease(spec="^7.0"), ErrorCode.USER_ERROR),
        (MissingInput(name="token"), ErrorCode.USER_ERROR),
        (UnsupportedPlatform(current="linux", required="Windows"), ErrorCode.ENV_ERROR),
        (AssetNotFound(asset="pewbuild.exe", tag="v1.0.0"), ErrorCode.ENV_ERROR),
        (ProviderError(operation="list releases", detail="HTTP 500"), ErrorCode.NETWORK_ERROR),
        (FilesystemError(path=Path("x"), detail="Failed"), ErrorCode.IO_ERROR),
    ],
)
def test_exit_codes(error: SetupError, expected: ErrorCode) -> None:
    assert setup_error_exit_code(error) == int(expected)


class TestPrintSetupError:
    def test_prints_to_console(self) -> None:
        console = MockConsole()
        echoed: list[str] = []

        print_setup_error(
            NoMatchingRelease(spec="^7.0"), console, environ={}, echo=echoed.append
        )

        assert console.has_error()
        assert console.messages == ["error: No release found matching version range ^7.0"]
        assert echoed == []

    def test_annotates_job_on_runner(self) -> None:
        console = MockConsole()
        echoed: list[str] = []

        print_setup_error(
            AssetNotFound(asset="pewbuild.exe", tag="v1.0.0"),
            console,
            environ={"GITHUB_ACTIONS": "true"},
            echo=echoed.append,
        )

        assert echoed == ["::error::pewbuild.exe not found in release v1.0.0"]
