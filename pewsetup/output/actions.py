"""GitHub Actions step outputs and workflow commands.

Outputs and PATH additions are written to the files the runner names
in ``GITHUB_OUTPUT`` and ``GITHUB_PATH``. Outside a runner (no such
files) the legacy ``::set-output`` / ``::add-path`` commands are echoed
instead.
"""

from __future__ import annotations

import os
import uuid
from collections.abc import Callable, Mapping, MutableMapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

import typer

from pewsetup.core.errors import FilesystemError
from pewsetup.core.result import Err, Ok, Result

__all__ = [
    "OutputSink",
    "StepOutputs",
    "MockStepOutputs",
    "escape_data",
    "error_command",
]


def escape_data(value: str) -> str:
    """Escape a workflow command payload."""
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def error_command(message: str) -> str:
    return f"::error::{escape_data(message)}"


class OutputSink(Protocol):
    def publish(
        self, outputs: Mapping[str, str], directory: Path
    ) -> Result[None, FilesystemError]:
        """Publish all ``outputs`` and put ``directory`` on PATH."""
        ...


class StepOutputs:
    """Publishes step outputs for later steps of the same job.

    The PATH entry is written before the outputs, and all outputs go
    out in a single append, so a failed write leaves no output behind.
    """

    def __init__(
        self,
        *,
        output_file: Path | None,
        path_file: Path | None,
        environ: MutableMapping[str, str],
        echo: Callable[[str], None] = typer.echo,
    ) -> None:
        self._output_file = output_file
        self._path_file = path_file
        self._environ = environ
        self._echo = echo

    @classmethod
    def from_env(cls, environ: MutableMapping[str, str] = os.environ) -> StepOutputs:
        return cls(
            output_file=_env_path(environ, "GITHUB_OUTPUT"),
            path_file=_env_path(environ, "GITHUB_PATH"),
            environ=environ,
        )

    def publish(
        self, outputs: Mapping[str, str], directory: Path
    ) -> Result[None, FilesystemError]:
        if self._path_file is not None:
            written = _append(self._path_file, f"{directory}\n")
            if isinstance(written, Err):
                return written

        if self._output_file is not None:
            block = "".join(_heredoc(name, value) for name, value in outputs.items())
            written = _append(self._output_file, block)
            if isinstance(written, Err):
                return written
        else:
            for name, value in outputs.items():
                self._echo(f"::set-output name={name}::{escape_data(value)}")

        if self._path_file is None:
            self._echo(f"::add-path::{escape_data(str(directory))}")

        current = self._environ.get("PATH", "")
        self._environ["PATH"] = f"{directory}{os.pathsep}{current}" if current else str(directory)
        return Ok(None)


def _heredoc(name: str, value: str) -> str:
    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    return f"{name}<<{delimiter}\n{value}\n{delimiter}\n"


def _append(path: Path, text: str) -> Result[None, FilesystemError]:
    try:
        with path.open("a", encoding="utf-8") as handle:
            handle.write(text)
    except OSError as e:
        return Err(FilesystemError(path=path, detail=f"Failed to write step outputs ({e})"))
    return Ok(None)


def _env_path(environ: Mapping[str, str], name: str) -> Path | None:
    value = environ.get(name, "").strip()
    return Path(value) if value else None


def _empty_outputs() -> dict[str, str]:
    return {}


def _empty_paths() -> list[Path]:
    return []


@dataclass
class MockStepOutputs:
    """OutputSink that records what would have been published."""

    outputs: dict[str, str] = field(default_factory=_empty_outputs)
    paths: list[Path] = field(default_factory=_empty_paths)

    def publish(
        self, outputs: Mapping[str, str], directory: Path
    ) -> Result[None, FilesystemError]:
        self.outputs.update(outputs)
        self.paths.append(directory)
        return Ok(None)
