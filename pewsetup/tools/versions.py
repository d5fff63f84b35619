"""Version specifiers and release tag parsing.

A user-supplied version string becomes one of three specifiers:

- ``latest``          -> Latest()
- ``^1.2`` / ``~1.2.0`` -> Range(op, major, minor)
- anything else       -> Exact(tag), with a ``v`` prefix ensured

Parsing is pure; nothing here touches the network.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

from pewsetup.core.errors import MalformedRange
from pewsetup.core.result import Err, Ok, Result

__all__ = [
    "Exact",
    "Latest",
    "Range",
    "RangeOp",
    "VersionSpec",
    "parse_spec",
    "release_triple",
]

RangeOp = Literal["^", "~"]

_NUMERIC = re.compile(r"[0-9]+")


@dataclass(frozen=True, slots=True)
class Exact:
    tag: str

    def __str__(self) -> str:
        return self.tag


@dataclass(frozen=True, slots=True)
class Latest:
    def __str__(self) -> str:
        return "latest"


@dataclass(frozen=True, slots=True)
class Range:
    """Caret or tilde range.

    ``^`` matches every release sharing ``major``; ``~`` additionally
    requires the same ``minor``.
    """

    op: RangeOp
    major: int
    minor: int

    def __str__(self) -> str:
        return f"{self.op}{self.major}.{self.minor}"

    def matches(self, triple: tuple[int, int, int]) -> bool:
        match self.op:
            case "^":
                return triple[0] == self.major
            case "~":
                return triple[0] == self.major and triple[1] == self.minor


type VersionSpec = Exact | Latest | Range


def _parse_component(text: str) -> int | None:
    if not _NUMERIC.fullmatch(text):
        return None
    return int(text)


def parse_spec(raw: str) -> Result[VersionSpec, MalformedRange]:
    """Parse a raw version string into a specifier."""
    if raw == "latest":
        return Ok(Latest())

    if raw.startswith(("^", "~")):
        op: RangeOp = "^" if raw[0] == "^" else "~"
        parts = raw[1:].split(".")
        if len(parts) < 2:
            return Err(MalformedRange(raw=raw, reason="expected at least major.minor"))

        major = _parse_component(parts[0])
        minor = _parse_component(parts[1])
        if major is None or minor is None:
            return Err(
                MalformedRange(raw=raw, reason="major and minor must be non-negative integers")
            )
        return Ok(Range(op=op, major=major, minor=minor))

    tag = raw if raw.startswith("v") else f"v{raw}"
    return Ok(Exact(tag=tag))


def release_triple(tag: str) -> tuple[int, int, int] | None:
    """Reduce a release tag to comparable (major, minor, patch).

    Returns None unless the tag (minus one leading ``v``) is exactly
    three dot-separated integers, so pre-releases such as
    ``v2.3.1-beta`` and short tags such as ``v1.0`` are excluded.
    """
    bare = tag[1:] if tag.startswith("v") else tag
    parts = bare.split(".")
    if len(parts) != 3:
        return None

    numbers = [_parse_component(p) for p in parts]
    if any(n is None for n in numbers):
        return None
    major, minor, patch = (n for n in numbers if n is not None)
    return (major, minor, patch)
