"""Tests for tools/versions.py - specifier parsing."""

import pytest

from pewsetup.core.errors import MalformedRange
from pewsetup.core.result import Err, Ok
from pewsetup.tools.versions import Exact, Latest, Range, parse_spec, release_triple


class TestParseSpec:
    """Tests for parse_spec()."""

    def test_latest(self) -> None:
        assert parse_spec("latest") == Ok(Latest())

    @pytest.mark.parametrize("raw", ["1.2.3", "1.0", "2024.01", "nightly"])
    def test_exact_gets_single_v_prefix(self, raw: str) -> None:
        """Bare exact versions get exactly one leading v."""
        assert parse_spec(raw) == Ok(Exact(tag=f"v{raw}"))

    @pytest.mark.parametrize("raw", ["v1.2.3", "v1.0", "vnext"])
    def test_exact_prefixed_unchanged(self, raw: str) -> None:
        assert parse_spec(raw) == Ok(Exact(tag=raw))

    def test_exact_prefixing_is_idempotent(self) -> None:
        first = parse_spec("1.4.0")
        assert isinstance(first, Ok)
        assert isinstance(first.value, Exact)
        assert parse_spec(first.value.tag) == first

    def test_caret_range(self) -> None:
        assert parse_spec("^2.0.0") == Ok(Range(op="^", major=2, minor=0))

    def test_tilde_range(self) -> None:
        assert parse_spec("~2.1.5") == Ok(Range(op="~", major=2, minor=1))

    def test_range_with_two_components(self) -> None:
        assert parse_spec("^3.4") == Ok(Range(op="^", major=3, minor=4))

    @pytest.mark.parametrize("raw", ["^1", "~", "^1.x", "~a.2", "^-1.0", "^1.-2", "^ 1.2", "^.1"])
    def test_malformed_range(self, raw: str) -> None:
        result = parse_spec(raw)

        assert isinstance(result, Err)
        assert isinstance(result.error, MalformedRange)
        assert result.error.raw == raw

    def test_latest_is_case_sensitive(self) -> None:
        """Only the exact word 'latest' selects the latest release."""
        assert parse_spec("Latest") == Ok(Exact(tag="vLatest"))


class TestRange:
    def test_caret_matches_major_only(self) -> None:
        spec = Range(op="^", major=2, minor=0)
        assert spec.matches((2, 9, 1))
        assert not spec.matches((1, 0, 0))

    def test_tilde_matches_major_and_minor(self) -> None:
        spec = Range(op="~", major=2, minor=1)
        assert spec.matches((2, 1, 7))
        assert not spec.matches((2, 2, 0))

    def test_str(self) -> None:
        assert str(Range(op="~", major=1, minor=3)) == "~1.3"


class TestReleaseTriple:
    @pytest.mark.parametrize(
        ("tag", "expected"),
        [
            ("v1.2.3", (1, 2, 3)),
            ("1.2.3", (1, 2, 3)),
            ("v10.0.12", (10, 0, 12)),
        ],
    )
    def test_three_part_tags(self, tag: str, expected: tuple[int, int, int]) -> None:
        assert release_triple(tag) == expected

    @pytest.mark.parametrize("tag", ["v1.0", "v1", "v2.3.1-beta", "v1.2.3.4", "release-1", "vv1.2.3", ""])
    def test_excluded_tags(self, tag: str) -> None:
        assert release_triple(tag) is None
