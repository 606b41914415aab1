"""Tests for connector/versions.py - Gradle version parsing and ordering."""

import pytest

from gradle_insight.connector.versions import (
    UNKNOWN,
    GradleVersion,
    is_older_than,
    major_gaps,
    parse_version,
    parse_version_lenient,
)
from gradle_insight.exceptions import VersionParseError


class TestParseVersion:
    """Test parse_version function."""

    def test_major_minor(self):
        assert parse_version("7.6") == GradleVersion(7, 6, 0)

    def test_major_minor_patch(self):
        v = parse_version("8.5.1")
        assert (v.major, v.minor, v.patch) == (8, 5, 1)

    def test_qualifier_ignored(self):
        assert parse_version("9.0-rc-1") == GradleVersion(9, 0, 0)
        assert parse_version("8.10-milestone-3") == GradleVersion(8, 10, 0)

    def test_surrounding_whitespace(self):
        assert parse_version(" 8.4\n") == GradleVersion(8, 4, 0)

    def test_unknown_literal(self):
        assert parse_version("unknown") is UNKNOWN

    @pytest.mark.parametrize("text", ["", "8", "abc", "v8.5", "8.x"])
    def test_malformed_raises(self, text):
        with pytest.raises(VersionParseError):
            parse_version(text)

    def test_lenient_degrades_to_unknown_with_warning(self):
        warnings = []
        assert parse_version_lenient("nightly", warnings) is UNKNOWN
        assert len(warnings) == 1
        assert "nightly" in warnings[0]


class TestOrdering:
    """Versions form a total order with unknown oldest."""

    def test_numeric_not_lexical(self):
        assert parse_version("8.10") > parse_version("8.9")

    def test_patch_breaks_ties(self):
        assert parse_version("8.5") < parse_version("8.5.1")

    def test_unknown_older_than_everything(self):
        assert UNKNOWN < parse_version("0.1")
        assert is_older_than(UNKNOWN, parse_version("1.0"))

    def test_sort(self):
        versions = [parse_version(t) for t in ("9.2.1", "unknown", "7.6", "8.0")]
        assert [str(v) for v in sorted(versions)] == ["unknown", "7.6", "8.0", "9.2.1"]

    def test_equal_versions_not_older(self):
        assert not is_older_than(parse_version("9.0"), parse_version("9.0.0"))

    def test_str(self):
        assert str(parse_version("9.2.1")) == "9.2.1"
        assert str(parse_version("8.0")) == "8.0"
        assert str(UNKNOWN) == "unknown"


class TestMajorGaps:
    """Test major_gaps function."""

    def test_one_hop_per_major(self):
        assert major_gaps(parse_version("7.6"), parse_version("9.2.1")) == [(7, 8), (8, 9)]

    def test_same_major_no_gaps(self):
        assert major_gaps(parse_version("9.0"), parse_version("9.2.1")) == []

    def test_unknown_uses_configured_gap(self):
        assert major_gaps(UNKNOWN, parse_version("9.2.1")) == [(7, 8), (8, 9)]
        assert major_gaps(UNKNOWN, parse_version("9.2.1"), unknown_gap=3) == [
            (6, 7),
            (7, 8),
            (8, 9),
        ]
