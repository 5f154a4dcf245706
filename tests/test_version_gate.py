"""Tests for the version gate."""

from __future__ import annotations

import pytest

from aursync.release.version_gate import strip_version_prefix, versions_match


class TestStripVersionPrefix:
    def test_strips_leading_v(self):
        assert strip_version_prefix("v1.2.3") == "1.2.3"

    def test_leaves_plain_version(self):
        assert strip_version_prefix("1.2.3") == "1.2.3"

    def test_strips_at_most_one_prefix(self):
        assert strip_version_prefix("vv1.2.3") == "v1.2.3"

    def test_empty_string(self):
        assert strip_version_prefix("") == ""


class TestVersionsMatch:
    @pytest.mark.parametrize(
        "current, latest",
        [
            ("v1.2.3", "v1.2.3"),
            ("v1.2.3", "1.2.3"),
            ("1.2.3", "v1.2.3"),
            ("1.2.3", "1.2.3"),
        ],
    )
    def test_equal_after_prefix_strip(self, current, latest):
        assert versions_match(current, latest) is True

    @pytest.mark.parametrize(
        "current, latest",
        [
            ("1.2.3", "1.2.30"),
            ("v1.0.0", "v1.1.0"),
            ("vv1.2.3", "1.2.3"),
            ("1.2.3", "V1.2.3"),
        ],
    )
    def test_different_versions(self, current, latest):
        assert versions_match(current, latest) is False
