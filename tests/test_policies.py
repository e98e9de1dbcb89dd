"""Tests for section policies module."""

import pytest

from difflines.diffpack import Hunk
from difflines.policies import SectionPolicies
from difflines.vcs import DeltaStatus, FileDelta


class TestSectionPolicies:
    """Test SectionPolicies class."""

    @pytest.mark.parametrize(
        "status,expected",
        [
            (DeltaStatus.ADDED, True),
            (DeltaStatus.MODIFIED, True),
            (DeltaStatus.DELETED, False),
            (DeltaStatus.RENAMED, False),
            (DeltaStatus.COPIED, False),
            (DeltaStatus.TYPE_CHANGED, False),
            (DeltaStatus.UNMERGED, False),
            (DeltaStatus.UNMODIFIED, False),
            (DeltaStatus.UNKNOWN, False),
        ],
    )
    def test_is_reportable_status(self, status, expected):
        """Only additions and modifications are reportable."""
        assert SectionPolicies.is_reportable_status(status) is expected

    def test_matches_extension(self):
        """Extension matching is a literal suffix test."""
        assert SectionPolicies.matches_extension("src/lib.rs", ".rs") is True
        assert SectionPolicies.matches_extension("lib.notrs", ".rs") is False
        assert SectionPolicies.matches_extension("lib.rs.orig", ".rs") is False
        assert SectionPolicies.matches_extension("lib.RS", ".rs") is False
        assert SectionPolicies.matches_extension("archive.tar.gz", ".tar.gz") is True

    def test_should_report(self):
        """Status and extension must both qualify."""
        hunks = [Hunk(1, 1, 1, 1)]

        assert SectionPolicies.should_report(
            FileDelta(DeltaStatus.ADDED, None, "a.py", hunks), ".py"
        ) is True
        assert SectionPolicies.should_report(
            FileDelta(DeltaStatus.ADDED, None, "a.txt", hunks), ".py"
        ) is False
        assert SectionPolicies.should_report(
            FileDelta(DeltaStatus.DELETED, "a.py", None, hunks), ".py"
        ) is False

    def test_should_report_requires_new_path(self):
        """A delta without a post-change path is never reported."""
        assert SectionPolicies.should_report(
            FileDelta(DeltaStatus.MODIFIED, "a.py", None), ".py"
        ) is False
