"""Tests for repository filtering and ordering helpers."""
from datetime import datetime, timedelta, timezone

import pytest

from opskit.models import RepositoryDescriptor
from opskit.services.repo_filters import (
    filter_by_visibility,
    filter_updated_before,
    filter_updated_within,
    sort_by_updated,
)

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


def repo(name, visibility="PUBLIC", days_ago=None):
    updated = NOW - timedelta(days=days_ago) if days_ago is not None else None
    return RepositoryDescriptor(name=name, visibility=visibility, updated_at=updated)


@pytest.fixture
def repos():
    return [
        repo("fresh", "PUBLIC", days_ago=1),
        repo("month-old", "private", days_ago=30),
        repo("stale", "Private", days_ago=400),
        repo("undated", "PUBLIC"),
        repo("also-fresh", "INTERNAL", days_ago=1),
    ]


class TestVisibility:

    def test_case_insensitive_match(self, repos):
        assert [r.name for r in filter_by_visibility(repos, "private")] == ["month-old", "stale"]
        assert [r.name for r in filter_by_visibility(repos, "PUBLIC")] == ["fresh", "undated"]

    def test_input_not_mutated(self, repos):
        before = [r.name for r in repos]
        filter_by_visibility(repos, "public")
        assert [r.name for r in repos] == before

    def test_missing_visibility_never_matches(self):
        assert filter_by_visibility([RepositoryDescriptor(name="x")], "public") == []


class TestDateWindows:

    def test_within_boundary_is_inclusive(self, repos):
        # exactly one 30-day month ago counts as "within 1 month"
        names = [r.name for r in filter_updated_within(repos, 1, now=NOW)]
        assert names == ["fresh", "month-old", "also-fresh"]

    def test_before_is_complement_over_dated_entries(self, repos):
        within = filter_updated_within(repos, 1, now=NOW)
        before = filter_updated_before(repos, 1, now=NOW)

        dated = [r.name for r in repos if r.updated_at is not None]
        assert sorted(r.name for r in within + before) == sorted(dated)
        assert [r.name for r in before] == ["stale"]

    def test_months_are_thirty_days(self):
        just_inside = repo("in", days_ago=89.99)
        just_outside = repo("out", days_ago=90.01)

        names = [r.name for r in filter_updated_within([just_inside, just_outside], 3, now=NOW)]
        assert names == ["in"]

    def test_zero_months(self, repos):
        assert filter_updated_within(repos, 0, now=NOW) == []
        assert len(filter_updated_before(repos, 0, now=NOW)) == 4

    def test_window_past_calendar_start_keeps_every_dated_repo(self, repos):
        within = filter_updated_within(repos, 100000, now=NOW)
        before = filter_updated_before(repos, 100000, now=NOW)

        assert [r.name for r in within] == ["fresh", "month-old", "stale", "also-fresh"]
        assert before == []

    @pytest.mark.parametrize("months", [float("inf"), float("nan")])
    def test_non_finite_months_rejected(self, repos, months):
        with pytest.raises(ValueError, match="finite"):
            filter_updated_within(repos, months, now=NOW)


class TestSort:

    def test_descending(self, repos):
        ordered = sort_by_updated(repos)
        stamps = [r.updated_at for r in ordered if r.updated_at]
        assert stamps == sorted(stamps, reverse=True)
        assert ordered[-1].name == "undated"

    def test_ascending(self, repos):
        ordered = sort_by_updated(repos, "asc")
        stamps = [r.updated_at for r in ordered if r.updated_at]
        assert stamps == sorted(stamps)
        assert ordered[-1].name == "undated"

    def test_stable_for_equal_timestamps(self, repos):
        assert [r.name for r in sort_by_updated(repos, "desc")][:2] == ["fresh", "also-fresh"]
        assert [r.name for r in sort_by_updated(repos, "asc")][2:4] == ["fresh", "also-fresh"]

    def test_does_not_mutate(self, repos):
        before = [r.name for r in repos]
        sort_by_updated(repos, "asc")
        assert [r.name for r in repos] == before

    def test_rejects_unknown_order(self, repos):
        with pytest.raises(ValueError):
            sort_by_updated(repos, "sideways")
