"""Tests for merging fetched activities into the cache."""

from datetime import date, datetime

from triplan.models.records import ExternalActivity
from triplan.services.sync_merger import merge_activities

EARLIER = datetime(2026, 2, 1, 8, 0, 0)
NOW = datetime(2026, 2, 10, 9, 30, 0)


def _activity(external_id, day, title="Run", start_time=None, synced_at=None, **fields):
    return ExternalActivity(
        external_id,
        date=day,
        start_time=start_time,
        title=title,
        fields=fields,
        synced_at=synced_at,
    )


class TestMergeActivities:
    """Tests for merge_activities."""

    def test_adds_new(self):
        result = merge_activities([], [_activity("1", date(2026, 2, 9))], NOW)

        assert result.added == 1
        assert result.updated == 0
        assert result.total == 1
        assert result.merged[0].synced_at == NOW

    def test_identical_keeps_previous_stamp(self):
        existing = [_activity("1", date(2026, 2, 9), synced_at=EARLIER)]

        result = merge_activities(existing, [_activity("1", date(2026, 2, 9))], NOW)

        assert result.added == 0
        assert result.updated == 0
        assert result.merged[0].synced_at == EARLIER

    def test_changed_is_replaced(self):
        existing = [_activity("1", date(2026, 2, 9), title="Run", synced_at=EARLIER)]

        result = merge_activities(existing, [_activity("1", date(2026, 2, 9), title="Tempo Run")], NOW)

        assert result.updated == 1
        assert result.merged[0].title == "Tempo Run"
        assert result.merged[0].synced_at == NOW

    def test_field_change_counts_as_update(self):
        existing = [_activity("1", date(2026, 2, 9), icu_training_load=50, synced_at=EARLIER)]

        result = merge_activities(existing, [_activity("1", date(2026, 2, 9), icu_training_load=55)], NOW)

        assert result.updated == 1

    def test_never_drops_cached(self):
        existing = [_activity("1", date(2026, 1, 5), synced_at=EARLIER)]

        result = merge_activities(existing, [_activity("2", date(2026, 2, 9))], NOW)

        assert {a.external_id for a in result.merged} == {"1", "2"}

    def test_second_merge_is_noop(self):
        incoming = [_activity("1", date(2026, 2, 9)), _activity("2", date(2026, 2, 10))]
        first = merge_activities([], incoming, EARLIER)

        second = merge_activities(first.merged, incoming, NOW)

        assert (second.added, second.updated) == (0, 0)
        assert [a.synced_at for a in second.merged] == [EARLIER, EARLIER]

    def test_newest_first(self):
        incoming = [
            _activity("1", date(2026, 2, 9), start_time="07:00:00"),
            _activity("2", date(2026, 2, 10)),
            _activity("3", date(2026, 2, 9), start_time="18:00:00"),
            _activity("4", None),
        ]

        result = merge_activities([], incoming, NOW)

        assert [a.external_id for a in result.merged] == ["2", "3", "1", "4"]

    def test_inputs_not_mutated(self):
        existing = [_activity("1", date(2026, 2, 9), title="Run", synced_at=EARLIER)]
        incoming = [_activity("1", date(2026, 2, 9), title="Tempo"), _activity("2", date(2026, 2, 10))]

        merge_activities(existing, incoming, NOW)

        assert existing[0].title == "Run"
        assert existing[0].synced_at == EARLIER
        assert all(a.synced_at is None for a in incoming)
