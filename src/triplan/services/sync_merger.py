"""Merge freshly fetched external activities into the cached collection."""

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Dict, Iterable, List

from ..models.records import ExternalActivity


@dataclass
class MergeResult:
    merged: List[ExternalActivity] = field(default_factory=list)
    added: int = 0
    updated: int = 0

    @property
    def total(self) -> int:
        return len(self.merged)


def _sort_key(activity: ExternalActivity):
    return (activity.date or date.min, activity.start_time or "")


def merge_activities(
    existing: Iterable[ExternalActivity],
    incoming: Iterable[ExternalActivity],
    now: datetime,
) -> MergeResult:
    """
    Merge ``incoming`` into ``existing`` keyed by external id.

    New activities are added and changed ones replaced, both stamped with
    ``now``. Identical activities keep their previous ``synced_at``. Nothing
    already cached is ever dropped, so merging the same batch twice is a
    no-op the second time. Neither input is mutated.

    Returns:
        MergeResult whose ``merged`` list is newest first
    """
    by_id: Dict[str, ExternalActivity] = {a.external_id: a for a in existing}
    added = 0
    updated = 0

    for activity in incoming:
        current = by_id.get(activity.external_id)
        if current is None:
            by_id[activity.external_id] = replace(activity, synced_at=now)
            added += 1
        elif not current.same_content(activity):
            by_id[activity.external_id] = replace(activity, synced_at=now)
            updated += 1

    merged = sorted(by_id.values(), key=_sort_key, reverse=True)
    return MergeResult(merged=merged, added=added, updated=updated)
