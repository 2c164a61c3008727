from __future__ import annotations

from collections import defaultdict
from datetime import date, tzinfo
from typing import Iterable

from ..common.datetime_utils import local_day, to_local
from ..events.model import Event


def group_events_by_day(events: Iterable[Event], tz: tzinfo) -> dict[date, list[Event]]:
    """Bucket live punches by local calendar day.

    Buckets come back in date order and each bucket is sorted by timestamp.
    The sort is stable, so punches sharing a timestamp keep arrival order.
    """

    buckets: dict[date, list[Event]] = defaultdict(list)
    for event in events:
        if event.is_deleted:
            continue
        buckets[local_day(event.timestamp, tz)].append(event)

    for bucket in buckets.values():
        bucket.sort(key=lambda e: to_local(e.timestamp, tz))

    return dict(sorted(buckets.items()))
