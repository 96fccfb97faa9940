"""
Statistics over journal records.

Every function takes a full snapshot of records and recomputes from scratch;
nothing is cached between calls.
"""

import math
from collections import Counter, defaultdict
from collections.abc import Iterable, Sequence
from datetime import date, datetime, timedelta, timezone

from .models import (
    DailyMood,
    DistortionCount,
    EmotionSummary,
    JournalRecord,
    StatsReport,
)

WEEK = timedelta(days=7)
TOP_DISTORTIONS = 5


def _round(value: float) -> int:
    """Round half up."""
    return math.floor(value + 0.5)


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def compute_stats(
    records: Sequence[JournalRecord], now: datetime | None = None
) -> StatsReport:
    """
    Compute the summary report for a snapshot of records.

    Args:
        records: Every record in the store
        now: Reference instant for the weekly window (defaults to current time)

    Returns:
        Totals, records created in the last 7 days, mean mood improvement and
        the five most frequent distortion types
    """
    if now is None:
        now = datetime.now(timezone.utc)
    week_ago = now - WEEK

    weekly = sum(1 for record in records if week_ago < record.created_at <= now)
    improvement = _mean([record.mood_before - record.mood_after for record in records])

    return StatsReport(
        total_records=len(records),
        weekly_records=weekly,
        avg_mood_improvement=improvement,
        common_distortions=rank_distortions(records),
    )


def rank_distortions(
    records: Iterable[JournalRecord], limit: int = TOP_DISTORTIONS
) -> list[DistortionCount]:
    """
    Tally distortion findings by type.

    Sorted by count descending; equal counts keep the order in which each type
    was first seen while scanning the records.
    """
    counts: Counter = Counter()
    for record in records:
        for finding in record.detected_distortions:
            counts[finding.type] += 1

    # sorted() is stable and Counter keeps first-seen order.
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [DistortionCount(type=kind, count=count) for kind, count in ranked[:limit]]


def summarize_emotions(
    records: Iterable[JournalRecord], limit: int = 5
) -> list[EmotionSummary]:
    """
    Count emotions by type with their average intensity.

    Args:
        records: Records to scan
        limit: Maximum number of emotion types to return

    Returns:
        The most frequent emotion types, most frequent first
    """
    intensities: dict[str, list[int]] = {}
    for record in records:
        for emotion in record.emotions:
            intensities.setdefault(emotion.type, []).append(emotion.intensity)

    summaries = [
        EmotionSummary(type=kind, count=len(values), avg_intensity=_round(_mean(values)))
        for kind, values in intensities.items()
    ]
    summaries.sort(key=lambda summary: summary.count, reverse=True)
    return summaries[:limit]


def _improvement_pct(record: JournalRecord) -> float:
    if record.mood_before == 0:
        return 0.0
    return _round((record.mood_before - record.mood_after) / record.mood_before * 100)


def mood_trend(records: Iterable[JournalRecord], days: int = 7) -> list[DailyMood]:
    """
    Average moods per journal date.

    Args:
        records: Records to scan
        days: Number of most recent dates to keep

    Returns:
        One entry per date, oldest first
    """
    by_date: dict[date, list[JournalRecord]] = defaultdict(list)
    for record in records:
        by_date[record.date].append(record)

    trend = [
        DailyMood(
            date=day,
            avg_mood_before=_round(_mean([r.mood_before for r in group])),
            avg_mood_after=_round(_mean([r.mood_after for r in group])),
            avg_improvement=_round(_mean([_improvement_pct(r) for r in group])),
        )
        for day, group in sorted(by_date.items())
    ]
    if days <= 0:
        return []
    return trend[-days:]
