"""
趋势聚合测试
"""
from datetime import datetime, timedelta, timezone

import pytest

from models import SentimentAnalysis, TrendEntryInput
from routers.services.trend_service import (
    DECLINING_RECOMMENDATION,
    IMPROVING_RECOMMENDATION,
    NEGATIVE_INSIGHT,
    POSITIVE_INSIGHT,
    TrendService,
    aggregate_trends,
    compute_weekly_trend,
)
from storage.repositories.entry_repository import EntryRepository

NOW = datetime(2024, 3, 15, 12, 0, 0)


def _entry(days_ago, intensity=5, emotions=("calm",), sentiment="positive", is_incident=False):
    return TrendEntryInput(
        timestamp=NOW - timedelta(days=days_ago),
        is_incident=is_incident,
        sentiment_analysis=SentimentAnalysis(
            emotions=list(emotions),
            dominant_emotion=emotions[0] if emotions else "neutral",
            intensity=intensity,
            sentiment=sentiment,
        ),
    )


class TestAggregateTrends:

    def test_empty_collection_gives_default_snapshot(self):
        snapshot = aggregate_trends([], now=NOW)

        assert snapshot.weekly_trend == "stable"
        assert snapshot.emotional_patterns == {}
        assert snapshot.insights == []
        assert snapshot.recommendations == []
        assert snapshot.monthly_entry_count == 0
        assert snapshot.window_size == 0

    def test_rising_intensity_over_a_week_is_improving(self):
        entries = [_entry(6 - i, intensity=3 + i) for i in range(7)]

        snapshot = aggregate_trends(entries, now=NOW)

        assert snapshot.window_size == 7
        assert snapshot.weekly_trend == "improving"
        assert IMPROVING_RECOMMENDATION in snapshot.recommendations

    def test_falling_intensity_is_declining(self):
        entries = [_entry(6 - i, intensity=9 - i) for i in range(7)]

        snapshot = aggregate_trends(entries, now=NOW)

        assert snapshot.weekly_trend == "declining"
        assert DECLINING_RECOMMENDATION in snapshot.recommendations

    @pytest.mark.parametrize("intensities", [[1, 10], [10, 1], [5]])
    def test_fewer_than_three_entries_is_stable(self, intensities):
        entries = [_entry(len(intensities) - i, intensity=v) for i, v in enumerate(intensities)]
        assert aggregate_trends(entries, now=NOW).weekly_trend == "stable"

    def test_window_is_calendar_week_capped_at_seven(self):
        old = [_entry(20, intensity=1), _entry(10, intensity=1)]
        recent = [_entry(6.5 - i * 0.5, intensity=5) for i in range(9)]

        snapshot = aggregate_trends(old + recent, now=NOW)

        assert snapshot.window_size == 7
        assert snapshot.monthly_entry_count == 11
        assert snapshot.monthly_comparison == "11 entries this month"

    def test_input_order_does_not_matter(self):
        entries = [_entry(6 - i, intensity=3 + i) for i in range(7)]
        assert aggregate_trends(list(reversed(entries)), now=NOW) == aggregate_trends(entries, now=NOW)

    def test_patterns_insights_and_recommendations(self):
        entries = [
            _entry(4, 6, ("stressed", "anxious"), "negative"),
            _entry(3, 6, ("stressed", "anxious", "tired"), "negative", is_incident=True),
            _entry(2, 6, ("stressed", "anxious", "sad"), "negative"),
            _entry(1, 6, ("stressed", "sad"), "negative"),
            _entry(0, 6, ("sad",), "negative"),
        ]

        snapshot = aggregate_trends(entries, now=NOW)

        assert snapshot.emotional_patterns == {"stressed": 4, "anxious": 3, "sad": 3, "tired": 1}
        assert NEGATIVE_INSIGHT in snapshot.insights
        assert "Your most frequent emotion this week is stressed (4 entries)." in snapshot.insights
        assert "You recorded 1 incident this week." in snapshot.insights
        assert len(snapshot.recommendations) == 3
        assert snapshot.recommendations[0].startswith("Consider stress management")
        assert snapshot.recommendations[1].startswith("Try grounding exercises")

    def test_positive_majority_insight(self):
        entries = [_entry(1, sentiment="positive"), _entry(0, sentiment="positive")]
        assert POSITIVE_INSIGHT in aggregate_trends(entries, now=NOW).insights

    def test_timezone_aware_timestamps_are_normalised(self):
        aware_now = NOW.replace(tzinfo=timezone.utc)
        entries = [_entry(6 - i, intensity=3 + i) for i in range(7)]

        assert aggregate_trends(entries, now=aware_now).weekly_trend == "improving"


def test_compute_weekly_trend_halves():
    # 前半 floor(n/2) 条，后半其余
    assert compute_weekly_trend([4, 4, 5, 6, 6]) == "improving"
    assert compute_weekly_trend([5, 5, 5]) == "stable"


@pytest.mark.asyncio
async def test_trend_service_reads_store(db_session):
    repo = EntryRepository(db_session)
    for i in range(7):
        timestamp = NOW - timedelta(days=6 - i)
        await repo.append(
            timestamp=timestamp,
            entry_date=timestamp.date(),
            text="entry text " * 6,
            emotions=["calm"],
            dominant_emotion="calm",
            intensity=3 + i,
            sentiment="positive",
            narrative="ok",
            suggestions=["a", "b", "c"],
        )

    snapshot = await TrendService(db_session).get_trends(now=NOW)

    assert snapshot.weekly_trend == "improving"
    assert snapshot.emotional_patterns == {"calm": 7}
    assert snapshot.monthly_entry_count == 7
