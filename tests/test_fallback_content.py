"""
兜底内容测试
"""
import pytest

from fallback_content import (
    DAILY_NARRATIVES,
    EMOTION_NARRATIVES,
    INCIDENT_NARRATIVES,
    default_narrative,
    default_suggestions,
)


def test_incident_narrative_by_sentiment():
    assert default_narrative("happy", "negative", True) == INCIDENT_NARRATIVES["negative"]


def test_daily_narrative_prefers_emotion_text():
    assert default_narrative("anxious", "negative", False) == EMOTION_NARRATIVES["anxious"]
    assert default_narrative("hopeful", "positive", False) == DAILY_NARRATIVES["positive"]
    assert default_narrative("neutral", "neutral", False) == DAILY_NARRATIVES["neutral"]


@pytest.mark.parametrize("emotions, dominant, sentiment, incident", [
    ([], "neutral", "neutral", False),
    (["hopeful"], "hopeful", "positive", True),
    (["confident", "energetic"], "confident", "positive", False),
    (["sad", "sad"], "sad", "negative", False),
])
def test_always_at_least_three_unique_suggestions(emotions, dominant, sentiment, incident):
    result = default_suggestions(emotions, dominant, sentiment, incident)

    assert 3 <= len(result) <= 6
    assert len(set(result)) == len(result)
