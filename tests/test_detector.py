"""
情绪检测器测试
"""
import pytest

from emotion.detector import detect_emotions, score_emotions, calculate_intensity
from emotion.lexicon import EMOTION_KEYWORDS


NO_KEYWORD_TEXTS = [
    "",
    "The meeting moved to Thursday afternoon at three o'clock.",
    "Bought groceries, paid the electricity bill and watered the plants.",
]


class TestDetectEmotions:

    @pytest.mark.parametrize("text", NO_KEYWORD_TEXTS)
    def test_no_keywords_is_neutral_with_lowest_intensity(self, text):
        result = detect_emotions(text)

        assert result.emotions == ()
        assert result.dominant_emotion == "neutral"
        assert result.intensity == 1

    def test_exam_entry_detects_negative_cluster(self, e2e_text):
        result = detect_emotions(e2e_text)

        assert {"stressed", "anxious", "overwhelmed"} <= set(result.emotions)
        assert result.dominant_emotion == "stressed"
        assert result.intensity >= 6

    def test_booster_adds_bonus(self):
        plain = score_emotions("I felt happy today")
        boosted = score_emotions("I felt very happy today")

        assert plain["happy"] == 1
        assert boosted["happy"] == 3

    def test_keywords_match_on_word_boundaries(self):
        # "sadness" 和 "madness" 不应命中 sad/mad
        scores = score_emotions("a documentary about madness and sadness")
        assert "sad" not in scores
        assert "angry" not in scores

    def test_ties_keep_lexicon_order(self):
        result = detect_emotions("I was tired but grateful and a bit lonely")

        order = list(EMOTION_KEYWORDS)
        assert list(result.emotions) == sorted(result.emotions, key=order.index)

    def test_higher_score_comes_first(self):
        result = detect_emotions("calm morning, then really angry and furious at the traffic")
        assert result.emotions[0] == "angry"

    def test_cap_on_number_of_emotions(self):
        text = (
            "happy sad angry anxious stressed calm excited grateful "
            "lonely confident overwhelmed hopeful tired energetic"
        )
        assert len(detect_emotions(text).emotions) == 8
        assert len(detect_emotions(text, max_emotions=3).emotions) == 3

    def test_is_idempotent(self, e2e_text):
        assert detect_emotions(e2e_text) == detect_emotions(e2e_text)

    @pytest.mark.parametrize("text", [
        "very very really so extremely totally completely absolutely incredibly deeply happy sad angry anxious stressed tired",
        "slightly kind of sort of somewhat a little sad",
        "happy",
    ] + NO_KEYWORD_TEXTS)
    def test_intensity_in_range_and_dominant_consistent(self, text):
        result = detect_emotions(text)

        assert isinstance(result.intensity, int)
        assert 1 <= result.intensity <= 10
        assert result.dominant_emotion == "neutral" or result.dominant_emotion in result.emotions


class TestCalculateIntensity:

    def test_midpoint_without_modifiers(self):
        assert calculate_intensity("I feel happy", 1) == 5

    def test_diminishers_lower_intensity(self):
        assert calculate_intensity("I feel slightly sad and a little tired", 2) == 3

    def test_emotion_count_bonuses(self):
        assert calculate_intensity("plain", 4) == 6
        assert calculate_intensity("plain", 6) == 7

    def test_clamped_to_ten(self):
        text = "very extremely really so totally completely absolutely incredibly deeply overwhelming"
        assert calculate_intensity(text, 6) == 10
