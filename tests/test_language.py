"""
语言识别测试
"""
import pytest

from emotion.language import detect_language_by_pattern, normalize_language_code
from routers.services.language_service import LanguageService


@pytest.mark.parametrize("text, expected", [
    ("Hola, hoy fue un día largo", "es"),
    ("Merci pour tout, je suis fatigué", "fr"),
    ("Danke, heute war anstrengend", "de"),
    ("Привет, сегодня тяжелый день", "ru"),
    ("今日はありがとう", "ja"),
    ("오늘 아침은 힘들었다", "ko"),
    ("今天谢谢你陪我", "zh"),
    ("नमस्ते, आज का दिन लंबा था", "hi"),
    ("Today was a long day at work", None),
    ("I chatted with a bonjourno fan", None),
])
def test_detect_language_by_pattern(text, expected):
    assert detect_language_by_pattern(text) == expected


@pytest.mark.parametrize("raw, expected", [
    ("es", "es"),
    ("  FR.\n", "fr"),
    ('"de"', "de"),
    ("The language code is: it", "it"),
    ("xx", "en"),
    ("", "en"),
])
def test_normalize_language_code(raw, expected):
    assert normalize_language_code(raw) == expected


class TestLanguageService:

    @pytest.mark.asyncio
    async def test_empty_text_defaults_to_english(self, failing_llm, no_wait_policy):
        result = await LanguageService(failing_llm, no_wait_policy).detect("   ")

        assert (result.language, result.confidence, result.method) == ("en", 0.0, "default")
        failing_llm.generate_text.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_pattern_match_skips_llm(self, failing_llm, no_wait_policy):
        result = await LanguageService(failing_llm, no_wait_policy).detect("Ciao, grazie di tutto")

        assert (result.language, result.confidence, result.method) == ("it", 0.8, "pattern")
        failing_llm.generate_text.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_llm_decides_when_no_pattern(self, llm_factory, no_wait_policy):
        llm = llm_factory("nl")
        result = await LanguageService(llm, no_wait_policy).detect("Vandaag was een lange werkdag")

        # nl 不在支持列表中
        assert (result.language, result.confidence, result.method) == ("en", 0.6, "llm")

        llm = llm_factory("pt")
        result = await LanguageService(llm, no_wait_policy).detect("Hoje foi um longo trabalho")
        assert result.language == "pt"
        assert "Hoje foi um longo trabalho" in llm.generate_text.await_args.args[0]

    @pytest.mark.asyncio
    async def test_llm_failure_defaults_to_english(self, failing_llm, no_wait_policy):
        result = await LanguageService(failing_llm, no_wait_policy).detect("Vandaag was een lange werkdag")

        assert (result.language, result.confidence, result.method) == ("en", 0.0, "fallback")
        assert failing_llm.generate_text.await_count == no_wait_policy.max_attempts
