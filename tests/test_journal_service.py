"""
日记服务测试
"""
from unittest.mock import AsyncMock, MagicMock

import pytest

from fallback_content import DEGRADED_NARRATIVE, DEGRADED_SUGGESTIONS, EMOTION_NARRATIVES
from redis_client import DummyLock
from routers.services import analysis_service, journal_service
from routers.services.analysis_service import MoodAnalysisService
from routers.services.journal_service import (
    EntryValidationError,
    JournalService,
    SubmissionInProgressError,
    validate_entry_text,
)
from routers.services.narrative_service import NarrativeService


@pytest.fixture
def offline_journal(db_session, failing_llm, no_wait_policy):
    """LLM不可用时的日记服务"""
    narrative = NarrativeService(llm_client=failing_llm, retry_policy=no_wait_policy)
    return JournalService(db_session, MoodAnalysisService(narrative))


class TestValidateEntryText:

    def test_strips_whitespace(self):
        text = "  " + "x" * 50 + "  "
        assert validate_entry_text(text) == "x" * 50

    @pytest.mark.parametrize("text", [None, "", "   ", "too short to count", " " * 10 + "y" * 49 + " " * 10])
    def test_rejects_short_text(self, text):
        with pytest.raises(EntryValidationError):
            validate_entry_text(text)


class TestCreateEntry:

    @pytest.mark.asyncio
    async def test_offline_exam_entry_uses_specific_fallback(self, offline_journal, e2e_text):
        entry = await offline_journal.create_entry(e2e_text)

        analysis = entry.sentiment_analysis
        assert {"stressed", "anxious", "overwhelmed"} <= set(analysis.emotions)
        assert analysis.sentiment == "negative"
        assert analysis.intensity >= 6
        assert entry.narrative == EMOTION_NARRATIVES["stressed"]
        assert len(entry.suggestions) >= 3
        assert entry.narrative_source == "fallback"
        assert entry.response_role == "supportive_friend"
        assert entry.entry_date == entry.timestamp.date()
        assert entry.schema_version == 1

    @pytest.mark.asyncio
    async def test_entries_are_appended_in_order(self, offline_journal, e2e_text):
        first = await offline_journal.create_entry(e2e_text)
        second = await offline_journal.create_entry(
            "Today was calm and peaceful, I felt grateful for a long walk with my sister.",
            response_role="close_friend",
        )

        entries, total = await offline_journal.list_entries()

        assert total == 2
        assert [e.id for e in entries] == [first.id, second.id]
        assert await offline_journal.get_entry(second.id) == second
        assert await offline_journal.get_entry("missing") is None

    @pytest.mark.asyncio
    async def test_short_entry_never_reaches_detector(self, offline_journal, monkeypatch):
        detector = MagicMock()
        monkeypatch.setattr(analysis_service, "detect_emotions", detector)

        with pytest.raises(EntryValidationError):
            await offline_journal.create_entry("Feeling meh.")

        detector.assert_not_called()
        assert (await offline_journal.list_entries())[1] == 0

    @pytest.mark.asyncio
    async def test_pipeline_crash_still_saves_degraded_entry(self, db_session, e2e_text):
        broken = MagicMock()
        broken.analyze = AsyncMock(side_effect=RuntimeError("detector exploded"))
        service = JournalService(db_session, broken)

        entry = await service.create_entry(e2e_text, response_role="dad")

        assert entry.sentiment_analysis.emotions == ["neutral"]
        assert entry.sentiment_analysis.dominant_emotion == "neutral"
        assert entry.sentiment_analysis.intensity == 5
        assert entry.sentiment_analysis.sentiment == "neutral"
        assert entry.narrative == DEGRADED_NARRATIVE
        assert entry.suggestions == DEGRADED_SUGGESTIONS
        assert entry.narrative_source == "degraded"
        assert entry.response_role == "dad"

    @pytest.mark.asyncio
    async def test_history_of_recent_entries_is_passed_on(self, db_session, failing_llm, no_wait_policy, e2e_text):
        analysis = MoodAnalysisService(NarrativeService(llm_client=failing_llm, retry_policy=no_wait_policy))
        service = JournalService(db_session, analysis)
        await service.create_entry(e2e_text)

        spy = AsyncMock(wraps=analysis.analyze)
        analysis.analyze = spy
        await service.create_entry(e2e_text)

        assert spy.await_args.kwargs["history"] == ["stressed"]

    @pytest.mark.asyncio
    async def test_concurrent_submission_is_rejected(self, offline_journal, monkeypatch, e2e_text):
        monkeypatch.setattr(
            journal_service,
            "acquire_submission_lock",
            AsyncMock(side_effect=SubmissionInProgressError("busy")),
        )

        with pytest.raises(SubmissionInProgressError):
            await offline_journal.create_entry(e2e_text)

        assert (await offline_journal.list_entries())[1] == 0

    @pytest.mark.asyncio
    async def test_lock_is_released(self, offline_journal, monkeypatch, e2e_text):
        lock = DummyLock()
        lock.release = AsyncMock()
        monkeypatch.setattr(journal_service, "acquire_submission_lock", AsyncMock(return_value=lock))

        await offline_journal.create_entry(e2e_text)

        lock.release.assert_awaited_once()


def test_degraded_result_keeps_suggestion_cap(monkeypatch):
    from config import settings
    from emotion.safety import RESOURCE_LINES

    monkeypatch.setattr(settings, "MAX_SUGGESTIONS", 4)

    result = analysis_service.build_degraded_result(
        "I want to die, and he is blackmailing me and threatening me every night"
    )

    suggestions = result.narrative.suggestions
    assert len(suggestions) == 4
    assert suggestions[:2] == [RESOURCE_LINES["self_harm"], RESOURCE_LINES["exploitation"]]
    assert suggestions[2:] == list(DEGRADED_SUGGESTIONS)[:2]
