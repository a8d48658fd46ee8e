"""
API接口测试
"""
from datetime import datetime, timedelta

from emotion.safety import RESOURCE_LINES
from fallback_content import CHAT_FAILURE_MESSAGE, DEGRADED_NARRATIVE
from routers import analysis


class TestBasic:

    def test_root_and_health(self, client):
        assert client.get("/").status_code == 200
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["checks"] == {"database": "ok", "submission_lock": "disabled"}


class TestJournalEndpoints:

    def test_short_entry_is_rejected(self, client):
        response = client.post("/journal/entries", json={"text": "   tiny entry   "})

        assert response.status_code == 400
        assert client.get("/journal/entries").json()["total"] == 0

    def test_create_list_and_fetch(self, client, e2e_text):
        response = client.post("/journal/entries", json={"text": e2e_text, "response_role": "brother"})

        assert response.status_code == 200
        entry = response.json()["data"]
        assert entry["sentiment_analysis"]["sentiment"] == "negative"
        assert entry["sentiment_analysis"]["intensity"] >= 6
        assert entry["response_role"] == "brother"
        assert len(entry["suggestions"]) >= 3

        listing = client.get("/journal/entries").json()
        assert listing["total"] == 1
        assert listing["data"][0]["id"] == entry["id"]

        detail = client.get(f"/journal/entries/{entry['id']}")
        assert detail.status_code == 200
        assert detail.json()["data"]["text"] == e2e_text

    def test_unknown_entry_is_404(self, client):
        assert client.get("/journal/entries/does-not-exist").status_code == 404


class TestMoodAnalysisEndpoint:

    def test_empty_entry_is_400(self, client):
        assert client.post("/mood-analysis", json={"entry": "   "}).status_code == 400

    def test_offline_analysis_returns_fallback(self, client, e2e_text):
        response = client.post("/mood-analysis", json={
            "entry": e2e_text,
            "previous_entries": [
                {"sentiment_analysis": {"dominant_emotion": "tired"}},
                {"dominant_emotion": "sad", "text": "ignored"},
            ],
            "response_role": "unknown-role",
        })

        assert response.status_code == 200
        data = response.json()
        assert data["analysis_complete"] is True
        assert data["sentiment"]["dominant_emotion"] == "stressed"
        assert data["response_role"] == "supportive_friend"
        assert data["narrative_source"] == "fallback"
        assert data["insight"]
        assert len(data["suggestions"]) >= 3

    def test_internal_error_returns_degraded_payload(self, client, monkeypatch, e2e_text):
        class BrokenService:
            async def analyze(self, *args, **kwargs):
                raise RuntimeError("boom")

        monkeypatch.setattr(analysis, "MoodAnalysisService", BrokenService)

        response = client.post("/mood-analysis", json={"entry": e2e_text})

        assert response.status_code == 200
        data = response.json()
        assert data["analysis_complete"] is False
        assert data["error"]
        assert data["sentiment"] == {
            "emotions": ["neutral"],
            "dominant_emotion": "neutral",
            "intensity": 5,
            "sentiment": "neutral",
        }
        assert data["insight"] == DEGRADED_NARRATIVE
        assert len(data["suggestions"]) == 3


class TestTrendEndpoints:

    def test_trends_over_store(self, client, e2e_text):
        assert client.get("/trends").json()["data"]["weekly_trend"] == "stable"

        client.post("/journal/entries", json={"text": e2e_text})
        data = client.get("/trends").json()["data"]

        assert data["monthly_entry_count"] == 1
        assert data["emotional_patterns"]["stressed"] == 1
        assert data["weekly_trend"] == "stable"

    def test_aggregate_explicit_entries(self, client):
        now = datetime(2024, 3, 15, 12, 0, 0)
        entries = [
            {
                "timestamp": (now - timedelta(days=6 - i)).isoformat(),
                "sentiment_analysis": {
                    "emotions": ["hopeful"],
                    "dominant_emotion": "hopeful",
                    "intensity": 3 + i,
                    "sentiment": "positive",
                },
            }
            for i in range(7)
        ]

        response = client.post("/trends/aggregate", json={"entries": entries, "now": now.isoformat()})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["weekly_trend"] == "improving"
        assert data["emotional_patterns"] == {"hopeful": 7}

    def test_aggregate_empty(self, client):
        data = client.post("/trends/aggregate", json={"entries": []}).json()["data"]

        assert data["weekly_trend"] == "stable"
        assert data["emotional_patterns"] == {}
        assert data["insights"] == []
        assert data["recommendations"] == []


class TestChatEndpoint:

    def test_empty_message_is_400(self, client):
        assert client.post("/chat", json={"message": "  "}).status_code == 400

    def test_llm_failure_returns_apology(self, client):
        response = client.post("/chat", json={"message": "How do I sleep better?", "context": "general"})

        assert response.status_code == 200
        assert response.json() == {"message": CHAT_FAILURE_MESSAGE, "context": "general"}

    def test_wellness_chat_adds_resource_line(self, client):
        response = client.post("/chat", json={"message": "I want to die", "context": "wellness"})

        assert response.status_code == 200
        assert RESOURCE_LINES["self_harm"] in response.json()["message"]


class TestLanguageEndpoint:

    def test_pattern_detection(self, client):
        response = client.post("/detect-language", json={"text": "Bonjour, merci beaucoup"})

        assert response.status_code == 200
        assert response.json() == {"language": "fr", "confidence": 0.8, "method": "pattern"}

    def test_empty_and_unavailable_llm_default_to_english(self, client):
        assert client.post("/detect-language", json={"text": ""}).json()["confidence"] == 0.0

        data = client.post("/detect-language", json={"text": "Vandaag was een lange werkdag"}).json()
        assert data == {"language": "en", "confidence": 0.0, "method": "fallback"}
