"""
Services layer
业务逻辑层
"""

from .narrative_service import NarrativeService, NarrativeRequest, NarrativeResult
from .analysis_service import MoodAnalysisService, AnalysisResult, build_degraded_result
from .trend_service import TrendService, aggregate_trends
from .journal_service import JournalService, EntryValidationError, SubmissionInProgressError
from .chat_service import ChatService
from .language_service import LanguageService

__all__ = [
    "NarrativeService",
    "NarrativeRequest",
    "NarrativeResult",
    "MoodAnalysisService",
    "AnalysisResult",
    "build_degraded_result",
    "TrendService",
    "aggregate_trends",
    "JournalService",
    "EntryValidationError",
    "SubmissionInProgressError",
    "ChatService",
    "LanguageService",
]
