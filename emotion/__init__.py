"""
情绪分析模块
提供基于词典的情绪检测、情绪倾向分类和安全规则
"""

from .lexicon import NEUTRAL, EMOTION_KEYWORDS, POSITIVE_EMOTIONS, NEGATIVE_EMOTIONS
from .detector import EmotionDetection, detect_emotions
from .classifier import classify_sentiment
from .safety import SafetyAssessment, assess_safety
from .language import detect_language_by_pattern, normalize_language_code

__all__ = [
    "NEUTRAL",
    "EMOTION_KEYWORDS",
    "POSITIVE_EMOTIONS",
    "NEGATIVE_EMOTIONS",
    "EmotionDetection",
    "detect_emotions",
    "classify_sentiment",
    "SafetyAssessment",
    "assess_safety",
    "detect_language_by_pattern",
    "normalize_language_code",
]
