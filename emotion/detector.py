"""
情绪检测器
基于情绪词典的关键词打分，得出情绪列表、主导情绪和强度
"""
# 标准库导包
import re
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

# 项目内部导包
from config import settings
from .lexicon import (
    NEUTRAL,
    EMOTION_KEYWORDS,
    KEYWORD_BOOSTERS,
    INTENSIFIER_WORDS,
    DIMINISHER_WORDS,
)

MIN_INTENSITY = 1
MAX_INTENSITY = 10
BASE_INTENSITY = 5

# 关键词命中 +1，前面紧邻加强词时再 +2
KEYWORD_SCORE = 1
BOOSTER_BONUS = 2


def _word_pattern(phrase: str) -> re.Pattern:
    """按词边界匹配单词或短语，短语内的空白宽松匹配"""
    body = r"\s+".join(re.escape(part) for part in phrase.split())
    return re.compile(rf"\b{body}\b")


def _boosted_pattern(phrase: str) -> re.Pattern:
    body = r"\s+".join(re.escape(part) for part in phrase.split())
    boosters = "|".join(re.escape(word) for word in KEYWORD_BOOSTERS)
    return re.compile(rf"\b(?:{boosters})\s+{body}\b")


# 模块加载时预编译
_KEYWORD_PATTERNS = {
    label: tuple((_word_pattern(kw), _boosted_pattern(kw)) for kw in keywords)
    for label, keywords in EMOTION_KEYWORDS.items()
}
_INTENSIFIER_PATTERNS = tuple(_word_pattern(word) for word in INTENSIFIER_WORDS)
_DIMINISHER_PATTERNS = tuple(_word_pattern(word) for word in DIMINISHER_WORDS)


@dataclass(frozen=True)
class EmotionDetection:
    """情绪检测结果"""
    emotions: Tuple[str, ...]
    dominant_emotion: str
    intensity: int
    scores: Dict[str, int] = field(default_factory=dict, compare=False)


def score_emotions(text: str) -> Dict[str, int]:
    """
    计算每个情绪标签的得分

    Args:
        text: 日记文本

    Returns:
        得分大于0的 {情绪标签: 得分}，按词典声明顺序
    """
    lower_text = (text or "").lower()
    scores: Dict[str, int] = {}

    for label, patterns in _KEYWORD_PATTERNS.items():
        score = 0
        for keyword_pattern, boosted_pattern in patterns:
            if keyword_pattern.search(lower_text):
                score += KEYWORD_SCORE
                if boosted_pattern.search(lower_text):
                    score += BOOSTER_BONUS
        if score > 0:
            scores[label] = score

    return scores


def calculate_intensity(text: str, emotion_count: int) -> int:
    """
    计算情绪强度（中点调整策略）

    从5开始，每个出现的加强词+1，每个出现的弱化词-1，
    检测到4个及以上情绪+1，6个及以上再+1，最后截断到[1, 10]。
    没有检测到任何情绪时强度为1。
    """
    if emotion_count == 0:
        return MIN_INTENSITY

    lower_text = (text or "").lower()
    intensity = BASE_INTENSITY
    intensity += sum(1 for pattern in _INTENSIFIER_PATTERNS if pattern.search(lower_text))
    intensity -= sum(1 for pattern in _DIMINISHER_PATTERNS if pattern.search(lower_text))

    if emotion_count >= 4:
        intensity += 1
    if emotion_count >= 6:
        intensity += 1

    return min(max(intensity, MIN_INTENSITY), MAX_INTENSITY)


def detect_emotions(text: str, max_emotions: Optional[int] = None) -> EmotionDetection:
    """
    检测文本中的情绪

    Args:
        text: 日记文本
        max_emotions: 最多保留的情绪数量，默认使用配置 MAX_DETECTED_EMOTIONS

    Returns:
        EmotionDetection，情绪按得分降序（同分保持词典顺序）
    """
    if max_emotions is None:
        max_emotions = settings.MAX_DETECTED_EMOTIONS

    scores = score_emotions(text)

    # sorted是稳定排序，同分时保持词典声明顺序
    ranked = sorted(scores.items(), key=lambda item: item[1], reverse=True)
    emotions = tuple(label for label, _ in ranked[:max_emotions])

    dominant_emotion = emotions[0] if emotions else NEUTRAL
    intensity = calculate_intensity(text, len(emotions))

    return EmotionDetection(
        emotions=emotions,
        dominant_emotion=dominant_emotion,
        intensity=intensity,
        scores=scores,
    )
