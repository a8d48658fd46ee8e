"""
情绪倾向分类器
"""
# 标准库导包
from typing import Iterable

# 项目内部导包
from .lexicon import polarity_of


def classify_sentiment(emotions: Iterable[str]) -> str:
    """
    根据情绪列表判断整体情绪倾向

    积极/消极情绪数量严格占多数的一方胜出，持平则为neutral。

    Args:
        emotions: 情绪标签列表

    Returns:
        positive/negative/neutral
    """
    positive_count = 0
    negative_count = 0
    for emotion in emotions:
        polarity = polarity_of(emotion)
        if polarity == "positive":
            positive_count += 1
        elif polarity == "negative":
            negative_count += 1

    if positive_count > negative_count:
        return "positive"
    if negative_count > positive_count:
        return "negative"
    return "neutral"
