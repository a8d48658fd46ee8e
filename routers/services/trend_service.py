"""
趋势聚合服务
基于最近一周的日记计算情绪趋势、情绪频次、洞察和建议
"""
# 标准库导包
import logging
from collections import Counter
from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Sequence

# 第三方库导包
from sqlalchemy.ext.asyncio import AsyncSession

# 项目内部导包
from models import MoodEntry, TrendSnapshot
from storage.repositories.entry_repository import EntryRepository
from utils.time_utils import utc_now, to_utc_naive

# 配置日志
logger = logging.getLogger(__name__)

WEEKLY_WINDOW_DAYS = 7
WEEKLY_WINDOW_SIZE = 7
MONTHLY_WINDOW_DAYS = 30
MIN_TREND_ENTRIES = 3
TREND_THRESHOLD = 1.0
RECOMMENDATION_THRESHOLD = 2
MAX_RECOMMENDATIONS = 3

POSITIVE_INSIGHT = "You've been experiencing more positive emotions recently!"
NEGATIVE_INSIGHT = "You've been having some challenging times lately."

# 按优先级排列：(情绪, 建议)
EMOTION_RECOMMENDATIONS = (
    ("stressed", "Consider stress management techniques like deep breathing or meditation"),
    ("anxious", "Try grounding exercises: name 5 things you can see, 4 you can touch, and so on"),
    ("sad", "Reach out to friends or family, or engage in activities you enjoy"),
    ("lonely", "Plan some time with people you care about, even a short call can help"),
    ("tired", "Your entries mention tiredness often. Try to protect your sleep and take real breaks"),
)
DECLINING_RECOMMENDATION = "Your mood seems to be declining. Consider talking to someone or practicing self-care"
IMPROVING_RECOMMENDATION = "Great progress! Keep doing what you're doing"


def _mean(values: Sequence[int]) -> float:
    return sum(values) / len(values)


def weekly_window(entries: Iterable, now: datetime) -> List:
    """过去7天内的日记，按时间升序，最多保留最近7条"""
    week_ago = now - timedelta(days=WEEKLY_WINDOW_DAYS)
    recent = [e for e in entries if to_utc_naive(e.timestamp) >= week_ago]
    recent.sort(key=lambda e: to_utc_naive(e.timestamp))
    return recent[-WEEKLY_WINDOW_SIZE:]


def compute_weekly_trend(intensities: Sequence[int]) -> str:
    """
    计算周趋势

    按位置分成前后两半（奇数时后半多一条），比较平均强度。

    Args:
        intensities: 按时间升序的强度列表

    Returns:
        improving/declining/stable
    """
    if len(intensities) < MIN_TREND_ENTRIES:
        return "stable"

    half = len(intensities) // 2
    first_avg = _mean(intensities[:half])
    second_avg = _mean(intensities[half:])

    if second_avg - first_avg > TREND_THRESHOLD:
        return "improving"
    if second_avg - first_avg < -TREND_THRESHOLD:
        return "declining"
    return "stable"


def build_insights(window: Sequence, patterns: Counter) -> List[str]:
    insights: List[str] = []

    positive_count = sum(1 for e in window if e.sentiment_analysis.sentiment == "positive")
    negative_count = sum(1 for e in window if e.sentiment_analysis.sentiment == "negative")
    if positive_count > negative_count:
        insights.append(POSITIVE_INSIGHT)
    elif negative_count > positive_count:
        insights.append(NEGATIVE_INSIGHT)

    if patterns:
        emotion, count = patterns.most_common(1)[0]
        if count >= 2:
            insights.append(f"Your most frequent emotion this week is {emotion} ({count} entries).")

    incident_count = sum(1 for e in window if e.is_incident)
    if incident_count:
        noun = "incident" if incident_count == 1 else "incidents"
        insights.append(f"You recorded {incident_count} {noun} this week.")

    return insights


def build_recommendations(patterns: Counter, weekly_trend: str) -> List[str]:
    """按固定优先级匹配建议，最多3条"""
    recommendations = [
        text for emotion, text in EMOTION_RECOMMENDATIONS
        if patterns.get(emotion, 0) > RECOMMENDATION_THRESHOLD
    ]
    if weekly_trend == "declining":
        recommendations.append(DECLINING_RECOMMENDATION)
    if weekly_trend == "improving":
        recommendations.append(IMPROVING_RECOMMENDATION)
    return recommendations[:MAX_RECOMMENDATIONS]


def aggregate_trends(entries: Iterable, now: Optional[datetime] = None) -> TrendSnapshot:
    """
    聚合趋势快照

    纯函数：只依赖输入条目和基准时间。条目需要有 timestamp、is_incident、
    sentiment_analysis(emotions/intensity/sentiment) 属性。

    Args:
        entries: 日记条目
        now: 基准时间，默认当前UTC时间

    Returns:
        TrendSnapshot，空输入返回默认快照
    """
    now = to_utc_naive(now) if now else utc_now()
    entries = list(entries)

    window = weekly_window(entries, now)
    month_ago = now - timedelta(days=MONTHLY_WINDOW_DAYS)
    monthly_count = sum(1 for e in entries if to_utc_naive(e.timestamp) >= month_ago)

    patterns: Counter = Counter()
    for entry in window:
        patterns.update(entry.sentiment_analysis.emotions)

    weekly_trend = compute_weekly_trend([e.sentiment_analysis.intensity for e in window])

    return TrendSnapshot(
        weekly_trend=weekly_trend,
        monthly_entry_count=monthly_count,
        monthly_comparison=f"{monthly_count} entries this month",
        emotional_patterns=dict(patterns.most_common()),
        insights=build_insights(window, patterns),
        recommendations=build_recommendations(patterns, weekly_trend),
        window_size=len(window),
        generated_at=now,
    )


class TrendService:
    """趋势服务类"""

    def __init__(self, session: AsyncSession):
        """
        初始化趋势服务

        Args:
            session: 数据库会话
        """
        self.session = session
        self.entry_repo = EntryRepository(session)

    async def get_trends(self, now: Optional[datetime] = None) -> TrendSnapshot:
        """
        读取最近30天的日记并聚合趋势

        Args:
            now: 基准时间，默认当前UTC时间

        Returns:
            TrendSnapshot
        """
        now = to_utc_naive(now) if now else utc_now()
        records = await self.entry_repo.get_since(now - timedelta(days=MONTHLY_WINDOW_DAYS))
        snapshot = aggregate_trends([MoodEntry.from_record(r) for r in records], now=now)
        logger.info(
            f"趋势聚合完成: weekly_trend={snapshot.weekly_trend}, "
            f"window_size={snapshot.window_size}, monthly={snapshot.monthly_entry_count}"
        )
        return snapshot
