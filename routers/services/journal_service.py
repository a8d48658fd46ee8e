"""
日记服务类
处理心情日记的校验、分析、保存和查询
"""
# 标准库导包
import logging
from datetime import datetime
from typing import Optional, List, Tuple

# 第三方库导包
from sqlalchemy.ext.asyncio import AsyncSession

# 项目内部导包
from config import settings
from models import MoodEntry, TrendSnapshot
from redis_client import SubmissionInProgressError, acquire_submission_lock, release_submission_lock
from routers.services.analysis_service import AnalysisResult, MoodAnalysisService, build_degraded_result
from routers.services.trend_service import TrendService
from storage.models.entry import CURRENT_SCHEMA_VERSION
from storage.repositories.entry_repository import EntryRepository
from utils.time_utils import utc_now

# 配置日志
logger = logging.getLogger(__name__)

DEFAULT_JOURNAL_ID = "default"

__all__ = [
    "EntryValidationError",
    "SubmissionInProgressError",
    "JournalService",
    "validate_entry_text",
]


class EntryValidationError(ValueError):
    """日记文本不满足长度要求"""


def validate_entry_text(text: Optional[str]) -> str:
    """
    校验日记文本

    Args:
        text: 原始文本

    Returns:
        去除首尾空白后的文本

    Raises:
        EntryValidationError: 长度不足或超出上限
    """
    cleaned = (text or "").strip()
    if len(cleaned) < settings.MIN_ENTRY_LENGTH:
        raise EntryValidationError(
            f"Entry must be at least {settings.MIN_ENTRY_LENGTH} characters "
            f"(got {len(cleaned)})."
        )
    if len(cleaned) > settings.MAX_ENTRY_LENGTH:
        raise EntryValidationError(
            f"Entry must be at most {settings.MAX_ENTRY_LENGTH} characters."
        )
    return cleaned


class JournalService:
    """日记服务类"""

    def __init__(self, session: AsyncSession, analysis_service: Optional[MoodAnalysisService] = None):
        """
        初始化日记服务

        Args:
            session: 数据库会话
            analysis_service: 情绪分析服务，默认新建
        """
        self.session = session
        self.entry_repo = EntryRepository(session)
        self.analysis_service = analysis_service or MoodAnalysisService()

    async def _recent_history(self) -> List[str]:
        """最近几条日记的主导情绪（由旧到新）"""
        records = await self.entry_repo.get_recent(settings.HISTORY_FETCH_SIZE)
        return [r.dominant_emotion for r in records]

    async def create_entry(
        self,
        text: str,
        is_incident: bool = False,
        response_role: Optional[str] = None,
        journal_id: str = DEFAULT_JOURNAL_ID,
    ) -> MoodEntry:
        """
        校验、分析并保存一条日记

        分析流程的意外异常会被降级结果替代，日记仍然保存。

        Args:
            text: 日记文本
            is_incident: 是否为事件记录
            response_role: 回应角色
            journal_id: 日记ID，用于提交锁

        Returns:
            保存后的MoodEntry

        Raises:
            EntryValidationError: 文本长度不满足要求
            SubmissionInProgressError: 已有提交在进行中
        """
        text = validate_entry_text(text)

        lock = await acquire_submission_lock(journal_id)
        try:
            history = await self._recent_history()
            try:
                result = await self.analysis_service.analyze(
                    text, history=history, is_incident=is_incident, response_role=response_role
                )
            except Exception as e:
                logger.exception(f"日记分析失败，使用降级结果: {str(e)}")
                result = build_degraded_result(text, response_role, error=str(e))

            entry = await self._append(text, is_incident, result)
        finally:
            await release_submission_lock(lock)

        logger.info(
            f"创建日记成功: entry_id={entry.id}, dominant={entry.sentiment_analysis.dominant_emotion}, "
            f"source={entry.narrative_source}"
        )
        return entry

    async def _append(self, text: str, is_incident: bool, result: AnalysisResult) -> MoodEntry:
        timestamp = utc_now()
        analysis = result.sentiment_analysis
        record = await self.entry_repo.append(
            timestamp=timestamp,
            entry_date=timestamp.date(),
            text=text,
            is_incident=is_incident,
            response_role=result.response_role,
            emotions=list(analysis.emotions),
            dominant_emotion=analysis.dominant_emotion,
            intensity=analysis.intensity,
            sentiment=analysis.sentiment,
            narrative=result.narrative.narrative,
            suggestions=list(result.narrative.suggestions),
            safety_flags=result.safety_flags,
            narrative_source=result.narrative_source,
            schema_version=CURRENT_SCHEMA_VERSION,
        )
        return MoodEntry.from_record(record)

    async def list_entries(
        self,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> Tuple[List[MoodEntry], int]:
        """
        按时间升序获取日记列表

        Returns:
            (日记列表, 总数)
        """
        records = await self.entry_repo.list_all(limit=limit, offset=offset)
        total = await self.entry_repo.count()
        return [MoodEntry.from_record(r) for r in records], total

    async def get_entry(self, entry_id: str) -> Optional[MoodEntry]:
        """根据ID获取日记，不存在返回None"""
        record = await self.entry_repo.get_by_id(entry_id)
        return MoodEntry.from_record(record) if record else None

    async def get_trends(self, now: Optional[datetime] = None) -> TrendSnapshot:
        """获取当前日记集合的趋势快照"""
        return await TrendService(self.session).get_trends(now)
