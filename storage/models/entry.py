"""
MoodEntryRecord模型 - 心情日记表
只追加，核心流程不更新也不删除
"""
# 标准库导包
import uuid
from datetime import date, datetime
from typing import Optional

# 第三方库导包
from sqlalchemy import String, Text, Boolean, Integer, Date, DateTime, JSON, Index
from sqlalchemy.orm import Mapped, mapped_column

# 项目内部导包
from storage.database import Base
from utils.time_utils import utc_now

CURRENT_SCHEMA_VERSION = 1


class MoodEntryRecord(Base):
    """心情日记表"""

    __tablename__ = "mood_entries"

    # 核心字段
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    timestamp: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utc_now, index=True, comment="创建时间，UTC")
    entry_date: Mapped[date] = mapped_column(Date, nullable=False, comment="创建日期")
    text: Mapped[str] = mapped_column(Text, nullable=False, comment="日记原文")
    is_incident: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, comment="是否为事件记录")
    response_role: Mapped[str] = mapped_column(String(32), nullable=False, default="supportive_friend")

    # 情绪分析结果
    emotions: Mapped[list] = mapped_column(JSON, nullable=False, default=list, comment="情绪标签，得分高的在前")
    dominant_emotion: Mapped[str] = mapped_column(String(32), nullable=False, default="neutral")
    intensity: Mapped[int] = mapped_column(Integer, nullable=False, default=1, comment="强度1-10")
    sentiment: Mapped[str] = mapped_column(String(16), nullable=False, default="neutral", comment="positive/negative/neutral")

    # 回应内容
    narrative: Mapped[str] = mapped_column(Text, nullable=False, default="")
    suggestions: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    safety_flags: Mapped[list] = mapped_column(JSON, nullable=False, default=list, comment="安全规则命中的类别")
    narrative_source: Mapped[Optional[str]] = mapped_column(String(16), nullable=True, comment="llm/fallback/degraded")

    schema_version: Mapped[int] = mapped_column(Integer, nullable=False, default=CURRENT_SCHEMA_VERSION)

    __table_args__ = (
        Index("idx_mood_entries_date", "entry_date"),
    )

    def __repr__(self):
        return f"<MoodEntryRecord(id={self.id}, dominant={self.dominant_emotion}, sentiment={self.sentiment})>"
