"""
EntryRepository - 心情日记Repository
"""
# 标准库导包
from datetime import datetime
from typing import Optional, List

# 第三方库导包
from sqlalchemy.ext.asyncio import AsyncSession

# 项目内部导包
from storage.models.entry import MoodEntryRecord
from storage.repositories.base import BaseRepository


class EntryRepository(BaseRepository[MoodEntryRecord]):
    """心情日记Repository，只提供追加和读取"""

    def __init__(self, session: AsyncSession):
        super().__init__(session, MoodEntryRecord)

    async def append(self, **fields) -> MoodEntryRecord:
        """
        追加一条日记

        Args:
            **fields: MoodEntryRecord字段值

        Returns:
            创建的记录
        """
        return await self.create(**fields)

    async def list_all(self, limit: Optional[int] = None, offset: Optional[int] = None) -> List[MoodEntryRecord]:
        """按时间升序读取全部日记"""
        return await self.list_ordered("timestamp", False, limit, offset)

    async def get_recent(self, limit: int) -> List[MoodEntryRecord]:
        """
        获取最近的limit条日记

        Returns:
            按时间升序排列的记录（最新的在最后）
        """
        if limit <= 0:
            return []
        records = await self.list_ordered("timestamp", True, limit)
        records.reverse()
        return records

    async def get_since(self, start_time: datetime) -> List[MoodEntryRecord]:
        """
        获取start_time（含）之后的日记

        Args:
            start_time: 起始时间，UTC

        Returns:
            按时间升序排列的记录
        """
        return await self.list_ordered(
            "timestamp", False, None, None,
            MoodEntryRecord.timestamp >= start_time,
        )
