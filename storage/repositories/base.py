"""
基础Repository类
"""
# 标准库导包
from typing import TypeVar, Generic, Optional, List
from abc import ABC

# 第三方库导包
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.sql import func

# 项目内部导包
from storage.database import Base

# 泛型类型
ModelType = TypeVar('ModelType', bound=Base)


class BaseRepository(Generic[ModelType], ABC):
    """基础Repository类，提供通用的读写操作"""

    def __init__(self, session: AsyncSession, model: type[ModelType]):
        """
        初始化Repository

        Args:
            session: 数据库会话
            model: 数据库模型类
        """
        self.session = session
        self.model = model

    async def get_by_id(self, id) -> Optional[ModelType]:
        """
        根据ID获取单条记录

        Args:
            id: 记录ID

        Returns:
            模型实例或None
        """
        result = await self.session.execute(
            select(self.model).where(self.model.id == id)
        )
        return result.scalar_one_or_none()

    async def create(self, **kwargs) -> ModelType:
        """
        创建新记录

        Args:
            **kwargs: 模型字段值

        Returns:
            创建的模型实例
        """
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def count(self) -> int:
        """统计记录数量"""
        result = await self.session.execute(select(func.count(self.model.id)))
        return result.scalar_one()

    async def list_ordered(
        self,
        order_by: str,
        order_desc: bool = False,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        *conditions,
    ) -> List[ModelType]:
        """
        按字段排序查询记录

        Args:
            order_by: 排序字段
            order_desc: 是否降序
            limit: 限制返回数量
            offset: 偏移量
            *conditions: 额外的where条件

        Returns:
            模型实例列表
        """
        column = getattr(self.model, order_by)
        query = select(self.model)
        if conditions:
            query = query.where(*conditions)
        query = query.order_by(column.desc() if order_desc else column.asc())

        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)

        result = await self.session.execute(query)
        return list(result.scalars().all())
