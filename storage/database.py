"""Database configuration module."""
# 标准库导包
import logging
from typing import AsyncGenerator

# 第三方库导包
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

# 项目内部导包
from config import settings

# 配置日志
logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all database models."""
    pass


def get_database_url() -> str:
    """获取数据库URL，默认使用本地SQLite文件"""
    return settings.DATABASE_URL


def _engine_options(database_url: str) -> dict:
    """SQLite文件库不使用连接池，其他数据库使用连接池参数"""
    options = {
        "echo": settings.DB_ECHO,  # 调试时显示SQL语句
    }
    if make_url(database_url).get_backend_name() == "sqlite":
        options["poolclass"] = NullPool
    else:
        options.update(
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_recycle=settings.DB_POOL_RECYCLE,
            pool_pre_ping=True,
        )
    return options


# 获取数据库URL
DATABASE_URL = get_database_url()
logger.info(f"数据库连接URL: {make_url(DATABASE_URL).render_as_string(hide_password=True)}")

# 创建异步引擎
engine = create_async_engine(DATABASE_URL, **_engine_options(DATABASE_URL))

# 创建会话工厂
async_session_factory = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False
)


async def init_db():
    """初始化数据库，创建所有表"""
    # 导入模型以注册到 Base.metadata
    from storage import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        logger.info("数据库表初始化完成")


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """获取数据库会话的异步生成器

    这是一个依赖注入函数，可以用于FastAPI的Depends。

    Yields:
        AsyncSession: 数据库会话对象
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception as e:
            logger.error(f"数据库会话发生错误: {str(e)}")
            await session.rollback()
            raise


async def cleanup_db():
    """清理数据库连接"""
    await engine.dispose()
    logger.info("数据库连接已关闭")
