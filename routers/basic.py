"""
基础API路由
服务信息和健康检查
"""
# 标准库导包
import logging

# 第三方库导包
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

# 项目内部导包
from config import settings
from storage.database import get_session

# 配置日志
logger = logging.getLogger(__name__)

# 创建路由器
router = APIRouter(
    tags=["基础功能"]
)


@router.get("/", summary="服务信息")
async def root():
    return {
        "message": f"{settings.APP_NAME} API",
        "version": settings.APP_VERSION,
        "endpoints": ["/journal/entries", "/mood-analysis", "/trends", "/chat"],
    }


@router.get("/health", summary="健康检查")
async def health_check(session: AsyncSession = Depends(get_session)):
    """
    健康检查接口

    日记库不可用时 status 为 degraded；提交锁关闭时标记为 disabled。
    """
    try:
        await session.execute(text("SELECT 1"))
        database = "ok"
    except Exception as e:
        logger.error(f"日记库健康检查失败: {str(e)}")
        database = "error"

    return {
        "status": "healthy" if database == "ok" else "degraded",
        "service": settings.APP_NAME,
        "environment": settings.POD_ENV,
        "checks": {
            "database": database,
            "submission_lock": "redis" if settings.SUBMISSION_LOCK_ENABLED else "disabled",
        }
    }
