"""
趋势路由
提供基于本地日记的趋势快照，以及对指定条目的无状态聚合
"""
# 标准库导包
import logging

# 第三方库导包
from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy.ext.asyncio import AsyncSession

# 项目内部导包
from models import AggregateTrendsRequest, TrendResponse
from storage.database import get_session
from routers.services.trend_service import TrendService, aggregate_trends

# 配置日志
logger = logging.getLogger(__name__)

# 创建路由器
router = APIRouter(
    prefix="/trends",
    tags=["趋势分析"]
)


@router.get("", response_model=TrendResponse, summary="获取趋势快照")
async def get_trends(session: AsyncSession = Depends(get_session)):
    """
    基于已保存日记计算趋势快照（每次请求重新计算）
    """
    try:
        snapshot = await TrendService(session).get_trends()
        return TrendResponse(data=snapshot)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"获取趋势失败: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to compute trends")


@router.post("/aggregate", response_model=TrendResponse, summary="聚合指定条目的趋势")
async def aggregate(request: AggregateTrendsRequest):
    """
    对客户端传入的条目计算趋势快照，不读取本地存储
    """
    snapshot = aggregate_trends(request.entries, now=request.now)
    return TrendResponse(data=snapshot)
