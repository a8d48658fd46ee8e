"""
日记路由
提供心情日记的创建和查询API接口
"""
# 标准库导包
import logging
from typing import Optional

# 第三方库导包
from fastapi import APIRouter, HTTPException, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

# 项目内部导包
from models import (
    CreateEntryRequest,
    CreateEntryResponse,
    EntryDetailResponse,
    EntryListResponse,
)
from storage.database import get_session
from routers.services.journal_service import (
    JournalService,
    EntryValidationError,
    SubmissionInProgressError,
)

# 配置日志
logger = logging.getLogger(__name__)

# 创建路由器
router = APIRouter(
    prefix="/journal",
    tags=["日记记录"]
)


@router.post("/entries", response_model=CreateEntryResponse, summary="提交日记")
async def create_entry(
    request: CreateEntryRequest,
    session: AsyncSession = Depends(get_session)
):
    """
    提交一条日记：校验长度 → 情绪分析 → 生成回应 → 保存

    文本少于50个字符时返回400，不会进行任何分析；同一日记已有提交在进行中时返回409。
    """
    try:
        journal_service = JournalService(session)
        entry = await journal_service.create_entry(
            text=request.text,
            is_incident=request.is_incident,
            response_role=request.response_role,
        )
        return CreateEntryResponse(data=entry)

    except EntryValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SubmissionInProgressError:
        raise HTTPException(status_code=409, detail="An entry is already being analyzed. Please wait.")
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"创建日记失败: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to save entry")


@router.get("/entries", response_model=EntryListResponse, summary="获取日记列表")
async def get_entries(
    limit: Optional[int] = Query(None, ge=1, le=500, description="返回数量"),
    offset: Optional[int] = Query(None, ge=0, description="偏移量"),
    session: AsyncSession = Depends(get_session)
):
    """
    按时间升序获取日记列表
    """
    try:
        journal_service = JournalService(session)
        entries, total = await journal_service.list_entries(limit=limit, offset=offset)
        return EntryListResponse(data=entries, total=total)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"获取日记列表失败: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to load entries")


@router.get("/entries/{entry_id}", response_model=EntryDetailResponse, summary="获取日记详情")
async def get_entry(
    entry_id: str,
    session: AsyncSession = Depends(get_session)
):
    """
    获取单条日记
    """
    try:
        journal_service = JournalService(session)
        entry = await journal_service.get_entry(entry_id)
        if not entry:
            raise HTTPException(status_code=404, detail="Entry not found")
        return EntryDetailResponse(data=entry)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"获取日记详情失败: entry_id={entry_id}, error={str(e)}")
        raise HTTPException(status_code=500, detail="Failed to load entry")
