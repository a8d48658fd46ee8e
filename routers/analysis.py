"""
情绪分析路由
无状态的单次分析接口，不保存日记
"""
# 标准库导包
import logging

# 第三方库导包
from fastapi import APIRouter, HTTPException

# 项目内部导包
from models import MoodAnalysisRequest, MoodAnalysisResponse
from routers.services.analysis_service import (
    AnalysisResult,
    MoodAnalysisService,
    build_degraded_result,
)
from utils.time_utils import utc_now

# 配置日志
logger = logging.getLogger(__name__)

# 创建路由器
router = APIRouter(
    tags=["情绪分析"]
)


def _to_response(result: AnalysisResult, is_incident: bool) -> MoodAnalysisResponse:
    return MoodAnalysisResponse(
        sentiment=result.sentiment_analysis,
        insight=result.narrative.narrative,
        suggestions=result.narrative.suggestions,
        is_incident=is_incident,
        response_role=result.response_role,
        timestamp=utc_now(),
        safety_flags=result.safety_flags,
        narrative_source=result.narrative_source,
        analysis_complete=not result.degraded,
        error=result.error,
    )


@router.post("/mood-analysis", response_model=MoodAnalysisResponse, summary="分析一段日记")
async def mood_analysis(request: MoodAnalysisRequest):
    """
    分析日记文本并生成回应和建议

    文本为空时返回400；分析过程出现异常时仍返回200和降级结果。
    """
    text = request.entry.strip()
    if not text:
        raise HTTPException(status_code=400, detail="Entry is required")

    history = [e.history_emotion() for e in request.previous_entries]

    try:
        result = await MoodAnalysisService().analyze(
            text,
            history=history,
            is_incident=request.is_incident,
            response_role=request.response_role,
        )
    except Exception as e:
        logger.exception(f"情绪分析失败，返回降级结果: {str(e)}")
        result = build_degraded_result(text, request.response_role, error="Analysis failed")

    return _to_response(result, request.is_incident)
