"""
情绪分析服务
串联情绪检测、情绪倾向分类和回应生成
"""
# 标准库导包
import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence

# 项目内部导包
from config import settings
from emotion.classifier import classify_sentiment
from emotion.detector import detect_emotions
from emotion.safety import SafetyAssessment, assess_safety
from fallback_content import (
    DEGRADED_DOMINANT_EMOTION,
    DEGRADED_EMOTIONS,
    DEGRADED_INTENSITY,
    DEGRADED_NARRATIVE,
    DEGRADED_SENTIMENT,
    DEGRADED_SUGGESTIONS,
)
from llm.personas import resolve_role
from models import SentimentAnalysis
from routers.services.narrative_service import (
    NarrativeRequest,
    NarrativeResult,
    NarrativeService,
    prepend_resource_lines,
)

# 配置日志
logger = logging.getLogger(__name__)

SOURCE_DEGRADED = "degraded"


@dataclass
class AnalysisResult:
    """一次完整分析的结果"""
    sentiment_analysis: SentimentAnalysis
    narrative: NarrativeResult
    response_role: str
    degraded: bool = False
    error: Optional[str] = None

    @property
    def narrative_source(self) -> str:
        return SOURCE_DEGRADED if self.degraded else self.narrative.narrative_source

    @property
    def safety_flags(self) -> list:
        return list(self.narrative.safety.categories)


def build_degraded_result(text: str = "", response_role: Optional[str] = None, error: Optional[str] = None) -> AnalysisResult:
    """
    构建降级结果

    分析流程出现意外异常时使用，安全规则仍然生效。

    Args:
        text: 日记原文
        response_role: 回应角色
        error: 错误描述

    Returns:
        AnalysisResult(degraded=True)
    """
    safety = SafetyAssessment()
    try:
        safety = assess_safety(text)
    except Exception as e:
        logger.error(f"降级结果的安全评估失败: {str(e)}")

    narrative = DEGRADED_NARRATIVE
    suggestions = list(DEGRADED_SUGGESTIONS)
    if safety.requires_escalation:
        narrative = "\n\n".join([narrative, *safety.resource_lines])
        suggestions = prepend_resource_lines(suggestions, safety.resource_lines, settings.MAX_SUGGESTIONS)

    return AnalysisResult(
        sentiment_analysis=SentimentAnalysis(
            emotions=list(DEGRADED_EMOTIONS),
            dominant_emotion=DEGRADED_DOMINANT_EMOTION,
            intensity=DEGRADED_INTENSITY,
            sentiment=DEGRADED_SENTIMENT,
        ),
        narrative=NarrativeResult(
            narrative=narrative,
            suggestions=suggestions,
            narrative_source=SOURCE_DEGRADED,
            suggestions_source=SOURCE_DEGRADED,
            safety=safety,
        ),
        response_role=resolve_role(response_role).value,
        degraded=True,
        error=error,
    )


class MoodAnalysisService:
    """情绪分析服务类"""

    def __init__(self, narrative_service: Optional[NarrativeService] = None):
        """
        初始化情绪分析服务

        Args:
            narrative_service: 回应生成服务，默认新建
        """
        self.narrative_service = narrative_service or NarrativeService()

    async def analyze(
        self,
        text: str,
        history: Sequence[str] = (),
        is_incident: bool = False,
        response_role: Optional[str] = None,
    ) -> AnalysisResult:
        """
        分析一段日记

        Args:
            text: 日记原文
            history: 之前日记的主导情绪（由旧到新），只使用最近几条
            is_incident: 是否为事件记录
            response_role: 回应角色

        Returns:
            AnalysisResult
        """
        detection = detect_emotions(text)
        sentiment = classify_sentiment(detection.emotions)
        analysis = SentimentAnalysis(
            emotions=list(detection.emotions),
            dominant_emotion=detection.dominant_emotion,
            intensity=detection.intensity,
            sentiment=sentiment,
        )
        logger.info(
            f"情绪检测完成: dominant={analysis.dominant_emotion}, emotions={analysis.emotions}, "
            f"intensity={analysis.intensity}, sentiment={analysis.sentiment}"
        )

        role = resolve_role(response_role)
        context = [h for h in history if h][-settings.HISTORY_CONTEXT_SIZE:]
        narrative = await self.narrative_service.generate(NarrativeRequest(
            text=text,
            emotions=analysis.emotions,
            dominant_emotion=analysis.dominant_emotion,
            intensity=analysis.intensity,
            sentiment=analysis.sentiment,
            history=context,
            is_incident=is_incident,
            response_role=role.value,
        ))

        return AnalysisResult(
            sentiment_analysis=analysis,
            narrative=narrative,
            response_role=role.value,
        )
