"""
回应生成服务
按角色模板调用LLM生成日记回应和建议，失败时使用兜底内容，并始终执行安全升级
"""
# 标准库导包
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

# 项目内部导包
from config import settings
from emotion.safety import SafetyAssessment, assess_safety
from fallback_content import default_narrative, default_suggestions
from llm.client import LLMClient, extract_json
from llm.personas import get_persona_template
from llm.retry import RetryPolicy, retry_async
from prompt import build_narrative_messages, build_suggestion_messages
from routers.utils.text_cleaner import clean_narrative, clean_suggestions, split_lines

# 配置日志
logger = logging.getLogger(__name__)

SOURCE_LLM = "llm"
SOURCE_FALLBACK = "fallback"


@dataclass
class NarrativeRequest:
    """回应生成请求"""
    text: str
    emotions: Sequence[str]
    dominant_emotion: str
    intensity: int
    sentiment: str
    history: Sequence[str] = ()
    is_incident: bool = False
    response_role: Optional[str] = None


@dataclass
class NarrativeResult:
    """回应生成结果"""
    narrative: str
    suggestions: List[str]
    narrative_source: str = SOURCE_LLM
    suggestions_source: str = SOURCE_LLM
    safety: SafetyAssessment = field(default_factory=SafetyAssessment)


def prepend_resource_lines(suggestions: Sequence[str], resource_lines: Sequence[str], max_count: int) -> List[str]:
    """求助信息排在最前，其余建议按原顺序补足，总数不超过max_count"""
    merged = list(resource_lines) + [s for s in suggestions if s not in resource_lines]
    return merged[:max_count]


class NarrativeService:
    """回应生成服务"""

    def __init__(self, llm_client: Optional[LLMClient] = None, retry_policy: Optional[RetryPolicy] = None):
        """
        初始化回应生成服务

        Args:
            llm_client: LLM客户端，默认新建
            retry_policy: 重试策略，默认从设置读取
        """
        self.llm_client = llm_client or LLMClient()
        self.retry_policy = retry_policy or RetryPolicy.from_settings()

    async def generate(self, request: NarrativeRequest) -> NarrativeResult:
        """
        生成回应和建议

        LLM失败不会抛出异常，而是使用兜底内容。

        Args:
            request: 回应生成请求

        Returns:
            NarrativeResult
        """
        safety = assess_safety(request.text, request.intensity, request.sentiment)
        escalate = safety.requires_escalation

        narrative, narrative_source = await self._generate_narrative(request, escalate)
        suggestions, suggestions_source = await self._generate_suggestions(request, escalate)

        # 求助信息在截断之后追加，保证不会被截掉
        if escalate:
            narrative = "\n\n".join([narrative, *safety.resource_lines])
            suggestions = prepend_resource_lines(suggestions, safety.resource_lines, settings.MAX_SUGGESTIONS)
            logger.warning(f"已插入求助信息: risk_level={safety.risk_level}, categories={list(safety.categories)}")

        logger.info(
            f"回应生成完成: narrative_source={narrative_source}, "
            f"suggestions_source={suggestions_source}, suggestions={len(suggestions)}"
        )
        return NarrativeResult(
            narrative=narrative,
            suggestions=suggestions,
            narrative_source=narrative_source,
            suggestions_source=suggestions_source,
            safety=safety,
        )

    async def _generate_narrative(self, request: NarrativeRequest, escalate: bool) -> tuple[str, str]:
        persona = get_persona_template(request.response_role, request.is_incident)
        system_prompt, user_prompt = build_narrative_messages(
            persona=persona,
            entry=request.text,
            emotions=request.emotions,
            intensity=request.intensity,
            sentiment=request.sentiment,
            previous_dominant_emotions=request.history,
            max_length=settings.NARRATIVE_MAX_LENGTH,
            escalate=escalate,
        )

        try:
            raw = await retry_async(
                lambda: self.llm_client.generate_text(user_prompt, system_prompt=system_prompt),
                policy=self.retry_policy,
                operation="narrative",
            )
            narrative = clean_narrative(raw, settings.NARRATIVE_MAX_LENGTH)
            if narrative:
                return narrative, SOURCE_LLM
            logger.error("LLM回应清洗后为空，使用兜底回应")
        except Exception as e:
            logger.error(f"LLM回应生成失败，使用兜底回应: {type(e).__name__}: {e}")

        return default_narrative(request.dominant_emotion, request.sentiment, request.is_incident), SOURCE_FALLBACK

    async def _generate_suggestions(self, request: NarrativeRequest, escalate: bool) -> tuple[List[str], str]:
        persona = get_persona_template(request.response_role, request.is_incident)
        system_prompt, user_prompt = build_suggestion_messages(
            persona=persona,
            entry=request.text,
            emotions=request.emotions,
            dominant_emotion=request.dominant_emotion,
            intensity=request.intensity,
            min_count=settings.MIN_SUGGESTIONS,
            max_count=settings.MAX_SUGGESTIONS,
            max_length=settings.SUGGESTION_MAX_LENGTH,
            escalate=escalate,
        )

        try:
            raw = await retry_async(
                lambda: self.llm_client.generate_text(user_prompt, system_prompt=system_prompt),
                policy=self.retry_policy,
                operation="suggestions",
            )
            suggestions = clean_suggestions(
                self._parse_suggestions(raw),
                min_length=settings.SUGGESTION_MIN_LENGTH,
                max_count=settings.MAX_SUGGESTIONS,
                max_length=settings.SUGGESTION_MAX_LENGTH,
            )
            if len(suggestions) >= settings.MIN_SUGGESTIONS:
                return suggestions, SOURCE_LLM
            logger.error(f"LLM可用建议不足{settings.MIN_SUGGESTIONS}条({len(suggestions)})，使用兜底建议")
        except Exception as e:
            logger.error(f"LLM建议生成失败，使用兜底建议: {type(e).__name__}: {e}")

        fallback = default_suggestions(
            request.emotions,
            request.dominant_emotion,
            request.sentiment,
            request.is_incident,
            max_count=settings.MAX_SUGGESTIONS,
        )
        return fallback, SOURCE_FALLBACK

    @staticmethod
    def _parse_suggestions(raw: str) -> List[str]:
        """优先按JSON解析，失败时按行拆分"""
        parsed = extract_json(raw)
        if isinstance(parsed, dict):
            parsed = parsed.get("suggestions")
        if isinstance(parsed, list):
            items = [item for item in parsed if isinstance(item, str)]
            if items:
                return items
        return split_lines(raw)
