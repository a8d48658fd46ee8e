"""
语言识别服务
先按短语规则匹配，未命中时询问LLM，LLM不可用时默认英文
"""
# 标准库导包
import logging
from typing import Optional

# 项目内部导包
from emotion.language import (
    DEFAULT_LANGUAGE,
    LLM_CONFIDENCE,
    PATTERN_CONFIDENCE,
    detect_language_by_pattern,
    normalize_language_code,
)
from llm.client import LLMClient
from llm.retry import RetryPolicy, retry_async
from models import LanguageDetectionResponse
from prompt import build_language_prompt

# 配置日志
logger = logging.getLogger(__name__)


class LanguageService:
    """语言识别服务类"""

    def __init__(self, llm_client: Optional[LLMClient] = None, retry_policy: Optional[RetryPolicy] = None):
        self.llm_client = llm_client or LLMClient()
        self.retry_policy = retry_policy or RetryPolicy.from_settings()

    async def detect(self, text: Optional[str]) -> LanguageDetectionResponse:
        """
        识别文本语言

        空文本和LLM失败都返回 en，置信度为0，不抛出异常。

        Args:
            text: 待识别文本

        Returns:
            LanguageDetectionResponse
        """
        text = (text or "").strip()
        if not text:
            return LanguageDetectionResponse(language=DEFAULT_LANGUAGE, confidence=0.0, method="default")

        language = detect_language_by_pattern(text)
        if language:
            return LanguageDetectionResponse(language=language, confidence=PATTERN_CONFIDENCE, method="pattern")

        try:
            raw = await retry_async(
                lambda: self.llm_client.generate_text(build_language_prompt(text), temperature=0),
                policy=self.retry_policy,
                operation="detect_language",
            )
        except Exception as e:
            logger.error(f"LLM语言识别失败，默认使用英文: {type(e).__name__}: {e}")
            return LanguageDetectionResponse(language=DEFAULT_LANGUAGE, confidence=0.0, method="fallback")

        language = normalize_language_code(raw)
        logger.info(f"LLM语言识别完成: raw={raw[:20]!r}, language={language}")
        return LanguageDetectionResponse(language=language, confidence=LLM_CONFIDENCE, method="llm")
