"""
陪伴聊天服务
单轮对话，wellness 语境下始终执行安全规则
"""
# 标准库导包
import logging
from typing import Optional

# 项目内部导包
from emotion.safety import assess_safety
from fallback_content import CHAT_FAILURE_MESSAGE, DEFAULT_CHAT_MESSAGE
from llm.client import LLMClient
from llm.retry import RetryPolicy, retry_async
from models import ChatResponse
from prompt import build_chat_prompt

# 配置日志
logger = logging.getLogger(__name__)

WELLNESS_CONTEXT = "wellness"
GENERAL_CONTEXT = "general"


class ChatService:
    """陪伴聊天服务类"""

    def __init__(self, llm_client: Optional[LLMClient] = None, retry_policy: Optional[RetryPolicy] = None):
        self.llm_client = llm_client or LLMClient()
        self.retry_policy = retry_policy or RetryPolicy.from_settings()

    async def reply(self, message: str, context: str = GENERAL_CONTEXT) -> ChatResponse:
        """
        生成聊天回复

        LLM失败时返回固定的致歉消息，不抛出异常。

        Args:
            message: 用户消息（已去除首尾空白）
            context: general 或 wellness

        Returns:
            ChatResponse
        """
        context = WELLNESS_CONTEXT if context == WELLNESS_CONTEXT else GENERAL_CONTEXT
        prompt = build_chat_prompt(message, context)

        try:
            content = await retry_async(
                lambda: self.llm_client.generate_text(prompt),
                policy=self.retry_policy,
                operation="chat",
            )
        except Exception as e:
            logger.error(f"聊天回复生成失败: {type(e).__name__}: {e}")
            content = CHAT_FAILURE_MESSAGE

        content = content or DEFAULT_CHAT_MESSAGE

        if context == WELLNESS_CONTEXT:
            safety = assess_safety(message)
            if safety.requires_escalation:
                content = "\n\n".join([content, *safety.resource_lines])

        return ChatResponse(message=content, context=context)
