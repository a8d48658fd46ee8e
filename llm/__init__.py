"""
LLM模块
提供统一的LLM客户端接口、有界重试工具和回应角色注册表
"""

from .client import LLMClient, LLMEmptyResponseError, extract_json
from .config import LLMConfig, LLMNotConfiguredError
from .retry import RetryPolicy, retry_async
from .personas import ResponseRole, PersonaTemplate, get_persona_template, resolve_role

__all__ = [
    "LLMClient",
    "LLMEmptyResponseError",
    "extract_json",
    "LLMConfig",
    "LLMNotConfiguredError",
    "RetryPolicy",
    "retry_async",
    "ResponseRole",
    "PersonaTemplate",
    "get_persona_template",
    "resolve_role",
]
