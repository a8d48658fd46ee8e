"""
LLM客户端模块
基于AsyncOpenAI封装统一的LLM调用接口
"""
# 标准库导包
import json
import logging
from typing import Optional, List, Dict, Any

# 第三方库导包
from openai import AsyncOpenAI
import json_repair

# 项目内部导包
from .config import llm_config, LLMConfig

# 配置日志
logger = logging.getLogger(__name__)


class LLMEmptyResponseError(Exception):
    """LLM返回空内容"""


def extract_json(response_text: str) -> Any:
    """
    从LLM响应中解析JSON

    支持Markdown的```json代码块，使用json_repair容忍不规范的JSON。

    Args:
        response_text: LLM原始响应

    Returns:
        解析后的对象，无法解析时返回None
    """
    if not response_text:
        return None

    # 纯文本（没有对象或数组）不做JSON解析
    if "{" not in response_text and "[" not in response_text:
        return None

    # 若存在 Markdown 的 ```json 代码块，则尝试提取其中的内容
    if "```json" in response_text:
        response_text = response_text.split("```json", 1)[1].split("```", 1)[0].strip()

    try:
        result = json_repair.loads(response_text)
    except (json.JSONDecodeError, ValueError):
        logger.warning("LLM返回的JSON解析失败")
        return None

    if isinstance(result, (dict, list)):
        return result
    return None


class LLMClient:
    """LLM客户端，支持多厂商和多模型切换"""

    def __init__(self, config: Optional[LLMConfig] = None):
        """
        初始化LLM客户端

        Args:
            config: LLM配置，如果为None则使用全局配置
        """
        self._config = config or llm_config
        self._clients: Dict[tuple[str, str], AsyncOpenAI] = {}

    def _get_client(self, provider: Optional[str], model_key: Optional[str]) -> tuple[AsyncOpenAI, str]:
        """
        获取指定提供商和模型的客户端，同一 (provider, model_key) 复用一个客户端

        Returns:
            (AsyncOpenAI客户端, 模型ID)元组

        Raises:
            LLMNotConfiguredError: 提供商或模型不存在，或缺少API Key
        """
        provider, provider_cfg, model_cfg = self._config.resolve(provider, model_key)
        cache_key = (provider, model_cfg.id)

        if cache_key not in self._clients:
            self._clients[cache_key] = AsyncOpenAI(
                api_key=provider_cfg.api_key,
                base_url=provider_cfg.base_url,
                max_retries=0,  # 重试由 llm.retry 统一控制
            )
            logger.info(f"创建LLM客户端: provider={provider}, model={model_cfg.name}")

        return self._clients[cache_key], model_cfg.id

    async def chat(
        self,
        messages: List[Dict[str, str]],
        provider: Optional[str] = None,
        model_key: Optional[str] = None,
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
        timeout: Optional[int] = None,
    ) -> str:
        """
        发送聊天请求

        Args:
            messages: 消息列表，格式为 [{"role": "user", "content": "..."}]
            provider: 提供商名称，如果为None则使用默认提供商
            model_key: 模型键，如果为None则使用默认模型
            temperature: 温度参数，控制随机性
            max_tokens: 最大token数
            timeout: 单次请求超时（秒）

        Returns:
            AI回复内容

        Raises:
            LLMNotConfiguredError: 如果提供商或模型不可用
            Exception: 如果API调用失败
        """
        client, model_id = self._get_client(provider, model_key)

        try:
            logger.debug(f"发送LLM请求: model={model_id}")
            response = await client.chat.completions.create(
                model=model_id,
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens or self._config.max_tokens,
                timeout=timeout or self._config.timeout,
            )

            content = response.choices[0].message.content or ""
            logger.debug(f"LLM响应长度: {len(content)} 字符")
            return content

        except Exception as e:
            logger.error(f"LLM API调用失败: {str(e)}")
            raise

    async def generate_text(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        temperature: float = 0.7,
        **kwargs,
    ) -> str:
        """
        单轮文本生成

        Args:
            prompt: 用户提示词
            system_prompt: 系统提示词（可选）
            temperature: 温度参数

        Returns:
            去除首尾空白的回复内容

        Raises:
            LLMEmptyResponseError: 如果回复为空
        """
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        content = await self.chat(messages=messages, temperature=temperature, **kwargs)
        content = content.strip()
        if not content:
            raise LLMEmptyResponseError("LLM返回空内容")
        return content
