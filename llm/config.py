"""
LLM配置模块
把settings里的提供商字典校验成pydantic模型，并负责按 (provider, model_key) 查找模型
"""
# 标准库导包
from typing import Dict, Optional, Tuple

# 第三方库导包
from pydantic import BaseModel

# 项目内部导包
from config import settings


class LLMModelConfig(BaseModel):
    """单个模型"""
    id: str
    name: str


class LLMProviderConfig(BaseModel):
    """OpenAI兼容的提供商"""
    api_key: str = ""
    base_url: str
    models: Dict[str, LLMModelConfig]

    @property
    def configured(self) -> bool:
        return bool(self.api_key)


class LLMNotConfiguredError(ValueError):
    """提供商或模型不存在，或缺少API Key"""


class LLMConfig(BaseModel):
    """回应生成和聊天共用的LLM配置"""
    providers: Dict[str, LLMProviderConfig]
    default_provider: str
    default_model_key: str
    timeout: int = 30
    max_tokens: Optional[int] = None

    def resolve(
        self,
        provider: Optional[str] = None,
        model_key: Optional[str] = None,
    ) -> Tuple[str, LLMProviderConfig, LLMModelConfig]:
        """
        查找提供商和模型，缺省时使用默认值

        Returns:
            (提供商名称, 提供商配置, 模型配置)

        Raises:
            LLMNotConfiguredError: 提供商/模型不存在或没有API Key
        """
        provider = provider or self.default_provider
        model_key = model_key or self.default_model_key

        provider_cfg = self.providers.get(provider)
        if provider_cfg is None:
            raise LLMNotConfiguredError(f"提供商 '{provider}' 不存在")
        if model_key not in provider_cfg.models:
            raise LLMNotConfiguredError(f"模型键 '{model_key}' 在提供商 '{provider}' 中不存在")
        if not provider_cfg.configured:
            raise LLMNotConfiguredError(f"提供商 '{provider}' 未配置API Key，将使用兜底内容")

        return provider, provider_cfg, provider_cfg.models[model_key]


def _resolve_api_key(provider: str, raw_key: str) -> str:
    """配置中未填写api_key时，从 <PROVIDER>_API_KEY 设置项读取"""
    return raw_key or getattr(settings, f"{provider.upper()}_API_KEY", "") or ""


def load_llm_config() -> LLMConfig:
    """从settings加载LLM配置"""
    providers = {
        name: LLMProviderConfig(
            api_key=_resolve_api_key(name, cfg.get("api_key", "")),
            base_url=cfg["base_url"],
            models=cfg["models"],
        )
        for name, cfg in settings.LLM_PROVIDERS.items()
    }

    return LLMConfig(
        providers=providers,
        default_provider=settings.DEFAULT_LLM_PROVIDER,
        default_model_key=settings.DEFAULT_LLM_MODEL_KEY,
        timeout=settings.LLM_TIMEOUT,
        max_tokens=settings.LLM_MAX_TOKENS,
    )


# 全局LLM配置实例
llm_config = load_llm_config()
