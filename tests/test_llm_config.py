"""
LLM配置查找测试
"""
import pytest

from llm.client import LLMClient
from llm.config import LLMConfig, LLMNotConfiguredError


def _config(api_key="k"):
    return LLMConfig(
        providers={
            "groq": {
                "api_key": api_key,
                "base_url": "https://api.groq.com/openai/v1",
                "models": {"fast": {"id": "llama-3.1-8b-instant", "name": "Llama 3.1 8B"}},
            }
        },
        default_provider="groq",
        default_model_key="fast",
    )


def test_resolve_defaults():
    provider, provider_cfg, model_cfg = _config().resolve()

    assert provider == "groq"
    assert provider_cfg.configured
    assert model_cfg.id == "llama-3.1-8b-instant"


@pytest.mark.parametrize("provider,model_key", [("openai", None), ("groq", "huge")])
def test_resolve_unknown_provider_or_model(provider, model_key):
    with pytest.raises(LLMNotConfiguredError):
        _config().resolve(provider, model_key)


def test_missing_api_key_is_not_configured():
    with pytest.raises(LLMNotConfiguredError):
        _config(api_key="").resolve()


def test_client_is_cached_per_model():
    client = LLMClient(_config())

    first, model_id = client._get_client(None, None)
    second, _ = client._get_client("groq", "fast")

    assert first is second
    assert model_id == "llama-3.1-8b-instant"
