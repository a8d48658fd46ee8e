"""
共享的pytest fixtures

使用本地SQLite测试库，关闭Redis提交锁，LLM全部用AsyncMock替代。
环境变量必须在导入任何项目模块之前设置。
"""
# 标准库导包
import asyncio
import os
from unittest.mock import AsyncMock, MagicMock

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test_mood_journal.db"
os.environ["SUBMISSION_LOCK_ENABLED"] = "false"
os.environ["LLM_RETRY_BASE_DELAY"] = "0"
os.environ["GROQ_API_KEY"] = "test-key"
os.environ["GEMINI_API_KEY"] = "test-key"

# 第三方库导包
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

# 项目内部导包
from llm.retry import RetryPolicy
from storage.database import Base, async_session_factory, engine

E2E_TEXT = "I am very stressed and anxious about my exam, I feel so overwhelmed"


async def _reset_tables():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


def make_llm(*responses):
    """
    构造假的LLM客户端

    Args:
        *responses: generate_text 依次返回的值；异常实例会被抛出
    """
    llm = MagicMock()
    llm.generate_text = AsyncMock(side_effect=list(responses))
    return llm


def make_failing_llm(error: Exception = None):
    """每次调用都抛出瞬时错误的LLM客户端"""
    llm = MagicMock()
    llm.generate_text = AsyncMock(side_effect=error or ConnectionError("collaborator unavailable"))
    return llm


@pytest.fixture
def no_wait_policy():
    return RetryPolicy(max_attempts=3, base_delay=0, max_delay=0)


@pytest.fixture
def failing_llm():
    return make_failing_llm()


@pytest_asyncio.fixture
async def db_session():
    await _reset_tables()
    async with async_session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def client(monkeypatch, failing_llm):
    """测试客户端，默认LLM不可用（走兜底内容）"""
    from routers.services import chat_service, language_service, narrative_service
    from main import app

    monkeypatch.setattr(narrative_service, "LLMClient", lambda: failing_llm)
    monkeypatch.setattr(chat_service, "LLMClient", lambda: failing_llm)
    monkeypatch.setattr(language_service, "LLMClient", lambda: failing_llm)

    asyncio.run(_reset_tables())
    with TestClient(app) as c:
        yield c


@pytest.fixture
def llm_factory():
    return make_llm


@pytest.fixture
def e2e_text():
    return E2E_TEXT
