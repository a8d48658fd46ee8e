"""
应用程序配置
"""
# 标准库导包
import os
from typing import List, Dict, Any, Optional

# 第三方库导包
from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """应用程序设置类"""

    # 应用基本信息
    APP_NAME: str = "MOOD JOURNAL"
    APP_VERSION: str = "1.0.0"
    POD_ENV: str = Field(default="local", env="POD_ENV")
    DEBUG: bool = Field(default_factory=lambda: Settings._get_debug())
    RELOAD: bool = False

    # 服务器配置
    HOST: str = Field(default="127.0.0.1", env="HOST")
    PORT: int = Field(default=8000, env="PORT")
    WORKERS: int = 1

    # 本地存储配置（单用户本地运行，默认SQLite文件）
    DATABASE_URL: str = Field(default="sqlite+aiosqlite:///./mood_journal.db", env="DATABASE_URL")
    DB_ECHO: bool = Field(default=False, env="DB_ECHO")
    DB_POOL_SIZE: int = Field(default=5, env="DB_POOL_SIZE")  # 非SQLite数据库时生效
    DB_MAX_OVERFLOW: int = Field(default=5, env="DB_MAX_OVERFLOW")
    DB_POOL_RECYCLE: int = Field(default=3600, env="DB_POOL_RECYCLE")

    # Redis配置（用于提交锁）
    REDIS_URL: str = Field(default="redis://localhost:6379/0", env="REDIS_URL")
    SUBMISSION_LOCK_ENABLED: bool = Field(default=True, env="SUBMISSION_LOCK_ENABLED")
    SUBMISSION_LOCK_TIMEOUT: int = Field(default=300, env="SUBMISSION_LOCK_TIMEOUT")  # 秒，不低于最坏情况分析耗时

    # CORS配置
    CORS_ORIGINS: List[str] = ["*"]
    CORS_ALLOW_CREDENTIALS: bool = True
    CORS_ALLOW_METHODS: List[str] = ["*"]
    CORS_ALLOW_HEADERS: List[str] = ["*"]

    # 日志配置
    LOG_LEVEL: str = Field(default="info", env="LOG_LEVEL")

    # 日记条目约束
    MIN_ENTRY_LENGTH: int = Field(default=50, env="MIN_ENTRY_LENGTH")
    MAX_ENTRY_LENGTH: int = Field(default=5000, env="MAX_ENTRY_LENGTH")
    HISTORY_CONTEXT_SIZE: int = Field(default=3, env="HISTORY_CONTEXT_SIZE")
    HISTORY_FETCH_SIZE: int = Field(default=5, env="HISTORY_FETCH_SIZE")

    # 情绪检测配置
    MAX_DETECTED_EMOTIONS: int = Field(default=8, env="MAX_DETECTED_EMOTIONS")

    # 文本生成后处理配置
    NARRATIVE_MAX_LENGTH: int = Field(default=600, env="NARRATIVE_MAX_LENGTH")
    SUGGESTION_MAX_LENGTH: int = Field(default=240, env="SUGGESTION_MAX_LENGTH")
    SUGGESTION_MIN_LENGTH: int = Field(default=10, env="SUGGESTION_MIN_LENGTH")
    MAX_SUGGESTIONS: int = Field(default=6, env="MAX_SUGGESTIONS")
    MIN_SUGGESTIONS: int = Field(default=3, env="MIN_SUGGESTIONS")

    # LLM配置（OpenAI兼容接口）
    GROQ_API_KEY: str = Field(default="", env="GROQ_API_KEY")
    GEMINI_API_KEY: str = Field(default="", env="GEMINI_API_KEY")
    LLM_PROVIDERS: Dict[str, Any] = Field(
        default={
            "groq": {
                "api_key": "",
                "base_url": "https://api.groq.com/openai/v1",
                "models": {
                    "llama-3.1-8b": {
                        "id": "llama-3.1-8b-instant",
                        "name": "Llama 3.1 8B Instant"
                    }
                }
            },
            "gemini": {
                "api_key": "",
                "base_url": "https://generativelanguage.googleapis.com/v1beta/openai/",
                "models": {
                    "gemini-2.0-flash": {
                        "id": "gemini-2.0-flash",
                        "name": "Gemini 2.0 Flash"
                    }
                }
            }
        },
        description="LLM提供商配置"
    )
    DEFAULT_LLM_PROVIDER: str = Field(default="groq", description="默认LLM提供商")
    DEFAULT_LLM_MODEL_KEY: str = Field(default="llama-3.1-8b", description="默认LLM模型键")
    LLM_TIMEOUT: int = Field(default=30, env="LLM_TIMEOUT")
    LLM_MAX_TOKENS: Optional[int] = Field(default=1228, env="LLM_MAX_TOKENS")

    # LLM重试策略
    LLM_MAX_ATTEMPTS: int = Field(default=3, env="LLM_MAX_ATTEMPTS")
    LLM_RETRY_BASE_DELAY: float = Field(default=1.0, env="LLM_RETRY_BASE_DELAY")
    LLM_RETRY_MULTIPLIER: float = Field(default=2.0, env="LLM_RETRY_MULTIPLIER")
    LLM_RATE_LIMIT_MULTIPLIER: float = Field(default=3.0, env="LLM_RATE_LIMIT_MULTIPLIER")
    LLM_RETRY_MAX_DELAY: float = Field(default=30.0, env="LLM_RETRY_MAX_DELAY")

    @property
    def REDIS_KEY_PREFIXES(self) -> dict:
        """Redis key前缀常量"""
        return {
            "SUBMISSION_LOCK": "mood_journal:submission_lock:",
        }

    @staticmethod
    def _get_debug() -> bool:
        """获取DEBUG模式，基于POD_ENV环境变量"""
        return os.getenv("POD_ENV", "local").lower() != "online"

    # API文档配置
    @property
    def DOCS_URL(self) -> str:
        return "/docs" if self.DEBUG else None

    @property
    def REDOC_URL(self) -> str:
        return "/redoc" if self.DEBUG else None

    @property
    def OPENAPI_URL(self) -> str:
        return "/openapi.json" if self.DEBUG else None

    class Config:
        """Pydantic配置"""
        env_file = ".env"  # 支持从.env文件读取配置
        env_file_encoding = "utf-8"
        case_sensitive = True


# 创建设置实例
settings = Settings()
