"""
有界重试工具
对外部协作方调用进行有限次数的退避重试
"""
# 标准库导包
import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, Tuple, Type

# 第三方库导包
import openai

# 项目内部导包
from config import settings
from .client import LLMEmptyResponseError

# 配置日志
logger = logging.getLogger(__name__)

ErrorTypes = Tuple[Type[BaseException], ...]

# 限流类错误：退避时间乘以 rate_limit_multiplier
RATE_LIMIT_ERRORS: ErrorTypes = (openai.RateLimitError,)

# 瞬时错误：可重试；其余错误（鉴权失败、请求错误等）直接抛出
TRANSIENT_ERRORS: ErrorTypes = (
    openai.APIConnectionError,
    openai.InternalServerError,
    LLMEmptyResponseError,
    ConnectionError,
    asyncio.TimeoutError,
)


@dataclass
class RetryPolicy:
    """重试策略"""
    max_attempts: int = 3
    base_delay: float = 1.0
    multiplier: float = 2.0
    rate_limit_multiplier: float = 3.0
    max_delay: float = 30.0

    @classmethod
    def from_settings(cls) -> "RetryPolicy":
        """从全局设置创建重试策略"""
        return cls(
            max_attempts=settings.LLM_MAX_ATTEMPTS,
            base_delay=settings.LLM_RETRY_BASE_DELAY,
            multiplier=settings.LLM_RETRY_MULTIPLIER,
            rate_limit_multiplier=settings.LLM_RATE_LIMIT_MULTIPLIER,
            max_delay=settings.LLM_RETRY_MAX_DELAY,
        )

    def compute_delay(self, attempt: int, rate_limited: bool = False) -> float:
        """
        计算第attempt次失败后的等待时间（指数退避）

        Args:
            attempt: 已失败的尝试次数（从1开始）
            rate_limited: 是否为限流错误

        Returns:
            等待秒数
        """
        delay = self.base_delay * (self.multiplier ** (attempt - 1))
        if rate_limited:
            delay *= self.rate_limit_multiplier
        return min(delay, self.max_delay)


async def retry_async(
    func: Callable[[], Awaitable[Any]],
    policy: Optional[RetryPolicy] = None,
    retry_on: ErrorTypes = TRANSIENT_ERRORS,
    rate_limit_on: ErrorTypes = RATE_LIMIT_ERRORS,
    operation: str = "external_call",
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
) -> Any:
    """
    以有界重试方式执行异步调用

    Args:
        func: 无参协程工厂，每次尝试都会重新调用
        policy: 重试策略，默认从设置读取
        retry_on: 可重试的错误类型
        rate_limit_on: 限流错误类型（同样可重试，退避更长）
        operation: 操作名称，用于日志
        sleep: 等待函数

    Returns:
        func的返回值

    Raises:
        最后一次尝试的异常；不可重试的异常立即抛出
    """
    policy = policy or RetryPolicy.from_settings()
    max_attempts = max(policy.max_attempts, 1)
    retryable = tuple(rate_limit_on) + tuple(retry_on)

    for attempt in range(1, max_attempts + 1):
        try:
            return await func()
        except retryable as e:
            if attempt >= max_attempts:
                logger.error(f"{operation} 重试耗尽: attempts={attempt}, error={type(e).__name__}: {e}")
                raise

            rate_limited = isinstance(e, tuple(rate_limit_on))
            delay = policy.compute_delay(attempt, rate_limited=rate_limited)
            logger.warning(
                f"{operation} 第{attempt}次尝试失败 ({type(e).__name__}: {e})，"
                f"{delay:.1f}秒后重试"
            )
            await sleep(delay)
