# 标准库导包
import asyncio
import logging
import math
import threading
from typing import Dict

# 第三方库导包
import redis.asyncio as redis
from redis.asyncio.lock import Lock
from redis.exceptions import RedisError

# 项目内部导包
from config import settings
from llm.retry import RetryPolicy

logger = logging.getLogger(__name__)

# 全局Redis连接池实例
_redis_pool = None
_redis_pool_lock = threading.Lock()

# 一次分析包含回应和建议两次LLM调用
LLM_CALLS_PER_ANALYSIS = 2
LOCK_TIMEOUT_MARGIN = 30


class SubmissionInProgressError(Exception):
    """同一日记已有分析在进行中"""


class DummyLock:
    """虚拟锁对象，提交锁关闭时使用"""
    async def release(self):
        pass


def get_redis():
    """获取Redis连接实例，支持连接池重建"""
    global _redis_pool

    with _redis_pool_lock:
        if _redis_pool is None:
            logger.info("创建新的Redis连接池...")
            _redis_pool = redis.ConnectionPool.from_url(
                settings.REDIS_URL,
                max_connections=20,
                socket_timeout=5.0,
                socket_connect_timeout=2.0,
                socket_keepalive=True,
                health_check_interval=15,
                retry_on_timeout=True,
            )
            logger.info(f"Redis连接池创建完成，连接地址: {settings.REDIS_URL}")

        return redis.Redis(connection_pool=_redis_pool, decode_responses=True)


def reset_redis_pool():
    """重置Redis连接池"""
    global _redis_pool

    with _redis_pool_lock:
        if _redis_pool:
            logger.info("关闭现有Redis连接池...")
            _redis_pool = None
        logger.info("Redis连接池已重置")


def submission_lock_key(journal_id: str) -> str:
    return f"{settings.REDIS_KEY_PREFIXES['SUBMISSION_LOCK']}{journal_id}"


class LocalSubmissionLock:
    """进程内提交锁，Redis不可用时按日记ID串行化提交"""

    _locks: Dict[str, asyncio.Lock] = {}

    def __init__(self, journal_id: str):
        self.journal_id = journal_id
        self._lock = self._locks.setdefault(journal_id, asyncio.Lock())

    async def acquire(self) -> bool:
        """非阻塞获取，已被占用时返回False"""
        if self._lock.locked():
            return False
        await self._lock.acquire()
        return True

    async def release(self):
        if self._lock.locked():
            self._lock.release()


def submission_lock_timeout() -> int:
    """
    Redis锁的过期时间（秒）

    取配置值与最坏情况分析耗时中的较大者：回应和建议两次LLM调用，
    每次都用尽重试次数、超时并按限流退避等待，再留出余量。
    """
    policy = RetryPolicy.from_settings()
    per_call = policy.max_attempts * settings.LLM_TIMEOUT + sum(
        policy.compute_delay(attempt, rate_limited=True)
        for attempt in range(1, policy.max_attempts)
    )
    worst_case = int(math.ceil(LLM_CALLS_PER_ANALYSIS * per_call)) + LOCK_TIMEOUT_MARGIN
    return max(settings.SUBMISSION_LOCK_TIMEOUT, worst_case)


async def acquire_submission_lock(journal_id: str = "default"):
    """
    获取日记提交锁（非阻塞）

    同一日记同一时间只允许一个分析流程。锁未启用时返回DummyLock；
    Redis不可用时降级为进程内锁，仍然保证单进程内的串行提交。

    参数:
        journal_id: 日记ID，单用户场景下使用 default

    返回:
        Lock、LocalSubmissionLock 或 DummyLock，调用方负责 release

    异常:
        SubmissionInProgressError: 已有提交在进行中
    """
    if not settings.SUBMISSION_LOCK_ENABLED:
        return DummyLock()

    lock = Lock(
        get_redis(),
        submission_lock_key(journal_id),
        timeout=submission_lock_timeout(),
        blocking=False,
    )
    try:
        acquired = await lock.acquire()
    except (RedisError, ConnectionError, OSError) as e:
        logger.warning(f"Redis不可用，提交锁降级为进程内锁: {str(e)}")
        lock = LocalSubmissionLock(journal_id)
        acquired = await lock.acquire()

    if not acquired:
        logger.info(f"日记 {journal_id} 已有提交在进行中")
        raise SubmissionInProgressError(f"journal {journal_id} already has a submission in progress")

    return lock


async def release_submission_lock(lock) -> None:
    """释放提交锁，锁已过期或Redis断开时只记录日志"""
    try:
        await lock.release()
    except (RedisError, ConnectionError, OSError) as e:
        logger.warning(f"释放提交锁失败: {str(e)}")
