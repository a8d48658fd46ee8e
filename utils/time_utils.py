"""
时间工具
数据库统一存储不带时区的UTC时间
"""
# 标准库导包
from datetime import datetime, timezone


def utc_now() -> datetime:
    """当前UTC时间（不带时区信息）"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_utc_naive(value: datetime) -> datetime:
    """带时区的时间转换为UTC后去掉时区；不带时区的视为UTC原样返回"""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
