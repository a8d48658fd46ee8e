"""
通用工具
"""

from .time_utils import utc_now, to_utc_naive

__all__ = ["utc_now", "to_utc_naive"]
