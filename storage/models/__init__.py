"""
Storage models package.
"""
# 项目内部导包
from .entry import MoodEntryRecord, CURRENT_SCHEMA_VERSION

__all__ = [
    "MoodEntryRecord",
    "CURRENT_SCHEMA_VERSION",
]
