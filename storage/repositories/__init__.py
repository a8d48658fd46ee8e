"""
Storage repositories package.
"""
# 项目内部导包
from .base import BaseRepository
from .entry_repository import EntryRepository

__all__ = [
    "BaseRepository",
    "EntryRepository",
]
