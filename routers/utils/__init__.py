"""
Utils layer
工具函数层
"""

from .text_cleaner import (
    truncate_to_complete_sentence,
    clean_narrative,
    clean_suggestions,
    split_lines,
)

__all__ = [
    "truncate_to_complete_sentence",
    "clean_narrative",
    "clean_suggestions",
    "split_lines",
]
