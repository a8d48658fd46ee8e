"""
文本清洗工具函数
用于清洗LLM生成的回应和建议：去除标签前缀、Markdown标记、列表符号，并按完整句子截断
"""
# 标准库导包
import re
from typing import Iterable, List

# LLM常见的标签前缀
LABEL_PREFIX_PATTERN = re.compile(
    r"^\s*(?:AI Insight|Compassionate Insight|Caring Insight|Insight|Response|Narrative|"
    r"Suggestions?|Answer)\s*:\s*",
    re.IGNORECASE,
)
# 形如 **Your Insight**: 的加粗标题
BOLD_HEADING_PATTERN = re.compile(r"^\s*\*\*[^*\n]*?\*\*(?::\s*|\s*\n\s*)")
BOLD_PATTERN = re.compile(r"\*\*(.+?)\*\*", re.DOTALL)
ITALIC_PATTERN = re.compile(r"(?<![\w*])\*(?!\s)(.+?)(?<!\s)\*(?![\w*])")
CODE_PATTERN = re.compile(r"`([^`]*)`")
HEADING_PATTERN = re.compile(r"^\s*#{1,6}\s*", re.MULTILINE)
LIST_MARKER_PATTERN = re.compile(r"^\s*(?:\d+[.)]\s*|[-*•]\s*)")
QUOTE_CHARS = "\"'“”"

SENTENCE_ENDINGS = ".!?"
ELLIPSIS = "..."


def truncate_to_complete_sentence(text: str, max_length: int, min_ratio: float = 0.5) -> str:
    """
    按完整句子截断文本

    在前max_length个字符内寻找最后一个句末标点(.!?)，位置超过 max_length*min_ratio 时在此截断；
    否则硬截断并追加省略号。

    Args:
        text: 原文
        max_length: 长度上限
        min_ratio: 句末标点的最小位置比例

    Returns:
        截断后的文本，长度不超过max_length
    """
    if not text or len(text) <= max_length:
        return text

    window = text[:max_length]
    last_end = max(window.rfind(ch) for ch in SENTENCE_ENDINGS)
    if last_end > max_length * min_ratio:
        return window[:last_end + 1]

    return text[:max_length - len(ELLIPSIS)].rstrip() + ELLIPSIS


def strip_label_prefix(text: str) -> str:
    """去除 'Insight:'、'**Title**:' 这类前缀"""
    text = BOLD_HEADING_PATTERN.sub("", text, count=1)
    return LABEL_PREFIX_PATTERN.sub("", text, count=1)


def strip_markup(text: str) -> str:
    """去除加粗、斜体、行内代码和标题标记"""
    text = BOLD_PATTERN.sub(r"\1", text)
    text = ITALIC_PATTERN.sub(r"\1", text)
    text = CODE_PATTERN.sub(r"\1", text)
    return HEADING_PATTERN.sub("", text)


def strip_list_marker(text: str) -> str:
    """去除 '1.'、'-'、'*'、'•' 等列表符号"""
    return LIST_MARKER_PATTERN.sub("", text, count=1)


def clean_narrative(text: str, max_length: int) -> str:
    """
    清洗回应文本

    Args:
        text: LLM原始输出
        max_length: 长度上限

    Returns:
        清洗并截断后的文本，可能为空字符串
    """
    if not text:
        return ""
    cleaned = strip_markup(strip_label_prefix(text.strip()))
    # 合并多余空白
    cleaned = re.sub(r"[ \t]+", " ", cleaned)
    cleaned = re.sub(r"\n{3,}", "\n\n", cleaned).strip()
    return truncate_to_complete_sentence(cleaned, max_length)


def clean_suggestions(
    items: Iterable[str],
    min_length: int = 10,
    max_count: int = 6,
    max_length: int = 240,
) -> List[str]:
    """
    清洗建议列表

    Args:
        items: 原始建议
        min_length: 过短的建议会被丢弃
        max_count: 最多保留条数
        max_length: 单条长度上限

    Returns:
        清洗后的建议列表
    """
    cleaned: List[str] = []
    for item in items:
        if not isinstance(item, str):
            continue
        line = strip_markup(strip_list_marker(strip_label_prefix(item.strip()))).strip()
        line = line.strip(QUOTE_CHARS).strip()
        if len(line) <= min_length or line in cleaned:
            continue
        cleaned.append(truncate_to_complete_sentence(line, max_length))
        if len(cleaned) >= max_count:
            break
    return cleaned


def split_lines(text: str) -> List[str]:
    """把纯文本输出拆成非空行"""
    return [line.strip() for line in (text or "").split("\n") if line.strip()]
