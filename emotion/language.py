"""
语言识别规则
按常见问候语/礼貌用语做快速匹配，匹配不到时由LLM判断
"""
# 标准库导包
import re
from typing import Dict, Optional, Tuple

DEFAULT_LANGUAGE = "en"

# 按检测顺序排列，多个语言共用的短语归先出现的语言
LANGUAGE_PHRASES: Dict[str, Tuple[str, ...]] = {
    "es": ("hola", "gracias", "por favor", "lo siento", "buenas", "días", "noches"),
    "fr": ("bonjour", "merci", "s'il vous plaît", "désolé", "bonsoir", "salut"),
    "de": ("hallo", "danke", "bitte", "entschuldigung", "guten", "abend"),
    "it": ("ciao", "grazie", "prego", "scusi", "buongiorno", "buonasera"),
    "pt": ("olá", "obrigado", "desculpe", "bom", "dia", "noite"),
    "ru": ("привет", "спасибо", "пожалуйста", "извините", "доброе", "утро", "вечер"),
    "ja": ("こんにちは", "ありがとう", "すみません", "おはよう", "こんばんは"),
    "ko": ("안녕", "감사", "죄송", "좋은", "아침", "저녁"),
    "zh": ("你好", "谢谢", "请", "对不起", "早上", "晚上", "好"),
    "hi": ("नमस्ते", "धन्यवाद", "कृपया", "माफ", "सुबह", "शाम"),
    "ar": ("مرحبا", "شكرا", "من فضلك", "آسف", "صباح", "مساء"),
}

# 这些文字不用空格分词，按子串匹配
UNSPACED_SCRIPTS = frozenset({"ja", "ko", "zh"})

SUPPORTED_LANGUAGES = (DEFAULT_LANGUAGE,) + tuple(LANGUAGE_PHRASES)

PATTERN_CONFIDENCE = 0.8
LLM_CONFIDENCE = 0.6


def _language_pattern(language: str, phrases: Tuple[str, ...]) -> re.Pattern:
    body = "|".join(re.escape(p) for p in phrases)
    if language in UNSPACED_SCRIPTS:
        return re.compile(body)
    return re.compile(rf"(?<!\w)(?:{body})(?!\w)", re.IGNORECASE)


_LANGUAGE_PATTERNS = tuple(
    (language, _language_pattern(language, phrases))
    for language, phrases in LANGUAGE_PHRASES.items()
)


def detect_language_by_pattern(text: str) -> Optional[str]:
    """返回第一个命中短语的语言代码，都未命中返回None"""
    for language, pattern in _LANGUAGE_PATTERNS:
        if pattern.search(text or ""):
            return language
    return None


def normalize_language_code(raw: str) -> str:
    """
    把LLM输出规范成支持的ISO 639-1代码

    优先取回复中单独出现的两字母代码，否则只保留字母取前两位；
    不在支持列表中时返回en。
    """
    lowered = (raw or "").lower()
    for token in re.findall(r"[a-z]+", lowered):
        if len(token) == 2 and token in SUPPORTED_LANGUAGES:
            return token
    code = re.sub(r"[^a-z]", "", lowered)[:2]
    return code if code in SUPPORTED_LANGUAGES else DEFAULT_LANGUAGE
