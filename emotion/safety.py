"""
安全规则
识别自伤、被剥削/虐待等高风险表述，给出必须插入的求助资源信息
"""
# 标准库导包
import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

# 配置日志
logger = logging.getLogger(__name__)

RISK_NONE = "none"
RISK_ELEVATED = "elevated"
RISK_HIGH = "high"

# 高风险关键词分组
SAFETY_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "self_harm": (
        "kill myself", "killing myself", "suicide", "suicidal", "end my life",
        "ending my life", "want to die", "wanna die", "self harm", "self-harm",
        "hurt myself", "hurting myself", "cut myself", "cutting myself",
        "no reason to live", "better off dead", "take my own life",
    ),
    "exploitation": (
        "abusing me", "abused me", "being abused", "sexually assaulted",
        "molested", "blackmail", "blackmailing me", "trafficked", "trafficking",
        "forced me", "forcing me", "threatening me", "touched me without",
    ),
}

RESOURCE_LINES: Dict[str, str] = {
    "self_harm": (
        "If you are thinking about hurting yourself, please reach out right now: "
        "call Tele-MANAS at 14416 (India) or 988 (US), or contact your local emergency services. "
        "You do not have to go through this alone."
    ),
    "exploitation": (
        "If someone is hurting, threatening or exploiting you, please contact emergency services "
        "(112 in India) or a trusted helpline such as Childline 1098. You deserve to be safe."
    ),
    "elevated": (
        "These feelings sound really heavy. Talking to a counsellor or a trusted person "
        "can help, and Tele-MANAS (14416) is available any time if you need someone to talk to."
    ),
}

# 无关键词时，消极且强度达到该值视为需要关注
ELEVATED_INTENSITY_THRESHOLD = 9


def _phrase_pattern(phrase: str) -> re.Pattern:
    body = r"[\s-]+".join(re.escape(part) for part in re.split(r"[\s-]+", phrase))
    return re.compile(rf"\b{body}\b")


_SAFETY_PATTERNS = {
    category: tuple((phrase, _phrase_pattern(phrase)) for phrase in phrases)
    for category, phrases in SAFETY_KEYWORDS.items()
}


@dataclass(frozen=True)
class SafetyAssessment:
    """安全评估结果"""
    risk_level: str = RISK_NONE
    categories: Tuple[str, ...] = ()
    matched_terms: Tuple[str, ...] = ()
    resource_lines: Tuple[str, ...] = field(default=())

    @property
    def requires_escalation(self) -> bool:
        return bool(self.resource_lines)


def assess_safety(text: str, intensity: int = 1, sentiment: str = "neutral") -> SafetyAssessment:
    """
    评估文本的安全风险

    Args:
        text: 用户文本
        intensity: 情绪强度
        sentiment: 情绪倾向

    Returns:
        SafetyAssessment，命中关键词时包含必须插入的求助资源
    """
    lower_text = (text or "").lower()
    categories: List[str] = []
    matched_terms: List[str] = []

    for category, patterns in _SAFETY_PATTERNS.items():
        hits = [phrase for phrase, pattern in patterns if pattern.search(lower_text)]
        if hits:
            categories.append(category)
            matched_terms.extend(hits)

    if categories:
        logger.warning(f"安全规则命中: categories={categories}")
        return SafetyAssessment(
            risk_level=RISK_HIGH,
            categories=tuple(categories),
            matched_terms=tuple(matched_terms),
            resource_lines=tuple(RESOURCE_LINES[c] for c in categories),
        )

    if sentiment == "negative" and intensity >= ELEVATED_INTENSITY_THRESHOLD:
        return SafetyAssessment(
            risk_level=RISK_ELEVATED,
            categories=("elevated",),
            resource_lines=(RESOURCE_LINES["elevated"],),
        )

    return SafetyAssessment()
