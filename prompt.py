"""
提示词管理模块
"""
# 标准库导包
from typing import Optional, Sequence

# 项目内部导包
from llm.personas import PersonaTemplate

# ========== 通用输出约束 ==========

PLAIN_TEXT_DIRECTIVE = (
    "Write plain conversational text only. Do not use markdown, bold, bullet symbols, "
    "headings or labels such as 'Insight:' or 'Response:'. Do not give medical diagnoses."
)

NEW_JOURNAL_CONTEXT = "This is a new emotional journal."

HISTORY_CONTEXT_TEMPLATE = "Previous emotional patterns: {patterns}"


# ========== 日记回应相关提示词 ==========

NARRATIVE_SYSTEM_PROMPT = """You are {display_name}, replying to someone's private mood journal entry.
{tone_directives}
{plain_text_directive}"""

NARRATIVE_USER_PROMPT = """{opening_line}

What they wrote: "{entry}"
Feelings detected: {emotions}
Intensity: {intensity}/10
Overall mood: {sentiment}
{history_context}

Reply in 3 to 5 sentences, under {max_length} characters, and finish on a complete sentence."""

SUGGESTION_SYSTEM_PROMPT = """You are {display_name}, suggesting small practical next steps after reading a mood journal entry.
{suggestion_directives}
{plain_text_directive}"""

SUGGESTION_USER_PROMPT = """What they wrote: "{entry_excerpt}"
Main feeling: {dominant_emotion}
All feelings: {emotions}
Intensity: {intensity}/10

Give {min_count} to {max_count} short, concrete suggestions, each one sentence under {max_length} characters.
Return JSON only, in this format:
{{"suggestions": ["suggestion 1", "suggestion 2", "suggestion 3"]}}"""

# 建议提示词中日记原文的截取长度
SUGGESTION_ENTRY_EXCERPT_LENGTH = 200


# ========== 陪伴聊天相关提示词 ==========

WELLNESS_CHAT_PROMPT = """Someone reached out to talk about how they are feeling. Reaching out shows real strength.

What they shared: {message}

Do not respond like a textbook or give clinical advice. Reply warmly and personally, like someone who truly cares about their wellbeing, in under 180 words."""

GENERAL_CHAT_PROMPT = """You are a helpful assistant. Provide a clear, informative response.

User: {message}
Response:"""


# ========== 语言识别相关提示词 ==========

LANGUAGE_DETECTION_PROMPT = """Detect the language of the following text. Respond with only the ISO 639-1 language code (e.g., "en" for English, "es" for Spanish, "fr" for French, etc.). If you're not sure, respond with "en".

Text: "{text}"

Language code:"""

# 识别语言只需要开头一段
LANGUAGE_DETECTION_EXCERPT_LENGTH = 500

def build_history_context(previous_dominant_emotions: Sequence[str]) -> str:
    """
    构建历史情绪上下文

    Args:
        previous_dominant_emotions: 之前日记的主导情绪（由旧到新）

    Returns:
        上下文文本
    """
    patterns = [emotion for emotion in previous_dominant_emotions if emotion]
    if not patterns:
        return NEW_JOURNAL_CONTEXT
    return HISTORY_CONTEXT_TEMPLATE.format(patterns=", ".join(patterns))


def _format_emotions(emotions: Sequence[str]) -> str:
    return ", ".join(emotions) if emotions else "neutral"


def build_narrative_messages(
    persona: PersonaTemplate,
    entry: str,
    emotions: Sequence[str],
    intensity: int,
    sentiment: str,
    previous_dominant_emotions: Sequence[str],
    max_length: int,
    escalate: bool = False,
) -> tuple[str, str]:
    """
    构建日记回应的(系统提示词, 用户提示词)

    Args:
        persona: 角色模板
        entry: 日记原文
        emotions: 检测到的情绪
        intensity: 情绪强度
        sentiment: 情绪倾向
        previous_dominant_emotions: 历史主导情绪
        max_length: 回应长度上限
        escalate: 是否加入安全升级指令
    """
    tone = persona.tone_directives
    if escalate:
        tone = f"{tone}\n{persona.escalation_directive}"

    system_prompt = NARRATIVE_SYSTEM_PROMPT.format(
        display_name=persona.display_name,
        tone_directives=tone,
        plain_text_directive=PLAIN_TEXT_DIRECTIVE,
    )
    user_prompt = NARRATIVE_USER_PROMPT.format(
        opening_line=persona.opening_line_for(entry),
        entry=entry,
        emotions=_format_emotions(emotions),
        intensity=intensity,
        sentiment=sentiment,
        history_context=build_history_context(previous_dominant_emotions),
        max_length=max_length,
    )
    return system_prompt, user_prompt


def build_suggestion_messages(
    persona: PersonaTemplate,
    entry: str,
    emotions: Sequence[str],
    dominant_emotion: str,
    intensity: int,
    min_count: int,
    max_count: int,
    max_length: int,
    escalate: bool = False,
) -> tuple[str, str]:
    """构建建议生成的(系统提示词, 用户提示词)"""
    directives = persona.suggestion_directives
    if escalate:
        directives = f"{directives}\n{persona.escalation_directive}"

    excerpt = entry[:SUGGESTION_ENTRY_EXCERPT_LENGTH]
    if len(entry) > SUGGESTION_ENTRY_EXCERPT_LENGTH:
        excerpt += "..."

    system_prompt = SUGGESTION_SYSTEM_PROMPT.format(
        display_name=persona.display_name,
        suggestion_directives=directives,
        plain_text_directive=PLAIN_TEXT_DIRECTIVE,
    )
    user_prompt = SUGGESTION_USER_PROMPT.format(
        entry_excerpt=excerpt,
        dominant_emotion=dominant_emotion,
        emotions=_format_emotions(emotions),
        intensity=intensity,
        min_count=min_count,
        max_count=max_count,
        max_length=max_length,
    )
    return system_prompt, user_prompt


def build_chat_prompt(message: str, context: Optional[str] = "general") -> str:
    """构建聊天提示词，wellness 使用陪伴语气"""
    if context == "wellness":
        return WELLNESS_CHAT_PROMPT.format(message=message)
    return GENERAL_CHAT_PROMPT.format(message=message)


def build_language_prompt(text: str) -> str:
    return LANGUAGE_DETECTION_PROMPT.format(text=text[:LANGUAGE_DETECTION_EXCERPT_LENGTH])
