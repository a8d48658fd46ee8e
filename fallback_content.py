"""
兜底内容
LLM不可用时使用的确定性回应和建议
"""
# 标准库导包
from typing import Dict, List, Sequence

# 项目内部导包
from emotion.lexicon import NEUTRAL

# ========== 日记回应 ==========

INCIDENT_NARRATIVES: Dict[str, str] = {
    "negative": (
        "I can feel the weight of this moment in your words, and it took courage to write it down. "
        "What happened hurts, and your feelings about it are completely valid. "
        "You have made it through every hard day so far, and you do not have to carry this one alone."
    ),
    "positive": (
        "The joy in your words about this experience is wonderful to read! "
        "Noticing and savouring moments like this shows how much you appreciate life. "
        "Hold on to this memory, it will be a source of light on harder days."
    ),
    "neutral": (
        "Thank you for trusting your journal with this moment. "
        "Taking the time to reflect on what happened shows real self-awareness. "
        "Every experience, including this one, is part of your story and helps you grow."
    ),
}

DAILY_NARRATIVES: Dict[str, str] = {
    "negative": (
        "It sounds like you are carrying some heavy feelings today, and sharing them shows real courage. "
        "Feeling deeply is one of your strengths, even when it hurts. "
        "These emotions are visitors, not permanent residents, and you have a real capacity to heal."
    ),
    "positive": (
        "Your positive energy comes through clearly today! "
        "The happiness in your words is a gift to you and to the people around you. "
        "Enjoy this feeling and notice what helped create it."
    ),
    "neutral": (
        "Your reflection today shows a thoughtful, introspective side of you. "
        "Pausing to look at your inner world is a quiet kind of wisdom. "
        "Each moment of attention like this helps you understand yourself a little better."
    ),
}

EMOTION_NARRATIVES: Dict[str, str] = {
    "happy": (
        "It is wonderful to see you feeling joyful! These moments are precious and worth celebrating. "
        "Your happiness can brighten the day of the people around you too."
    ),
    "sad": (
        "I can sense the heaviness you are carrying. It is okay to feel sad, it is part of being human. "
        "Let yourself feel it, and remember that this feeling will pass."
    ),
    "angry": (
        "Your anger is telling you that something important to you was affected. "
        "The feeling is valid. When you are ready, try to channel that energy into something constructive."
    ),
    "anxious": (
        "Uncertainty can feel overwhelming, and your anxiety shows how much you care about what happens. "
        "Try to take things one small step at a time."
    ),
    "stressed": (
        "The pressure you are feeling is real and understandable. "
        "Be kind to yourself today and take breaks when you need them."
    ),
    "overwhelmed": (
        "It sounds like a lot is landing on you at once. You do not have to solve everything today. "
        "Pick one small thing, and let the rest wait for a moment."
    ),
    "lonely": (
        "Feeling alone is hard, and writing about it is a brave first step. "
        "You matter, and reaching out to even one person can make the day feel lighter."
    ),
    "tired": (
        "Your body and mind sound like they need rest. Tiredness is a signal, not a failure. "
        "Give yourself permission to slow down."
    ),
    "calm": (
        "There is something beautiful about the peace you are feeling. "
        "This inner calm is a strength you can return to when life gets busy."
    ),
    "grateful": (
        "Your gratitude shines through today. "
        "Appreciating what you have enriches your life and the lives of people around you."
    ),
}

# ========== 建议 ==========

EMOTION_SUGGESTIONS: Dict[str, List[str]] = {
    "happy": [
        "Share your joy with someone you love, happiness grows when it is shared",
        "Write down what made you happy today so you can come back to it",
        "Use this good energy on something you have been putting off",
        "Capture this moment with a photo or a few lines in your journal",
    ],
    "sad": [
        "Allow yourself to feel the sadness without judging it",
        "Reach out to a friend or family member for some comfort",
        "Do one small self-care activity that usually brings you peace",
        "Get some gentle movement or fresh air, even for ten minutes",
    ],
    "angry": [
        "Take a few slow, deep breaths before responding to the situation",
        "Go for a brisk walk or do some exercise to release the tension",
        "Write down exactly what is bothering you to get some clarity",
        "Address the issue constructively once you feel calmer",
    ],
    "anxious": [
        "Try the 5-4-3-2-1 grounding technique to come back to the present",
        "Break big tasks into smaller, manageable steps",
        "Practice slow breathing or progressive muscle relaxation",
        "Limit caffeine today and protect your sleep tonight",
    ],
    "stressed": [
        "Take a five minute break and breathe slowly, in for four and out for six",
        "Write down everything on your mind and pick just one thing to do next",
        "Step away from screens for a short walk outside",
        "Ask for help with one task that is weighing on you",
    ],
    "overwhelmed": [
        "List what is on your plate and circle only the most urgent item",
        "Say no to one thing today that can wait",
        "Set a timer for twenty minutes of focused work, then rest",
        "Talk to someone you trust about what feels like too much",
    ],
    "lonely": [
        "Send a message to someone you have not spoken to in a while",
        "Spend some time in a public place like a cafe, park or library",
        "Join a class, group or online community around something you enjoy",
        "Plan a call or meet-up with a friend for this week",
    ],
    "tired": [
        "Go to bed a little earlier tonight and keep screens away before sleep",
        "Drink some water and eat something nourishing",
        "Take a short rest or nap without feeling guilty about it",
        "Cut one non-essential task from today",
    ],
}

INCIDENT_SUGGESTIONS: Dict[str, List[str]] = {
    "negative": [
        "Share what happened with a trusted friend or family member",
        "Try slow deep breathing to settle your body after what happened",
        "Write down your thoughts to help process the experience",
        "Consider speaking with a counsellor or therapist",
        "Do some gentle movement like walking or stretching",
    ],
    "positive": [
        "Celebrate this moment by sharing it with someone special",
        "Write this experience down in detail so you can revisit it later",
        "Notice what made this go so well so you can recreate it",
    ],
    "neutral": [
        "Take a few minutes to write down how this experience affected you",
        "Talk it over with someone whose perspective you trust",
        "Give yourself some quiet time to let your thoughts settle",
    ],
}

GENERIC_SUGGESTIONS: Dict[str, List[str]] = {
    "negative": [
        "Speak to yourself as kindly as you would to your best friend",
        "Spend ten to fifteen minutes outside or by a window",
        "Try a short guided meditation to release physical tension",
        "Remember that difficult emotions are temporary and will pass",
    ],
    "positive": [
        "Put this good energy into something that brings you lasting fulfillment",
        "Do something kind for a friend, neighbour or stranger today",
        "Write down three specific things that made you smile today",
    ],
    "neutral": [
        "Take a mindful walk and pay attention to your surroundings",
        "Notice three small moments of beauty or kindness from today",
        "Try a creative activity like drawing, writing or music",
        "Consider what small step could make tomorrow feel better",
    ],
}

# ========== 降级结果 ==========

DEGRADED_EMOTIONS = [NEUTRAL]
DEGRADED_DOMINANT_EMOTION = NEUTRAL
DEGRADED_INTENSITY = 5
DEGRADED_SENTIMENT = "neutral"
DEGRADED_NARRATIVE = (
    "Thank you for sharing your thoughts. Every entry helps you understand yourself better."
)
DEGRADED_SUGGESTIONS = [
    "Take a few deep breaths",
    "Practice self-compassion",
    "Reflect on your feelings",
]

DEFAULT_CHAT_MESSAGE = "I'm here to help with any questions you have."
CHAT_FAILURE_MESSAGE = "I'm having trouble responding right now. Please try again."


def _sentiment_key(sentiment: str) -> str:
    return sentiment if sentiment in ("positive", "negative") else "neutral"


def default_narrative(dominant_emotion: str, sentiment: str, is_incident: bool) -> str:
    """
    选择兜底回应

    Args:
        dominant_emotion: 主导情绪
        sentiment: 情绪倾向
        is_incident: 是否为事件模式

    Returns:
        回应文本
    """
    key = _sentiment_key(sentiment)
    if is_incident:
        return INCIDENT_NARRATIVES[key]
    return EMOTION_NARRATIVES.get(dominant_emotion) or DAILY_NARRATIVES[key]


def default_suggestions(
    emotions: Sequence[str],
    dominant_emotion: str,
    sentiment: str,
    is_incident: bool,
    max_count: int = 6,
) -> List[str]:
    """
    选择兜底建议

    主导情绪有专属建议时使用专属建议，否则按模式和情绪倾向选择；
    再补充其他情绪专属建议的第一条，去重后截断。

    Args:
        emotions: 检测到的情绪
        dominant_emotion: 主导情绪
        sentiment: 情绪倾向
        is_incident: 是否为事件模式
        max_count: 最多返回条数

    Returns:
        建议列表
    """
    key = _sentiment_key(sentiment)
    base = EMOTION_SUGGESTIONS.get(dominant_emotion)
    if base is None:
        base = INCIDENT_SUGGESTIONS[key] if is_incident else GENERIC_SUGGESTIONS[key]

    suggestions: List[str] = list(base)
    for emotion in emotions:
        if emotion == dominant_emotion:
            continue
        extra = EMOTION_SUGGESTIONS.get(emotion)
        if extra and extra[0] not in suggestions:
            suggestions.append(extra[0])

    # 兜底列表至少3条
    for item in GENERIC_SUGGESTIONS[key]:
        if len(suggestions) >= 3:
            break
        if item not in suggestions:
            suggestions.append(item)

    return suggestions[:max_count]
