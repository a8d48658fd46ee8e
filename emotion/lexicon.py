"""
情绪词典
情绪标签 -> 触发关键词/短语，以及情绪极性分组
"""

# 未检测到任何情绪时使用的占位标签
NEUTRAL = "neutral"

# 声明顺序即同分时的排序顺序，不要随意调整
EMOTION_KEYWORDS = {
    "happy": ("happy", "joy", "joyful", "excited", "cheerful", "delighted", "pleased", "content"),
    "sad": ("sad", "depressed", "down", "unhappy", "melancholy", "blue", "dejected"),
    "angry": ("angry", "mad", "furious", "irritated", "annoyed", "frustrated", "rage"),
    "anxious": ("anxious", "worried", "nervous", "scared", "fearful", "panic", "stress"),
    "stressed": ("stressed", "overwhelmed", "pressure", "burden", "tension", "strain"),
    "calm": ("calm", "peaceful", "relaxed", "serene", "tranquil", "composed"),
    "excited": ("excited", "thrilled", "enthusiastic", "eager", "pumped"),
    "grateful": ("grateful", "thankful", "appreciative", "blessed", "thankfulness"),
    "lonely": ("lonely", "isolated", "alone", "disconnected", "solitary"),
    "confident": ("confident", "sure", "certain", "self-assured", "empowered"),
    "overwhelmed": ("overwhelmed", "swamped", "buried", "drowning", "too much"),
    "peaceful": ("peaceful", "serene", "tranquil", "zen", "mindful"),
    "hopeful": ("hopeful", "optimistic", "positive", "looking forward", "expecting"),
    "tired": ("tired", "exhausted", "drained", "weary", "fatigue"),
    "energetic": ("energetic", "active", "vigorous", "lively", "dynamic"),
}

# 情绪极性分组（两组互不相交）
POSITIVE_EMOTIONS = frozenset({
    "happy", "excited", "grateful", "confident", "peaceful", "hopeful", "energetic", "calm",
})
NEGATIVE_EMOTIONS = frozenset({
    "sad", "angry", "anxious", "stressed", "lonely", "overwhelmed", "tired",
})

# 关键词前紧邻这些词时额外加分
KEYWORD_BOOSTERS = ("very", "really")

# 强度调节词：出现即 +1 / -1
INTENSIFIER_WORDS = (
    "very", "extremely", "really", "so", "totally", "completely",
    "absolutely", "incredibly", "deeply", "overwhelming",
)
DIMINISHER_WORDS = ("little", "slightly", "somewhat", "kind of", "sort of")


def polarity_of(label: str) -> str:
    """返回情绪标签的极性：positive/negative/neutral"""
    if label in POSITIVE_EMOTIONS:
        return "positive"
    if label in NEGATIVE_EMOTIONS:
        return "negative"
    return "neutral"
