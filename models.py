"""
数据模型定义
"""
# 标准库导包
from typing import Optional, Dict, Any, List, Literal
from datetime import datetime, date

# 第三方库导包
from pydantic import BaseModel, ConfigDict, Field

SentimentLabel = Literal["positive", "negative", "neutral"]
TrendDirection = Literal["improving", "declining", "stable"]


# ========== 情绪分析相关模型 ==========

class SentimentAnalysis(BaseModel):
    """情绪分析结果（不可变）"""
    model_config = ConfigDict(frozen=True)

    emotions: List[str] = Field(default_factory=list, description="情绪标签，得分高的在前")
    dominant_emotion: str = "neutral"
    intensity: int = Field(default=1, ge=1, le=10, description="强度1-10")
    sentiment: SentimentLabel = "neutral"


class PreviousEntry(BaseModel):
    """客户端传入的历史日记，只使用其中的主导情绪"""
    model_config = ConfigDict(extra="ignore")

    dominant_emotion: Optional[str] = None
    sentiment_analysis: Optional[Dict[str, Any]] = None

    def history_emotion(self) -> Optional[str]:
        if self.dominant_emotion:
            return self.dominant_emotion
        if self.sentiment_analysis:
            return self.sentiment_analysis.get("dominant_emotion")
        return None


class MoodAnalysisRequest(BaseModel):
    """单次情绪分析请求模型"""
    entry: str = Field(default="", description="日记文本")
    previous_entries: List[PreviousEntry] = Field(default_factory=list, description="历史日记，最近的在最后")
    is_incident: bool = False
    response_role: Optional[str] = Field(default=None, description="回应角色，默认supportive_friend")


class MoodAnalysisResponse(BaseModel):
    """单次情绪分析响应模型"""
    sentiment: SentimentAnalysis
    insight: str
    suggestions: List[str]
    is_incident: bool = False
    response_role: str
    timestamp: datetime
    safety_flags: List[str] = Field(default_factory=list)
    narrative_source: str = "llm"
    analysis_complete: bool = True
    error: Optional[str] = None


# ========== Journal模块相关模型 ==========

class CreateEntryRequest(BaseModel):
    """创建日记请求模型"""
    text: str = Field(..., description="日记文本，至少50字符")
    is_incident: bool = Field(default=False, description="是否为事件记录")
    response_role: Optional[str] = Field(default=None, description="回应角色")


class MoodEntry(BaseModel):
    """心情日记模型"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    timestamp: datetime
    entry_date: date
    text: str
    is_incident: bool = False
    response_role: str = "supportive_friend"
    sentiment_analysis: SentimentAnalysis
    narrative: str = ""
    suggestions: List[str] = Field(default_factory=list)
    safety_flags: List[str] = Field(default_factory=list)
    narrative_source: Optional[str] = None
    schema_version: int = 1

    @classmethod
    def from_record(cls, record: Any) -> "MoodEntry":
        """从数据库记录构建，情绪分析字段在表中是平铺存储的"""
        return cls(
            id=record.id,
            timestamp=record.timestamp,
            entry_date=record.entry_date,
            text=record.text,
            is_incident=record.is_incident,
            response_role=record.response_role,
            sentiment_analysis=SentimentAnalysis(
                emotions=list(record.emotions or []),
                dominant_emotion=record.dominant_emotion,
                intensity=record.intensity,
                sentiment=record.sentiment,
            ),
            narrative=record.narrative,
            suggestions=list(record.suggestions or []),
            safety_flags=list(record.safety_flags or []),
            narrative_source=record.narrative_source,
            schema_version=record.schema_version,
        )


class EntryListResponse(BaseModel):
    """日记列表响应模型"""
    success: bool = True
    message: str = "Fetched successfully"
    data: List[MoodEntry]
    total: int


class EntryDetailResponse(BaseModel):
    """日记详情响应模型"""
    success: bool = True
    message: str = "Fetched successfully"
    data: MoodEntry


class CreateEntryResponse(BaseModel):
    """创建日记响应模型"""
    success: bool = True
    message: str = "Created successfully"
    data: MoodEntry


# ========== 趋势相关模型 ==========

class TrendEntryInput(BaseModel):
    """趋势聚合的输入条目，兼容完整的MoodEntry"""
    model_config = ConfigDict(extra="ignore")

    timestamp: datetime
    is_incident: bool = False
    sentiment_analysis: SentimentAnalysis


class AggregateTrendsRequest(BaseModel):
    """对指定条目做趋势聚合的请求模型"""
    entries: List[TrendEntryInput] = Field(default_factory=list)
    now: Optional[datetime] = Field(default=None, description="聚合基准时间，默认当前UTC时间")


class TrendSnapshot(BaseModel):
    """趋势快照（按需计算，不持久化）"""
    weekly_trend: TrendDirection = "stable"
    monthly_entry_count: int = 0
    monthly_comparison: str = "0 entries this month"
    emotional_patterns: Dict[str, int] = Field(default_factory=dict)
    insights: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    window_size: int = 0
    generated_at: datetime


class TrendResponse(BaseModel):
    """趋势响应模型"""
    success: bool = True
    message: str = "Fetched successfully"
    data: TrendSnapshot


# ========== 陪伴聊天相关模型 ==========

class ChatRequest(BaseModel):
    """聊天请求模型"""
    message: str = ""
    context: str = Field(default="general", description="general 或 wellness")


class ChatResponse(BaseModel):
    """聊天响应模型"""
    message: str
    context: str


# ========== 语言识别相关模型 ==========

class LanguageDetectionRequest(BaseModel):
    """语言识别请求模型"""
    text: str = ""


class LanguageDetectionResponse(BaseModel):
    """语言识别响应模型"""
    language: str = "en"
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    method: Literal["pattern", "llm", "default", "fallback"] = "default"
