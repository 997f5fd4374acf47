"""
情感分析结果数据模型
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from iris_care.core.types import EmotionType, MoodTrend, SentimentLabel


@dataclass
class SentimentDetails:
    """分项得分（诊断用）"""
    lexical_score: float = 0.0
    syntactic_score: float = 0.0
    contextual_score: float = 0.0


@dataclass
class SentimentResult:
    """单条文本的情感分析结果"""
    sentiment: SentimentLabel = SentimentLabel.NEUTRAL
    confidence: float = 0.5  # 0-1
    emotion: EmotionType = EmotionType.NEUTRAL
    score: float = 0.0  # -1 到 1
    keywords: List[str] = field(default_factory=list)
    details: Optional[SentimentDetails] = None

    @property
    def is_negative(self) -> bool:
        return self.sentiment == SentimentLabel.NEGATIVE

    @property
    def is_positive(self) -> bool:
        return self.sentiment == SentimentLabel.POSITIVE

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "sentiment": self.sentiment.value,
            "confidence": self.confidence,
            "emotion": self.emotion.value,
            "score": self.score,
            "keywords": list(self.keywords),
        }
        if self.details is not None:
            data["details"] = {
                "lexical_score": self.details.lexical_score,
                "syntactic_score": self.details.syntactic_score,
                "contextual_score": self.details.contextual_score,
            }
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SentimentResult":
        details = data.get("details")
        return cls(
            sentiment=SentimentLabel(data.get("sentiment", SentimentLabel.NEUTRAL.value)),
            confidence=data.get("confidence", 0.5),
            emotion=EmotionType(data.get("emotion", EmotionType.NEUTRAL.value)),
            score=data.get("score", 0.0),
            keywords=list(data.get("keywords", [])),
            details=SentimentDetails(**details) if details else None,
        )


@dataclass
class ConversationSentiment:
    """多轮对话的情感概况"""
    overall: SentimentResult
    trend: MoodTrend = MoodTrend.STABLE
    average_score: float = 0.0
