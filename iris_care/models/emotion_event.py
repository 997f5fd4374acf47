"""
情感事件数据模型

一次聊天、一次行为采样或一次交互都会被记录为一个情感事件。
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from iris_care.core.types import EmotionType, EventType
from iris_care.models.behavior import BehaviorData
from iris_care.models.sentiment import SentimentResult


@dataclass
class EventContext:
    """事件上下文"""
    text: Optional[str] = None
    behavior: Optional[BehaviorData] = None
    intensity: float = 0.0
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def action(self) -> Optional[str]:
        """交互动作（metadata.action）"""
        action = self.metadata.get("action")
        return action if isinstance(action, str) else None


@dataclass
class EmotionEvent:
    """情感事件"""
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    timestamp: datetime = field(default_factory=datetime.now)
    type: EventType = EventType.CHAT
    source: str = "user_input"
    emotion: EmotionType = EmotionType.NEUTRAL
    sentiment: SentimentResult = field(default_factory=SentimentResult)
    context: EventContext = field(default_factory=EventContext)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": self.timestamp.isoformat(),
            "type": self.type.value,
            "source": self.source,
            "emotion": self.emotion.value,
            "sentiment": self.sentiment.to_dict(),
            "context": {
                "text": self.context.text,
                "behavior": self.context.behavior.to_dict() if self.context.behavior else None,
                "intensity": self.context.intensity,
                "metadata": dict(self.context.metadata),
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EmotionEvent":
        context = data.get("context") or {}
        behavior = context.get("behavior")
        timestamp = data.get("timestamp")
        if isinstance(timestamp, str):
            timestamp = datetime.fromisoformat(timestamp)
        return cls(
            id=data.get("id") or uuid.uuid4().hex,
            timestamp=timestamp or datetime.now(),
            type=EventType(data.get("type", EventType.CHAT.value)),
            source=data.get("source", "user_input"),
            emotion=EmotionType(data.get("emotion", EmotionType.NEUTRAL.value)),
            sentiment=SentimentResult.from_dict(data.get("sentiment") or {}),
            context=EventContext(
                text=context.get("text"),
                behavior=BehaviorData.from_dict(behavior) if behavior else None,
                intensity=context.get("intensity", 0.0),
                metadata=dict(context.get("metadata") or {}),
            ),
        )
