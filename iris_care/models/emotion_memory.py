"""
情感记忆数据模型

EmotionMemory: 经过重要度评估、会随时间衰减的情感记忆
MemoryQuery: 记忆查询条件
EmotionPattern / EmotionInsights: 记忆分析结果
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from iris_care.core.types import EmotionType, MoodTrend, PatternType


@dataclass
class MemoryContent:
    """记忆内容"""
    description: str = ""
    keywords: List[str] = field(default_factory=list)
    context: Dict[str, Any] = field(default_factory=dict)


@dataclass
class EmotionMemory:
    """情感记忆

    decay_rate 在创建时确定，之后不再重新计算。
    """
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    created_at: datetime = field(default_factory=datetime.now)
    last_accessed: datetime = field(default_factory=datetime.now)
    access_count: int = 1
    emotion: EmotionType = EmotionType.NEUTRAL
    intensity: float = 0.5
    content: MemoryContent = field(default_factory=MemoryContent)
    importance: float = 0.5  # 0-1
    decay_rate: float = 0.05  # 每天

    @property
    def keywords(self) -> List[str]:
        return self.content.keywords

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典格式（用于序列化）"""
        data: Dict[str, Any] = {}
        for key, value in self.__dict__.items():
            if isinstance(value, datetime):
                data[key] = value.isoformat()
            elif isinstance(value, Enum):
                data[key] = value.value
            elif isinstance(value, MemoryContent):
                data[key] = {
                    "description": value.description,
                    "keywords": list(value.keywords),
                    "context": dict(value.context),
                }
            else:
                data[key] = value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EmotionMemory":
        """从字典创建EmotionMemory对象"""
        data = data.copy()
        for key in ("created_at", "last_accessed"):
            if isinstance(data.get(key), str):
                data[key] = datetime.fromisoformat(data[key])
        if isinstance(data.get("emotion"), str):
            data["emotion"] = EmotionType(data["emotion"])
        content = data.get("content")
        if isinstance(content, dict):
            data["content"] = MemoryContent(
                description=content.get("description", ""),
                keywords=list(content.get("keywords", [])),
                context=dict(content.get("context", {})),
            )
        known = set(cls.__dataclass_fields__)
        return cls(**{k: v for k, v in data.items() if k in known})


class SortField(str, Enum):
    """查询排序字段"""
    TIMESTAMP = "timestamp"
    IMPORTANCE = "importance"
    LAST_ACCESSED = "last_accessed"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass
class MemoryQuery:
    """记忆查询条件，所有条件为合取关系"""
    emotion: Optional[EmotionType] = None
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    min_importance: Optional[float] = None
    keywords: List[str] = field(default_factory=list)
    sort_by: SortField = SortField.TIMESTAMP
    sort_order: SortOrder = SortOrder.ASC
    limit: Optional[int] = None


@dataclass
class EmotionPattern:
    """情感模式"""
    type: PatternType
    description: str
    emotion: EmotionType
    frequency: float
    confidence: float
    suggestions: List[str] = field(default_factory=list)


@dataclass
class EmotionInsights:
    """情绪洞察"""
    dominant_emotion: EmotionType = EmotionType.NEUTRAL
    mood_trend: MoodTrend = MoodTrend.STABLE
    average_intensity: float = 0.0
    top_keywords: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)
