"""
主动关怀数据模型
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from iris_care.core.types import CareResponse, CareTone, CareType


def new_opportunity_id(care_type: CareType) -> str:
    """机会ID以类型开头，便于从ID反查类型"""
    return f"{care_type.value}_{uuid.uuid4().hex}"


def care_type_from_id(opportunity_id: str) -> Optional[CareType]:
    """从机会ID前缀解析关怀类型，无法识别时返回None"""
    # 类型名本身含下划线，按最长前缀匹配
    for care_type in sorted(CareType, key=lambda t: len(t.value), reverse=True):
        if opportunity_id.startswith(care_type.value + "_") or opportunity_id == care_type.value:
            return care_type
    return None


@dataclass
class CareTrigger:
    """触发条件"""
    condition: str
    value: float
    threshold: float


@dataclass
class CareSuggestion:
    """检测器给出的建议（消息生成器会重新选取模板）"""
    title: str
    message: str
    action: Optional[str] = None
    tone: CareTone = CareTone.GENTLE


@dataclass
class CareOpportunity:
    """关怀机会"""
    type: CareType
    priority: int
    trigger: CareTrigger
    suggestion: CareSuggestion
    id: str = ""
    timestamp: datetime = field(default_factory=datetime.now)
    related_data: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not self.id:
            self.id = new_opportunity_id(self.type)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": self.timestamp.isoformat(),
            "type": self.type.value,
            "priority": self.priority,
            "trigger": {
                "condition": self.trigger.condition,
                "value": self.trigger.value,
                "threshold": self.trigger.threshold,
            },
            "suggestion": {
                "title": self.suggestion.title,
                "message": self.suggestion.message,
                "action": self.suggestion.action,
                "tone": self.suggestion.tone.value,
            },
        }


@dataclass
class GeneratedCareMessage:
    """最终展示给用户的关怀消息"""
    title: str
    message: str
    action: Optional[str] = None
    tone: CareTone = CareTone.GENTLE


@dataclass
class CareHistory:
    """关怀反馈记录"""
    timestamp: datetime
    opportunity_id: str
    type: CareType
    response: CareResponse
    user_feedback: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp.isoformat(),
            "opportunity_id": self.opportunity_id,
            "type": self.type.value,
            "response": self.response.value,
            "user_feedback": self.user_feedback,
        }


@dataclass
class CareDelivery:
    """一次完整关怀周期的产出"""
    opportunity: CareOpportunity
    message: GeneratedCareMessage
