"""
对话交互数据模型
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from iris_care.core.types import EmotionType, ResponseTone
from iris_care.models.behavior import BehaviorData
from iris_care.models.care import CareOpportunity


@dataclass
class InteractionContext:
    """一次交互的输入"""
    user_input: Optional[str] = None
    behavior_data: Optional[Union[BehaviorData, Dict[str, Any]]] = None


@dataclass
class ResponseMetadata:
    generation_time: datetime
    model: str = "emotion-engine"
    tokens_used: int = 0
    confidence: float = 0.5


@dataclass
class GeneratedResponse:
    """基于情绪生成的回复"""
    text: str
    emotion: EmotionType
    tone: ResponseTone
    metadata: ResponseMetadata
    care_opportunities: List[CareOpportunity] = field(default_factory=list)
