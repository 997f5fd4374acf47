"""
关怀消息生成器
从模板池中随机选择措辞，并记录用户对每次关怀的评分
"""

import random
from typing import Dict, List, Optional

from iris_care.care.message_templates import MESSAGE_TEMPLATES, MessageTemplate
from iris_care.core.constants import FALLBACK_CARE_MESSAGE, FALLBACK_CARE_TITLE
from iris_care.core.types import CareTone, CareType
from iris_care.models.care import CareOpportunity, GeneratedCareMessage
from iris_care.utils.bounded_dict import BoundedDict
from iris_care.utils.logger import get_logger

logger = get_logger("message_generator")

FALLBACK_TEMPLATE = MessageTemplate(FALLBACK_CARE_TITLE, FALLBACK_CARE_MESSAGE, CareTone.GENTLE)


class MessageGenerator:
    """关怀消息生成器

    Args:
        templates: 模板池，默认使用内置模板
        rng: 随机数生成器，测试时可传入固定种子
        max_preferences: 最多保留的偏好评分条数
    """

    def __init__(
        self,
        templates: Optional[Dict[CareType, List[MessageTemplate]]] = None,
        rng: Optional[random.Random] = None,
        max_preferences: int = 1000,
    ):
        self.templates = templates if templates is not None else MESSAGE_TEMPLATES
        self._rng = rng or random.Random()
        self._preferences: BoundedDict[str, float] = BoundedDict(max_size=max_preferences)

    def generate(self, opportunity: CareOpportunity) -> GeneratedCareMessage:
        pool = self.templates.get(opportunity.type) or []
        template = self._rng.choice(pool) if pool else FALLBACK_TEMPLATE
        if not pool:
            logger.warning(f"No templates for {opportunity.type.value}, using fallback")

        return GeneratedCareMessage(
            title=template.title,
            message=template.message,
            action=opportunity.suggestion.action,
            tone=template.tone,
        )

    def learn_preference(self, opportunity_id: str, rating: float) -> float:
        """更新该关怀的偏好评分：新值 = (旧值 + 评分) / 2，旧值默认为0"""
        current = self._preferences.get(opportunity_id, 0.0)
        updated = (current + rating) / 2
        self._preferences[opportunity_id] = updated
        logger.debug(f"Preference updated: {opportunity_id} -> {updated:.2f}")
        return updated

    def get_preference(self, opportunity_id: str) -> Optional[float]:
        return self._preferences.get(opportunity_id)

    @property
    def preferences(self) -> Dict[str, float]:
        return self._preferences.snapshot()
