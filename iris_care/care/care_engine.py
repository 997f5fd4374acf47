"""
关怀引擎

组合机会检测、消息生成和通知控制的门面。
"""

import random
from typing import Any, Dict, List, Optional, Sequence, Union

from iris_care.care.message_generator import MessageGenerator
from iris_care.care.notification_controller import NotificationController
from iris_care.care.opportunity_detector import OpportunityDetector
from iris_care.core.clock import Clock, SystemClock
from iris_care.core.config_manager import CareConfig, default_care_config, merge_care_config
from iris_care.core.types import CareResponse, CareType
from iris_care.models.behavior import BehaviorPatternResult
from iris_care.models.care import CareHistory, CareOpportunity, GeneratedCareMessage
from iris_care.models.emotion_event import EmotionEvent
from iris_care.models.sentiment import SentimentResult
from iris_care.utils.logger import get_logger

logger = get_logger("care_engine")


class CareEngine:
    """关怀引擎

    Args:
        config: 关怀配置，默认使用内置默认值
        clock: 时钟，默认系统时钟
        rng: 消息模板选择用的随机数生成器
    """

    def __init__(
        self,
        config: Optional[CareConfig] = None,
        clock: Optional[Clock] = None,
        rng: Optional[random.Random] = None,
    ):
        self._config = (config or default_care_config()).copy()
        self._clock = clock or SystemClock()
        self.detector = OpportunityDetector(self._config, self._clock)
        self.generator = MessageGenerator(rng=rng)
        self.controller = NotificationController(self._config, self._clock)

    def detect_opportunities(
        self,
        sentiment: Optional[SentimentResult],
        behavior: Optional[BehaviorPatternResult],
        recent_events: Sequence[EmotionEvent] = (),
    ) -> List[CareOpportunity]:
        return self.detector.detect_all(sentiment, behavior, recent_events)

    def generate_care_message(self, opportunity: CareOpportunity) -> GeneratedCareMessage:
        return self.generator.generate(opportunity)

    def can_notify(self) -> bool:
        return self.controller.can_notify()

    def record_notification(self, opportunity_id: str, care_type: Optional[CareType] = None) -> None:
        self.controller.record_notification(opportunity_id, care_type)

    def record_feedback(
        self,
        opportunity_id: str,
        response: Union[CareResponse, str],
        rating: Optional[float] = None,
    ) -> CareHistory:
        entry = self.controller.record_feedback(opportunity_id, CareResponse(response), rating)
        # 评分同步给消息生成器
        if rating is not None and self._config.personalization.learning_enabled:
            self.generator.learn_preference(opportunity_id, rating)
        return entry

    def get_care_statistics(self) -> Dict[str, Any]:
        return self.controller.get_statistics()

    def get_history(self) -> List[CareHistory]:
        return self.controller.get_history()

    def update_config(self, new_config: Union[CareConfig, Dict[str, Any], None]) -> CareConfig:
        """合并新配置并重建检测器；通知控制器保留计数状态"""
        self._config = merge_care_config(self._config, new_config)
        self.detector = OpportunityDetector(self._config, self._clock)
        self.controller.update_config(self._config)
        logger.info(
            f"Care config updated: enabled={self._config.enabled}, "
            f"min_interval={self._config.min_interval_minutes}min"
        )
        return self.get_config()

    def get_config(self) -> CareConfig:
        return self._config.copy()
