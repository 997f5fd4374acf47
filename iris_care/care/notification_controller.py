"""
通知控制器

决定当前是否允许发出关怀通知（总开关、免打扰时段、最小间隔、每小时上限），
并记录通知与用户反馈历史。
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from iris_care.core.clock import Clock, SystemClock
from iris_care.core.config_manager import CareConfig, default_care_config
from iris_care.core.constants import HISTORY_MAX_ENTRIES, HISTORY_TRIM_TO, TOP_CARE_TYPES_LIMIT
from iris_care.core.types import CareResponse, CareType
from iris_care.models.care import CareHistory, care_type_from_id
from iris_care.utils.bounded_dict import BoundedDict
from iris_care.utils.logger import get_logger
from iris_care.utils.rate_limiter import CooldownTracker, RollingWindowCounter

logger = get_logger("notification_controller")

NOTIFY_KEY = "care_notification"


def in_quiet_hours(hour: int, start: int, end: int) -> bool:
    """判断某个整点是否处于免打扰时段

    start > end 表示跨午夜（如 22→7）；start == end 表示不设免打扰。
    """
    if start == end:
        return False
    if start > end:
        return hour >= start or hour < end
    return start <= hour < end


@dataclass
class NotificationState:
    """通知状态快照"""
    last_notification_time: Optional[datetime]
    notification_count_this_hour: int
    last_hour_reset: datetime
    history: List[CareHistory]


class NotificationController:
    """通知控制器"""

    def __init__(self, config: Optional[CareConfig] = None, clock: Optional[Clock] = None):
        self.config = config or default_care_config()
        self._clock = clock or SystemClock()
        self._cooldown = CooldownTracker(self.config.min_interval_minutes * 60, self._clock)
        self._hourly = RollingWindowCounter(
            self.config.disturbance_control.max_notifications_per_hour,
            timedelta(hours=1),
            self._clock,
        )
        self._notified_types: BoundedDict[str, CareType] = BoundedDict(max_size=HISTORY_MAX_ENTRIES)
        self._history: List[CareHistory] = []

    def can_notify(self) -> bool:
        if not self.config.enabled:
            logger.debug("Notify blocked: care disabled")
            return False

        disturbance = self.config.disturbance_control
        if disturbance.enabled:
            hour = self._clock.now().hour
            if in_quiet_hours(hour, disturbance.quiet_hours.start, disturbance.quiet_hours.end):
                logger.debug(f"Notify blocked: quiet hours (hour={hour})")
                return False

        if not self._cooldown.is_ready(NOTIFY_KEY):
            logger.debug("Notify blocked: within minimum interval")
            return False

        if disturbance.max_notifications_per_hour <= 0 or not self._hourly.is_within_limit():
            logger.debug(f"Notify blocked: hourly cap reached ({self._hourly.count})")
            return False

        return True

    def record_notification(self, opportunity_id: str, care_type: Optional[CareType] = None) -> None:
        self._cooldown.record(NOTIFY_KEY)
        self._hourly.increment()
        if care_type is not None:
            self._notified_types[opportunity_id] = care_type
        logger.info(f"Care notification sent: {opportunity_id}")

    def record_feedback(
        self,
        opportunity_id: str,
        response: CareResponse,
        rating: Optional[float] = None,
    ) -> CareHistory:
        care_type = (
            self._notified_types.get(opportunity_id)
            or care_type_from_id(opportunity_id)
            or CareType.BREAK_REMINDER
        )
        entry = CareHistory(
            timestamp=self._clock.now(),
            opportunity_id=opportunity_id,
            type=care_type,
            response=CareResponse(response),
            user_feedback=rating,
        )
        self._history.append(entry)

        if len(self._history) > HISTORY_MAX_ENTRIES:
            self._history = self._history[-HISTORY_TRIM_TO:]

        logger.debug(f"Feedback recorded: {opportunity_id} -> {entry.response.value}, rating={rating}")
        return entry

    def get_statistics(self) -> Dict[str, Any]:
        total = len(self._history)
        accepted = sum(1 for h in self._history if h.response == CareResponse.ACCEPTED)
        dismissed = sum(1 for h in self._history if h.response == CareResponse.DISMISSED)
        rated = [h.user_feedback for h in self._history if h.user_feedback is not None]

        type_counts: Dict[str, int] = {}
        for h in self._history:
            type_counts[h.type.value] = type_counts.get(h.type.value, 0) + 1
        top_types = sorted(type_counts.items(), key=lambda item: item[1], reverse=True)

        return {
            "total_opportunities": total,
            "accepted_rate": accepted / total if total else 0.0,
            "dismissed_rate": dismissed / total if total else 0.0,
            "average_rating": sum(rated) / len(rated) if rated else 0.0,
            "top_care_types": [
                {"type": care_type, "count": count}
                for care_type, count in top_types[:TOP_CARE_TYPES_LIMIT]
            ],
        }

    def get_history(self) -> List[CareHistory]:
        return list(self._history)

    def get_state(self) -> NotificationState:
        return NotificationState(
            last_notification_time=self._cooldown.last_call(NOTIFY_KEY),
            notification_count_this_hour=self._hourly.count,
            last_hour_reset=self._hourly.last_reset,
            history=self.get_history(),
        )

    def update_config(self, config: CareConfig) -> None:
        """替换配置，冷却时间与每小时上限立即生效，已有计数保留"""
        self.config = config
        self._cooldown.cooldown_seconds = config.min_interval_minutes * 60
        self._hourly.limit = config.disturbance_control.max_notifications_per_hour
