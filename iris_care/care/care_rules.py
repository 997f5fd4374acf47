"""
关怀规则辅助函数

配置读取（阈值/优先级/启用状态）以及检测规则共用的事件窗口计算。
"""

from datetime import datetime, timedelta
from typing import Iterable, List, Optional

from iris_care.core.config_manager import CareConfig
from iris_care.core.constants import DEFAULT_BREAK_AGE_MINUTES, NIGHT_FACTORS, REST_ACTIONS
from iris_care.core.types import CareType, EventType, SentimentLabel
from iris_care.models.emotion_event import EmotionEvent


def is_care_type_enabled(care_type: CareType, config: CareConfig) -> bool:
    """未配置的类型视为禁用"""
    type_config = config.get_type_config(care_type)
    return type_config is not None and type_config.enabled


def get_care_threshold(care_type: CareType, config: CareConfig) -> Optional[float]:
    type_config = config.get_type_config(care_type)
    return None if type_config is None else type_config.threshold


def get_care_priority(care_type: CareType, config: CareConfig) -> int:
    """优先级取自配置，截断到 [1, 10]"""
    type_config = config.get_type_config(care_type)
    if type_config is None:
        return 1
    return max(1, min(10, int(type_config.priority)))


def is_rest_event(event: EmotionEvent) -> bool:
    return event.type == EventType.INTERACTION and event.context.action in REST_ACTIONS


def last_break_time(events: Iterable[EmotionEvent], now: datetime) -> datetime:
    """最近一次休息类交互的时间；找不到时假定45分钟前休息过"""
    rest_times = [e.timestamp for e in events if is_rest_event(e)]
    if rest_times:
        return max(rest_times)
    return now - timedelta(minutes=DEFAULT_BREAK_AGE_MINUTES)


def events_within(events: Iterable[EmotionEvent], now: datetime, minutes: float) -> List[EmotionEvent]:
    """时间窗口内的事件（不含窗口边界本身）"""
    window = timedelta(minutes=minutes)
    return [e for e in events if now - e.timestamp < window]


def count_sentiment_within(
    events: Iterable[EmotionEvent],
    now: datetime,
    minutes: float,
    label: SentimentLabel,
) -> int:
    return sum(1 for e in events_within(events, now, minutes) if e.sentiment.sentiment == label)


def negative_ratio(events: Iterable[EmotionEvent], now: datetime, minutes: float, min_events: int) -> float:
    """窗口内负面事件占比，事件数不足 min_events 时记为0"""
    recent = [e for e in events_within(events, now, minutes) if e.type != EventType.INTERACTION]
    if len(recent) < min_events:
        return 0.0
    negatives = sum(1 for e in recent if e.sentiment.sentiment == SentimentLabel.NEGATIVE)
    return negatives / len(recent)


def night_factor(hour: int) -> float:
    """深夜系数：22:00-01:59 为1.0，21点和02:00-03:59 为0.6，其余为0"""
    return NIGHT_FACTORS.get(hour, 0.0)
