"""
pytest测试配置文件

提供固定时钟、固定随机种子以及情感事件、行为分析结果的构造工具。
"""

import random
from datetime import datetime, timedelta

import pytest

from iris_care.analysis.behavior_analyzer import BehaviorAnalyzer
from iris_care.analysis.sentiment_analyzer import SentimentAnalyzer
from iris_care.care.care_engine import CareEngine
from iris_care.core.clock import ManualClock
from iris_care.core.config_manager import MemoryConfig, default_care_config
from iris_care.core.types import BehaviorPattern, EmotionType, EventType, SentimentLabel
from iris_care.models.behavior import BehaviorCharacteristics, BehaviorPatternResult
from iris_care.models.emotion_event import EmotionEvent, EventContext
from iris_care.models.sentiment import SentimentResult
from iris_care.services.emotion_engine import EmotionEngine
from iris_care.storage.emotion_memory_store import EmotionMemoryStore


@pytest.fixture
def clock():
    """固定在 2024-01-01 12:00 的手动时钟"""
    return ManualClock(datetime(2024, 1, 1, 12, 0))


@pytest.fixture
def rng():
    return random.Random(42)


@pytest.fixture
def care_config():
    return default_care_config()


@pytest.fixture
def sentiment_analyzer():
    return SentimentAnalyzer()


@pytest.fixture
def behavior_analyzer():
    return BehaviorAnalyzer()


@pytest.fixture
def care_engine(care_config, clock, rng):
    return CareEngine(care_config, clock, rng)


@pytest.fixture
def memory_store(clock):
    return EmotionMemoryStore(MemoryConfig(), clock)


@pytest.fixture
def emotion_engine(sentiment_analyzer, behavior_analyzer, memory_store, care_engine, clock, rng):
    return EmotionEngine(
        sentiment_analyzer=sentiment_analyzer,
        behavior_analyzer=behavior_analyzer,
        memory_store=memory_store,
        care_engine=care_engine,
        clock=clock,
        rng=rng,
    )


@pytest.fixture
def make_event(clock):
    """情感事件工厂"""

    def _make(
        sentiment=SentimentLabel.NEUTRAL,
        minutes_ago=0,
        event_type=EventType.CHAT,
        action=None,
        emotion=EmotionType.NEUTRAL,
        confidence=0.5,
        score=0.0,
        keywords=(),
    ):
        metadata = {"action": action} if action else {}
        return EmotionEvent(
            timestamp=clock.now() - timedelta(minutes=minutes_ago),
            type=event_type,
            emotion=emotion,
            sentiment=SentimentResult(
                sentiment=sentiment,
                confidence=confidence,
                emotion=emotion,
                score=score,
                keywords=list(keywords),
            ),
            context=EventContext(text="test", intensity=confidence, metadata=metadata),
        )

    return _make


@pytest.fixture
def make_behavior():
    """行为分析结果工厂"""

    def _make(stress=0.0, focus=0.5, energy=0.5, productivity=0.5, work_hours=0.0,
              pattern=BehaviorPattern.FOCUSED):
        return BehaviorPatternResult(
            pattern=pattern,
            confidence=0.8,
            characteristics=BehaviorCharacteristics(
                stress_level=stress,
                focus_level=focus,
                energy_level=energy,
                productivity_level=productivity,
            ),
            work_hours=work_hours,
        )

    return _make
