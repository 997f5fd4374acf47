"""
CareEngine测试
测试检测、反馈学习与运行时配置更新
"""

import random

from iris_care.care.care_engine import CareEngine
from iris_care.core.types import CareResponse, CareType, EventType


class TestFeedbackLearning:
    """测试反馈与偏好学习"""

    def test_rating_updates_preference(self, care_engine):
        entry = care_engine.record_feedback("high_stress_1", "accepted", 4.0)

        assert entry.response == CareResponse.ACCEPTED
        assert entry.type == CareType.HIGH_STRESS
        assert care_engine.generator.get_preference("high_stress_1") == 2.0

    def test_learning_disabled(self, care_config, clock):
        care_config.personalization.learning_enabled = False
        engine = CareEngine(care_config, clock, random.Random(0))
        engine.record_feedback("high_stress_1", CareResponse.ACCEPTED, 4.0)

        assert engine.generator.get_preference("high_stress_1") is None
        assert engine.get_care_statistics()["average_rating"] == 4.0

    def test_feedback_without_rating(self, care_engine):
        care_engine.record_feedback("low_mood_1", CareResponse.DISMISSED)
        assert care_engine.generator.get_preference("low_mood_1") is None
        assert len(care_engine.get_history()) == 1


class TestConfigUpdate:
    """测试配置更新"""

    def test_update_from_dict(self, care_engine, make_behavior, make_event):
        rest = make_event(event_type=EventType.INTERACTION, action="rest")
        assert care_engine.detect_opportunities(None, make_behavior(stress=0.85), [rest])[0].type == CareType.HIGH_STRESS

        config = care_engine.update_config({
            "min_interval_minutes": 30,
            "care_types": {"high_stress": {"threshold": 0.9}},
        })

        assert config.min_interval_minutes == 30
        assert config.care_types[CareType.HIGH_STRESS].threshold == 0.9
        assert config.care_types[CareType.HIGH_STRESS].priority == 9
        types = [o.type for o in care_engine.detect_opportunities(None, make_behavior(stress=0.85), [rest])]
        assert CareType.HIGH_STRESS not in types

    def test_update_keeps_notification_counters(self, care_engine, clock):
        care_engine.record_notification("low_mood_1", CareType.LOW_MOOD)
        care_engine.update_config({"min_interval_minutes": 5})

        clock.advance(minutes=6)
        assert care_engine.can_notify() is True
        assert care_engine.controller.get_state().notification_count_this_hour == 1

    def test_bad_values_ignored(self, care_engine):
        config = care_engine.update_config({"enabled": "yes", "min_interval_minutes": "ten"})
        assert config.enabled is True
        assert config.min_interval_minutes == 15

    def test_get_config_returns_copy(self, care_engine):
        config = care_engine.get_config()
        config.enabled = False
        assert care_engine.get_config().enabled is True

    def test_engine_owns_its_config(self, care_config, clock):
        engine = CareEngine(care_config, clock)
        care_config.enabled = False
        assert engine.get_config().enabled is True
