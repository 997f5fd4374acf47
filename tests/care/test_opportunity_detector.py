"""
OpportunityDetector测试
测试各关怀规则的触发条件、过滤、排序与去重
"""

from datetime import datetime

import pytest

from iris_care.care.opportunity_detector import OpportunityDetector
from iris_care.core.types import CareType, EventType, SentimentLabel
from iris_care.models.care import CareOpportunity, CareSuggestion, CareTrigger
from iris_care.models.sentiment import SentimentResult


@pytest.fixture
def detector(care_config, clock):
    return OpportunityDetector(care_config, clock)


def rest_now(make_event):
    """刚刚休息过，屏蔽 break_reminder"""
    return make_event(event_type=EventType.INTERACTION, action="rest")


def types_of(opportunities):
    return [o.type for o in opportunities]


class TestBehaviorRules:
    """测试基于行为特征的规则"""

    def test_high_stress(self, detector, make_behavior):
        opportunities = detector.detect_all(None, make_behavior(stress=0.85))

        assert opportunities[0].type == CareType.HIGH_STRESS
        assert opportunities[0].priority == 9
        assert opportunities[0].trigger.condition == "high_stress_level"
        assert opportunities[0].trigger.value == 0.85
        assert opportunities[0].suggestion.action == "rest_suggestion"
        assert types_of(opportunities) == [
            CareType.HIGH_STRESS, CareType.BREATHING_EXERCISE, CareType.BREAK_REMINDER,
        ]

    def test_stress_at_threshold_does_not_trigger(self, detector, make_behavior, make_event):
        opportunities = detector.detect_all(None, make_behavior(stress=0.7), [rest_now(make_event)])
        assert CareType.HIGH_STRESS not in types_of(opportunities)
        assert CareType.BREATHING_EXERCISE in types_of(opportunities)

    def test_long_work(self, detector, make_behavior, make_event):
        opportunities = detector.detect_all(None, make_behavior(work_hours=9), [rest_now(make_event)])

        assert types_of(opportunities) == [CareType.LONG_WORK]
        assert opportunities[0].trigger.value == pytest.approx(0.9)
        assert opportunities[0].priority == 7

    def test_low_energy(self, detector, make_behavior, make_event):
        opportunities = detector.detect_all(None, make_behavior(energy=0.3), [rest_now(make_event)])
        assert types_of(opportunities) == [CareType.LOW_ENERGY]
        assert opportunities[0].suggestion.action == "energy_boost"

    def test_health_warning_on_energy_floor(self, detector, make_behavior, make_event):
        opportunities = detector.detect_all(None, make_behavior(energy=0.05), [rest_now(make_event)])

        assert opportunities[0].type == CareType.HEALTH_WARNING
        assert opportunities[0].priority == 10
        assert types_of(opportunities) == [CareType.HEALTH_WARNING, CareType.LOW_ENERGY]

    def test_health_warning_on_focus_floor(self, detector, make_behavior, make_event):
        opportunities = detector.detect_all(None, make_behavior(focus=0.1), [rest_now(make_event)])
        assert types_of(opportunities) == [CareType.HEALTH_WARNING]

    def test_behavior_rules_skipped_without_behavior(self, detector, make_event):
        opportunities = detector.detect_all(None, None, [rest_now(make_event)])
        assert opportunities == []


class TestSentimentRules:
    """测试基于情感与事件的规则"""

    def test_low_mood(self, detector, make_event):
        sentiment = SentimentResult(sentiment=SentimentLabel.NEGATIVE, confidence=0.7, score=-0.5)
        opportunities = detector.detect_all(sentiment, None, [rest_now(make_event)])

        assert types_of(opportunities) == [CareType.LOW_MOOD]
        assert opportunities[0].priority == 8

    def test_low_mood_requires_confidence_above_threshold(self, detector, make_event):
        sentiment = SentimentResult(sentiment=SentimentLabel.NEGATIVE, confidence=0.6, score=-0.5)
        assert detector.detect_all(sentiment, None, [rest_now(make_event)]) == []

    def test_emotional_support(self, detector, make_event):
        events = [make_event(SentimentLabel.NEGATIVE, minutes_ago=m) for m in (1, 10, 20)]
        events.append(rest_now(make_event))
        opportunities = detector.detect_all(None, None, events)

        assert CareType.EMOTIONAL_SUPPORT in types_of(opportunities)
        support = opportunities[types_of(opportunities).index(CareType.EMOTIONAL_SUPPORT)]
        assert support.trigger.value == 3
        assert support.priority == 8

    def test_emotional_support_window(self, detector, make_event):
        events = [make_event(SentimentLabel.NEGATIVE, minutes_ago=m) for m in (1, 10, 30)]
        events.append(rest_now(make_event))
        assert CareType.EMOTIONAL_SUPPORT not in types_of(detector.detect_all(None, None, events))

    def test_achievement(self, detector, make_event):
        events = [make_event(SentimentLabel.POSITIVE, minutes_ago=m) for m in range(0, 50, 10)]
        events.append(rest_now(make_event))
        opportunities = detector.detect_all(None, None, events)

        assert types_of(opportunities) == [CareType.ACHIEVEMENT_CELEBRATION]
        assert opportunities[0].priority == 4
        assert opportunities[0].suggestion.action == "celebrate"

    def test_meditation(self, detector, make_behavior, make_event):
        events = [make_event(SentimentLabel.NEGATIVE, minutes_ago=m) for m in (40, 45, 50)]
        events.append(rest_now(make_event))
        opportunities = detector.detect_all(None, make_behavior(stress=0.5), events)

        # 0.5×0.5 + 0.5×1.0 = 0.75
        assert types_of(opportunities) == [CareType.MEDITATION_SUGGESTION]
        assert opportunities[0].trigger.value == pytest.approx(0.75)


class TestTimeRules:
    """测试与时间相关的规则"""

    def test_break_reminder_fallback(self, detector):
        """没有休息记录时假定45分钟前休息过"""
        opportunities = detector.detect_all(None, None, [])

        assert types_of(opportunities) == [CareType.BREAK_REMINDER]
        assert opportunities[0].trigger.value == pytest.approx(45)
        assert opportunities[0].suggestion.message == "已经工作了45分钟，起来活动一下吧！"

    def test_recent_break_suppresses_reminder(self, detector, make_event):
        rest = make_event(event_type=EventType.INTERACTION, action="relax", minutes_ago=7)
        assert detector.detect_all(None, None, [rest]) == []

    @pytest.mark.parametrize("hour, fires", [(21, True), (23, True), (2, True), (4, False), (12, False)])
    def test_bedtime_story(self, detector, make_event, clock, hour, fires):
        clock.set(datetime(2024, 1, 1, hour, 0))
        opportunities = detector.detect_all(None, None, [rest_now(make_event)])
        assert (CareType.BEDTIME_STORY in types_of(opportunities)) is fires


class TestFilterAndRank:
    """测试过滤、排序与去重"""

    def test_disabled_care(self, care_config, clock, make_behavior):
        care_config.enabled = False
        detector = OpportunityDetector(care_config, clock)
        assert detector.detect_all(None, make_behavior(stress=1.0, energy=0.0)) == []

    def test_disabled_type_filtered(self, care_config, clock, make_behavior):
        care_config.care_types[CareType.BREAK_REMINDER].enabled = False
        detector = OpportunityDetector(care_config, clock)
        assert CareType.BREAK_REMINDER not in types_of(detector.detect_all(None, make_behavior()))

    def test_unconfigured_type_skipped(self, care_config, clock):
        del care_config.care_types[CareType.BREAK_REMINDER]
        detector = OpportunityDetector(care_config, clock)
        assert detector.detect_all(None, None, []) == []

    def test_dedup_keeps_first_of_each_type(self, detector):
        def make(care_type, priority, tag):
            return CareOpportunity(
                type=care_type,
                priority=priority,
                trigger=CareTrigger("test", 1.0, 0.5),
                suggestion=CareSuggestion(tag, tag),
            )

        ranked = detector.filter_and_rank([
            make(CareType.LOW_MOOD, 5, "first"),
            make(CareType.HIGH_STRESS, 9, "stress"),
            make(CareType.LOW_MOOD, 5, "second"),
            make(CareType.LONG_WORK, 5, "work"),
        ])

        assert types_of(ranked) == [CareType.HIGH_STRESS, CareType.LOW_MOOD, CareType.LONG_WORK]
        assert ranked[1].suggestion.title == "first"

    def test_results_sorted_and_unique(self, detector, make_behavior, make_event):
        events = [make_event(SentimentLabel.NEGATIVE, minutes_ago=m) for m in (1, 2, 3)]
        sentiment = SentimentResult(sentiment=SentimentLabel.NEGATIVE, confidence=0.9, score=-0.9)
        opportunities = detector.detect_all(sentiment, make_behavior(stress=0.95, energy=0.05, work_hours=12), events)

        priorities = [o.priority for o in opportunities]
        assert priorities == sorted(priorities, reverse=True)
        assert len(set(types_of(opportunities))) == len(opportunities)
        assert opportunities[0].type == CareType.HEALTH_WARNING

    def test_update_config(self, detector, care_config, make_behavior, make_event):
        config = care_config.copy()
        config.care_types[CareType.HIGH_STRESS].threshold = 0.9
        detector.update_config(config)
        assert CareType.HIGH_STRESS not in types_of(
            detector.detect_all(None, make_behavior(stress=0.85), [rest_now(make_event)])
        )
