"""关怀规则辅助函数测试"""

from datetime import timedelta

import pytest

from iris_care.care.care_rules import (
    count_sentiment_within,
    events_within,
    get_care_priority,
    get_care_threshold,
    is_care_type_enabled,
    is_rest_event,
    last_break_time,
    negative_ratio,
    night_factor,
)
from iris_care.core.types import CareType, EventType, SentimentLabel


class TestConfigLookups:

    def test_missing_type_is_disabled(self, care_config):
        del care_config.care_types[CareType.LOW_MOOD]
        assert is_care_type_enabled(CareType.LOW_MOOD, care_config) is False
        assert get_care_threshold(CareType.LOW_MOOD, care_config) is None

    def test_priority_clamped(self, care_config):
        care_config.care_types[CareType.LOW_MOOD].priority = 15
        care_config.care_types[CareType.HIGH_STRESS].priority = -3
        assert get_care_priority(CareType.LOW_MOOD, care_config) == 10
        assert get_care_priority(CareType.HIGH_STRESS, care_config) == 1


class TestEventWindows:

    def test_rest_event(self, make_event):
        assert is_rest_event(make_event(event_type=EventType.INTERACTION, action="sleep"))
        assert not is_rest_event(make_event(event_type=EventType.INTERACTION, action="click"))
        assert not is_rest_event(make_event(event_type=EventType.CHAT, action="rest"))

    def test_last_break_time(self, make_event, clock):
        events = [
            make_event(event_type=EventType.INTERACTION, action="rest", minutes_ago=30),
            make_event(event_type=EventType.INTERACTION, action="break", minutes_ago=10),
        ]
        assert last_break_time(events, clock.now()) == clock.now() - timedelta(minutes=10)

    def test_last_break_time_fallback(self, clock):
        assert last_break_time([], clock.now()) == clock.now() - timedelta(minutes=45)

    def test_window_boundary_excluded(self, make_event, clock):
        events = [make_event(minutes_ago=30), make_event(minutes_ago=29)]
        assert len(events_within(events, clock.now(), 30)) == 1

    def test_count_sentiment(self, make_event, clock):
        events = [
            make_event(SentimentLabel.NEGATIVE, minutes_ago=5),
            make_event(SentimentLabel.NEGATIVE, minutes_ago=50),
            make_event(SentimentLabel.POSITIVE, minutes_ago=5),
        ]
        assert count_sentiment_within(events, clock.now(), 30, SentimentLabel.NEGATIVE) == 1

    def test_negative_ratio(self, make_event, clock):
        events = [
            make_event(SentimentLabel.NEGATIVE),
            make_event(SentimentLabel.NEGATIVE),
            make_event(SentimentLabel.POSITIVE),
            make_event(SentimentLabel.NEGATIVE),
            make_event(event_type=EventType.INTERACTION, action="rest"),
        ]
        assert negative_ratio(events, clock.now(), 60, 3) == pytest.approx(0.75)

    def test_negative_ratio_needs_min_events(self, make_event, clock):
        events = [make_event(SentimentLabel.NEGATIVE), make_event(SentimentLabel.NEGATIVE)]
        assert negative_ratio(events, clock.now(), 60, 3) == 0.0


@pytest.mark.parametrize("hour, expected", [
    (20, 0.0), (21, 0.6), (22, 1.0), (23, 1.0), (0, 1.0), (1, 1.0), (2, 0.6), (3, 0.6), (4, 0.0), (12, 0.0),
])
def test_night_factor(hour, expected):
    assert night_factor(hour) == expected
