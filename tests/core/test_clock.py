"""时钟测试"""

from datetime import datetime

import pytest

from iris_care.core.clock import Clock, ManualClock, SystemClock


class TestManualClock:

    def test_default_start(self):
        assert ManualClock().now() == datetime(2024, 1, 1, 12, 0, 0)

    def test_advance(self):
        clock = ManualClock(datetime(2024, 1, 1, 23, 30))
        assert clock.advance(minutes=45) == datetime(2024, 1, 2, 0, 15)
        assert clock.now() == datetime(2024, 1, 2, 0, 15)

    def test_set(self):
        clock = ManualClock()
        clock.set(datetime(2025, 6, 1, 8, 0))
        assert clock.now().hour == 8


def test_system_clock_returns_datetime():
    assert isinstance(SystemClock().now(), datetime)


def test_clock_is_abstract():
    with pytest.raises(TypeError):
        Clock()
