"""
时钟抽象

所有与时间相关的判断（免打扰、冷却、衰减、时间窗口）都通过注入的时钟取当前时间，
测试中用 ManualClock 精确推进。
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Optional


class Clock(ABC):
    """时钟接口"""

    @abstractmethod
    def now(self) -> datetime:
        """返回当前本地时间"""


class SystemClock(Clock):
    """本地系统时钟"""

    def now(self) -> datetime:
        return datetime.now()


class ManualClock(Clock):
    """手动推进的时钟

    用法::

        clock = ManualClock(datetime(2024, 1, 1, 12, 0))
        clock.advance(minutes=5)
    """

    def __init__(self, start: Optional[datetime] = None):
        self._now = start or datetime(2024, 1, 1, 12, 0, 0)

    def now(self) -> datetime:
        return self._now

    def set(self, moment: datetime) -> None:
        self._now = moment

    def advance(self, **kwargs) -> datetime:
        """前进指定时长，参数同 timedelta"""
        self._now = self._now + timedelta(**kwargs)
        return self._now
