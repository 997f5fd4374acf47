"""
共享限流工具

提供两种限流器：
- ``CooldownTracker``       ─ 基于时间戳的冷却（per-key）
- ``RollingWindowCounter``  ─ 基于固定窗口重置的计数限流

两者都从注入的时钟读取时间。
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Dict, Optional

from iris_care.core.clock import Clock, SystemClock


class CooldownTracker:
    """基于 Dict[key, datetime] 的冷却追踪器。

    用法::

        tracker = CooldownTracker(cooldown_seconds=900, clock=clock)
        if tracker.is_ready("notify"):
            do_work()
            tracker.record("notify")
    """

    def __init__(self, cooldown_seconds: float, clock: Optional[Clock] = None):
        self.cooldown_seconds = cooldown_seconds
        self._clock = clock or SystemClock()
        self._last_call: Dict[str, datetime] = {}

    def is_ready(self, key: str) -> bool:
        """检查 key 是否已过冷却期"""
        last = self._last_call.get(key)
        if last is None:
            return True
        return (self._clock.now() - last).total_seconds() >= self.cooldown_seconds

    def record(self, key: str, at: Optional[datetime] = None) -> None:
        """记录一次调用"""
        self._last_call[key] = at or self._clock.now()

    def last_call(self, key: str) -> Optional[datetime]:
        return self._last_call.get(key)

    def clear(self, key: Optional[str] = None) -> None:
        """清除某个 key 或全部冷却记录"""
        if key is None:
            self._last_call.clear()
        else:
            self._last_call.pop(key, None)


class RollingWindowCounter:
    """窗口计数限流器。

    距上次重置超过 ``window`` 时计数清零；``limit <= 0`` 表示不限制。

    用法::

        counter = RollingWindowCounter(limit=3, window=timedelta(hours=1), clock=clock)
        if counter.is_within_limit():
            do_work()
            counter.increment()
    """

    def __init__(self, limit: int, window: timedelta, clock: Optional[Clock] = None):
        self.limit = limit
        self.window = window
        self._clock = clock or SystemClock()
        self._count: int = 0
        self._last_reset: datetime = self._clock.now()

    # ------ internal ------

    def _reset_if_expired(self) -> None:
        now = self._clock.now()
        if now - self._last_reset > self.window:
            self._count = 0
            self._last_reset = now

    # ------ public API ------

    def is_within_limit(self) -> bool:
        """检查当前窗口内是否仍有额度"""
        self._reset_if_expired()
        if self.limit <= 0:
            return True
        return self._count < self.limit

    def increment(self) -> None:
        """记录一次成功调用"""
        self._reset_if_expired()
        self._count += 1

    @property
    def count(self) -> int:
        return self._count

    @property
    def last_reset(self) -> datetime:
        return self._last_reset

    @property
    def remaining(self) -> int:
        """剩余可用次数。-1 = 无限制。"""
        self._reset_if_expired()
        if self.limit <= 0:
            return -1
        return max(0, self.limit - self._count)
