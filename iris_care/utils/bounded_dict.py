"""
有界字典

按关怀机会ID保存的状态（已通知的类型、偏好评分）随运行时间不断增加，
这里用 LRU 策略限制条目数。
"""

from collections import OrderedDict
from typing import Dict, Iterator, MutableMapping, Optional, TypeVar

KT = TypeVar("KT")
VT = TypeVar("VT")


class BoundedDict(MutableMapping[KT, VT]):
    """最多保留 ``max_size`` 条的映射，超出时丢弃最久未使用的条目

    读取（``[]`` 与 ``get``）和写入都会把条目标记为最近使用。

    用法::

        notified = BoundedDict[str, CareType](max_size=1000)
        notified["high_stress_ab12"] = CareType.HIGH_STRESS
    """

    def __init__(self, max_size: int = 1000) -> None:
        self._max_size = max(1, max_size)
        self._data: "OrderedDict[KT, VT]" = OrderedDict()
        self._evicted = 0

    @property
    def max_size(self) -> int:
        return self._max_size

    @property
    def evicted(self) -> int:
        """累计被挤出的条目数"""
        return self._evicted

    def __getitem__(self, key: KT) -> VT:
        value = self._data[key]
        self._data.move_to_end(key)
        return value

    def __setitem__(self, key: KT, value: VT) -> None:
        self._data[key] = value
        self._data.move_to_end(key)
        while len(self._data) > self._max_size:
            self._data.popitem(last=False)
            self._evicted += 1

    def __delitem__(self, key: KT) -> None:
        del self._data[key]

    def __iter__(self) -> Iterator[KT]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        # 成员判断不刷新使用顺序
        return key in self._data

    def get(self, key: KT, default: Optional[VT] = None) -> Optional[VT]:  # type: ignore[override]
        if key in self._data:
            return self[key]
        return default

    def snapshot(self) -> Dict[KT, VT]:
        """按使用顺序（旧 → 新）复制当前内容，不影响顺序"""
        return dict(self._data)

    def __repr__(self) -> str:
        return f"BoundedDict(max_size={self._max_size}, size={len(self._data)})"
