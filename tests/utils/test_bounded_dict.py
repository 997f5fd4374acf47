"""BoundedDict 单元测试"""

import pytest
from iris_care.utils.bounded_dict import BoundedDict


class TestBoundedDict:
    """BoundedDict LRU 有界字典测试"""

    def test_basic_operations(self):
        """基本读写操作"""
        d = BoundedDict[str, float](max_size=5)
        d["low_mood_1"] = 0.5
        d["high_stress_2"] = 1.0
        assert d["low_mood_1"] == 0.5
        assert len(d) == 2

    def test_eviction_on_overflow(self):
        """超出容量时驱逐最旧条目"""
        d = BoundedDict[str, int](max_size=3)
        for i, key in enumerate("abcd"):
            d[key] = i
        assert "a" not in d
        assert list(d.keys()) == ["b", "c", "d"]

    def test_get_refreshes_order(self):
        """get 命中时同样刷新使用顺序"""
        d = BoundedDict[str, int](max_size=3)
        d["a"] = 1
        d["b"] = 2
        d["c"] = 3
        assert d.get("a") == 1
        d["d"] = 4
        assert "a" in d
        assert "b" not in d

    def test_get_default(self):
        d = BoundedDict[str, int](max_size=3)
        assert d.get("missing") is None
        assert d.get("missing", 7) == 7

    def test_update_moves_to_end(self):
        """更新已有条目不增加大小，且移到末尾"""
        d = BoundedDict[str, int](max_size=3)
        d["a"] = 1
        d["b"] = 2
        d["c"] = 3
        d["a"] = 10
        d["d"] = 4
        assert d["a"] == 10
        assert "b" not in d
        assert len(d) == 3

    def test_invalid_max_size(self):
        """非法容量应被钳住为 1"""
        assert BoundedDict(max_size=0).max_size == 1
        assert BoundedDict(max_size=-1).max_size == 1

    def test_get_nonexistent_key(self):
        d = BoundedDict[str, int](max_size=5)
        with pytest.raises(KeyError):
            _ = d["missing"]

    def test_evicted_counter(self):
        d = BoundedDict[str, int](max_size=2)
        for i, key in enumerate("abcd"):
            d[key] = i
        assert d.evicted == 2

    def test_snapshot_keeps_order(self):
        d = BoundedDict[str, int](max_size=3)
        d["a"] = 1
        d["b"] = 2
        assert d.snapshot() == {"a": 1, "b": 2}
        d["c"] = 3
        d["d"] = 4
        assert list(d.snapshot()) == ["b", "c", "d"]

    def test_delete(self):
        d = BoundedDict[str, int](max_size=3)
        d["a"] = 1
        del d["a"]
        assert len(d) == 0
