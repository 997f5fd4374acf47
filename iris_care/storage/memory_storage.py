"""
情感记忆存储

以 id -> EmotionMemory 的字典保存全部记忆，所有检索都是线性扫描，
容量由 max_memories 限制（默认1000条）。
"""

from datetime import timedelta
from typing import Dict, List, Optional

from iris_care.core.clock import Clock, SystemClock
from iris_care.core.config_manager import MemoryConfig
from iris_care.core.defaults import DEFAULTS
from iris_care.core.types import EventType
from iris_care.models.emotion_event import EmotionEvent
from iris_care.models.emotion_memory import (
    EmotionMemory,
    MemoryQuery,
    SortField,
    SortOrder,
)
from iris_care.utils.logger import get_logger

logger = get_logger("memory_storage")

SECONDS_PER_DAY = 86400


def keyword_similarity(m1: EmotionMemory, m2: EmotionMemory) -> float:
    """相似度 = 0.5 × 情绪相同 + 0.5 × 关键词重叠比例

    双方都没有关键词时关键词集合相同，重叠比例记为1。
    """
    score = 0.0
    if m1.emotion == m2.emotion:
        score += 0.5

    longest = max(len(m1.keywords), len(m2.keywords))
    if longest == 0:
        return score + 0.5
    common = [k for k in m1.keywords if k in m2.keywords]
    return score + len(common) / longest * 0.5


class MemoryStorage:
    """情感记忆存储"""

    def __init__(self, config: Optional[MemoryConfig] = None, clock: Optional[Clock] = None):
        self.config = config or MemoryConfig()
        self._clock = clock or SystemClock()
        self._memories: Dict[str, EmotionMemory] = {}

    # ========== 基础读写 ==========

    def store(self, memory: EmotionMemory) -> None:
        self._memories[memory.id] = memory

    def get(self, memory_id: str) -> Optional[EmotionMemory]:
        """读取记忆，不更新访问信息"""
        return self._memories.get(memory_id)

    def find(self, memory_id: str) -> Optional[EmotionMemory]:
        """读取记忆并更新访问时间和访问次数"""
        memory = self._memories.get(memory_id)
        if memory is not None:
            memory.last_accessed = self._clock.now()
            memory.access_count += 1
        return memory

    def delete(self, memory_id: str) -> bool:
        return self._memories.pop(memory_id, None) is not None

    def get_all(self) -> List[EmotionMemory]:
        return list(self._memories.values())

    def size(self) -> int:
        return len(self._memories)

    def clear(self) -> None:
        self._memories.clear()

    def _is_expired(self, memory: EmotionMemory) -> bool:
        age = self._clock.now() - memory.created_at
        return age >= timedelta(days=self.config.memory_expiry_days)

    # ========== 查询 ==========

    def query(self, query: Optional[MemoryQuery] = None) -> List[EmotionMemory]:
        """按条件过滤、排序并截断，过期记忆不会出现在结果中"""
        query = query or MemoryQuery()
        results = list(self._memories.values())

        if query.emotion is not None:
            results = [m for m in results if m.emotion == query.emotion]

        if query.start is not None:
            results = [m for m in results if m.created_at >= query.start]
        if query.end is not None:
            results = [m for m in results if m.created_at <= query.end]

        if query.min_importance is not None:
            results = [m for m in results if m.importance >= query.min_importance]

        if query.keywords:
            results = [
                m for m in results
                if any(q in k for q in query.keywords for k in m.keywords)
            ]

        results = [m for m in results if not self._is_expired(m)]

        sort_by = SortField(query.sort_by)
        if sort_by == SortField.IMPORTANCE:
            key = lambda m: m.importance
        elif sort_by == SortField.LAST_ACCESSED:
            key = lambda m: m.last_accessed
        else:
            key = lambda m: m.created_at
        results.sort(key=key, reverse=SortOrder(query.sort_order) == SortOrder.DESC)

        if query.limit:
            results = results[:query.limit]
        return results

    # ========== 合并与清理 ==========

    def find_similar(self, memory: EmotionMemory, threshold: float) -> Optional[EmotionMemory]:
        """返回第一条相似度超过阈值的记忆"""
        for existing in self._memories.values():
            if keyword_similarity(memory, existing) > threshold:
                return existing
        return None

    def merge(self, existing_id: str, new_memory: EmotionMemory) -> str:
        """把新记忆合并进已有记忆

        Raises:
            KeyError: existing_id 不存在
        """
        existing = self._memories.get(existing_id)
        if existing is None:
            raise KeyError(f"Memory {existing_id} not found")

        merged_keywords = list(existing.keywords)
        for keyword in new_memory.keywords:
            if keyword not in merged_keywords:
                merged_keywords.append(keyword)

        existing.content.keywords = merged_keywords
        existing.importance = max(existing.importance, new_memory.importance)
        existing.last_accessed = self._clock.now()
        existing.access_count += 1
        return existing_id

    def cleanup(self, max_count: int) -> int:
        """淘汰得分最低的记忆直到数量不超过 max_count

        得分 = importance × (1 − 距上次访问的天数)

        Returns:
            删除的记忆数量
        """
        overflow = len(self._memories) - max_count
        if overflow <= 0:
            return 0

        now = self._clock.now()

        def retention_score(memory: EmotionMemory) -> float:
            days = (now - memory.last_accessed).total_seconds() / SECONDS_PER_DAY
            return memory.importance * (1 - days)

        ranked = sorted(self._memories.values(), key=retention_score)
        for memory in ranked[:overflow]:
            del self._memories[memory.id]
        logger.debug(f"Evicted {overflow} memories, {len(self._memories)} remain")
        return overflow

    # ========== 记忆构建 ==========

    @staticmethod
    def generate_description(event: EmotionEvent) -> str:
        keywords = ", ".join(event.sentiment.keywords)
        return f"{event.emotion.value} ({keywords}) from {event.source}"

    @staticmethod
    def calculate_importance(event: EmotionEvent) -> float:
        d = DEFAULTS.memory
        sentiment = event.sentiment
        importance = sentiment.confidence

        if abs(sentiment.score) > 0.5:
            importance += d.strong_score_bonus

        importance += min(len(sentiment.keywords) * d.keyword_bonus_step, d.keyword_bonus_cap)

        if event.type == EventType.CHAT:
            importance += d.chat_source_bonus
        elif event.type == EventType.BEHAVIOR:
            importance += d.behavior_source_bonus

        return max(0.0, min(1.0, importance))

    def calculate_decay_rate(self, event: EmotionEvent) -> float:
        d = DEFAULTS.memory
        base = self.config.default_decay_rate
        if event.sentiment.is_negative:
            return base * d.negative_decay_factor
        if event.sentiment.confidence > 0.8:
            return base * d.confident_decay_factor
        return base
