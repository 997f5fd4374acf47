"""
情感记忆系统

把情感事件转换为带重要度和衰减率的记忆，负责相似记忆合并、容量淘汰、
按天衰减，并对外提供查询、模式分析、洞察与统计。
"""

from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from iris_care.analysis.memory_analyzer import MemoryAnalyzer
from iris_care.core.clock import Clock, SystemClock
from iris_care.core.config_manager import MemoryConfig
from iris_care.core.constants import IMPORTANT_MEMORIES_LIMIT, INSIGHT_WINDOW
from iris_care.models.emotion_event import EmotionEvent
from iris_care.models.emotion_memory import (
    EmotionInsights,
    EmotionMemory,
    EmotionPattern,
    MemoryContent,
    MemoryQuery,
    SortField,
    SortOrder,
)
from iris_care.storage.memory_storage import SECONDS_PER_DAY, MemoryStorage
from iris_care.utils.logger import get_logger

logger = get_logger("emotion_memory")


class EmotionMemoryStore:
    """情感记忆系统

    每次调用内完成全部变更（合并、淘汰、衰减），不依赖后台任务。
    """

    def __init__(
        self,
        config: Optional[MemoryConfig] = None,
        clock: Optional[Clock] = None,
        analyzer: Optional[MemoryAnalyzer] = None,
    ):
        self.config = config or MemoryConfig()
        self._clock = clock or SystemClock()
        self.storage = MemoryStorage(self.config, self._clock)
        self.analyzer = analyzer or MemoryAnalyzer()
        self._last_decay_time: datetime = self._clock.now()

    # ========== 写入 ==========

    def _build_memory(self, event: EmotionEvent) -> EmotionMemory:
        context: Dict[str, Any] = {
            "type": event.type.value,
            "source": event.source,
            "sentiment": event.sentiment.sentiment.value,
            "text": event.context.text,
            "intensity": event.context.intensity,
            "metadata": dict(event.context.metadata),
        }
        if event.context.behavior is not None:
            context["behavior"] = event.context.behavior.to_dict()

        return EmotionMemory(
            id=event.id,
            created_at=event.timestamp,
            last_accessed=event.timestamp,
            access_count=1,
            emotion=event.emotion,
            intensity=event.sentiment.confidence,
            content=MemoryContent(
                description=self.storage.generate_description(event),
                keywords=list(event.sentiment.keywords),
                context=context,
            ),
            importance=self.storage.calculate_importance(event),
            decay_rate=self.storage.calculate_decay_rate(event),
        )

    def record_event(self, event: EmotionEvent) -> str:
        """记录情感事件，返回新记忆或被合并记忆的ID"""
        memory = self._build_memory(event)

        similar = self.storage.find_similar(memory, self.config.merge_threshold)
        if similar is not None:
            logger.debug(f"Merging event {event.id} into memory {similar.id}")
            return self.storage.merge(similar.id, memory)

        self.storage.store(memory)
        if self.storage.size() > self.config.max_memories:
            self.storage.cleanup(self.config.max_memories)

        logger.debug(
            f"Memory stored: id={memory.id}, emotion={memory.emotion.value}, "
            f"importance={memory.importance:.2f}, decay_rate={memory.decay_rate:.3f}"
        )
        return memory.id

    # ========== 衰减 ==========

    def apply_decay(self, force: bool = False) -> bool:
        """按经过的天数衰减全部记忆的重要度

        距上次衰减不足一天时跳过（force=True 时不跳过）。

        Returns:
            是否执行了衰减
        """
        now = self._clock.now()
        days_passed = (now - self._last_decay_time).total_seconds() / SECONDS_PER_DAY
        if days_passed < 1 and not force:
            return False

        days_passed = max(days_passed, 0.0)
        for memory in self.storage.get_all():
            memory.importance = max(0.0, memory.importance - memory.decay_rate * days_passed)

        self._last_decay_time = now
        logger.info(f"Decay applied: days_passed={days_passed:.2f}, memories={self.storage.size()}")
        return True

    # ========== 查询 ==========

    def find_memory(self, memory_id: str) -> Optional[EmotionMemory]:
        return self.storage.find(memory_id)

    def query_memories(self, query: Optional[MemoryQuery] = None, **kwargs) -> List[EmotionMemory]:
        """查询记忆，可以传 MemoryQuery 或同名关键字参数"""
        if query is None:
            query = MemoryQuery(**kwargs)
        return self.storage.query(query)

    def get_important_memories(self, threshold: Optional[float] = None) -> List[EmotionMemory]:
        if threshold is None:
            threshold = self.config.importance_threshold
        return self.query_memories(
            min_importance=threshold,
            sort_by=SortField.IMPORTANCE,
            sort_order=SortOrder.DESC,
            limit=IMPORTANT_MEMORIES_LIMIT,
        )

    def get_recent_memories(self, days: float = 7) -> List[EmotionMemory]:
        now = self._clock.now()
        return self.query_memories(
            start=now - timedelta(days=days),
            end=now,
            sort_by=SortField.TIMESTAMP,
            sort_order=SortOrder.DESC,
        )

    def get_memories_since(self, minutes: float, limit: Optional[int] = None) -> List[EmotionMemory]:
        """最近若干分钟内的记忆，按时间倒序"""
        now = self._clock.now()
        return self.query_memories(
            start=now - timedelta(minutes=minutes),
            end=now,
            sort_by=SortField.TIMESTAMP,
            sort_order=SortOrder.DESC,
            limit=limit,
        )

    # ========== 分析 ==========

    def analyze_patterns(self, days: int = 30) -> List[EmotionPattern]:
        return self.analyzer.analyze_patterns(self.get_recent_memories(days), days)

    def get_insights(self) -> EmotionInsights:
        memories = self.query_memories(
            sort_by=SortField.TIMESTAMP,
            sort_order=SortOrder.DESC,
            limit=INSIGHT_WINDOW,
        )
        return self.analyzer.get_insights(memories)

    def get_statistics(self) -> Dict[str, Any]:
        return self.analyzer.get_statistics(self.storage.get_all())

    # ========== 快照 ==========

    def export_memories(self) -> List[Dict[str, Any]]:
        """导出全部记忆（按创建时间排序），供外部持久化"""
        memories = sorted(self.storage.get_all(), key=lambda m: m.created_at)
        return [m.to_dict() for m in memories]

    def import_memories(self, records: List[Dict[str, Any]]) -> int:
        """导入记忆快照，同ID覆盖；超出容量时按淘汰规则清理

        Returns:
            导入的记忆数量
        """
        count = 0
        for record in records:
            self.storage.store(EmotionMemory.from_dict(record))
            count += 1
        if self.storage.size() > self.config.max_memories:
            self.storage.cleanup(self.config.max_memories)
        logger.info(f"Imported {count} memories, total={self.storage.size()}")
        return count

    def size(self) -> int:
        return self.storage.size()

    def clear(self) -> None:
        self.storage.clear()
