"""
情感引擎

组合情感分析、行为分析、情感记忆与关怀引擎的顶层门面。
所有组件显式注入，不使用模块级单例。

数据流：
    文本 → SentimentAnalyzer → 记录为聊天事件 → EmotionMemoryStore
    行为数据 → BehaviorAnalyzer ─┐
    最近一小时事件 ──────────────┴→ CareEngine.detect_opportunities
        → can_notify → generate_care_message → record_notification
"""

import random
import uuid
from collections import deque
from datetime import timedelta
from typing import Any, Deque, Dict, List, Optional, Union

from iris_care.analysis.behavior_analyzer import BehaviorAnalyzer
from iris_care.analysis.sentiment_analyzer import SentimentAnalyzer
from iris_care.care.care_engine import CareEngine
from iris_care.core.clock import Clock, SystemClock
from iris_care.core.config_manager import ConfigManager
from iris_care.core.constants import RECENT_EVENTS_LIMIT
from iris_care.core.types import (
    CareResponse,
    EmotionType,
    EventType,
    ResponseTone,
    SentimentLabel,
)
from iris_care.models.behavior import BehaviorData, BehaviorPatternResult
from iris_care.models.care import CareDelivery, CareHistory, CareOpportunity, GeneratedCareMessage
from iris_care.models.emotion_event import EmotionEvent, EventContext
from iris_care.models.emotion_memory import EmotionInsights, EmotionMemory, EmotionPattern
from iris_care.models.interaction import GeneratedResponse, InteractionContext, ResponseMetadata
from iris_care.models.sentiment import SentimentResult
from iris_care.storage.emotion_memory_store import EmotionMemoryStore
from iris_care.utils.logger import DebugLogger, get_logger

logger = get_logger("emotion_engine")

RECENT_WINDOW_MINUTES = 60
HIGH_PRIORITY_CARE = 8
CARING_CONFIDENCE = 0.8

GREETING_TEXT = "你好！我是你的AI伙伴，有什么我可以帮助你的吗？"

RESPONSE_POOLS: Dict[EmotionType, List[str]] = {
    EmotionType.HAPPY: [
        "看到你这么开心，我也很高兴！",
        "你的好心情感染了我～",
        "继续保持这种快乐的状态！",
    ],
    EmotionType.EXCITED: [
        "哇，你看起来很兴奋！",
        "有什么好事发生吗？",
        "你的热情真感染人！",
    ],
    EmotionType.SAD: [
        "我注意到你似乎有些难过，想聊聊吗？",
        "虽然我无法完全理解你的感受，但我会在这里陪着你。",
        "要记住，难过的日子总会过去的。",
    ],
    EmotionType.THINKING: [
        "在思考什么呢？可以和我分享吗？",
        "看起来你在想事情，需要帮助吗？",
        "思考是好事，慢慢来。",
    ],
    EmotionType.NEUTRAL: [
        "今天怎么样？",
        "我在这里陪着你。",
        "有什么想聊的吗？",
    ],
}

BehaviorInput = Union[BehaviorData, Dict[str, Any]]


class EmotionEngine:
    """情感引擎

    Args:
        sentiment_analyzer: 情感分析器
        behavior_analyzer: 行为分析器
        memory_store: 情感记忆系统
        care_engine: 关怀引擎
        clock: 时钟
        rng: 回复文本选择用的随机数生成器
    """

    def __init__(
        self,
        sentiment_analyzer: Optional[SentimentAnalyzer] = None,
        behavior_analyzer: Optional[BehaviorAnalyzer] = None,
        memory_store: Optional[EmotionMemoryStore] = None,
        care_engine: Optional[CareEngine] = None,
        clock: Optional[Clock] = None,
        rng: Optional[random.Random] = None,
    ):
        self._clock = clock or SystemClock()
        self._rng = rng or random.Random()
        self.sentiment_analyzer = sentiment_analyzer or SentimentAnalyzer()
        self.behavior_analyzer = behavior_analyzer or BehaviorAnalyzer()
        self.memory_store = memory_store or EmotionMemoryStore(clock=self._clock)
        self.care_engine = care_engine or CareEngine(clock=self._clock, rng=self._rng)
        self._recent_events: Deque[EmotionEvent] = deque(maxlen=RECENT_EVENTS_LIMIT)

    @classmethod
    def from_config(
        cls,
        config_manager: ConfigManager,
        clock: Optional[Clock] = None,
        rng: Optional[random.Random] = None,
    ) -> "EmotionEngine":
        """按配置管理器中的用户配置组装全部组件"""
        clock = clock or SystemClock()
        rng = rng or random.Random()
        return cls(
            sentiment_analyzer=SentimentAnalyzer(),
            behavior_analyzer=BehaviorAnalyzer(**config_manager.behavior_overrides),
            memory_store=EmotionMemoryStore(config_manager.memory_config, clock),
            care_engine=CareEngine(config_manager.care_config, clock, rng),
            clock=clock,
            rng=rng,
        )

    # ========== 分析 ==========

    def analyze_text(self, text: Optional[str]) -> SentimentResult:
        """分析文本并记录为一次聊天事件"""
        result = self.sentiment_analyzer.analyze(text)
        event = EmotionEvent(
            id=f"chat_{uuid.uuid4().hex}",
            timestamp=self._clock.now(),
            type=EventType.CHAT,
            source="user_input",
            emotion=result.emotion,
            sentiment=result,
            context=EventContext(text=text, intensity=result.confidence),
        )
        self._remember(event)
        self.memory_store.record_event(event)
        return result

    def analyze_behavior(self, behavior_data: Optional[BehaviorInput]) -> BehaviorPatternResult:
        return self.behavior_analyzer.analyze(behavior_data)

    def record_interaction(self, action: str, metadata: Optional[Dict[str, Any]] = None) -> EmotionEvent:
        """记录一次用户交互（如 rest/sleep/break/relax），供休息提醒判断"""
        event_metadata = dict(metadata or {})
        event_metadata["action"] = action
        event = EmotionEvent(
            id=f"interaction_{uuid.uuid4().hex}",
            timestamp=self._clock.now(),
            type=EventType.INTERACTION,
            source="user_action",
            context=EventContext(metadata=event_metadata),
        )
        self._remember(event)
        logger.debug(f"Interaction recorded: action={action}")
        return event

    def _remember(self, event: EmotionEvent) -> None:
        self._recent_events.append(event)

    # ========== 关怀 ==========

    def get_recent_events(self, minutes: float = RECENT_WINDOW_MINUTES) -> List[EmotionEvent]:
        """最近若干分钟内的事件

        优先使用本进程记录的事件；为空时从情感记忆还原。
        """
        since = self._clock.now() - timedelta(minutes=minutes)
        events = [e for e in self._recent_events if e.timestamp >= since]
        if events:
            return events

        memories = self.memory_store.get_memories_since(minutes, limit=RECENT_EVENTS_LIMIT)
        return [self._memory_to_event(m) for m in memories]

    @staticmethod
    def _memory_to_event(memory: EmotionMemory) -> EmotionEvent:
        context = memory.content.context
        label = context.get("sentiment", SentimentLabel.NEUTRAL.value)
        try:
            sentiment_label = SentimentLabel(label)
        except ValueError:
            sentiment_label = SentimentLabel.NEUTRAL
        return EmotionEvent(
            id=memory.id,
            timestamp=memory.created_at,
            type=EventType.SYSTEM,
            source="memory",
            emotion=memory.emotion,
            sentiment=SentimentResult(
                sentiment=sentiment_label,
                confidence=memory.intensity,
                emotion=memory.emotion,
                score=0.0,
                keywords=list(memory.keywords),
            ),
            context=EventContext(
                text=context.get("text"),
                intensity=context.get("intensity", memory.intensity),
                metadata=dict(context.get("metadata") or {}),
            ),
        )

    def detect_care_opportunities(
        self,
        sentiment: Optional[SentimentResult],
        behavior_data: Optional[BehaviorInput] = None,
    ) -> List[CareOpportunity]:
        behavior = self.analyze_behavior(behavior_data) if behavior_data is not None else None
        return self.care_engine.detect_opportunities(sentiment, behavior, self.get_recent_events())

    def generate_care_message(self, opportunity: CareOpportunity) -> GeneratedCareMessage:
        return self.care_engine.generate_care_message(opportunity)

    def run_care_cycle(
        self,
        text: Optional[str] = None,
        behavior_data: Optional[BehaviorInput] = None,
    ) -> Optional[CareDelivery]:
        """完整关怀周期：检测 → 通知闸门 → 生成消息 → 记录通知

        Returns:
            实际发出的关怀；没有机会或被通知控制拦截时返回 None
        """
        with DebugLogger("care_cycle"):
            sentiment = self.analyze_text(text) if text else None
            opportunities = self.detect_care_opportunities(sentiment, behavior_data)
            if not opportunities:
                return None

            if not self.care_engine.can_notify():
                logger.debug(f"Care suppressed by notification control: {opportunities[0].type.value}")
                return None

            top = opportunities[0]
            message = self.care_engine.generate_care_message(top)
            self.care_engine.record_notification(top.id, top.type)
            logger.info(f"Care delivered: type={top.type.value}, priority={top.priority}")
            return CareDelivery(opportunity=top, message=message)

    def record_care_feedback(
        self,
        opportunity_id: str,
        response: Union[CareResponse, str],
        rating: Optional[float] = None,
    ) -> CareHistory:
        return self.care_engine.record_feedback(opportunity_id, response, rating)

    def get_care_statistics(self) -> Dict[str, Any]:
        return self.care_engine.get_care_statistics()

    # ========== 回复 ==========

    def generate_response(self, context: InteractionContext) -> GeneratedResponse:
        """根据用户输入的情绪生成回复，高优先级关怀会前置到回复中"""
        if not context.user_input:
            return GeneratedResponse(
                text=GREETING_TEXT,
                emotion=EmotionType.NEUTRAL,
                tone=ResponseTone.FRIENDLY,
                metadata=ResponseMetadata(generation_time=self._clock.now(), confidence=0.5),
            )

        sentiment = self.analyze_text(context.user_input)
        pool = RESPONSE_POOLS.get(sentiment.emotion, RESPONSE_POOLS[EmotionType.NEUTRAL])
        text = self._rng.choice(pool)

        opportunities: List[CareOpportunity] = []
        if context.behavior_data is not None:
            opportunities = self.detect_care_opportunities(sentiment, context.behavior_data)
            urgent = next((o for o in opportunities if o.priority >= HIGH_PRIORITY_CARE), None)
            if urgent is not None:
                care_message = self.generate_care_message(urgent)
                text = f"{care_message.message}\n\n{text}"

        tone = ResponseTone.CARING if sentiment.confidence > CARING_CONFIDENCE else ResponseTone.FRIENDLY
        return GeneratedResponse(
            text=text,
            emotion=sentiment.emotion,
            tone=tone,
            care_opportunities=opportunities,
            metadata=ResponseMetadata(
                generation_time=self._clock.now(),
                tokens_used=len(text),
                confidence=sentiment.confidence,
            ),
        )

    # ========== 记忆 ==========

    def get_emotional_insights(self) -> EmotionInsights:
        return self.memory_store.get_insights()

    def get_emotional_patterns(self, days: int = 30) -> List[EmotionPattern]:
        return self.memory_store.analyze_patterns(days)

    def get_memory_statistics(self) -> Dict[str, Any]:
        return self.memory_store.get_statistics()

    def cleanup(self) -> bool:
        """执行记忆衰减（距上次不足一天时跳过）"""
        return self.memory_store.apply_decay()
