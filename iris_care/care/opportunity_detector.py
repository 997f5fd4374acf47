"""
关怀机会检测器

每条规则独立地把一个实时信号与该类型的配置阈值比较，命中则生成一个关怀机会；
全部规则执行完后过滤禁用类型、按优先级降序排序、按类型去重。
"""

from typing import Any, Callable, Dict, List, Optional, Sequence

from iris_care.care.care_rules import (
    count_sentiment_within,
    get_care_priority,
    get_care_threshold,
    is_care_type_enabled,
    last_break_time,
    negative_ratio,
    night_factor,
)
from iris_care.core.clock import Clock, SystemClock
from iris_care.core.config_manager import CareConfig, default_care_config
from iris_care.core.constants import (
    ACHIEVEMENT_MIN_EVENTS,
    ACHIEVEMENT_WINDOW_MINUTES,
    BREAK_THRESHOLD_SCALE_MINUTES,
    EMOTIONAL_SUPPORT_MIN_EVENTS,
    EMOTIONAL_SUPPORT_WINDOW_MINUTES,
    HEALTH_ENERGY_FLOOR,
    HEALTH_FOCUS_FLOOR,
    LONG_WORK_HOURS_SCALE,
    MEDITATION_MIN_EVENTS,
    MEDITATION_WINDOW_MINUTES,
)
from iris_care.core.types import CareTone, CareType, SentimentLabel
from iris_care.models.behavior import BehaviorPatternResult
from iris_care.models.care import CareOpportunity, CareSuggestion, CareTrigger
from iris_care.models.emotion_event import EmotionEvent
from iris_care.models.sentiment import SentimentResult
from iris_care.utils.logger import get_logger

logger = get_logger("opportunity_detector")


class DetectionContext:
    """一次检测所需的全部输入"""

    def __init__(
        self,
        sentiment: Optional[SentimentResult],
        behavior: Optional[BehaviorPatternResult],
        events: Sequence[EmotionEvent],
        clock: Clock,
    ):
        self.sentiment = sentiment
        self.behavior = behavior
        self.events = list(events)
        self.now = clock.now()


class OpportunityDetector:
    """关怀机会检测器"""

    def __init__(self, config: Optional[CareConfig] = None, clock: Optional[Clock] = None):
        self.config = config or default_care_config()
        self._clock = clock or SystemClock()
        self._rules: List[Callable[[DetectionContext], Optional[CareOpportunity]]] = [
            self._check_low_mood,
            self._check_high_stress,
            self._check_long_work,
            self._check_low_energy,
            self._check_break_reminder,
            self._check_health_warning,
            self._check_emotional_support,
            self._check_achievement,
            self._check_breathing_exercise,
            self._check_bedtime_story,
            self._check_meditation,
        ]

    def detect_all(
        self,
        sentiment: Optional[SentimentResult],
        behavior: Optional[BehaviorPatternResult],
        recent_events: Sequence[EmotionEvent] = (),
    ) -> List[CareOpportunity]:
        """执行全部规则，返回按优先级降序且类型唯一的关怀机会

        behavior 为 None 时跳过依赖行为特征的规则。
        """
        if not self.config.enabled:
            logger.debug("Care disabled, no opportunities")
            return []

        ctx = DetectionContext(sentiment, behavior, recent_events, self._clock)
        opportunities: List[CareOpportunity] = []
        for rule in self._rules:
            opportunity = rule(ctx)
            if opportunity is not None:
                opportunities.append(opportunity)

        ranked = self.filter_and_rank(opportunities)
        logger.debug(
            f"Detected {len(opportunities)} opportunities, {len(ranked)} after ranking: "
            f"{[o.type.value for o in ranked]}"
        )
        return ranked

    def filter_and_rank(self, opportunities: List[CareOpportunity]) -> List[CareOpportunity]:
        """过滤禁用/未配置类型，按优先级降序（稳定排序），同类型只保留第一个"""
        enabled = [o for o in opportunities if is_care_type_enabled(o.type, self.config)]
        enabled.sort(key=lambda o: o.priority, reverse=True)

        unique: List[CareOpportunity] = []
        seen = set()
        for opportunity in enabled:
            if opportunity.type in seen:
                continue
            seen.add(opportunity.type)
            unique.append(opportunity)
        return unique

    # ========== 构造 ==========

    def _create(
        self,
        care_type: CareType,
        condition: str,
        value: float,
        suggestion: CareSuggestion,
        now,
        related_data: Optional[Dict[str, Any]] = None,
    ) -> CareOpportunity:
        return CareOpportunity(
            type=care_type,
            priority=get_care_priority(care_type, self.config),
            trigger=CareTrigger(
                condition=condition,
                value=value,
                threshold=get_care_threshold(care_type, self.config),
            ),
            suggestion=suggestion,
            timestamp=now,
            related_data=related_data or {},
        )

    def _threshold(self, care_type: CareType) -> Optional[float]:
        """未配置的类型返回 None，对应规则直接跳过"""
        return get_care_threshold(care_type, self.config)

    # ========== 规则 ==========

    def _check_low_mood(self, ctx: DetectionContext) -> Optional[CareOpportunity]:
        threshold = self._threshold(CareType.LOW_MOOD)
        sentiment = ctx.sentiment
        if threshold is None or sentiment is None:
            return None
        if sentiment.sentiment != SentimentLabel.NEGATIVE or sentiment.confidence <= threshold:
            return None
        return self._create(
            CareType.LOW_MOOD, "negative_sentiment", sentiment.confidence,
            CareSuggestion("需要陪伴", "我注意到你心情不太好，需要我陪陪你吗？", tone=CareTone.SUPPORTIVE),
            ctx.now, {"sentiment": sentiment},
        )

    def _check_high_stress(self, ctx: DetectionContext) -> Optional[CareOpportunity]:
        threshold = self._threshold(CareType.HIGH_STRESS)
        if threshold is None or ctx.behavior is None:
            return None
        stress = ctx.behavior.characteristics.stress_level
        if stress <= threshold:
            return None
        return self._create(
            CareType.HIGH_STRESS, "high_stress_level", stress,
            CareSuggestion(
                "休息一下吧", "你看起来压力很大，建议休息一下。试试深呼吸或简单的伸展运动？",
                action="rest_suggestion",
            ),
            ctx.now, {"behavior": ctx.behavior},
        )

    def _check_long_work(self, ctx: DetectionContext) -> Optional[CareOpportunity]:
        threshold = self._threshold(CareType.LONG_WORK)
        if threshold is None or ctx.behavior is None:
            return None
        # 阈值 0.8 对应 8 小时
        value = ctx.behavior.work_hours / LONG_WORK_HOURS_SCALE
        if value <= threshold:
            return None
        return self._create(
            CareType.LONG_WORK, "long_work_duration", value,
            CareSuggestion("工作时间过长", "已经连续工作很久了，休息一下吧！你的健康很重要。", action="take_break"),
            ctx.now, {"behavior": ctx.behavior, "work_hours": ctx.behavior.work_hours},
        )

    def _check_low_energy(self, ctx: DetectionContext) -> Optional[CareOpportunity]:
        threshold = self._threshold(CareType.LOW_ENERGY)
        if threshold is None or ctx.behavior is None:
            return None
        energy = ctx.behavior.characteristics.energy_level
        if energy >= threshold:
            return None
        return self._create(
            CareType.LOW_ENERGY, "low_energy_level", energy,
            CareSuggestion("补充能量", "看起来有点累，要不要喝杯水或吃个小点心？", action="energy_boost"),
            ctx.now, {"behavior": ctx.behavior},
        )

    def _check_break_reminder(self, ctx: DetectionContext) -> Optional[CareOpportunity]:
        threshold = self._threshold(CareType.BREAK_REMINDER)
        if threshold is None:
            return None
        last_break = last_break_time(ctx.events, ctx.now)
        minutes_since_break = (ctx.now - last_break).total_seconds() / 60
        if minutes_since_break <= threshold * BREAK_THRESHOLD_SCALE_MINUTES:
            return None
        return self._create(
            CareType.BREAK_REMINDER, "long_since_break", minutes_since_break,
            CareSuggestion(
                "休息时间", f"已经工作了{int(minutes_since_break)}分钟，起来活动一下吧！",
                action="take_break",
            ),
            ctx.now, {"minutes_since_break": minutes_since_break},
        )

    def _check_health_warning(self, ctx: DetectionContext) -> Optional[CareOpportunity]:
        threshold = self._threshold(CareType.HEALTH_WARNING)
        if threshold is None or ctx.behavior is None:
            return None
        c = ctx.behavior.characteristics
        if not (
            c.stress_level > threshold
            or c.energy_level < HEALTH_ENERGY_FLOOR
            or c.focus_level < HEALTH_FOCUS_FLOOR
        ):
            return None
        return self._create(
            CareType.HEALTH_WARNING, "health_risk", 1.0,
            CareSuggestion(
                "健康提醒", "长时间的紧张工作可能影响健康，请注意劳逸结合！",
                action="health_check", tone=CareTone.URGENT,
            ),
            ctx.now, {"behavior": ctx.behavior},
        )

    def _check_emotional_support(self, ctx: DetectionContext) -> Optional[CareOpportunity]:
        if self._threshold(CareType.EMOTIONAL_SUPPORT) is None:
            return None
        negatives = count_sentiment_within(
            ctx.events, ctx.now, EMOTIONAL_SUPPORT_WINDOW_MINUTES, SentimentLabel.NEGATIVE,
        )
        if negatives < EMOTIONAL_SUPPORT_MIN_EVENTS:
            return None
        return self._create(
            CareType.EMOTIONAL_SUPPORT, "emotional_distress", float(negatives),
            CareSuggestion(
                "需要支持", "我在这里陪着你。如果需要聊天或只是静静坐着，我都在。",
                tone=CareTone.SUPPORTIVE,
            ),
            ctx.now, {"negative_events": negatives},
        )

    def _check_achievement(self, ctx: DetectionContext) -> Optional[CareOpportunity]:
        if self._threshold(CareType.ACHIEVEMENT_CELEBRATION) is None:
            return None
        positives = count_sentiment_within(
            ctx.events, ctx.now, ACHIEVEMENT_WINDOW_MINUTES, SentimentLabel.POSITIVE,
        )
        if positives < ACHIEVEMENT_MIN_EVENTS:
            return None
        return self._create(
            CareType.ACHIEVEMENT_CELEBRATION, "positive_achievement", float(positives),
            CareSuggestion(
                "太棒了！", "我为你感到高兴！继续保持这种积极的状态！",
                action="celebrate", tone=CareTone.CELEBRATORY,
            ),
            ctx.now, {"positive_events": positives},
        )

    def _check_breathing_exercise(self, ctx: DetectionContext) -> Optional[CareOpportunity]:
        threshold = self._threshold(CareType.BREATHING_EXERCISE)
        if threshold is None or ctx.behavior is None:
            return None
        stress = ctx.behavior.characteristics.stress_level
        if stress <= threshold:
            return None
        return self._create(
            CareType.BREATHING_EXERCISE, "elevated_stress", stress,
            CareSuggestion(
                "呼吸放松", "来做个简单的呼吸练习吧，只需要几分钟就能帮你放松身心。",
                action="breathing_exercise",
            ),
            ctx.now, {"behavior": ctx.behavior},
        )

    def _check_bedtime_story(self, ctx: DetectionContext) -> Optional[CareOpportunity]:
        threshold = self._threshold(CareType.BEDTIME_STORY)
        if threshold is None:
            return None
        factor = night_factor(ctx.now.hour)
        if factor <= threshold:
            return None
        return self._create(
            CareType.BEDTIME_STORY, "late_night", factor,
            CareSuggestion("睡前故事", "夜深了，要不要听个温馨的故事帮助入睡？", action="bedtime_story"),
            ctx.now, {"hour": ctx.now.hour},
        )

    def _check_meditation(self, ctx: DetectionContext) -> Optional[CareOpportunity]:
        threshold = self._threshold(CareType.MEDITATION_SUGGESTION)
        if threshold is None:
            return None
        stress = ctx.behavior.characteristics.stress_level if ctx.behavior is not None else 0.0
        ratio = negative_ratio(ctx.events, ctx.now, MEDITATION_WINDOW_MINUTES, MEDITATION_MIN_EVENTS)
        tension = 0.5 * stress + 0.5 * ratio
        if tension <= threshold:
            return None
        return self._create(
            CareType.MEDITATION_SUGGESTION, "sustained_tension", tension,
            CareSuggestion("冥想时刻", "花几分钟冥想一下吧，让心灵得到片刻宁静。", action="meditation"),
            ctx.now, {"stress_level": stress, "negative_ratio": ratio},
        )

    def update_config(self, config: CareConfig) -> None:
        self.config = config
