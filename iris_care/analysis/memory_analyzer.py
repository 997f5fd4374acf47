"""
情感记忆分析器
从记忆集合中挖掘情感模式、生成情绪洞察和统计（只读，不修改记忆）
"""

from collections import Counter, defaultdict
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from iris_care.core.constants import DAY_SEGMENTS, TOP_KEYWORDS_LIMIT
from iris_care.core.types import EmotionType, MoodTrend, PatternType
from iris_care.models.emotion_memory import EmotionInsights, EmotionMemory, EmotionPattern
from iris_care.utils.logger import get_logger

logger = get_logger("memory_analyzer")

FREQUENT_THRESHOLD = 0.5    # 次/天
INTENSE_THRESHOLD = 0.7
INTENSE_CONFIDENCE = 0.8
PERIODIC_SHARE = 0.3        # 最集中的小时至少占该情绪记忆的30%
TREND_DELTA = 0.1
HIGH_INTENSITY = 0.8


def _average_intensity(memories: List[EmotionMemory]) -> float:
    if not memories:
        return 0.0
    return float(np.mean([m.intensity for m in memories]))


def _day_segment(hour: int) -> str:
    for start, end, label in DAY_SEGMENTS:
        if start <= hour < end:
            return label
    return "晚上"


class MemoryAnalyzer:
    """情感记忆分析器"""

    def analyze_patterns(self, memories: List[EmotionMemory], days: int = 30) -> List[EmotionPattern]:
        """按情绪分组，识别高频、高强度和周期性模式

        Args:
            memories: 待分析的记忆
            days: 时间范围（天），用于计算频率
        """
        days = max(days, 1)
        groups: Dict[EmotionType, List[EmotionMemory]] = defaultdict(list)
        for memory in memories:
            groups[memory.emotion].append(memory)

        patterns: List[EmotionPattern] = []
        for emotion, group in groups.items():
            label = emotion.value
            frequency = len(group) / days

            if frequency > FREQUENT_THRESHOLD:
                patterns.append(EmotionPattern(
                    type=PatternType.FREQUENT,
                    description=f"经常感到{label}",
                    emotion=emotion,
                    frequency=frequency,
                    confidence=min(frequency, 1.0),
                    suggestions=[f"经常感到{label}，建议关注情绪变化"],
                ))

            intense = [m for m in group if m.intensity > INTENSE_THRESHOLD]
            if intense:
                patterns.append(EmotionPattern(
                    type=PatternType.INTENSE,
                    description=f"偶尔有强烈的{label}情绪",
                    emotion=emotion,
                    frequency=len(intense) / days,
                    confidence=INTENSE_CONFIDENCE,
                    suggestions=[f"强烈的{label}情绪，建议寻找情绪出口"],
                ))

            periodic = self._detect_periodic(group)
            if periodic is not None:
                segment, confidence = periodic
                patterns.append(EmotionPattern(
                    type=PatternType.PERIODIC,
                    description=f"在{segment}经常感到{label}",
                    emotion=emotion,
                    frequency=frequency,
                    confidence=confidence,
                    suggestions=[f"在特定时间感到{label}，可能与作息相关"],
                ))

        logger.debug(f"Pattern analysis: memories={len(memories)}, days={days}, patterns={len(patterns)}")
        return patterns

    @staticmethod
    def _detect_periodic(memories: List[EmotionMemory]) -> Optional[Tuple[str, float]]:
        """找出记忆最集中的小时，返回 (时段, 置信度)"""
        if not memories:
            return None
        hours = np.array([m.created_at.hour for m in memories], dtype=int)
        counts = np.bincount(hours, minlength=24)
        peak_hour = int(np.argmax(counts))
        peak_count = int(counts[peak_hour])

        if peak_count < len(memories) * PERIODIC_SHARE:
            return None
        return _day_segment(peak_hour), peak_count / len(memories)

    def get_insights(self, memories: List[EmotionMemory]) -> EmotionInsights:
        """生成情绪洞察

        趋势按时间先后排序后，比较较早一半与较新一半的平均强度。
        """
        if not memories:
            return EmotionInsights(
                dominant_emotion=EmotionType.NEUTRAL,
                mood_trend=MoodTrend.STABLE,
                average_intensity=0.0,
                top_keywords=[],
                recommendations=["开始记录你的情感，让AI更好地理解你"],
            )

        ordered = sorted(memories, key=lambda m: m.created_at)

        dominant_emotion = Counter(m.emotion for m in ordered).most_common(1)[0][0]

        half = len(ordered) // 2
        older_avg = _average_intensity(ordered[:half])
        newer_avg = _average_intensity(ordered[half:])
        if newer_avg > older_avg + TREND_DELTA:
            mood_trend = MoodTrend.IMPROVING
        elif newer_avg < older_avg - TREND_DELTA:
            mood_trend = MoodTrend.DECLINING
        else:
            mood_trend = MoodTrend.STABLE

        average_intensity = _average_intensity(ordered)

        keyword_counts = Counter(k for m in ordered for k in m.keywords)
        top_keywords = [k for k, _ in keyword_counts.most_common(TOP_KEYWORDS_LIMIT)]

        patterns = self.analyze_patterns(ordered)
        recommendations = self._recommendations(mood_trend, average_intensity, patterns)

        return EmotionInsights(
            dominant_emotion=dominant_emotion,
            mood_trend=mood_trend,
            average_intensity=average_intensity,
            top_keywords=top_keywords,
            recommendations=recommendations,
        )

    @staticmethod
    def _recommendations(
        mood_trend: MoodTrend,
        average_intensity: float,
        patterns: List[EmotionPattern],
    ) -> List[str]:
        recommendations: List[str] = []

        if mood_trend == MoodTrend.DECLINING:
            recommendations.append("最近情绪呈下降趋势，建议寻求支持")
            recommendations.append("可以尝试写日记或与朋友交流")
        elif mood_trend == MoodTrend.IMPROVING:
            recommendations.append("情绪在改善，保持良好的习惯")

        if average_intensity > HIGH_INTENSITY:
            recommendations.append("情绪强度较高，注意控制情绪波动")

        if patterns:
            recommendations.append("发现了一些情绪模式，可以进一步分析")

        return recommendations

    @staticmethod
    def get_statistics(memories: List[EmotionMemory]) -> Dict[str, Any]:
        """记忆统计"""
        emotions_by_type: Dict[str, int] = dict(Counter(m.emotion.value for m in memories))
        if not memories:
            return {
                "total_memories": 0,
                "emotions_by_type": emotions_by_type,
                "average_importance": 0.0,
                "oldest_memory": None,
                "newest_memory": None,
            }
        return {
            "total_memories": len(memories),
            "emotions_by_type": emotions_by_type,
            "average_importance": float(np.mean([m.importance for m in memories])),
            "oldest_memory": min(m.created_at for m in memories),
            "newest_memory": max(m.created_at for m in memories),
        }
