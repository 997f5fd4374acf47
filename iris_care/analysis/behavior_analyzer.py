"""
行为分析器
根据工作时长、休息间隔、打字速度、窗口切换等遥测推断压力/专注/精力/效率，
并按规则顺序确定行为模式
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional, Union

import numpy as np

from iris_care.core.defaults import DEFAULTS
from iris_care.core.types import BehaviorPattern
from iris_care.models.behavior import (
    BehaviorCharacteristics,
    BehaviorData,
    BehaviorPatternResult,
)
from iris_care.utils.logger import get_logger

logger = get_logger("behavior_analyzer")


@dataclass
class BehaviorThresholds:
    """行为判定阈值"""
    normal_work_hours: float = DEFAULTS.behavior.normal_work_hours
    normal_break_interval: float = DEFAULTS.behavior.normal_break_interval
    normal_typing_speed: float = DEFAULTS.behavior.normal_typing_speed
    long_work_hours: float = DEFAULTS.behavior.long_work_hours
    short_break_interval: float = DEFAULTS.behavior.short_break_interval
    high_typing_speed: float = DEFAULTS.behavior.high_typing_speed
    high_window_switches: float = DEFAULTS.behavior.high_window_switches


# 压力规则：(每单位增量, 上限)
STRESS_LONG_WORK = (0.25, 0.4)      # 每超出1小时
STRESS_SHORT_BREAK = (0.03, 0.3)    # 每少1分钟
STRESS_FAST_TYPING = (0.002, 0.2)   # 每超出1字/分钟
STRESS_WINDOW_SWITCHES = 0.2
STRESS_MOUSE = 0.1
MOUSE_HIGH = 1000
MOUSE_LOW = 100

FOCUS_DISTRACTION = 0.3   # 窗口切换过于频繁
ENERGY_RECOVERY = 0.3     # 休息充足且工作时长不超过正常时长的一半

PATTERN_SUGGESTIONS: Dict[BehaviorPattern, List[str]] = {
    BehaviorPattern.STRESSED: [
        "建议休息一下，深呼吸放松",
        "可以尝试短暂的冥想或伸展运动",
        "考虑喝杯水，缓解紧张情绪",
    ],
    BehaviorPattern.OVERWORKED: [
        "工作时间过长，请立即休息！",
        "建议休息至少15-30分钟",
        "可以听听音乐或看看远方放松眼睛",
        "长期过度工作会影响健康，请注意劳逸结合",
    ],
    BehaviorPattern.FOCUSED: [
        "保持专注，但记得适时休息",
        "可以设置番茄钟提醒",
    ],
    BehaviorPattern.PRODUCTIVE: [
        "工作效率很高，继续保持！",
        "记录下这种状态，分析什么让你更高效",
    ],
    BehaviorPattern.RELAXED: [
        "状态很放松，适合做创意性工作",
        "或者享受休闲时光",
    ],
    BehaviorPattern.BORED: [
        "觉得无聊吗？试试换个任务",
        "或者起来活动一下，换个心情",
    ],
}


def _clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


class BehaviorAnalyzer:
    """行为分析器

    四项特征各自由独立的阈值规则累加并截断到 [0, 1]；
    行为模式按固定规则顺序判定，而不是取最大特征。
    """

    def __init__(self, thresholds: Optional[BehaviorThresholds] = None, **overrides):
        self.thresholds = thresholds or BehaviorThresholds()
        if overrides:
            self.update_thresholds(**overrides)

    def analyze(self, behavior: Union[BehaviorData, Dict[str, Any], None]) -> BehaviorPatternResult:
        """分析一个周期的行为数据，缺失字段按0处理"""
        if not isinstance(behavior, BehaviorData):
            behavior = BehaviorData.from_dict(behavior or {})

        characteristics = BehaviorCharacteristics(
            stress_level=self._stress_level(behavior),
            focus_level=self._focus_level(behavior),
            energy_level=self._energy_level(behavior),
            productivity_level=self._productivity_level(behavior),
        )
        pattern = self._determine_pattern(characteristics)

        result = BehaviorPatternResult(
            pattern=pattern,
            confidence=self._confidence(characteristics),
            characteristics=characteristics,
            suggestions=self._suggestions(pattern, behavior),
            warnings=self._warnings(behavior),
            work_hours=behavior.work_hours,
        )
        logger.debug(
            f"Behavior analyzed: pattern={pattern.value}, "
            f"stress={characteristics.stress_level:.2f}, focus={characteristics.focus_level:.2f}, "
            f"energy={characteristics.energy_level:.2f}, "
            f"productivity={characteristics.productivity_level:.2f}, warnings={len(result.warnings)}"
        )
        return result

    # ========== 特征计算 ==========

    def _stress_level(self, behavior: BehaviorData) -> float:
        t = self.thresholds
        score = 0.0

        work_hours = behavior.work_hours
        if work_hours > t.long_work_hours:
            step, cap = STRESS_LONG_WORK
            score += min((work_hours - t.long_work_hours) * step, cap)

        if behavior.break_interval < t.short_break_interval:
            step, cap = STRESS_SHORT_BREAK
            score += min((t.short_break_interval - behavior.break_interval) * step, cap)

        if behavior.typing_speed > t.high_typing_speed:
            step, cap = STRESS_FAST_TYPING
            score += min((behavior.typing_speed - t.high_typing_speed) * step, cap)

        if behavior.switches_per_hour > t.high_window_switches:
            score += STRESS_WINDOW_SWITCHES

        if behavior.mouse_movements > MOUSE_HIGH:
            score += STRESS_MOUSE

        return _clamp01(score)

    def _focus_level(self, behavior: BehaviorData) -> float:
        t = self.thresholds
        score = 0.5

        if 1 <= behavior.work_hours <= 4:
            score += 0.3
        if t.normal_break_interval * 0.8 <= behavior.break_interval <= t.normal_break_interval * 1.5:
            score += 0.2
        if behavior.switches_per_hour < 30:
            score += 0.2
        elif behavior.switches_per_hour > t.high_window_switches:
            score -= FOCUS_DISTRACTION

        return _clamp01(score)

    def _energy_level(self, behavior: BehaviorData) -> float:
        t = self.thresholds
        score = 0.5

        if (behavior.break_interval >= t.normal_break_interval
                and behavior.work_hours <= t.normal_work_hours / 2):
            score += ENERGY_RECOVERY
        if behavior.work_hours > t.normal_work_hours:
            score -= min((behavior.work_hours - t.normal_work_hours) * 0.05, 0.3)
        if behavior.typing_speed < t.normal_typing_speed * 0.5:
            score -= 0.2
        if behavior.mouse_movements < MOUSE_LOW:
            score -= 0.1

        return _clamp01(score)

    def _productivity_level(self, behavior: BehaviorData) -> float:
        t = self.thresholds
        score = 0.5

        if 4 <= behavior.work_hours <= 8:
            score += 0.3
        if t.normal_typing_speed * 0.8 <= behavior.typing_speed <= t.normal_typing_speed * 1.5:
            score += 0.2
        if 20 <= behavior.switches_per_hour <= 40:
            score += 0.2

        return _clamp01(score)

    # ========== 模式与建议 ==========

    @staticmethod
    def _determine_pattern(c: BehaviorCharacteristics) -> BehaviorPattern:
        # 高压优先
        if c.stress_level > 0.7:
            return BehaviorPattern.OVERWORKED if c.energy_level < 0.3 else BehaviorPattern.STRESSED

        if c.focus_level > 0.7 and c.stress_level < 0.3:
            return BehaviorPattern.PRODUCTIVE if c.productivity_level > 0.7 else BehaviorPattern.FOCUSED

        if c.stress_level < 0.3 and c.energy_level > 0.7:
            return BehaviorPattern.RELAXED

        if c.focus_level < 0.3 and c.stress_level < 0.3 and c.energy_level > 0.5:
            return BehaviorPattern.BORED

        return BehaviorPattern.FOCUSED

    def _suggestions(self, pattern: BehaviorPattern, behavior: BehaviorData) -> List[str]:
        suggestions = list(PATTERN_SUGGESTIONS.get(pattern, []))

        if behavior.work_hours > self.thresholds.normal_work_hours:
            suggestions.append(f"已连续工作{int(behavior.work_hours)}小时，建议结束工作")
        if behavior.break_interval < self.thresholds.short_break_interval:
            suggestions.append("休息间隔太短，建议每次休息至少15分钟")

        return suggestions

    def _warnings(self, behavior: BehaviorData) -> List[str]:
        warnings: List[str] = []

        if behavior.work_hours > self.thresholds.long_work_hours:
            warnings.append("警告：工作时间过长，可能影响健康！")
        elif behavior.work_hours > self.thresholds.normal_work_hours:
            warnings.append("已超过正常工作时长，建议尽快休息")

        if behavior.break_interval < 10:
            warnings.append("休息间隔过短，可能导致疲劳累积")
        if behavior.typing_speed > 500:
            warnings.append("打字速度过快，可能处于紧张状态")
        if behavior.switches_per_hour > 80:
            warnings.append("窗口切换过于频繁，注意力可能分散")

        return warnings

    @staticmethod
    def _confidence(c: BehaviorCharacteristics) -> float:
        """三项主要特征差异越大，置信度越低"""
        variance = float(np.var([c.stress_level, c.focus_level, c.energy_level]))
        return max(0.5, 1 - variance)

    # ========== 配置 ==========

    def update_thresholds(self, **kwargs) -> None:
        """更新阈值，未知键记录警告后忽略"""
        for key, value in kwargs.items():
            if not hasattr(self.thresholds, key):
                logger.warning(f"Unknown behavior threshold ignored: {key}")
                continue
            setattr(self.thresholds, key, value)

    def get_thresholds(self) -> Dict[str, float]:
        return asdict(self.thresholds)
