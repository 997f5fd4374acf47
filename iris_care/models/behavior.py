"""
行为数据与行为分析结果模型
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List

from iris_care.core.types import BehaviorPattern


def _as_number(value: Any) -> float:
    """缺失、非数值或非有限字段一律按0处理"""
    if isinstance(value, bool):
        return 0.0
    try:
        result = float(value)
    except (TypeError, ValueError):
        return 0.0
    return result if math.isfinite(result) else 0.0


@dataclass
class AppUsage:
    """应用使用情况"""
    name: str = ""
    duration: float = 0.0  # 分钟
    frequency: int = 0


@dataclass
class BehaviorData:
    """一个采样周期内的行为遥测"""
    typing_speed: float = 0.0      # 字/分钟
    work_duration: float = 0.0     # 连续工作分钟数
    break_interval: float = 0.0    # 休息间隔（分钟）
    window_switches: float = 0.0   # 周期内窗口切换次数
    mouse_movements: float = 0.0
    active_hours: List[int] = field(default_factory=list)
    app_usage: List[AppUsage] = field(default_factory=list)

    @property
    def work_hours(self) -> float:
        return self.work_duration / 60

    @property
    def switches_per_hour(self) -> float:
        """每小时窗口切换次数，工作时长为0时记为0"""
        if self.work_hours <= 0:
            return 0.0
        return self.window_switches / self.work_hours

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BehaviorData":
        """容错构造：缺失、None 或非数值字段都按0处理"""
        data = data or {}
        apps = []
        for app in data.get("app_usage") or []:
            if isinstance(app, dict):
                apps.append(AppUsage(
                    name=str(app.get("name", "")),
                    duration=_as_number(app.get("duration")),
                    frequency=int(_as_number(app.get("frequency"))),
                ))
        active_hours = [
            int(h) for h in (data.get("active_hours") or [])
            if isinstance(h, (int, float)) and not isinstance(h, bool) and math.isfinite(h)
        ]
        return cls(
            typing_speed=_as_number(data.get("typing_speed")),
            work_duration=_as_number(data.get("work_duration")),
            break_interval=_as_number(data.get("break_interval")),
            window_switches=_as_number(data.get("window_switches")),
            mouse_movements=_as_number(data.get("mouse_movements")),
            active_hours=active_hours,
            app_usage=apps,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "typing_speed": self.typing_speed,
            "work_duration": self.work_duration,
            "break_interval": self.break_interval,
            "window_switches": self.window_switches,
            "mouse_movements": self.mouse_movements,
            "active_hours": list(self.active_hours),
            "app_usage": [
                {"name": a.name, "duration": a.duration, "frequency": a.frequency}
                for a in self.app_usage
            ],
        }


@dataclass
class BehaviorCharacteristics:
    """行为特征评分，均在 [0, 1]"""
    stress_level: float = 0.0
    focus_level: float = 0.5
    energy_level: float = 0.5
    productivity_level: float = 0.5


@dataclass
class BehaviorPatternResult:
    """行为模式分析结果"""
    pattern: BehaviorPattern = BehaviorPattern.FOCUSED
    confidence: float = 0.5
    characteristics: BehaviorCharacteristics = field(default_factory=BehaviorCharacteristics)
    suggestions: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    work_hours: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pattern": self.pattern.value,
            "confidence": self.confidence,
            "characteristics": {
                "stress_level": self.characteristics.stress_level,
                "focus_level": self.characteristics.focus_level,
                "energy_level": self.characteristics.energy_level,
                "productivity_level": self.characteristics.productivity_level,
            },
            "suggestions": list(self.suggestions),
            "warnings": list(self.warnings),
            "work_hours": self.work_hours,
        }
