"""
默认配置文件 - 存放高级参数和技术性配置

这些配置通常不需要修改，只有在特殊需求时才需要调整。
关怀策略（阈值、优先级、免打扰）见 config_manager.CareConfig。
"""

from dataclasses import dataclass, field, asdict
from typing import Dict, Any


@dataclass
class MemoryDefaults:
    """情感记忆默认配置"""
    max_memories: int = 1000
    default_decay_rate: float = 0.05  # 每天
    memory_expiry_days: int = 365
    importance_threshold: float = 0.6
    merge_threshold: float = 0.8

    # 重要度加成
    strong_score_bonus: float = 0.2
    keyword_bonus_step: float = 0.05
    keyword_bonus_cap: float = 0.2
    chat_source_bonus: float = 0.1
    behavior_source_bonus: float = 0.05

    # 衰减率系数
    negative_decay_factor: float = 0.7
    confident_decay_factor: float = 0.8


@dataclass
class BehaviorDefaults:
    """行为分析默认阈值"""
    normal_work_hours: float = 8
    normal_break_interval: float = 60  # 分钟
    normal_typing_speed: float = 200  # 字/分钟
    long_work_hours: float = 10
    short_break_interval: float = 15  # 分钟
    high_typing_speed: float = 400
    high_window_switches: float = 60  # 每小时


@dataclass
class CareDefaults:
    """主动关怀默认配置"""
    enabled: bool = True
    min_interval_minutes: int = 15
    disturbance_enabled: bool = True
    max_notifications_per_hour: int = 3
    quiet_hours_start: int = 22
    quiet_hours_end: int = 7


@dataclass
class LogDefaults:
    """日志默认配置"""
    level: str = "INFO"
    console_output: bool = True
    file_output: bool = False
    max_file_size: int = 10  # MB
    backup_count: int = 5


@dataclass
class AllDefaults:
    """所有默认配置的聚合"""
    memory: MemoryDefaults = field(default_factory=MemoryDefaults)
    behavior: BehaviorDefaults = field(default_factory=BehaviorDefaults)
    care: CareDefaults = field(default_factory=CareDefaults)
    log: LogDefaults = field(default_factory=LogDefaults)


# 全局默认配置实例
DEFAULTS = AllDefaults()


def get_default(section: str, key: str, fallback: Any = None) -> Any:
    """获取默认配置值

    Args:
        section: 配置区块（如 "memory", "behavior"）
        key: 配置键
        fallback: 如果找不到时的回退值
    """
    section_obj = getattr(DEFAULTS, section, None)
    if section_obj is None:
        return fallback
    return getattr(section_obj, key, fallback)


def get_defaults_dict() -> Dict[str, Dict[str, Any]]:
    """获取所有默认配置为字典格式"""
    return {
        "memory": asdict(DEFAULTS.memory),
        "behavior": asdict(DEFAULTS.behavior),
        "care": asdict(DEFAULTS.care),
        "log": asdict(DEFAULTS.log),
    }
