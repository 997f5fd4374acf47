"""
配置管理器 - 统一配置访问接口

负责：
1. 定义关怀策略与记忆系统的配置结构
2. 合并用户配置和默认配置（浅合并，嵌套区块按键合并）
3. 从 YAML 文件加载用户配置
"""

import copy
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from iris_care.core.defaults import DEFAULTS, get_default
from iris_care.core.types import CareType
from iris_care.utils.logger import get_logger

logger = get_logger("config_manager")


# ========== 关怀配置结构 ==========

@dataclass
class QuietHours:
    """免打扰时段（整点，start > end 表示跨午夜）"""
    start: int = DEFAULTS.care.quiet_hours_start
    end: int = DEFAULTS.care.quiet_hours_end


@dataclass
class DisturbanceControl:
    """打扰控制"""
    enabled: bool = DEFAULTS.care.disturbance_enabled
    max_notifications_per_hour: int = DEFAULTS.care.max_notifications_per_hour
    quiet_hours: QuietHours = field(default_factory=QuietHours)


@dataclass
class CareTypeConfig:
    """单个关怀类型的配置"""
    enabled: bool = True
    threshold: float = 0.5
    priority: int = 5


@dataclass
class PersonalizationConfig:
    """个性化配置"""
    learning_enabled: bool = True
    adapt_to_user_habits: bool = True
    custom_responses: bool = True


# 各关怀类型的默认 (threshold, priority)
DEFAULT_CARE_TYPES: Dict[CareType, tuple] = {
    CareType.LOW_MOOD: (0.6, 8),
    CareType.HIGH_STRESS: (0.7, 9),
    CareType.LONG_WORK: (0.8, 7),
    CareType.LOW_ENERGY: (0.4, 6),
    CareType.BREAK_REMINDER: (0.5, 5),
    CareType.HEALTH_WARNING: (0.9, 10),
    CareType.EMOTIONAL_SUPPORT: (0.7, 8),
    CareType.ACHIEVEMENT_CELEBRATION: (0.8, 4),
    CareType.BREATHING_EXERCISE: (0.6, 7),
    CareType.BEDTIME_STORY: (0.5, 5),
    CareType.MEDITATION_SUGGESTION: (0.7, 6),
}


def _default_care_types() -> Dict[CareType, CareTypeConfig]:
    return {
        care_type: CareTypeConfig(enabled=True, threshold=threshold, priority=priority)
        for care_type, (threshold, priority) in DEFAULT_CARE_TYPES.items()
    }


@dataclass
class CareConfig:
    """主动关怀配置

    care_types 中缺失的类型视为未配置，检测结果会被静默过滤。
    """
    enabled: bool = DEFAULTS.care.enabled
    min_interval_minutes: float = DEFAULTS.care.min_interval_minutes
    disturbance_control: DisturbanceControl = field(default_factory=DisturbanceControl)
    care_types: Dict[CareType, CareTypeConfig] = field(default_factory=_default_care_types)
    personalization: PersonalizationConfig = field(default_factory=PersonalizationConfig)

    def get_type_config(self, care_type: CareType) -> Optional[CareTypeConfig]:
        return self.care_types.get(care_type)

    def copy(self) -> "CareConfig":
        return copy.deepcopy(self)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["care_types"] = {
            care_type.value: asdict(type_config)
            for care_type, type_config in self.care_types.items()
        }
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CareConfig":
        return merge_care_config(default_care_config(), data)


def default_care_config() -> CareConfig:
    """返回一份全新的默认关怀配置"""
    return CareConfig()


# ========== 合并逻辑 ==========

def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _merge_scalar_fields(target: Any, overrides: Dict[str, Any], path: str) -> None:
    """按字段覆盖数据类上的标量值，类型不符的值记录警告后忽略"""
    for key, value in overrides.items():
        if not hasattr(target, key):
            logger.warning(f"Unknown config key ignored: {path}.{key}")
            continue
        current = getattr(target, key)
        if isinstance(current, bool):
            if isinstance(value, bool):
                setattr(target, key, value)
                continue
        elif _is_number(current):
            if _is_number(value):
                setattr(target, key, value)
                continue
        else:
            # 嵌套区块由调用方处理
            continue
        logger.warning(f"Config value with wrong type ignored: {path}.{key}={value!r}")


def _merge_disturbance(target: DisturbanceControl, overrides: Any) -> None:
    if isinstance(overrides, DisturbanceControl):
        overrides = asdict(overrides)
    if not isinstance(overrides, dict):
        logger.warning(f"disturbance_control must be a mapping, got {type(overrides).__name__}")
        return
    scalars = {k: v for k, v in overrides.items() if k != "quiet_hours"}
    _merge_scalar_fields(target, scalars, "disturbance_control")
    if "quiet_hours" in overrides:
        quiet = overrides["quiet_hours"]
        if isinstance(quiet, QuietHours):
            quiet = asdict(quiet)
        if isinstance(quiet, dict):
            _merge_scalar_fields(target.quiet_hours, quiet, "disturbance_control.quiet_hours")
        else:
            logger.warning("disturbance_control.quiet_hours must be a mapping, ignored")


def _merge_care_types(target: Dict[CareType, CareTypeConfig], overrides: Any) -> None:
    if not isinstance(overrides, dict):
        logger.warning(f"care_types must be a mapping, got {type(overrides).__name__}")
        return
    for raw_type, type_overrides in overrides.items():
        try:
            care_type = CareType(raw_type)
        except ValueError:
            logger.warning(f"Unknown care type ignored: {raw_type!r}")
            continue
        if isinstance(type_overrides, CareTypeConfig):
            target[care_type] = copy.copy(type_overrides)
            continue
        if not isinstance(type_overrides, dict):
            logger.warning(f"care_types.{care_type.value} must be a mapping, ignored")
            continue
        type_config = target.get(care_type)
        if type_config is None:
            type_config = CareTypeConfig()
            target[care_type] = type_config
        _merge_scalar_fields(type_config, type_overrides, f"care_types.{care_type.value}")


def merge_care_config(
    base: CareConfig,
    overrides: Union[CareConfig, Dict[str, Any], None],
) -> CareConfig:
    """合并关怀配置，返回新的配置对象

    顶层字段浅合并；disturbance_control、care_types、personalization
    按键合并。形状不符的值只记录警告，不抛异常。
    """
    merged = base.copy()
    if overrides is None:
        return merged
    if isinstance(overrides, CareConfig):
        return overrides.copy()
    if not isinstance(overrides, dict):
        logger.warning(f"Care config override must be a mapping, got {type(overrides).__name__}")
        return merged

    scalars = {
        k: v for k, v in overrides.items()
        if k not in ("disturbance_control", "care_types", "personalization")
    }
    _merge_scalar_fields(merged, scalars, "care")

    if "disturbance_control" in overrides:
        _merge_disturbance(merged.disturbance_control, overrides["disturbance_control"])
    if "care_types" in overrides:
        _merge_care_types(merged.care_types, overrides["care_types"])
    if "personalization" in overrides:
        personalization = overrides["personalization"]
        if isinstance(personalization, PersonalizationConfig):
            merged.personalization = copy.copy(personalization)
        elif isinstance(personalization, dict):
            _merge_scalar_fields(merged.personalization, personalization, "personalization")
        else:
            logger.warning("personalization must be a mapping, ignored")
    return merged


# ========== 记忆配置 ==========

@dataclass
class MemoryConfig:
    """情感记忆配置"""
    max_memories: int = DEFAULTS.memory.max_memories
    default_decay_rate: float = DEFAULTS.memory.default_decay_rate
    memory_expiry_days: int = DEFAULTS.memory.memory_expiry_days
    importance_threshold: float = DEFAULTS.memory.importance_threshold
    merge_threshold: float = DEFAULTS.memory.merge_threshold


# ========== 配置文件 ==========

def load_yaml_config(path: Optional[Path]) -> Dict[str, Any]:
    """读取 YAML 配置文件，失败时返回空字典"""
    if path is None:
        return {}
    path = Path(path)
    if not path.exists():
        logger.warning(f"Config file not found: {path}")
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Failed to load config from {path}: {e}")
        return {}
    if not isinstance(data, dict):
        logger.warning(f"Config file {path} must contain a mapping")
        return {}
    logger.info(f"Config loaded from {path}")
    return data


def load_care_config(path: Optional[Path]) -> CareConfig:
    """从 YAML 文件加载关怀配置（文件可以是完整配置或只含 care 区块）"""
    data = load_yaml_config(path)
    care_section = data.get("care", data)
    return merge_care_config(default_care_config(), care_section)


class ConfigManager:
    """配置管理器

    统一管理用户配置（字典，通常来自 YAML）和默认配置的访问。
    """

    def __init__(self, user_config: Optional[Dict[str, Any]] = None):
        self._user_config: Dict[str, Any] = user_config or {}

    @classmethod
    def from_file(cls, path: Path) -> "ConfigManager":
        return cls(load_yaml_config(path))

    def set_user_config(self, config: Optional[Dict[str, Any]]) -> None:
        self._user_config = config or {}

    def get(self, key: str, fallback: Any = None) -> Any:
        """按 "section.key" 读取配置，用户配置优先，其次默认值"""
        section, _, attr = key.partition(".")
        user_section = self._user_config.get(section)
        if isinstance(user_section, dict) and attr in user_section:
            return user_section[attr]
        return get_default(section, attr, fallback)

    @property
    def care_config(self) -> CareConfig:
        return merge_care_config(default_care_config(), self._user_config.get("care"))

    @property
    def memory_config(self) -> MemoryConfig:
        return MemoryConfig(
            max_memories=self.get("memory.max_memories"),
            default_decay_rate=self.get("memory.default_decay_rate"),
            memory_expiry_days=self.get("memory.memory_expiry_days"),
            importance_threshold=self.get("memory.importance_threshold"),
            merge_threshold=self.get("memory.merge_threshold"),
        )

    @property
    def behavior_overrides(self) -> Dict[str, Any]:
        section = self._user_config.get("behavior")
        return dict(section) if isinstance(section, dict) else {}

    @property
    def log_level(self) -> str:
        return self.get("log.level", "INFO")
