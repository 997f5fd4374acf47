"""Core module for iris care"""
from iris_care.core.defaults import DEFAULTS, get_default, get_defaults_dict
from iris_care.core.clock import Clock, ManualClock, SystemClock
from iris_care.core.config_manager import (
    CareConfig,
    CareTypeConfig,
    ConfigManager,
    DisturbanceControl,
    MemoryConfig,
    PersonalizationConfig,
    QuietHours,
    default_care_config,
    load_care_config,
    load_yaml_config,
    merge_care_config,
)

__all__ = [
    'DEFAULTS',
    'get_default',
    'get_defaults_dict',
    'Clock',
    'ManualClock',
    'SystemClock',
    'CareConfig',
    'CareTypeConfig',
    'ConfigManager',
    'DisturbanceControl',
    'MemoryConfig',
    'PersonalizationConfig',
    'QuietHours',
    'default_care_config',
    'load_care_config',
    'load_yaml_config',
    'merge_care_config',
]
