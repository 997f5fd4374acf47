"""
配置管理测试
测试关怀配置合并、YAML 加载与 ConfigManager 的分区读取
"""

import logging

import pytest

from iris_care.core.config_manager import (
    CareConfig,
    CareTypeConfig,
    ConfigManager,
    MemoryConfig,
    default_care_config,
    load_care_config,
    load_yaml_config,
    merge_care_config,
)
from iris_care.core.defaults import DEFAULTS, get_default, get_defaults_dict
from iris_care.core.types import CareType


class TestDefaults:
    """测试默认配置"""

    def test_get_default(self):
        assert get_default("memory", "max_memories") == 1000
        assert get_default("care", "min_interval_minutes") == 15
        assert get_default("behavior", "long_work_hours") == 10

    def test_get_default_fallback(self):
        assert get_default("unknown", "key", "fb") == "fb"
        assert get_default("memory", "unknown", 42) == 42

    def test_get_defaults_dict(self):
        data = get_defaults_dict()
        assert set(data) == {"memory", "behavior", "care", "log"}
        assert data["care"]["quiet_hours_start"] == 22
        assert data["care"]["quiet_hours_end"] == 7


class TestDefaultCareConfig:
    """测试默认关怀配置"""

    def test_all_types_configured(self):
        config = default_care_config()
        assert set(config.care_types) == set(CareType)

    def test_default_values(self):
        config = default_care_config()
        assert config.enabled is True
        assert config.min_interval_minutes == 15
        assert config.disturbance_control.max_notifications_per_hour == 3
        assert config.disturbance_control.quiet_hours.start == 22
        assert config.disturbance_control.quiet_hours.end == 7
        assert config.care_types[CareType.HIGH_STRESS].threshold == 0.7
        assert config.care_types[CareType.HIGH_STRESS].priority == 9
        assert config.care_types[CareType.HEALTH_WARNING].priority == 10

    def test_default_configs_are_independent(self):
        """每次返回全新对象"""
        a = default_care_config()
        b = default_care_config()
        a.care_types[CareType.LOW_MOOD].threshold = 0.1
        assert b.care_types[CareType.LOW_MOOD].threshold == 0.6

    def test_to_dict_uses_type_values(self):
        data = default_care_config().to_dict()
        assert "low_mood" in data["care_types"]
        assert data["disturbance_control"]["quiet_hours"] == {"start": 22, "end": 7}


class TestMergeCareConfig:
    """测试关怀配置合并"""

    def test_none_returns_copy(self):
        base = default_care_config()
        merged = merge_care_config(base, None)
        assert merged == base
        assert merged is not base

    def test_does_not_mutate_base(self):
        base = default_care_config()
        merge_care_config(base, {"enabled": False, "care_types": {"low_mood": {"threshold": 0.1}}})
        assert base.enabled is True
        assert base.care_types[CareType.LOW_MOOD].threshold == 0.6

    def test_top_level_scalars(self):
        merged = merge_care_config(default_care_config(), {"enabled": False, "min_interval_minutes": 30})
        assert merged.enabled is False
        assert merged.min_interval_minutes == 30

    def test_nested_disturbance_merges_per_key(self):
        merged = merge_care_config(
            default_care_config(),
            {"disturbance_control": {"quiet_hours": {"start": 23}}},
        )
        assert merged.disturbance_control.quiet_hours.start == 23
        assert merged.disturbance_control.quiet_hours.end == 7
        assert merged.disturbance_control.max_notifications_per_hour == 3

    def test_care_type_merges_per_key(self):
        merged = merge_care_config(
            default_care_config(),
            {"care_types": {"high_stress": {"threshold": 0.5}}},
        )
        assert merged.care_types[CareType.HIGH_STRESS].threshold == 0.5
        assert merged.care_types[CareType.HIGH_STRESS].priority == 9
        assert merged.care_types[CareType.HIGH_STRESS].enabled is True

    def test_unknown_care_type_ignored(self, caplog):
        with caplog.at_level(logging.WARNING):
            merged = merge_care_config(default_care_config(), {"care_types": {"nap_time": {"enabled": True}}})
        assert set(merged.care_types) == set(CareType)
        assert any("nap_time" in r.getMessage() for r in caplog.records)

    def test_unknown_key_ignored(self, caplog):
        with caplog.at_level(logging.WARNING):
            merged = merge_care_config(default_care_config(), {"volume": 11})
        assert not hasattr(merged, "volume")
        assert any("volume" in r.getMessage() for r in caplog.records)

    def test_wrong_type_ignored(self):
        merged = merge_care_config(
            default_care_config(),
            {"enabled": "yes", "min_interval_minutes": "soon", "care_types": {"low_mood": {"priority": True}}},
        )
        assert merged.enabled is True
        assert merged.min_interval_minutes == 15
        assert merged.care_types[CareType.LOW_MOOD].priority == 8

    def test_non_mapping_sections_ignored(self):
        merged = merge_care_config(
            default_care_config(),
            {"disturbance_control": [1, 2], "care_types": "all", "personalization": 3},
        )
        assert merged == default_care_config()

    def test_care_config_override_replaces(self):
        custom = default_care_config()
        custom.enabled = False
        merged = merge_care_config(default_care_config(), custom)
        assert merged.enabled is False
        assert merged is not custom

    def test_personalization_merge(self):
        merged = merge_care_config(default_care_config(), {"personalization": {"learning_enabled": False}})
        assert merged.personalization.learning_enabled is False
        assert merged.personalization.custom_responses is True

    def test_from_dict(self):
        config = CareConfig.from_dict({"care_types": {"bedtime_story": {"enabled": False}}})
        assert config.care_types[CareType.BEDTIME_STORY].enabled is False

    def test_get_type_config_missing(self):
        config = default_care_config()
        del config.care_types[CareType.LOW_MOOD]
        assert config.get_type_config(CareType.LOW_MOOD) is None
        assert isinstance(config.get_type_config(CareType.LONG_WORK), CareTypeConfig)


class TestYamlLoading:
    """测试 YAML 配置加载"""

    def test_missing_file(self, tmp_path):
        assert load_yaml_config(tmp_path / "missing.yaml") == {}

    def test_none_path(self):
        assert load_yaml_config(None) == {}

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("care: [unclosed", encoding="utf-8")
        assert load_yaml_config(path) == {}

    def test_non_mapping_yaml(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        assert load_yaml_config(path) == {}

    def test_load_care_section(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "care:\n"
            "  min_interval_minutes: 5\n"
            "  care_types:\n"
            "    low_mood:\n"
            "      threshold: 0.4\n",
            encoding="utf-8",
        )
        config = load_care_config(path)
        assert config.min_interval_minutes == 5
        assert config.care_types[CareType.LOW_MOOD].threshold == 0.4

    def test_load_bare_care_config(self, tmp_path):
        """文件可以只包含 care 区块的内容"""
        path = tmp_path / "care.yaml"
        path.write_text("enabled: false\n", encoding="utf-8")
        assert load_care_config(path).enabled is False


class TestConfigManager:
    """测试 ConfigManager"""

    def test_get_prefers_user_config(self):
        manager = ConfigManager({"memory": {"max_memories": 10}})
        assert manager.get("memory.max_memories") == 10
        assert manager.get("memory.merge_threshold") == DEFAULTS.memory.merge_threshold

    def test_get_fallback(self):
        assert ConfigManager().get("nothing.here", "fb") == "fb"

    def test_memory_config(self):
        manager = ConfigManager({"memory": {"memory_expiry_days": 30}})
        config = manager.memory_config
        assert isinstance(config, MemoryConfig)
        assert config.memory_expiry_days == 30
        assert config.max_memories == 1000

    def test_care_config(self):
        manager = ConfigManager({"care": {"enabled": False}})
        assert manager.care_config.enabled is False

    def test_behavior_overrides(self):
        assert ConfigManager({"behavior": {"long_work_hours": 9}}).behavior_overrides == {"long_work_hours": 9}
        assert ConfigManager({"behavior": "x"}).behavior_overrides == {}

    def test_log_level(self):
        assert ConfigManager().log_level == "INFO"
        assert ConfigManager({"log": {"level": "DEBUG"}}).log_level == "DEBUG"

    def test_from_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("log:\n  level: WARNING\n", encoding="utf-8")
        assert ConfigManager.from_file(path).log_level == "WARNING"

    def test_set_user_config(self):
        manager = ConfigManager({"log": {"level": "DEBUG"}})
        manager.set_user_config(None)
        assert manager.log_level == "INFO"

    @pytest.mark.parametrize("key", ["memory", "memory.", ".max_memories"])
    def test_get_malformed_key(self, key):
        assert ConfigManager().get(key, "fb") == "fb"
