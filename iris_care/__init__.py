"""Iris Care - 情感分析与主动关怀引擎"""

from iris_care.core.config_manager import ConfigManager
from iris_care.services.emotion_engine import EmotionEngine

__version__ = "0.1.0"

__all__ = ["ConfigManager", "EmotionEngine", "__version__"]
