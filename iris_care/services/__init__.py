"""
服务层模块

- EmotionEngine: 门面，组合情感分析、行为分析、情感记忆与关怀引擎
"""
from iris_care.services.emotion_engine import EmotionEngine

__all__ = ["EmotionEngine"]
