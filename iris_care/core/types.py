"""
核心数据类型定义
情感引擎、行为分析与主动关怀共用的枚举
"""

from enum import Enum


class SentimentLabel(str, Enum):
    """情感极性"""
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class EmotionType(str, Enum):
    """情绪标签（与展示层的表情一一对应）"""
    HAPPY = "happy"
    EXCITED = "excited"
    THINKING = "thinking"
    CONFUSED = "confused"
    SURPRISED = "surprised"
    NEUTRAL = "neutral"
    SAD = "sad"
    ANGRY = "angry"


class BehaviorPattern(str, Enum):
    """行为模式"""
    FOCUSED = "focused"          # 专注
    STRESSED = "stressed"        # 紧张
    RELAXED = "relaxed"          # 放松
    TIRED = "tired"              # 疲惫
    PRODUCTIVE = "productive"    # 高效
    BORED = "bored"              # 无聊
    OVERWORKED = "overworked"    # 过劳


class EventType(str, Enum):
    """情感事件类型"""
    CHAT = "chat"
    BEHAVIOR = "behavior"
    SYSTEM = "system"
    INTERACTION = "interaction"


class CareType(str, Enum):
    """关怀类型"""
    LOW_MOOD = "low_mood"
    HIGH_STRESS = "high_stress"
    LONG_WORK = "long_work"
    LOW_ENERGY = "low_energy"
    BREAK_REMINDER = "break_reminder"
    HEALTH_WARNING = "health_warning"
    EMOTIONAL_SUPPORT = "emotional_support"
    ACHIEVEMENT_CELEBRATION = "achievement_celebration"
    BREATHING_EXERCISE = "breathing_exercise"
    BEDTIME_STORY = "bedtime_story"
    MEDITATION_SUGGESTION = "meditation_suggestion"


class CareTone(str, Enum):
    """关怀语气"""
    GENTLE = "gentle"
    URGENT = "urgent"
    CELEBRATORY = "celebratory"
    SUPPORTIVE = "supportive"


class CareResponse(str, Enum):
    """用户对关怀的响应"""
    ACCEPTED = "accepted"
    DISMISSED = "dismissed"
    IGNORED = "ignored"


class MoodTrend(str, Enum):
    """情绪趋势"""
    IMPROVING = "improving"   # 改善
    DECLINING = "declining"   # 下降
    STABLE = "stable"         # 稳定


class PatternType(str, Enum):
    """情感模式类型"""
    FREQUENT = "frequent"     # 高频
    INTENSE = "intense"       # 高强度
    PERIODIC = "periodic"     # 周期性


class ResponseTone(str, Enum):
    """对话回复语气"""
    FRIENDLY = "friendly"
    CARING = "caring"
    PLAYFUL = "playful"
    SERIOUS = "serious"
