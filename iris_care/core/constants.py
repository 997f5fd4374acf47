"""
常量定义模块 - 集中管理评分权重、关键词表等硬编码常量
"""
from typing import Dict, Final, FrozenSet, List, Tuple

from iris_care.core.types import EmotionType


# ── 情感词典分级权重 ──

TIER_WEIGHTS: Final[Dict[str, float]] = {
    "strong": 0.8,
    "medium": 0.5,
    "weak": 0.2,
}
"""强/中/弱三级关键词的得分（负面词取相反数）"""

SENTIMENT_POSITIVE_THRESHOLD: Final[float] = 0.2
SENTIMENT_NEGATIVE_THRESHOLD: Final[float] = -0.2

MAX_SENTIMENT_CONFIDENCE: Final[float] = 0.95

CJK_PATTERN: Final[str] = r"[一-龥]"
"""中文检测正则：包含任一汉字即使用中文词典"""


# ── 情绪关键词表（有序，先匹配者优先） ──

EMOTION_KEYWORDS: Final[Tuple[Tuple[EmotionType, Tuple[str, ...]], ...]] = (
    (EmotionType.HAPPY, ("开心", "高兴", "快乐", "happy", "joy", "excited", "great")),
    (EmotionType.EXCITED, ("激动", "兴奋", "惊喜", "excited", "thrilled", "amazing")),
    (EmotionType.THINKING, ("思考", "想想", "考虑", "think", "consider", "wonder")),
    (EmotionType.CONFUSED, ("困惑", "不明白", "疑惑", "confused", "puzzled", "unsure")),
    (EmotionType.SURPRISED, ("惊讶", "意外", "哇", "surprised", "shocked", "wow")),
    (EmotionType.NEUTRAL, ("还好", "一般", "okay", "fine", "alright", "normal")),
    (EmotionType.SAD, ("难过", "伤心", "悲伤", "sad", "upset", "down")),
    (EmotionType.ANGRY, ("生气", "愤怒", "恼火", "angry", "mad", "furious")),
)


# ── 关怀检测 ──

REST_ACTIONS: Final[FrozenSet[str]] = frozenset(["rest", "sleep", "break", "relax"])
"""视为一次休息的交互动作"""

DEFAULT_BREAK_AGE_MINUTES: Final[int] = 45
"""找不到休息记录时，假定上次休息发生在45分钟前"""

BREAK_THRESHOLD_SCALE_MINUTES: Final[int] = 15
"""break_reminder 阈值换算：threshold × 15 分钟"""

LONG_WORK_HOURS_SCALE: Final[float] = 10.0
"""long_work 阈值换算：工作小时数 / 10"""

EMOTIONAL_SUPPORT_WINDOW_MINUTES: Final[int] = 30
EMOTIONAL_SUPPORT_MIN_EVENTS: Final[int] = 3
ACHIEVEMENT_WINDOW_MINUTES: Final[int] = 60
ACHIEVEMENT_MIN_EVENTS: Final[int] = 5
MEDITATION_WINDOW_MINUTES: Final[int] = 60
MEDITATION_MIN_EVENTS: Final[int] = 3

HEALTH_ENERGY_FLOOR: Final[float] = 0.1
HEALTH_FOCUS_FLOOR: Final[float] = 0.2

NIGHT_FACTORS: Final[Dict[int, float]] = {
    21: 0.6,
    22: 1.0, 23: 1.0, 0: 1.0, 1: 1.0,
    2: 0.6, 3: 0.6,
}
"""各小时的深夜系数，未列出的小时为0"""


# ── 记忆分析 ──

DAY_SEGMENTS: Final[List[Tuple[int, int, str]]] = [
    (0, 6, "凌晨"),
    (6, 12, "上午"),
    (12, 18, "下午"),
    (18, 24, "晚上"),
]

INSIGHT_WINDOW: Final[int] = 100
"""情绪洞察只看最近100条记忆"""

TOP_KEYWORDS_LIMIT: Final[int] = 5
IMPORTANT_MEMORIES_LIMIT: Final[int] = 50
RECENT_EVENTS_LIMIT: Final[int] = 100


# ── 通知历史 ──

HISTORY_MAX_ENTRIES: Final[int] = 1000
HISTORY_TRIM_TO: Final[int] = 500
TOP_CARE_TYPES_LIMIT: Final[int] = 5


# ── 关怀消息兜底 ──

FALLBACK_CARE_TITLE: Final[str] = "关怀"
FALLBACK_CARE_MESSAGE: Final[str] = "我在这里陪着你"
