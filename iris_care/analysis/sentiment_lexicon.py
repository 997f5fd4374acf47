"""
情感词典配置管理

SentimentLexicon: 外置情感词典（YAML），加载失败时使用内置默认值
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from iris_care.utils.logger import get_logger

logger = get_logger("sentiment_lexicon")

LANGUAGES = ("zh", "en")
POLARITIES = ("positive", "negative")
TIERS = ("strong", "medium", "weak")


class SentimentLexicon:
    """外置情感词典

    结构为 {语言: {极性: {强度: [关键词]}}}，关键词统一转为小写。
    """

    def __init__(self, yaml_path: Optional[Path] = None):
        if yaml_path is not None:
            self._yaml_path: Optional[Path] = Path(yaml_path)
        else:
            default_yaml = Path(__file__).resolve().parent / "sentiment_lexicon.yaml"
            self._yaml_path = default_yaml if default_yaml.exists() else None
        self._data: Dict[str, Any] = {}
        self._loaded = False

    def load(self) -> None:
        """加载词典"""
        if self._yaml_path and self._yaml_path.exists():
            try:
                with open(self._yaml_path, "r", encoding="utf-8") as f:
                    data = yaml.safe_load(f) or {}
                self._data = self._normalize(data)
                self._loaded = True
                logger.info(f"Sentiment lexicon loaded from {self._yaml_path}")
                return
            except (OSError, yaml.YAMLError, AttributeError, TypeError) as e:
                logger.warning(f"Failed to load sentiment lexicon from {self._yaml_path}: {e}")

        # 内置默认值（兜底）
        self._data = self._normalize(self._builtin_defaults())
        self._loaded = True
        logger.info("Using builtin default sentiment lexicon")

    def _ensure_loaded(self) -> None:
        if not self._loaded:
            self.load()

    @staticmethod
    def _normalize(data: Dict[str, Any]) -> Dict[str, Dict[str, Dict[str, List[str]]]]:
        """补齐缺失的语言/极性/强度，关键词转小写字符串"""
        result: Dict[str, Dict[str, Dict[str, List[str]]]] = {}
        for lang in LANGUAGES:
            lang_data = data.get(lang) or {}
            result[lang] = {}
            for polarity in POLARITIES:
                polarity_data = lang_data.get(polarity) or {}
                result[lang][polarity] = {
                    tier: [str(word).lower() for word in (polarity_data.get(tier) or [])]
                    for tier in TIERS
                }
        return result

    def tiers(self, lang: str) -> List[Tuple[str, str, List[str]]]:
        """按 (极性, 强度, 关键词列表) 顺序返回某种语言的全部分级"""
        self._ensure_loaded()
        lang_data = self._data.get(lang, self._data["en"])
        return [
            (polarity, tier, lang_data[polarity][tier])
            for polarity in POLARITIES
            for tier in TIERS
        ]

    def words(self, lang: str, polarity: str, tier: str) -> List[str]:
        self._ensure_loaded()
        return list(self._data.get(lang, {}).get(polarity, {}).get(tier, []))

    @staticmethod
    def _builtin_defaults() -> Dict[str, Any]:
        """内置默认词典（与 sentiment_lexicon.yaml 一致）"""
        return {
            "zh": {
                "positive": {
                    "strong": ["太棒了", "太好了", "超级好", "非常开心", "特别棒", "太高兴了", "太棒啦",
                               "完美", "优秀", "卓越", "精彩", "出色", "惊人", "震撼", "激动", "兴奋",
                               "狂喜", "喜悦", "愉快", "欢乐"],
                    "medium": ["不错", "很好", "挺好", "还不错", "可以", "行", "开心", "高兴", "快乐",
                               "满意", "喜欢", "爱", "舒服", "轻松", "自在", "愉快", "乐观"],
                    "weak": ["还行", "一般", "凑合", "可以接受", "还行吧", "还好", "不错嘛", "尚可"],
                },
                "negative": {
                    "strong": ["非常生气", "超级生气", "愤怒", "暴怒", "恼火", "讨厌", "恨", "厌恶", "憎恨",
                               "鄙视", "绝望", "崩溃", "痛苦", "煎熬", "折磨", "糟糕", "太差了", "极差",
                               "不可接受"],
                    "medium": ["生气", "不开心", "难过", "伤心", "悲伤", "失望", "沮丧", "郁闷", "烦躁",
                               "焦虑", "担心", "害怕", "恐惧", "紧张", "不安"],
                    "weak": ["有点累", "不太行", "不太好", "一般般", "稍微有点", "有点小", "还行吧",
                             "没劲", "无聊", "累", "困"],
                },
            },
            "en": {
                "positive": {
                    "strong": ["amazing", "awesome", "excellent", "perfect", "outstanding", "incredible",
                               "fantastic", "wonderful", "brilliant", "superb", "excited", "thrilled",
                               "ecstatic", "delighted", "joyful"],
                    "medium": ["good", "great", "nice", "happy", "pleased", "satisfied", "content",
                               "comfortable", "relaxed", "optimistic", "enjoy", "like", "love",
                               "pleasant", "positive"],
                    "weak": ["okay", "fine", "acceptable", "decent", "alright", "not bad", "so so",
                             "fair", "reasonable"],
                },
                "negative": {
                    "strong": ["terrible", "horrible", "awful", "disgusting", "hate", "furious", "enraged",
                               "desperate", "devastated", "miserable", "unacceptable", "worst",
                               "disaster", "catastrophe"],
                    "medium": ["bad", "sad", "angry", "upset", "disappointed", "frustrated", "depressed",
                               "anxious", "worried", "scared", "tired", "bored", "stressed",
                               "overwhelmed", "annoyed"],
                    "weak": ["tired", "a bit", "slightly", "kind of", "somewhat", "not great",
                             "okay-ish", "meh", "blah"],
                },
            },
        }
