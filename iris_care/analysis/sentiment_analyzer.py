"""
情感分析器
基于分级情感词典的规则式情感打分，支持中英文
"""

import re
from typing import Any, Dict, Iterable, List, Optional, Union

from iris_care.analysis.sentiment_lexicon import SentimentLexicon
from iris_care.core.constants import (
    CJK_PATTERN,
    EMOTION_KEYWORDS,
    MAX_SENTIMENT_CONFIDENCE,
    SENTIMENT_NEGATIVE_THRESHOLD,
    SENTIMENT_POSITIVE_THRESHOLD,
    TIER_WEIGHTS,
)
from iris_care.core.types import EmotionType, MoodTrend, SentimentLabel
from iris_care.models.sentiment import ConversationSentiment, SentimentDetails, SentimentResult
from iris_care.utils.logger import get_logger

# 模块logger
logger = get_logger("sentiment_analyzer")

_CJK_RE = re.compile(CJK_PATTERN)
_REPEATED_EXCLAMATION_RE = re.compile(r"([！!])\1{2,}")

Message = Union[str, Dict[str, Any]]


def _clamp(value: float, low: float = -1.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


class SentimentAnalyzer:
    """情感分析器

    打分流程：
    - 检测文本语言（含汉字即使用中文词典）
    - 分级词典匹配（强 ±0.8 / 中 ±0.5 / 弱 ±0.2），累加后截断到 [-1, 1]
    - 按情绪关键词表映射具体情绪，未命中时按分数映射
    - 句法得分只写入 details，不参与判定
    """

    def __init__(self, lexicon: Optional[SentimentLexicon] = None):
        self.lexicon = lexicon or SentimentLexicon()
        self.lexicon.load()

    def analyze(self, text: Optional[str]) -> SentimentResult:
        """分析单条文本，空文本返回中性结果"""
        if not text or not text.strip():
            logger.debug("Empty text, returning neutral")
            return self._neutral_result()

        lang = "zh" if _CJK_RE.search(text) else "en"
        lower_text = text.lower()

        score, keywords = self._score(lower_text, lang)
        sentiment = self._determine_sentiment(score)
        emotion = self._map_to_emotion(score, keywords)
        confidence = self._calculate_confidence(score, keywords)

        text_preview = text[:30] + "..." if len(text) > 30 else text
        logger.debug(
            f"Sentiment for '{text_preview}': lang={lang}, score={score:.2f}, "
            f"sentiment={sentiment.value}, emotion={emotion.value}, keywords={keywords}"
        )

        return SentimentResult(
            sentiment=sentiment,
            confidence=confidence,
            emotion=emotion,
            score=score,
            keywords=keywords,
            details=SentimentDetails(
                lexical_score=score,
                syntactic_score=self._syntactic_score(text),
                contextual_score=0.0,
            ),
        )

    def _score(self, lower_text: str, lang: str):
        """词典打分，返回 (截断后的分数, 去重后的命中关键词)"""
        score = 0.0
        keywords: List[str] = []
        for polarity, tier, words in self.lexicon.tiers(lang):
            weight = TIER_WEIGHTS[tier] if polarity == "positive" else -TIER_WEIGHTS[tier]
            for word in words:
                if word and word in lower_text:
                    score += weight
                    if word not in keywords:
                        keywords.append(word)
        return _clamp(score), keywords

    @staticmethod
    def _determine_sentiment(score: float) -> SentimentLabel:
        if score > SENTIMENT_POSITIVE_THRESHOLD:
            return SentimentLabel.POSITIVE
        if score < SENTIMENT_NEGATIVE_THRESHOLD:
            return SentimentLabel.NEGATIVE
        return SentimentLabel.NEUTRAL

    @staticmethod
    def _map_to_emotion(score: float, keywords: List[str]) -> EmotionType:
        # 先按情绪关键词表顺序匹配
        for emotion, emotion_keywords in EMOTION_KEYWORDS:
            for emotion_keyword in emotion_keywords:
                if any(emotion_keyword in keyword for keyword in keywords):
                    return emotion

        # 再按分数映射
        if score > 0.6:
            return EmotionType.EXCITED
        if score > SENTIMENT_POSITIVE_THRESHOLD:
            return EmotionType.HAPPY
        if score < SENTIMENT_NEGATIVE_THRESHOLD:
            return EmotionType.SAD
        return EmotionType.NEUTRAL

    @staticmethod
    def _calculate_confidence(score: float, keywords: List[str]) -> float:
        keyword_bonus = min(len(keywords) * 0.1, 0.3)
        score_clarity = 1 - abs(score)
        return min(MAX_SENTIMENT_CONFIDENCE, 0.5 + keyword_bonus + score_clarity * 0.2)

    @staticmethod
    def _syntactic_score(text: str) -> float:
        """标点层面的诊断得分"""
        score = 0.0
        if "！" in text or "!" in text:
            score += 0.2
        if "？" in text or "?" in text:
            score -= 0.1
        if _REPEATED_EXCLAMATION_RE.search(text):
            score += 0.3
        return _clamp(score)

    @staticmethod
    def _neutral_result() -> SentimentResult:
        return SentimentResult(
            sentiment=SentimentLabel.NEUTRAL,
            confidence=0.5,
            emotion=EmotionType.NEUTRAL,
            score=0.0,
            keywords=[],
        )

    def batch_analyze(self, texts: Iterable[Optional[str]]) -> List[SentimentResult]:
        """批量分析"""
        return [self.analyze(text) for text in texts]

    def analyze_conversation(self, messages: List[Message]) -> ConversationSentiment:
        """分析对话历史

        Args:
            messages: 文本列表，或 {"role": ..., "content": ...} 字典列表

        Returns:
            整体情感（基于用户发言拼接）、前后半段趋势与平均分
        """
        contents: List[str] = []
        user_contents: List[str] = []
        for message in messages:
            if isinstance(message, dict):
                content = str(message.get("content") or "")
                if message.get("role", "user") == "user":
                    user_contents.append(content)
            else:
                content = str(message or "")
                user_contents.append(content)
            contents.append(content)

        if not contents:
            return ConversationSentiment(overall=self._neutral_result())

        results = self.batch_analyze(contents)
        scores = [r.score for r in results]
        average_score = sum(scores) / len(scores)

        trend = MoodTrend.STABLE
        if len(scores) >= 2:
            middle = len(scores) // 2
            first_avg = sum(scores[:middle]) / middle
            second_avg = sum(scores[middle:]) / (len(scores) - middle)
            if second_avg - first_avg > 0.2:
                trend = MoodTrend.IMPROVING
            elif second_avg - first_avg < -0.2:
                trend = MoodTrend.DECLINING

        overall = self.analyze("\n".join(user_contents))
        logger.debug(
            f"Conversation sentiment: messages={len(contents)}, "
            f"average={average_score:.2f}, trend={trend.value}"
        )
        return ConversationSentiment(overall=overall, trend=trend, average_score=average_score)
