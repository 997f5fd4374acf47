"""Analysis module for iris care"""

from iris_care.analysis.sentiment_lexicon import SentimentLexicon
from iris_care.analysis.sentiment_analyzer import SentimentAnalyzer
from iris_care.analysis.behavior_analyzer import BehaviorAnalyzer, BehaviorThresholds
from iris_care.analysis.memory_analyzer import MemoryAnalyzer

__all__ = [
    'SentimentLexicon',
    'SentimentAnalyzer',
    'BehaviorAnalyzer',
    'BehaviorThresholds',
    'MemoryAnalyzer',
]
