"""Storage module for iris care"""

from .memory_storage import MemoryStorage, keyword_similarity
from .emotion_memory_store import EmotionMemoryStore

__all__ = [
    'MemoryStorage',
    'keyword_similarity',
    'EmotionMemoryStore',
]
