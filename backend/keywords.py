"""Keyword frequency ranking over visible page text."""

import re
from collections import Counter

from models import KeywordEntry

# Common English function words ignored by the ranker.
STOP_WORDS = frozenset(
    {
        "and", "the", "is", "in", "at", "of", "for", "to", "a", "an",
        "on", "with", "as", "by", "from", "it", "that", "this", "are",
        "was", "be", "have", "has", "had", "will", "would", "could",
        "should", "may", "might", "can", "need", "must", "but", "or",
        "not", "no", "so", "if", "then", "when", "where", "how", "what",
        "who", "which", "about", "into", "more", "some", "such", "out",
        "up", "down", "only", "also", "just", "than", "them", "they",
        "their", "we", "you", "your", "his", "her", "its", "our", "me",
        "my", "do", "does", "did", "done", "being", "been", "get", "got",
        "going", "go", "here", "there", "all", "any", "each", "every",
        "other", "most", "many", "much", "very", "too", "even", "back",
    }
)

_NON_WORD = re.compile(r"[^\w\s]")


class KeywordRanker:
    """Rank the most frequent content words in a text.

    Ties keep first-occurrence order.
    """

    def __init__(self, stop_words: frozenset[str] = STOP_WORDS, limit: int = 10, min_length: int = 3):
        self.stop_words = frozenset(stop_words)
        self.limit = limit
        self.min_length = min_length

    def tokenize(self, text: str) -> list[str]:
        cleaned = _NON_WORD.sub(" ", (text or "").lower())
        return [
            token
            for token in cleaned.split()
            if len(token) >= self.min_length and token not in self.stop_words
        ]

    def rank(self, text: str) -> list[KeywordEntry]:
        counts = Counter(self.tokenize(text))
        return [{"word": word, "count": count} for word, count in counts.most_common(self.limit)]
