"""Lexicon sentiment scorer for free-text journal entries.

Matching is plain substring containment on the lower-cased text: no
tokenisation, stemming or negation handling ("unhappy" counts as
"happy", "not happy" still counts as positive).
"""

from __future__ import annotations

POSITIVE_WORDS: frozenset[str] = frozenset({
    "happy", "good", "great", "wonderful", "excellent",
    "love", "joy", "peace", "calm", "grateful",
})

NEGATIVE_WORDS: frozenset[str] = frozenset({
    "sad", "bad", "terrible", "awful", "hate",
    "angry", "stress", "anxious", "worried", "pain",
})

_WORD_WEIGHT = 0.1


def score_sentiment(text: str) -> float:
    """Return a sentiment value in ``[-1, 1]`` for *text*.

    Each lexicon word found anywhere in the text moves the score by 0.1.
    The result is rounded to two decimals, the precision it is stored at.
    """
    if not text:
        return 0.0
    lowered = text.lower()
    hits = sum(1 for word in POSITIVE_WORDS if word in lowered)
    hits -= sum(1 for word in NEGATIVE_WORDS if word in lowered)
    score = max(-1.0, min(1.0, hits * _WORD_WEIGHT))
    return round(score, 2)
