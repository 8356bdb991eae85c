import math
import re
from collections import Counter

import numpy as np

_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
_PUNCTUATION_RE = re.compile(r"[^\w\s]")


def count_words(text: str) -> int:
    """Number of whitespace-separated words."""
    return len(text.split())


def count_sentences(text: str) -> int:
    """Number of non-blank segments between ``.``, ``!`` and ``?`` runs."""
    return sum(1 for part in _SENTENCE_SPLIT_RE.split(text) if part.strip())


def _bag_of_words(text: str) -> Counter[str]:
    return Counter(_PUNCTUATION_RE.sub("", text.lower()).split())


def cosine_similarity(text1: str, text2: str) -> float:
    """Cosine similarity of the two texts' word-count vectors.

    Returns 0.0 when either text has no words.
    """
    bag1 = _bag_of_words(text1)
    bag2 = _bag_of_words(text2)
    vocabulary = sorted(bag1.keys() | bag2.keys())
    v1 = np.array([bag1[w] for w in vocabulary], dtype=float)
    v2 = np.array([bag2[w] for w in vocabulary], dtype=float)

    norm = np.linalg.norm(v1) * np.linalg.norm(v2)
    if norm == 0:
        return 0.0
    return float(np.dot(v1, v2) / norm)


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def match_percentage(response: str, goal: str) -> int:
    """Map the response/goal cosine similarity from [-1, 1] onto 0-100."""
    similarity = cosine_similarity(response, goal)
    return round_half_up((similarity + 1) / 2 * 100)
