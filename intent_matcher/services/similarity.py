"""Similarity measures between an utterance and an example phrase.

All functions return values in [0, 1] (the bonus is 0 or 1) and are
symmetric in their arguments.
"""

from __future__ import annotations

from typing import Iterable

from rapidfuzz.distance import Levenshtein


def jaccard(tokens_a: Iterable[str], tokens_b: Iterable[str]) -> float:
    """|A ∩ B| / |A ∪ B| over token sets; 0.0 when both are empty."""
    a = set(tokens_a)
    b = set(tokens_b)
    union = a | b
    if not union:
        return 0.0
    return len(a & b) / len(union)


def edit_similarity(a: str, b: str) -> float:
    """1 - levenshtein(a, b) / max(len(a), len(b)).

    Two empty strings are identical, so they score 1.0.
    """
    if not a and not b:
        return 1.0
    distance = Levenshtein.distance(a, b)
    return 1.0 - distance / max(len(a), len(b), 1)


def contains_bonus(a: str, b: str) -> int:
    """1 when either non-empty string contains the other (e.g. "saldo" in "quiero mi saldo")."""
    if not a or not b:
        return 0
    return 1 if a in b or b in a else 0


__all__ = ["contains_bonus", "edit_similarity", "jaccard"]
