"""
String similarity helpers
"""

from typing import Any

from rapidfuzz.distance import Levenshtein


def levenshtein_distance(a: str, b: str) -> int:
    """Classic edit distance (insert / delete / substitute, unit cost)."""
    return Levenshtein.distance(a, b)


def string_similarity(a: Any, b: Any) -> float:
    """
    Normalized similarity in [0, 1], case-insensitive.

    (longer_length - distance) / longer_length; two empty strings are identical.
    """
    left = str(a if a is not None else "").lower()
    right = str(b if b is not None else "").lower()
    if not left and not right:
        return 1.0
    return Levenshtein.normalized_similarity(left, right)
