"""Similarity: edit distance and normalised similarity ratio between strings."""

from typing import List


def levenshtein_distance(a: str, b: str) -> int:
    """Compute the Levenshtein edit distance between two strings.

    Classic dynamic programming over a ``(len(b) + 1) x (len(a) + 1)`` table.
    Insertions, deletions and substitutions each cost 1.

    Args:
        a: First string.
        b: Second string.

    Returns:
        Minimum number of single-character edits turning ``a`` into ``b``.
    """
    matrix: List[List[int]] = [[i] + [0] * len(a) for i in range(len(b) + 1)]
    for j in range(len(a) + 1):
        matrix[0][j] = j

    for i in range(1, len(b) + 1):
        for j in range(1, len(a) + 1):
            if b[i - 1] == a[j - 1]:
                matrix[i][j] = matrix[i - 1][j - 1]
            else:
                matrix[i][j] = min(
                    matrix[i - 1][j - 1] + 1,
                    matrix[i][j - 1] + 1,
                    matrix[i - 1][j] + 1,
                )

    return matrix[len(b)][len(a)]


def similarity(a: str, b: str) -> float:
    """Return the similarity ratio of two strings in [0, 1].

    Defined as ``(longest - distance) / longest``; two empty strings are
    identical and score 1.0.
    """
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return (longest - levenshtein_distance(a, b)) / longest
