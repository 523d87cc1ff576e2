"""String similarity utilities."""

from docsorter.utils.similarity.similarity import levenshtein_distance, similarity


__all__ = [
    "levenshtein_distance",
    "similarity",
]
