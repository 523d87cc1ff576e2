"""Utility components for document metadata extraction and rating."""

from docsorter.utils.metadata_extractor.metadata_extractor import (
    MetadataExtractionService,
)
from docsorter.utils.quality_rater.quality_rater import QualityRatingService
from docsorter.utils.similarity.similarity import levenshtein_distance, similarity


__all__ = [
    "MetadataExtractionService",
    "QualityRatingService",
    "levenshtein_distance",
    "similarity",
]
