"""Quality rating for suggested filenames."""

from docsorter.utils.quality_rater.models import (
    QualityRating,
    QualityReport,
    QualitySuggestion,
)
from docsorter.utils.quality_rater.quality_rater import QualityRatingService


__all__ = [
    "QualityRating",
    "QualityRatingService",
    "QualityReport",
    "QualitySuggestion",
]
