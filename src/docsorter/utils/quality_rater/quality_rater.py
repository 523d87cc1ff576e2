"""QualityRatingService: deterministic 1-5 scoring of suggested filenames.

Five independent assessors each score a suggestion in [0, 1]:

- accuracy: does the name carry the extracted document type, client and date?
  Generic placeholder names are pinned to 0.1.
- format: separators, mixed case, no characters that are illegal in paths.
- length: banded on character count.
- creativity: distance from the original name and descriptive keywords.
- completeness: presence of a date, a document type keyword and an identifier.

The weighted sum of the sub-metrics is mapped to the ordinal scale with
``floor(score * 4 + 0.5) + 1``, i.e. half-points always round up. Issues,
strengths and recommendations are threshold driven and independent of the
overall score. Rating never calls the model and never fails: a missing
analysis result only lowers the accuracy score.
"""

import math
import os
import re
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

from docsorter.config import QualityConfig
from docsorter.utils.quality_rater.models import (
    METRIC_NAMES,
    QualityRating,
    QualityReport,
    QualitySuggestion,
)
from docsorter.utils.similarity import similarity


DESCRIPTIVE_WORDS = ("invoice", "contract", "report", "agreement", "proposal", "statement")

ISSUE_THRESHOLD = 0.5
STRENGTH_THRESHOLD = 0.7
REPORT_RECOMMENDATION_THRESHOLD = 0.6

_INVALID_CHARS_RE = re.compile(r'[<>:"/\\|?*]')
_DATE_TOKEN_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}|[0-9]{2}/[0-9]{2}/[0-9]{4}|[0-9]{4}")
_TYPE_KEYWORD_RE = re.compile(
    r"invoice|contract|report|agreement|proposal|statement|notes", re.IGNORECASE
)
_IDENTIFIER_RE = re.compile(r"[A-Za-z]{3,}")

_STRENGTHS = {
    "accuracy": "High accuracy",
    "format": "Good format",
    "length": "Appropriate length",
    "creativity": "Creative naming",
    "completeness": "Complete information",
}

_OVERALL_RECOMMENDATIONS = {
    "accuracy": "Improve entity extraction accuracy",
    "format": "Standardize filename formatting rules",
    "length": "Optimize filename length constraints",
    "creativity": "Enhance creative naming patterns",
    "completeness": "Ensure all required elements are included",
}


class QualityRatingService:
    """Rates filename suggestions against the metadata they were built from.

    Configuration (length bounds, forbidden patterns, weights) is fixed at
    construction, so one instance can rate suggestions concurrently.

    Example Usage:

    rater = QualityRatingService()
    rating = rater.rate_suggestion(
        QualitySuggestion(
            original_filename="scan_0042.pdf",
            suggested_filename="Acme_Invoice_2024-01-15.pdf",
            analysis_result=record,
            extracted_text=text,
        )
    )
    report = rater.generate_quality_report(rater.rate_suggestions(suggestions))
    """

    def __init__(self, config: Optional[QualityConfig] = None) -> None:
        """Initialize the rater.

        Args:
            config: Rating settings. Uses default QualityConfig if None.

        Raises:
            re.error: If a forbidden pattern is not a valid regular expression.
        """
        self.config = config or QualityConfig()
        # Snapshot; the weights dict stays owned by the caller.
        self.weights = dict(self.config.weights)
        self.forbidden_patterns = [
            re.compile(pattern, re.IGNORECASE)
            for pattern in self.config.forbidden_patterns
        ]

    def rate_suggestion(self, suggestion: QualitySuggestion) -> QualityRating:
        """Rate one suggestion.

        Args:
            suggestion: The original and suggested filenames with the
                extracted metadata (possibly None) and source text.

        Returns:
            A complete QualityRating.
        """
        metrics = {
            "accuracy": self.assess_accuracy(suggestion),
            "format": self.assess_format(suggestion.suggested_filename),
            "length": self.assess_length(suggestion.suggested_filename),
            "creativity": self.assess_creativity(suggestion),
            "completeness": self.assess_completeness(suggestion.suggested_filename),
        }

        score = sum(metrics[name] * self.weights[name] for name in METRIC_NAMES)
        issues, strengths, recommendations = self._generate_feedback(
            metrics, suggestion.suggested_filename
        )

        return QualityRating(
            overall=self._to_scale(score),
            automated_metrics=metrics,
            human_rating=None,
            issues=issues,
            strengths=strengths,
            recommendations=recommendations,
            metadata={
                "original_filename": suggestion.original_filename,
                "suggested_filename": suggestion.suggested_filename,
                "text_length": len(suggestion.extracted_text or ""),
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        )

    def rate_suggestions(
        self, suggestions: Sequence[QualitySuggestion]
    ) -> List[QualityRating]:
        return [self.rate_suggestion(suggestion) for suggestion in suggestions]

    def is_generic(self, filename: str) -> bool:
        """Whether the name, with or without its extension, is a placeholder."""
        stem = os.path.splitext(filename)[0]
        return any(
            pattern.search(filename) or pattern.search(stem)
            for pattern in self.forbidden_patterns
        )

    def assess_accuracy(self, suggestion: QualitySuggestion) -> float:
        filename = suggestion.suggested_filename
        lowered = filename.lower()
        accuracy = 0.5

        analysis = suggestion.analysis_result
        if analysis is not None:
            if analysis.doc_type and analysis.doc_type.lower() in lowered:
                accuracy += 0.2

            if analysis.client_name and analysis.client_name != "Unknown":
                words = analysis.client_name.lower().split()
                if words and words[0] in lowered:
                    accuracy += 0.2

            if analysis.date and analysis.date in filename:
                accuracy += 0.1

        # Generic names are penalised regardless of any matches above.
        if self.is_generic(filename):
            accuracy = 0.1

        return min(accuracy, 1.0)

    def assess_format(self, filename: str) -> float:
        format_score = 0.5

        if "_" in filename or "-" in filename:
            format_score += 0.2

        if re.search(r"[A-Z]", filename) and re.search(r"[a-z]", filename):
            format_score += 0.1

        if not _INVALID_CHARS_RE.search(filename):
            format_score += 0.2

        return min(format_score, 1.0)

    def assess_length(self, filename: str) -> float:
        length = len(filename)

        if length < self.config.min_filename_length:
            return 0.2
        if length > self.config.max_filename_length:
            return 0.3
        if 20 <= length <= 60:
            return 1.0
        return 0.7

    def assess_creativity(self, suggestion: QualitySuggestion) -> float:
        creativity = 0.5

        if similarity(suggestion.original_filename, suggestion.suggested_filename) < 0.3:
            creativity += 0.3

        lowered = suggestion.suggested_filename.lower()
        if any(word in lowered for word in DESCRIPTIVE_WORDS):
            creativity += 0.2

        return min(creativity, 1.0)

    def assess_completeness(self, filename: str) -> float:
        completeness = 0.2

        if _DATE_TOKEN_RE.search(filename):
            completeness += 0.3
        if _TYPE_KEYWORD_RE.search(filename):
            completeness += 0.3
        if _IDENTIFIER_RE.search(filename):
            completeness += 0.2

        return min(completeness, 1.0)

    def generate_quality_report(self, ratings: Sequence[QualityRating]) -> QualityReport:
        """Summarise many ratings into averages, a score distribution and advice.

        Args:
            ratings: Ratings produced by rate_suggestion().

        Returns:
            A QualityReport. An empty input yields zeroed averages and no
            recommendations.
        """
        total = len(ratings)
        distribution = {
            "excellent": sum(1 for r in ratings if r.overall >= 5),
            "good": sum(1 for r in ratings if r.overall == 4),
            "mediocre": sum(1 for r in ratings if r.overall == 3),
            "bad": sum(1 for r in ratings if r.overall == 2),
            "terrible": sum(1 for r in ratings if r.overall == 1),
        }

        if total == 0:
            return QualityReport(
                total_suggestions=0,
                average_overall=0.0,
                average_metrics={name: 0.0 for name in METRIC_NAMES},
                distribution=distribution,
                success_rate=0.0,
                recommendations=[],
            )

        average_metrics = {
            name: sum(r.automated_metrics[name] for r in ratings) / total
            for name in METRIC_NAMES
        }
        average_overall = sum(r.overall for r in ratings) / total
        success_rate = (distribution["excellent"] + distribution["good"]) / total * 100

        return QualityReport(
            total_suggestions=total,
            average_overall=round(average_overall, 2),
            average_metrics=average_metrics,
            distribution=distribution,
            success_rate=round(success_rate, 1),
            recommendations=self._overall_recommendations(average_metrics, distribution),
        )

    def _to_scale(self, score: float) -> int:
        """Map a [0, 1] score onto 1-5, rounding half-points up."""
        return min(5, max(1, math.floor(score * 4 + 0.5) + 1))

    def _generate_feedback(
        self, metrics: Dict[str, float], filename: str
    ) -> tuple[List[str], List[str], List[str]]:
        issues: List[str] = []
        strengths: List[str] = []
        recommendations: List[str] = []

        if metrics["length"] < ISSUE_THRESHOLD:
            if len(filename) < self.config.min_filename_length:
                issues.append("Filename too short")
                recommendations.append("Include more descriptive elements")
            elif len(filename) > self.config.max_filename_length:
                issues.append("Filename too long")
                recommendations.append("Shorten filename while keeping key information")

        if metrics["format"] < ISSUE_THRESHOLD:
            issues.append("Poor filename format")
            recommendations.append("Use underscores or hyphens as separators")

        if metrics["accuracy"] < ISSUE_THRESHOLD:
            issues.append("Low accuracy")
            recommendations.append("Improve entity extraction and matching")

        if metrics["completeness"] < ISSUE_THRESHOLD:
            issues.append("Incomplete information")
            recommendations.append("Include date, document type, and key identifier")

        if self.is_generic(filename):
            issues.append("Generic filename")
            recommendations.append(
                "Use specific document information instead of generic terms"
            )

        for name in METRIC_NAMES:
            if metrics[name] > STRENGTH_THRESHOLD:
                strengths.append(_STRENGTHS[name])

        return issues, strengths, recommendations

    def _overall_recommendations(
        self, average_metrics: Dict[str, float], distribution: Dict[str, int]
    ) -> List[str]:
        recommendations = [
            _OVERALL_RECOMMENDATIONS[name]
            for name in METRIC_NAMES
            if average_metrics[name] < REPORT_RECOMMENDATION_THRESHOLD
        ]
        if distribution["terrible"] > distribution["excellent"]:
            recommendations.append(
                "Focus on fundamental improvements before optimization"
            )
        return recommendations
