"""Data models for filename quality rating."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from docsorter.utils.metadata_extractor.models import MetadataRecord


METRIC_NAMES = ("accuracy", "format", "length", "creativity", "completeness")


@dataclass(frozen=True)
class QualitySuggestion:
    """A proposed filename together with the evidence it was derived from."""

    original_filename: str
    suggested_filename: str
    analysis_result: Optional[MetadataRecord] = None
    extracted_text: str = ""


@dataclass(frozen=True)
class QualityRating:
    """Automated 1-5 rating of one suggestion with its sub-metrics.

    Attributes:
        overall: Integer score from 1 (terrible) to 5 (excellent).
        automated_metrics: Sub-metric name to score in [0, 1].
        human_rating: Reserved for a human override; never set automatically.
        issues: Problems found with the suggestion.
        strengths: Sub-metrics that scored well.
        recommendations: Suggested fixes for the issues.
        metadata: Original/suggested names, text length and rating timestamp.
    """

    overall: int
    automated_metrics: Dict[str, float]
    human_rating: Optional[float] = None
    issues: List[str] = field(default_factory=list)
    strengths: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overall": self.overall,
            "humanRating": self.human_rating,
            "automatedMetrics": dict(self.automated_metrics),
            "issues": list(self.issues),
            "strengths": list(self.strengths),
            "recommendations": list(self.recommendations),
            "metadata": {
                "originalFilename": self.metadata.get("original_filename"),
                "suggestedFilename": self.metadata.get("suggested_filename"),
                "textLength": self.metadata.get("text_length"),
                "timestamp": self.metadata.get("timestamp"),
            },
        }


@dataclass(frozen=True)
class QualityReport:
    """Aggregate of many QualityRatings."""

    total_suggestions: int
    average_overall: float
    average_metrics: Dict[str, float]
    distribution: Dict[str, int]
    success_rate: float
    recommendations: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "summary": {
                "totalSuggestions": self.total_suggestions,
                "averageOverall": self.average_overall,
                "averageMetrics": dict(self.average_metrics),
                "distribution": dict(self.distribution),
                "successRate": self.success_rate,
            },
            "recommendations": list(self.recommendations),
        }
