"""Configuration for the extraction and quality rating services.

Service settings are plain dataclasses that are fixed at construction. They
can be built directly, read from environment variables, or loaded from a
YAML file that also carries the pipeline and LLM sections.
"""

import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

import yaml
from dotenv import load_dotenv


DEFAULT_FORBIDDEN_PATTERNS: Tuple[str, ...] = (
    r"^Document\d*$",
    r"^File\d*$",
    r"^Untitled\d*$",
    r"^New\s+Document\d*$",
    r"^Scan\d*$",
)

DEFAULT_WEIGHTS: Dict[str, float] = {
    "accuracy": 0.35,
    "format": 0.20,
    "length": 0.15,
    "creativity": 0.15,
    "completeness": 0.15,
}


@dataclass(frozen=True)
class ExtractionConfig:
    """Configuration for the MetadataExtractionService.

    Attributes:
        enabled: When False every extraction short-circuits to None.
        model: Model identifier passed to the LLM client.
        confidence_threshold: Minimum overall confidence callers should trust.
        batch_size: Number of documents extracted concurrently per group.
        batch_delay: Seconds to wait between groups to respect rate limits.
        timeout_seconds: Upper bound on a single model call.
        max_tokens: Response token budget for the model call.
        temperature: Sampling temperature for the model call.
    """

    enabled: bool = True
    model: str = "gpt-3.5-turbo"
    confidence_threshold: float = 0.5
    batch_size: int = 5
    batch_delay: float = 0.1
    timeout_seconds: float = 30.0
    max_tokens: int = 500
    temperature: float = 0.1

    def __post_init__(self) -> None:
        if self.batch_size < 1:
            raise ValueError(f"batch_size must be at least 1, got {self.batch_size}.")
        if self.timeout_seconds <= 0:
            raise ValueError(
                f"timeout_seconds must be positive, got {self.timeout_seconds}."
            )
        if self.batch_delay < 0:
            raise ValueError(f"batch_delay cannot be negative, got {self.batch_delay}.")

    @classmethod
    def from_env(cls) -> "ExtractionConfig":
        """Build a config from USE_AI, AI_MODEL, AI_CONFIDENCE_THRESHOLD and AI_BATCH_SIZE.

        Values from a local ``.env`` file are loaded first; unset or malformed
        numeric values fall back to the defaults.
        """
        load_dotenv()
        defaults = cls()
        return cls(
            enabled=os.getenv("USE_AI", "false").strip().lower() == "true",
            model=os.getenv("AI_MODEL") or defaults.model,
            confidence_threshold=_env_number(
                "AI_CONFIDENCE_THRESHOLD", float, defaults.confidence_threshold
            ),
            batch_size=_env_number("AI_BATCH_SIZE", int, defaults.batch_size),
        )


@dataclass(frozen=True)
class QualityConfig:
    """Configuration for the QualityRatingService.

    Attributes:
        min_filename_length: Names shorter than this are "too short".
        max_filename_length: Names longer than this are "too long".
        forbidden_patterns: Case-insensitive regular expressions that identify
            generic placeholder names. Matched against the name with and
            without its extension.
        weights: Sub-metric weights for the overall score. Must cover exactly
            the five sub-metrics.
    """

    min_filename_length: int = 10
    max_filename_length: int = 100
    forbidden_patterns: Tuple[str, ...] = DEFAULT_FORBIDDEN_PATTERNS
    weights: Dict[str, float] = field(default_factory=lambda: dict(DEFAULT_WEIGHTS))

    def __post_init__(self) -> None:
        if self.min_filename_length > self.max_filename_length:
            raise ValueError(
                "min_filename_length cannot exceed max_filename_length "
                f"({self.min_filename_length} > {self.max_filename_length})."
            )
        if set(self.weights) != set(DEFAULT_WEIGHTS):
            raise ValueError(
                f"weights must define exactly {sorted(DEFAULT_WEIGHTS)}, "
                f"got {sorted(self.weights)}."
            )
        object.__setattr__(self, "forbidden_patterns", tuple(self.forbidden_patterns))


@dataclass
class DocSorterConfig:
    """Top-level configuration loaded from YAML."""

    extraction: ExtractionConfig = field(default_factory=ExtractionConfig)
    quality: QualityConfig = field(default_factory=QualityConfig)
    llm: Dict[str, Any] = field(default_factory=dict)
    pipeline: Dict[str, Any] = field(default_factory=dict)


def load_config(path: str) -> DocSorterConfig:
    """Load a DocSorterConfig from a YAML file.

    Expected sections are ``extraction``, ``quality``, ``llm`` and
    ``pipeline``; any of them may be omitted.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        The parsed configuration.

    Raises:
        ValueError: If the file does not contain a mapping, or a section holds
            invalid values.
        TypeError: If a section contains an unknown key.
    """
    with open(path, "r") as f:
        raw: Optional[Dict[str, Any]] = yaml.safe_load(f)

    raw = raw or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Configuration file {path} must contain a mapping.")

    quality_section = dict(raw.get("quality") or {})
    if "forbidden_patterns" in quality_section:
        quality_section["forbidden_patterns"] = tuple(
            quality_section["forbidden_patterns"]
        )

    return DocSorterConfig(
        extraction=ExtractionConfig(**(raw.get("extraction") or {})),
        quality=QualityConfig(**quality_section),
        llm=dict(raw.get("llm") or {}),
        pipeline=dict(raw.get("pipeline") or {}),
    )


def _env_number(name: str, cast: Any, default: Any) -> Any:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        return cast(value)
    except ValueError:
        return default
