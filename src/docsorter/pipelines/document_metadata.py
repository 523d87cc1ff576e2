"""Extract metadata for a batch of documents and rate their suggested filenames."""

import asyncio
import json
import logging
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from langchain_groq import ChatGroq

from docsorter.config import load_config
from docsorter.utils.metadata_extractor import (
    ChatModelLLMClient,
    MetadataExtractionService,
    MetadataRecord,
    TTLMetadataCache,
)
from docsorter.utils.quality_rater import (
    QualityRating,
    QualityRatingService,
    QualityReport,
    QualitySuggestion,
)


logger = logging.getLogger(__name__)


def load_suggestion_records(path: str) -> List[Dict[str, Any]]:
    """Read one JSON object per line with original/suggested filenames and text.

    Blank lines are skipped.

    Raises:
        ValueError: If a line is not a JSON object with both filename fields.
    """
    records = []
    with open(path, "r", encoding="utf-8") as f:
        for line_number, line in enumerate(f, start=1):
            if not line.strip():
                continue
            record = json.loads(line)
            if not isinstance(record, dict) or not all(
                key in record for key in ("original_filename", "suggested_filename")
            ):
                raise ValueError(
                    f"{path}:{line_number}: expected an object with "
                    "'original_filename' and 'suggested_filename'."
                )
            records.append(record)
    return records


async def rate_documents(
    records: List[Dict[str, Any]],
    extractor: MetadataExtractionService,
    rater: QualityRatingService,
) -> tuple[List[QualityRating], QualityReport]:
    """Extract metadata for every record with text, then rate each suggestion.

    Records with empty or non-string text are still rated, with no analysis
    result.
    """
    texts = [
        text if isinstance(text, str) else ""
        for text in (record.get("text") for record in records)
    ]
    with_text = [i for i, text in enumerate(texts) if text.strip()]

    # Batch extraction drops empty texts, so results line up with with_text.
    extracted = await extractor.extract_metadata_ai_batch(
        [{"text": texts[i]} for i in with_text]
    )
    analyses: Dict[int, Optional[MetadataRecord]] = dict(zip(with_text, extracted))

    confident = sum(
        1
        for record in analyses.values()
        if record is not None
        and record.is_confident(extractor.config.confidence_threshold)
    )
    logger.info(
        "Extracted metadata for %d of %d documents (%d above confidence threshold).",
        sum(1 for record in analyses.values() if record is not None),
        len(records),
        confident,
    )

    suggestions = [
        QualitySuggestion(
            original_filename=record["original_filename"],
            suggested_filename=record["suggested_filename"],
            analysis_result=analyses.get(i),
            extracted_text=texts[i],
        )
        for i, record in enumerate(records)
    ]
    ratings = rater.rate_suggestions(suggestions)
    return ratings, rater.generate_quality_report(ratings)


def main() -> None:
    """Run the document metadata pipeline."""
    logging.basicConfig(level=logging.INFO)

    # Load environment variables
    load_dotenv()

    # Load YAML configuration
    config = load_config("document_metadata_config.yml")
    llm_config = config.llm
    pipeline_config = config.pipeline

    llm = ChatGroq(
        model=llm_config["model"],
        temperature=llm_config.get("temperature", config.extraction.temperature),
        max_tokens=llm_config.get("max_tokens", config.extraction.max_tokens),
        max_retries=llm_config.get("max_retries", 2),
    )
    cache = TTLMetadataCache(
        max_entries=pipeline_config.get("cache_max_entries", 1000),
        ttl=pipeline_config.get("cache_ttl_seconds", 7 * 24 * 60 * 60),
    )
    extractor = MetadataExtractionService(
        config.extraction, llm_client=ChatModelLLMClient(llm), cache=cache
    )
    rater = QualityRatingService(config.quality)

    logger.info(f"Loading suggestions: {pipeline_config['input_path']}")
    records = load_suggestion_records(pipeline_config["input_path"])

    _, report = asyncio.run(rate_documents(records, extractor, rater))

    logger.info(
        "Average score %.2f over %d suggestions, success rate %.1f%%.",
        report.average_overall,
        report.total_suggestions,
        report.success_rate,
    )
    for recommendation in report.recommendations:
        logger.info(f"Recommendation: {recommendation}")
    logger.info(f"Cache stats: {cache.get_stats()}")

    with open(pipeline_config["report_path"], "w", encoding="utf-8") as f:
        json.dump(report.to_dict(), f, indent=2)


if __name__ == "__main__":
    main()
