"""Metadata extraction: LLM-backed client/date/type extraction with caching."""

from docsorter.utils.metadata_extractor.cache import (
    MetadataCache,
    TTLMetadataCache,
    generate_text_hash,
)
from docsorter.utils.metadata_extractor.llm_client import ChatModelLLMClient, LLMClient
from docsorter.utils.metadata_extractor.metadata_extractor import (
    MetadataExtractionService,
)
from docsorter.utils.metadata_extractor.models import (
    LLMMessage,
    LLMRequest,
    LLMResponse,
    MetadataRecord,
    MetadataSource,
    ParsedOk,
    ParseError,
)
from docsorter.utils.metadata_extractor.response_parser import parse_llm_response


__all__ = [
    "ChatModelLLMClient",
    "LLMClient",
    "LLMMessage",
    "LLMRequest",
    "LLMResponse",
    "MetadataCache",
    "MetadataExtractionService",
    "MetadataRecord",
    "MetadataSource",
    "ParsedOk",
    "ParseError",
    "TTLMetadataCache",
    "generate_text_hash",
    "parse_llm_response",
]
