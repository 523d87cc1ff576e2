"""MetadataExtractionService: LLM-backed client/date/type extraction with caching.

Turns raw document text into a validated, confidence-scored MetadataRecord:

- The text is hashed (SHA-256) and looked up in the injected cache. A hit is
  returned verbatim without calling the model.
- On a miss the injected LLM client is called once, bounded by a timeout.
- The raw response is parsed into a tagged result (ParsedOk | ParseError)
  before anything else touches it.
- Each field is normalised by the validators, the record is stored in the
  cache under the same hash and returned.

Every failure along the way (disabled service, empty text, missing client,
model error or timeout, malformed response) collapses to ``None``. Callers
branch on absence and fall back to heuristic naming; nothing is raised.

Batch extraction groups documents into fixed-size chunks and runs each chunk
concurrently with ``asyncio.gather()``, keeping output order aligned with the
non-empty input items.
"""

import asyncio
import inspect
import logging
from typing import Any, Dict, Iterable, List, Optional

from tqdm import tqdm

from docsorter.config import ExtractionConfig
from docsorter.utils.metadata_extractor.cache import MetadataCache, generate_text_hash
from docsorter.utils.metadata_extractor.llm_client import LLMClient
from docsorter.utils.metadata_extractor.models import (
    LLMMetadataPayload,
    MetadataRecord,
    MetadataSource,
    ParseError,
)
from docsorter.utils.metadata_extractor.prompts import build_metadata_prompt
from docsorter.utils.metadata_extractor.response_parser import parse_llm_response
from docsorter.utils.validators import (
    validate_client_name,
    validate_confidence,
    validate_date,
    validate_document_type,
    validate_snippets,
)


logger = logging.getLogger(__name__)


async def _resolve(value: Any) -> Any:
    """Await ``value`` if the cache returned an awaitable, else pass it through."""
    if inspect.isawaitable(value):
        return await value
    return value


def _item_text(item: Any) -> Optional[str]:
    if isinstance(item, dict):
        text = item.get("text")
    else:
        text = getattr(item, "text", None)
    if isinstance(text, str) and text.strip():
        return text
    return None


class MetadataExtractionService:
    """Extracts client name, date and document type from document text via an LLM.

    The LLM client and the cache are injected capabilities. Either can be
    supplied at construction or attached later with ``set_llm_client()`` and
    ``set_cache()``. Configuration is read-only after construction, so
    concurrent calls never race on service state; the cache is the only
    shared mutable resource and is trusted to keep itself consistent.

    Example Usage:

    service = MetadataExtractionService(
        ExtractionConfig(model="llama-3.1-8b-instant"),
        llm_client=ChatModelLLMClient(ChatGroq(model="llama-3.1-8b-instant")),
        cache=TTLMetadataCache(),
    )
    record = await service.extract_metadata_ai(text)
    records = await service.extract_metadata_ai_batch([{"text": t} for t in texts])
    """

    def __init__(
        self,
        config: Optional[ExtractionConfig] = None,
        llm_client: Optional[LLMClient] = None,
        cache: Optional[MetadataCache] = None,
    ) -> None:
        """Initialize the service.

        Args:
            config: Extraction settings. Uses default ExtractionConfig if None.
            llm_client: Capability used to call the model. Without one every
                extraction returns None.
            cache: Optional key/value store for validated records.
        """
        self.config = config or ExtractionConfig()
        self.llm_client = llm_client
        self.cache = cache

    def set_llm_client(self, client: Optional[LLMClient]) -> None:
        self.llm_client = client

    def set_cache(self, cache: Optional[MetadataCache]) -> None:
        self.cache = cache

    def is_ready(self) -> bool:
        """Whether an LLM client is attached."""
        return self.llm_client is not None

    def get_config(self) -> Dict[str, Any]:
        """Return a snapshot of the effective configuration for diagnostics."""
        return {
            "enabled": self.config.enabled,
            "model": self.config.model,
            "confidence_threshold": self.config.confidence_threshold,
            "batch_size": self.config.batch_size,
            "has_llm_client": self.llm_client is not None,
            "has_cache": self.cache is not None,
        }

    async def extract_metadata_ai(
        self,
        text: str,
        *,
        use_cache: bool = True,
        force_refresh: bool = False,
        detected_language: Optional[str] = None,
        language_name: Optional[str] = None,
    ) -> Optional[MetadataRecord]:
        """Extract a MetadataRecord from one document's text.

        Args:
            text: Document body. Empty or whitespace-only text yields None.
            use_cache: When False the cache is neither read nor written.
            force_refresh: When True the cache lookup is skipped but the fresh
                result is still stored.
            detected_language: Optional language code passed to the prompt.
            language_name: Optional human-readable language name for the prompt.

        Returns:
            The validated record, the cached record on a cache hit, or None if
            the service is disabled, the text is empty, no client is attached,
            or the model call or response parsing fails.
        """
        if not self.config.enabled:
            return None
        if not isinstance(text, str) or not text.strip():
            return None
        if self.llm_client is None:
            logger.warning("Metadata extraction skipped: no LLM client configured.")
            return None

        text_hash = generate_text_hash(text)
        cache_enabled = use_cache and self.cache is not None

        if cache_enabled and not force_refresh:
            cached_record = await self._cache_get(text_hash)
            if cached_record is not None:
                logger.debug("Metadata for %s retrieved from cache.", text_hash[:12])
                return cached_record

        payload = await self._call_model(text, detected_language, language_name)
        if payload is None:
            return None

        record = self._build_record(payload)

        if cache_enabled:
            await self._cache_set(text_hash, record)

        return record

    async def extract_metadata_ai_batch(
        self,
        items: Iterable[Any],
        *,
        use_cache: bool = True,
        force_refresh: bool = False,
        concurrency: Optional[int] = None,
    ) -> List[Optional[MetadataRecord]]:
        """Extract metadata for many documents in fixed-size concurrent groups.

        Items without usable text are dropped before processing, so the output
        has one entry per non-empty item, in input order. A failed extraction
        leaves None at its position without affecting the others.

        Args:
            items: Mappings with a ``text`` key, or objects with a ``text``
                attribute.
            use_cache: Forwarded to extract_metadata_ai().
            force_refresh: Forwarded to extract_metadata_ai().
            concurrency: Group size override. Defaults to ``config.batch_size``.

        Returns:
            List of records (or None for failures), one per non-empty item.

        Raises:
            ValueError: If ``concurrency`` is less than 1.
        """
        group_size = concurrency if concurrency is not None else self.config.batch_size
        if group_size < 1:
            raise ValueError(f"concurrency must be at least 1, got {group_size}.")

        if not self.config.enabled:
            return []

        texts = [text for text in (_item_text(item) for item in items) if text]
        if not texts:
            return []

        results: List[Optional[MetadataRecord]] = []
        for start in tqdm(range(0, len(texts), group_size), desc="Extracting metadata"):
            group = texts[start : start + group_size]

            # gather() preserves argument order, so positions stay aligned
            # with the surviving input items.
            group_results = await asyncio.gather(
                *[
                    self._extract_isolated(
                        text, use_cache=use_cache, force_refresh=force_refresh
                    )
                    for text in group
                ]
            )
            results.extend(group_results)

            if start + group_size < len(texts) and self.config.batch_delay > 0:
                await asyncio.sleep(self.config.batch_delay)

        return results

    async def _extract_isolated(
        self, text: str, *, use_cache: bool, force_refresh: bool
    ) -> Optional[MetadataRecord]:
        try:
            return await self.extract_metadata_ai(
                text, use_cache=use_cache, force_refresh=force_refresh
            )
        except Exception:
            logger.exception("Batch metadata extraction failed for one item.")
            return None

    async def _call_model(
        self,
        text: str,
        detected_language: Optional[str],
        language_name: Optional[str],
    ) -> Optional[LLMMetadataPayload]:
        """Call the LLM once and parse its response, returning None on any failure."""
        request = build_metadata_prompt(
            text,
            self.config.model,
            detected_language=detected_language,
            language_name=language_name,
            max_tokens=self.config.max_tokens,
            temperature=self.config.temperature,
        )

        try:
            response = await asyncio.wait_for(
                self.llm_client.call_llm(request),  # type: ignore[union-attr]
                timeout=self.config.timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.warning(
                "LLM call timed out after %.1fs.", self.config.timeout_seconds
            )
            return None
        except Exception as error:
            logger.warning("LLM call failed: %s", error)
            return None

        content = getattr(response, "content", None)
        parsed = parse_llm_response(content)  # type: ignore[arg-type]
        if isinstance(parsed, ParseError):
            logger.warning("Discarding LLM response: %s", parsed.reason)
            return None
        return parsed.payload

    def _build_record(self, payload: LLMMetadataPayload) -> MetadataRecord:
        return MetadataRecord(
            client_name=validate_client_name(payload.clientName),
            client_confidence=validate_confidence(payload.clientConfidence),
            date=validate_date(payload.date),
            date_confidence=validate_confidence(payload.dateConfidence),
            doc_type=validate_document_type(payload.docType),
            doc_type_confidence=validate_confidence(payload.docTypeConfidence),
            snippets=tuple(validate_snippets(payload.snippets)),
            source=MetadataSource.AI,
        )

    async def _cache_get(self, key: str) -> Optional[MetadataRecord]:
        try:
            return await _resolve(self.cache.get(key))  # type: ignore[union-attr]
        except Exception as error:
            logger.warning("Cache lookup failed, treating as miss: %s", error)
            return None

    async def _cache_set(self, key: str, record: MetadataRecord) -> None:
        try:
            await _resolve(self.cache.set(key, record))  # type: ignore[union-attr]
        except Exception as error:
            logger.warning("Cache store failed: %s", error)
