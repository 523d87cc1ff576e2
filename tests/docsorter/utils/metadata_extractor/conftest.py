"""Shared fixtures for metadata extraction tests."""

import json
from typing import Any, Callable, Dict
from unittest.mock import AsyncMock, Mock

import pytest

from docsorter.config import ExtractionConfig
from docsorter.utils.metadata_extractor import (
    LLMResponse,
    MetadataExtractionService,
    TTLMetadataCache,
)


INVOICE_TEXT = (
    "INVOICE #12345\nAcme Corporation\n123 Business St\n"
    "Invoice Date: January 15, 2024\nAmount Due: $1,500.00"
)


@pytest.fixture
def invoice_text() -> str:
    return INVOICE_TEXT


@pytest.fixture
def invoice_payload() -> Dict[str, Any]:
    """A well-formed model response for the invoice text."""
    return {
        "clientName": "Acme Corporation",
        "clientConfidence": 0.95,
        "date": "January 15, 2024",
        "dateConfidence": 0.9,
        "docType": "Invoice",
        "docTypeConfidence": 0.98,
        "snippets": ["INVOICE #12345", "Acme Corporation"],
    }


@pytest.fixture
def make_llm_client() -> Callable[..., Mock]:
    """Build a mock LLM client whose call_llm returns or raises as configured."""

    def _make(
        payload: Any = None, *, content: Any = None, side_effect: Any = None
    ) -> Mock:
        client = Mock()
        if side_effect is not None:
            client.call_llm = AsyncMock(side_effect=side_effect)
        else:
            body = content if content is not None else json.dumps(payload)
            client.call_llm = AsyncMock(return_value=LLMResponse(content=body))
        return client

    return _make


@pytest.fixture
def test_config() -> ExtractionConfig:
    """Enabled config without inter-batch delay."""
    return ExtractionConfig(enabled=True, batch_size=2, batch_delay=0.0)


@pytest.fixture
def cache() -> TTLMetadataCache:
    return TTLMetadataCache()


@pytest.fixture
def make_service(test_config, cache) -> Callable[..., MetadataExtractionService]:
    def _make(llm_client: Any, **overrides: Any) -> MetadataExtractionService:
        return MetadataExtractionService(
            overrides.pop("config", test_config),
            llm_client=llm_client,
            cache=overrides.pop("cache", cache),
        )

    return _make
