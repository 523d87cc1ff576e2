"""Validators: normalise individual metadata fields returned by the LLM.

Every validator is a pure function. Invalid input never raises; each field
falls back to a defined value (``None``, ``0.0`` or an empty list) so that a
partially broken model response still produces a complete record.
"""

import math
import re
from typing import Any, List, Optional

import dateparser


MAX_CLIENT_NAME_LENGTH = 200
MAX_DOCUMENT_TYPE_LENGTH = 100
MAX_SNIPPET_LENGTH = 500
MAX_SNIPPETS = 5

_ISO_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

# Day, month and year must all be present in the text, and relative phrases
# such as "today" or "in 2 days" are rejected, so no part of the result ever
# comes from the current date.
_DATEPARSER_SETTINGS = {
    "STRICT_PARSING": True,
    "PARSERS": ["custom-formats", "absolute-time"],
}


def _clean_string(value: Any, max_length: int) -> Optional[str]:
    if not isinstance(value, str):
        return None
    cleaned = value.strip()
    if 0 < len(cleaned) < max_length:
        return cleaned
    return None


def validate_client_name(client_name: Any) -> Optional[str]:
    """Trim a client name, returning None for empty, oversized or non-string values."""
    return _clean_string(client_name, MAX_CLIENT_NAME_LENGTH)


def validate_document_type(doc_type: Any) -> Optional[str]:
    """Trim a document type, returning None for empty, oversized or non-string values."""
    return _clean_string(doc_type, MAX_DOCUMENT_TYPE_LENGTH)


def validate_date(date: Any) -> Optional[str]:
    """Normalise a date to ISO ``YYYY-MM-DD``.

    ISO dates are returned unchanged. Human-readable dates such as
    ``"January 15, 2024"`` are parsed and reformatted.

    Args:
        date: Raw date value from the model response.

    Returns:
        The ISO date string, or None if the value cannot be parsed.
    """
    if not isinstance(date, str) or not date:
        return None

    if _ISO_DATE_RE.fullmatch(date):
        return date

    parsed = dateparser.parse(date, settings=_DATEPARSER_SETTINGS)
    if parsed is None:
        return None
    return parsed.strftime("%Y-%m-%d")


def validate_confidence(confidence: Any) -> float:
    """Clamp a confidence score to [0, 1].

    Non-numeric values (including booleans, numeric strings and NaN) are
    coerced to 0.0. Integers too large for a float clamp by sign.
    """
    if isinstance(confidence, bool) or not isinstance(confidence, (int, float)):
        return 0.0
    try:
        value = float(confidence)
    except OverflowError:
        return 1.0 if confidence > 0 else 0.0
    if math.isnan(value):
        return 0.0
    return max(0.0, min(1.0, value))


def validate_snippets(snippets: Any) -> List[str]:
    """Keep up to five trimmed, non-blank snippets in their original order."""
    if not isinstance(snippets, list):
        return []

    cleaned = [
        snippet.strip()
        for snippet in snippets
        if isinstance(snippet, str) and snippet.strip()
    ]
    return [s for s in cleaned if len(s) < MAX_SNIPPET_LENGTH][:MAX_SNIPPETS]
