"""Strict parsing of raw model output into a tagged ParseResult."""

import json
import re

from pydantic import ValidationError

from docsorter.utils.metadata_extractor.models import (
    LLMMetadataPayload,
    ParsedOk,
    ParseError,
    ParseResult,
)


REQUIRED_KEYS = (
    "clientName",
    "clientConfidence",
    "date",
    "dateConfidence",
    "docType",
    "docTypeConfidence",
    "snippets",
)

# Greedy match from the first "{" to the last "}" so that prose or code
# fences around the JSON object are ignored.
_JSON_OBJECT_RE = re.compile(r"\{[\s\S]*\}")


def parse_llm_response(content: str) -> ParseResult:
    """Parse model output into a metadata payload.

    Args:
        content: Raw text returned by the LLM client.

    Returns:
        ParsedOk wrapping the validated payload, or ParseError describing why
        the content was rejected. Never raises.
    """
    if not isinstance(content, str) or not content.strip():
        return ParseError("empty response")

    match = _JSON_OBJECT_RE.search(content)
    if match is None:
        return ParseError("no JSON object found in response")

    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError as error:
        return ParseError(f"invalid JSON: {error.msg}")
    except (ValueError, RecursionError) as error:
        # Oversized integer literals or pathologically deep nesting.
        return ParseError(f"invalid JSON: {error}")

    if not isinstance(data, dict):
        return ParseError("response JSON is not an object")

    missing = [key for key in REQUIRED_KEYS if key not in data]
    if missing:
        return ParseError(f"missing required keys: {', '.join(missing)}")

    try:
        payload = LLMMetadataPayload.model_validate(data)
    except ValidationError as error:
        return ParseError(f"unexpected response shape: {error.error_count()} errors")

    return ParsedOk(payload)
