"""Field validators for extracted document metadata."""

from docsorter.utils.validators.validators import (
    validate_client_name,
    validate_confidence,
    validate_date,
    validate_document_type,
    validate_snippets,
)


__all__ = [
    "validate_client_name",
    "validate_confidence",
    "validate_date",
    "validate_document_type",
    "validate_snippets",
]
