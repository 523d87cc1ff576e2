"""Prompt templates for document metadata extraction.

The prompts force JSON-only output with the seven metadata fields and
per-field confidence scores.
"""

from typing import Optional

from docsorter.utils.metadata_extractor.models import LLMMessage, LLMRequest


MAX_PROMPT_TEXT_LENGTH = 3000
TRUNCATION_MARKER = "\n\n[Text truncated...]"

_BASE_INSTRUCTIONS = """You are a document metadata extraction assistant. Your task is to analyze document text and extract structured information about the client, date, and document type.{context}

CRITICAL REQUIREMENTS:
1. You MUST respond with ONLY valid JSON
2. Do not include any text before or after the JSON
3. Use the exact field names specified below
4. Provide confidence scores as numbers between 0.0 and 1.0
5. If information is not found, use null for the value and 0.0 for confidence
6. Extract relevant text snippets that support your findings

REQUIRED JSON STRUCTURE:
{{
  "clientName": "string or null",
  "clientConfidence": "number between 0.0 and 1.0",
  "date": "string in YYYY-MM-DD format or null",
  "dateConfidence": "number between 0.0 and 1.0",
  "docType": "string or null",
  "docTypeConfidence": "number between 0.0 and 1.0",
  "snippets": ["array of supporting text snippets"]
}}

FIELD GUIDELINES:
- clientName: Company, organization, or person name (e.g., "Acme Corporation", "John Smith")
- date: Document date in YYYY-MM-DD format (e.g., "2024-01-15")
- docType: Document type (e.g., "Invoice", "Contract", "Receipt", "Statement", "Report")
- snippets: Array of 1-3 relevant text excerpts that support your findings
- confidence: How certain you are (0.0 = not found, 1.0 = very certain)"""

_EXAMPLES = """

EXAMPLES:

Example 1 - Invoice:
Input: "INVOICE #12345\\nAcme Corporation\\n123 Business St\\nInvoice Date: January 15, 2024\\nAmount Due: $1,500.00"
Output: {
  "clientName": "Acme Corporation",
  "clientConfidence": 0.95,
  "date": "2024-01-15",
  "dateConfidence": 0.90,
  "docType": "Invoice",
  "docTypeConfidence": 0.98,
  "snippets": ["INVOICE #12345", "Acme Corporation", "Invoice Date: January 15, 2024"]
}

Example 2 - Contract:
Input: "SERVICE AGREEMENT\\nBetween ABC Company and XYZ Corp\\nEffective Date: March 1, 2024\\nThis agreement covers..."
Output: {
  "clientName": "ABC Company",
  "clientConfidence": 0.85,
  "date": "2024-03-01",
  "dateConfidence": 0.80,
  "docType": "Contract",
  "docTypeConfidence": 0.90,
  "snippets": ["SERVICE AGREEMENT", "Between ABC Company and XYZ Corp", "Effective Date: March 1, 2024"]
}

Example 3 - Unclear Document:
Input: "Random text with no clear structure or identifiable information"
Output: {
  "clientName": null,
  "clientConfidence": 0.0,
  "date": null,
  "dateConfidence": 0.0,
  "docType": null,
  "docTypeConfidence": 0.0,
  "snippets": []
}"""


def truncate_text(text: str, max_length: int = MAX_PROMPT_TEXT_LENGTH) -> str:
    """Cut text to ``max_length`` characters, marking the cut."""
    if len(text) <= max_length:
        return text
    return text[:max_length] + TRUNCATION_MARKER


def build_system_prompt(
    include_examples: bool = True,
    detected_language: Optional[str] = None,
    language_name: Optional[str] = None,
    has_table_data: bool = False,
) -> str:
    context = ""
    if detected_language and language_name:
        context += (
            f"\nLANGUAGE CONTEXT: The document appears to be written in "
            f"{language_name} ({detected_language}). Please consider this when "
            "extracting metadata and interpreting document structure."
        )
    if has_table_data:
        context += (
            "\nTABLE CONTEXT: This document contains structured table data. Pay "
            "special attention to table headers, rows, and cells when extracting "
            "client names, dates, and document types. Table data often contains "
            "the most reliable metadata."
        )

    prompt = _BASE_INSTRUCTIONS.format(context=context)
    if include_examples:
        prompt += _EXAMPLES
    return prompt


def build_user_prompt(
    text: str,
    detected_language: Optional[str] = None,
    language_name: Optional[str] = None,
    has_table_data: bool = False,
) -> str:
    hints = ""
    if detected_language and language_name:
        hints += (
            f"\nNote: This document appears to be in {language_name}. "
            "Please consider this when extracting metadata."
        )
    if has_table_data:
        hints += (
            "\nNote: This document contains table data. Focus on table content "
            "for the most accurate metadata extraction."
        )

    return (
        "Please analyze the following document text and extract the metadata as "
        "specified in the system instructions. Respond with ONLY the JSON object, "
        f"no additional text.{hints}\n\nDOCUMENT TEXT:\n{text}"
    )


def build_metadata_prompt(
    text: str,
    model: str,
    *,
    include_examples: bool = True,
    detected_language: Optional[str] = None,
    language_name: Optional[str] = None,
    has_table_data: bool = False,
    max_tokens: int = 500,
    temperature: float = 0.1,
) -> LLMRequest:
    """Build the chat request for extracting metadata from one document.

    Args:
        text: Raw document text. Truncated to 3000 characters.
        model: Model identifier forwarded to the LLM client.
        include_examples: Whether to append the worked examples.
        detected_language: Optional language code (e.g. ``"spa"``).
        language_name: Optional human-readable language name (e.g. ``"Spanish"``).
        has_table_data: Whether the text was extracted from tables.
        max_tokens: Response token budget.
        temperature: Sampling temperature. Low values keep the JSON stable.

    Returns:
        An LLMRequest with a system and a user message.
    """
    system_prompt = build_system_prompt(
        include_examples, detected_language, language_name, has_table_data
    )
    user_prompt = build_user_prompt(
        truncate_text(text), detected_language, language_name, has_table_data
    )
    return LLMRequest(
        model=model,
        messages=[
            LLMMessage(role="system", content=system_prompt),
            LLMMessage(role="user", content=user_prompt),
        ],
        max_tokens=max_tokens,
        temperature=temperature,
    )
