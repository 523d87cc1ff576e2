"""Tests for parsing raw model output into ParsedOk / ParseError."""

import json

from docsorter.utils.metadata_extractor import ParsedOk, ParseError, parse_llm_response


class TestParseLLMResponse:
    """The parser never raises and tags every outcome."""

    def test_plain_json_object(self, invoice_payload) -> None:
        result = parse_llm_response(json.dumps(invoice_payload))

        assert isinstance(result, ParsedOk)
        assert result.payload.clientName == "Acme Corporation"
        assert result.payload.snippets == ["INVOICE #12345", "Acme Corporation"]

    def test_json_wrapped_in_prose_and_fences(self, invoice_payload) -> None:
        content = (
            "Here is the metadata:\n```json\n" + json.dumps(invoice_payload) + "\n```"
        )

        result = parse_llm_response(content)

        assert isinstance(result, ParsedOk)
        assert result.payload.docType == "Invoice"

    def test_null_values_are_accepted(self) -> None:
        payload = {
            "clientName": None,
            "clientConfidence": 0.0,
            "date": None,
            "dateConfidence": 0.0,
            "docType": None,
            "docTypeConfidence": 0.0,
            "snippets": [],
        }

        result = parse_llm_response(json.dumps(payload))

        assert isinstance(result, ParsedOk)
        assert result.payload.clientName is None

    def test_extra_keys_are_ignored(self, invoice_payload) -> None:
        invoice_payload["reasoning"] = "looks like an invoice"

        assert isinstance(parse_llm_response(json.dumps(invoice_payload)), ParsedOk)

    def test_missing_keys(self, invoice_payload) -> None:
        del invoice_payload["snippets"]
        del invoice_payload["dateConfidence"]

        result = parse_llm_response(json.dumps(invoice_payload))

        assert isinstance(result, ParseError)
        assert "dateConfidence" in result.reason
        assert "snippets" in result.reason

    def test_no_json_object(self) -> None:
        result = parse_llm_response("I could not find any metadata.")

        assert isinstance(result, ParseError)

    def test_invalid_json(self) -> None:
        result = parse_llm_response('{"clientName": "Acme", }')

        assert isinstance(result, ParseError)
        assert result.reason.startswith("invalid JSON")

    def test_deeply_nested_json(self) -> None:
        content = '{"clientName": ' + "[" * 100000 + "]" * 100000 + "}"

        result = parse_llm_response(content)

        assert isinstance(result, ParseError)
        assert result.reason.startswith("invalid JSON")

    def test_empty_content(self) -> None:
        assert isinstance(parse_llm_response(""), ParseError)
        assert isinstance(parse_llm_response("   "), ParseError)

    def test_non_string_content(self) -> None:
        assert isinstance(parse_llm_response(None), ParseError)  # type: ignore[arg-type]
