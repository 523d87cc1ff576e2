"""Data models for metadata extraction: records, LLM requests and parse results."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict


class MetadataSource(Enum):
    """Where a MetadataRecord came from."""

    AI = "AI"
    CACHE = "Cache"


@dataclass(frozen=True)
class MetadataRecord:
    """Validated, confidence-scored client/date/type extraction for one document.

    Every confidence is already clamped to [0, 1] by the validators. The
    overall confidence is derived from the three field confidences and cannot
    be set independently.
    """

    client_name: Optional[str]
    client_confidence: float
    date: Optional[str]
    date_confidence: float
    doc_type: Optional[str]
    doc_type_confidence: float
    snippets: Tuple[str, ...] = ()
    source: MetadataSource = MetadataSource.AI

    @property
    def overall_confidence(self) -> float:
        """Arithmetic mean of the client, date and document type confidences."""
        return (
            self.client_confidence + self.date_confidence + self.doc_type_confidence
        ) / 3

    def is_confident(self, threshold: float) -> bool:
        """Whether the overall confidence reaches ``threshold``."""
        return self.overall_confidence >= threshold

    def to_dict(self) -> Dict[str, Any]:
        """Serialise to the camelCase shape consumed by the renaming layer."""
        return {
            "clientName": self.client_name,
            "clientConfidence": self.client_confidence,
            "date": self.date,
            "dateConfidence": self.date_confidence,
            "docType": self.doc_type,
            "docTypeConfidence": self.doc_type_confidence,
            "snippets": list(self.snippets),
            "source": self.source.value,
            "overallConfidence": self.overall_confidence,
        }


@dataclass(frozen=True)
class LLMMessage:
    role: str
    content: str


@dataclass(frozen=True)
class LLMRequest:
    """A chat request handed to the injected LLM client."""

    model: str
    messages: List[LLMMessage] = field(default_factory=list)
    max_tokens: int = 500
    temperature: float = 0.1


@dataclass(frozen=True)
class LLMResponse:
    content: str


class LLMMetadataPayload(BaseModel):
    """Shape of the JSON object the model is asked to return.

    Only the shape is enforced here. Scalar values may be of any JSON type
    since the field validators normalise them afterwards.
    """

    model_config = ConfigDict(extra="ignore")

    clientName: Any
    clientConfidence: Any
    date: Any
    dateConfidence: Any
    docType: Any
    docTypeConfidence: Any
    snippets: Any


@dataclass(frozen=True)
class ParsedOk:
    """Model output that decoded to the expected JSON shape."""

    payload: LLMMetadataPayload


@dataclass(frozen=True)
class ParseError:
    """Model output that could not be turned into a metadata payload."""

    reason: str


ParseResult = Union[ParsedOk, ParseError]
