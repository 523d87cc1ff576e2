"""LLM client capability and an adapter for LangChain chat models."""

from typing import List, Protocol

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage

from docsorter.utils.metadata_extractor.models import LLMRequest, LLMResponse


class LLMClient(Protocol):
    """Anything that can answer an LLMRequest, raising on failure."""

    async def call_llm(self, request: LLMRequest) -> LLMResponse: ...


class ChatModelLLMClient:
    """LLMClient backed by a LangChain chat model.

    Model choice, retries and rate limiting belong to the wrapped chat model
    (e.g. ``ChatGroq(model=..., max_retries=...)``). The request's model and
    sampling fields are informational here since the chat model is already
    configured.
    """

    def __init__(self, llm: BaseChatModel) -> None:
        """Initialize the adapter.

        Args:
            llm: A LangChain-compatible chat model supporting ``ainvoke``.
        """
        self.llm = llm

    async def call_llm(self, request: LLMRequest) -> LLMResponse:
        """Send the request messages to the chat model.

        Raises:
            ValueError: If the model returns empty or non-text content.
        """
        messages: List[BaseMessage] = [
            SystemMessage(content=m.content)
            if m.role == "system"
            else HumanMessage(content=m.content)
            for m in request.messages
        ]
        result = await self.llm.ainvoke(messages)

        content = result.content
        if not isinstance(content, str) or not content.strip():
            raise ValueError("LLM returned an empty response.")
        return LLMResponse(content=content)
