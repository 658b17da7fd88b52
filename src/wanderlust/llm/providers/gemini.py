"""Google Gemini LLM provider implementation.

Uses the official Google GenAI SDK for async chat completions.
Reference: https://github.com/googleapis/python-genai

Grounding with Google Maps is enabled per request through the
``maps_grounding`` flag; the citations Gemini attaches to the first
candidate are converted into the app's GroundingChunk models.
"""

import logging
from typing import Any

from google import genai
from google.genai import types

from ...memory.models import (
    GroundingChunk,
    MapsChunk,
    MapsSource,
    PlaceAnswerSource,
    ReviewSnippet,
    WebChunk,
    WebSource,
)
from ..base import LLMProvider
from ..models import ChatMessage, LLMResponse

logger = logging.getLogger(__name__)

# Maps grounding is supported from the 2.5 family onwards
DEFAULT_MODEL = "gemini-2.5-flash"


class GeminiProvider(LLMProvider):
    """Google Gemini LLM provider implementation.

    Hidden design decisions:
    - Google GenAI client initialization
    - Message format conversion
    - Google Maps tool configuration
    - Citation extraction from grounding metadata
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        **client_kwargs: Any
    ):
        """Initialize Gemini provider.

        Args:
            api_key: Google AI API key
            model: Default model (gemini-2.5-flash, gemini-2.5-pro)
            **client_kwargs: Additional kwargs for Client
        """
        self._model = model
        self._client = genai.Client(api_key=api_key, **client_kwargs)

    @property
    def model(self) -> str:
        """Get the default model name."""
        return self._model

    def _convert_messages(self, messages: list[ChatMessage]) -> tuple[str | None, list[types.Content]]:
        """Convert ChatMessage list to Gemini format.

        Args:
            messages: List of chat messages

        Returns:
            Tuple of (system_instruction, contents)
        """
        system_instruction = None
        contents = []

        for msg in messages:
            if msg.role == "system":
                system_instruction = msg.content
            elif msg.role == "user":
                contents.append(types.Content(
                    role="user",
                    parts=[types.Part(text=msg.content)]
                ))
            elif msg.role in ("model", "assistant"):
                contents.append(types.Content(
                    role="model",
                    parts=[types.Part(text=msg.content)]
                ))

        return system_instruction, contents

    def _extract_content(self, response) -> str:
        """Extract text content from Gemini response.

        Args:
            response: Gemini GenerateContentResponse

        Returns:
            Concatenated text of the first candidate, or empty string
        """
        if response.candidates:
            candidate = response.candidates[0]
            if candidate.content and candidate.content.parts:
                texts = [part.text for part in candidate.content.parts if getattr(part, "text", None)]
                return "".join(texts)
        return ""

    def _extract_grounding_chunks(self, response) -> tuple[GroundingChunk, ...] | None:
        """Convert grounding metadata of the first candidate to GroundingChunks.

        Chunks of kinds the app does not display (e.g. retrieved context)
        are skipped.
        """
        if not response.candidates:
            return None
        metadata = response.candidates[0].grounding_metadata
        if metadata is None or not metadata.grounding_chunks:
            return None

        chunks: list[GroundingChunk] = []
        for raw in metadata.grounding_chunks:
            maps = getattr(raw, "maps", None)
            if maps is not None:
                chunks.append(MapsChunk(maps=MapsSource(
                    uri=maps.uri or "",
                    title=maps.title or "",
                    place_answer_sources=_convert_place_sources(
                        getattr(maps, "place_answer_sources", None)
                    ),
                )))
            elif getattr(raw, "web", None) is not None:
                chunks.append(WebChunk(web=WebSource(
                    uri=raw.web.uri or "",
                    title=raw.web.title or "",
                )))
            else:
                logger.debug("Skipping unsupported grounding chunk: %r", raw)

        return tuple(chunks) or None

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        maps_grounding: bool = False,
        **kwargs: Any
    ) -> LLMResponse:
        """Generate a chat completion using Google Gemini.

        Issues exactly one request; empty responses are returned as-is.

        Args:
            messages: Conversation history
            model: Model to use (overrides default)
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate
            maps_grounding: Attach the Google Maps grounding tool
            **kwargs: Additional Gemini-specific config parameters

        Returns:
            LLMResponse with generated content and citations
        """
        model_to_use = model or self._model
        system_instruction, contents = self._convert_messages(messages)

        tools = [types.Tool(google_maps=types.GoogleMaps())] if maps_grounding else None
        config = types.GenerateContentConfig(
            temperature=temperature,
            system_instruction=system_instruction,
            tools=tools,
            **kwargs
        )
        if max_tokens is not None:
            config.max_output_tokens = max_tokens

        response = await self._client.aio.models.generate_content(
            model=model_to_use,
            contents=contents,
            config=config
        )

        usage = None
        if response.usage_metadata:
            usage = {
                "prompt_tokens": response.usage_metadata.prompt_token_count or 0,
                "completion_tokens": response.usage_metadata.candidates_token_count or 0,
                "total_tokens": response.usage_metadata.total_token_count or 0
            }

        return LLMResponse(
            content=self._extract_content(response),
            model=model_to_use,
            usage=usage,
            grounding_chunks=self._extract_grounding_chunks(response),
        )

    async def close(self) -> None:
        """Close the Gemini client.

        Note: The Google GenAI client doesn't require explicit closing,
        but we implement this for interface consistency.
        """
        pass


def _convert_place_sources(raw: Any) -> tuple[PlaceAnswerSource, ...] | None:
    if raw is None:
        return None
    # The SDK exposes a single object; the REST payload may carry a list
    sources = raw if isinstance(raw, list) else [raw]
    converted = []
    for source in sources:
        snippets = []
        for snippet in getattr(source, "review_snippets", None) or []:
            text = getattr(snippet, "review_text", None) or getattr(snippet, "title", None)
            if text:
                snippets.append(ReviewSnippet(review_text=text))
        converted.append(PlaceAnswerSource(review_snippets=tuple(snippets)))
    return tuple(converted) or None
