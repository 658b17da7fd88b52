"""Unit tests for the LLM provider layer."""
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from wanderlust.llm import ChatMessage, GeminiProvider, LLMProvider, create_llm_provider
from wanderlust.memory import MapsChunk, WebChunk


def _response(parts=None, grounding_chunks=None, usage=None):
    content = SimpleNamespace(parts=[SimpleNamespace(text=p) for p in parts]) if parts is not None else None
    metadata = SimpleNamespace(grounding_chunks=grounding_chunks) if grounding_chunks is not None else None
    candidate = SimpleNamespace(content=content, grounding_metadata=metadata)
    return SimpleNamespace(candidates=[candidate], usage_metadata=usage)


@pytest.fixture
def gemini():
    return GeminiProvider(api_key="fake-key")


class TestLLMProviderInterface:
    """Tests for the abstract LLMProvider interface."""

    def test_provider_is_abstract(self):
        with pytest.raises(TypeError):
            LLMProvider()  # type: ignore


class TestGeminiProvider:
    """Tests for GeminiProvider conversions (no network)."""

    def test_default_model(self, gemini):
        assert gemini.model == "gemini-2.5-flash"

    def test_convert_messages(self, gemini):
        system, contents = gemini._convert_messages([
            ChatMessage(role="system", content="Be a guide"),
            ChatMessage(role="model", content="Hello!"),
            ChatMessage(role="user", content="Paris?"),
        ])

        assert system == "Be a guide"
        assert [c.role for c in contents] == ["model", "user"]
        assert contents[1].parts[0].text == "Paris?"

    def test_extract_content_concatenates_parts(self, gemini):
        assert gemini._extract_content(_response(parts=["Day 1: ", "Louvre"])) == "Day 1: Louvre"

    def test_extract_content_empty(self, gemini):
        assert gemini._extract_content(SimpleNamespace(candidates=[])) == ""
        assert gemini._extract_content(_response(parts=None)) == ""

    def test_extract_grounding_chunks(self, gemini):
        snippet = SimpleNamespace(review_text="Lovely view", title=None)
        raw_chunks = [
            SimpleNamespace(
                maps=SimpleNamespace(
                    uri="https://maps.google.com/?cid=1",
                    title="Eiffel Tower",
                    place_answer_sources=SimpleNamespace(review_snippets=[snippet]),
                ),
                web=None,
            ),
            SimpleNamespace(maps=None, web=SimpleNamespace(uri="https://example.com", title=None)),
            SimpleNamespace(maps=None, web=None),
        ]

        chunks = gemini._extract_grounding_chunks(_response(parts=["x"], grounding_chunks=raw_chunks))

        assert len(chunks) == 2
        maps, web = chunks
        assert isinstance(maps, MapsChunk)
        assert maps.maps.title == "Eiffel Tower"
        assert maps.maps.place_answer_sources[0].review_snippets[0].review_text == "Lovely view"
        assert isinstance(web, WebChunk)
        assert web.web.title == ""

    def test_no_grounding_metadata(self, gemini):
        assert gemini._extract_grounding_chunks(_response(parts=["x"])) is None
        assert gemini._extract_grounding_chunks(_response(parts=["x"], grounding_chunks=[])) is None

    @pytest.mark.asyncio
    async def test_chat_completion_enables_maps_tool(self, gemini):
        generate = AsyncMock(return_value=_response(
            parts=["Try the Marais."],
            usage=SimpleNamespace(prompt_token_count=10, candidates_token_count=5, total_token_count=15),
        ))
        gemini._client = SimpleNamespace(aio=SimpleNamespace(models=SimpleNamespace(generate_content=generate)))

        response = await gemini.chat_completion(
            [ChatMessage(role="system", content="Guide"), ChatMessage(role="user", content="Paris food")],
            temperature=0.7,
            maps_grounding=True,
        )

        assert response.content == "Try the Marais."
        assert response.usage == {"prompt_tokens": 10, "completion_tokens": 5, "total_tokens": 15}
        generate.assert_awaited_once()
        config = generate.await_args.kwargs["config"]
        assert config.system_instruction == "Guide"
        assert config.temperature == 0.7
        assert config.tools[0].google_maps is not None

    @pytest.mark.asyncio
    async def test_chat_completion_without_grounding(self, gemini):
        generate = AsyncMock(return_value=_response(parts=["ok"]))
        gemini._client = SimpleNamespace(aio=SimpleNamespace(models=SimpleNamespace(generate_content=generate)))

        await gemini.chat_completion([ChatMessage(role="user", content="hi")])

        assert generate.await_args.kwargs["config"].tools is None

    @pytest.mark.asyncio
    @pytest.mark.integration
    async def test_chat_completion_real_api(self, api_keys):
        """Integration test: one grounded request against Gemini."""
        if not api_keys["gemini"]:
            pytest.skip("GEMINI_API_KEY not set")

        async with GeminiProvider(api_key=api_keys["gemini"]) as provider:
            response = await provider.chat_completion(
                [ChatMessage(role="user", content="Name one cafe near the Louvre.")],
                maps_grounding=True,
            )

        assert response.content


class TestLLMFactory:
    """Tests for create_llm_provider."""

    def test_create_gemini(self):
        provider = create_llm_provider("Gemini", api_key="fake-key", model="gemini-2.5-pro")

        assert isinstance(provider, GeminiProvider)
        assert provider.model == "gemini-2.5-pro"

    def test_missing_api_key(self):
        with pytest.raises(TypeError, match="api_key"):
            create_llm_provider("gemini")

    def test_unsupported_provider(self):
        with pytest.raises(ValueError, match="Unsupported provider"):
            create_llm_provider("openai", api_key="x")
