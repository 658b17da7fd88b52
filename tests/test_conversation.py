"""Unit tests for the conversation client and session controller."""
import asyncio

import pytest
from conftest import FakeProvider, StepClock

from wanderlust.conversation import ConversationClient, SessionController, TurnState
from wanderlust.locale import (
    APOLOGY_TEXT,
    CLEARED_TEXT,
    GREETING_TEXT,
    NO_RESPONSE_TEXT,
    QUICK_REPLIES,
    Language,
)
from wanderlust.memory import (
    MapsChunk,
    MapsSource,
    Message,
    MessageStore,
    Role,
    Session,
    deserialize_log,
    serialize_log,
)
from wanderlust.memory.in_memory import InMemoryBackend
from wanderlust.memory.json_file import JSONFileBackend
from wanderlust.prompts import instruction_for


class TestConversationClient:
    """Tests for ConversationClient."""

    def test_build_request_sends_history_then_new_turn(self, provider, web_chunk):
        client = ConversationClient(provider)
        history = [
            Message(role=Role.MODEL, text="Hello!"),
            Message(role=Role.USER, text="Paris?"),
            Message(role=Role.MODEL, text="Yes!", grounding_chunks=(web_chunk,)),
            Message(role=Role.USER, text="Food?"),
        ]

        request = client.build_request(history, "Food?", Language.EN)

        assert [(m.role, m.content) for m in request] == [
            ("system", instruction_for(Language.EN)),
            ("model", "Hello!"),
            ("user", "Paris?"),
            ("model", "Yes!"),
            ("user", "Food?"),
            ("user", "Food?"),
        ]

    def test_build_request_without_trailing_user_turn(self, provider):
        client = ConversationClient(provider)

        request = client.build_request([Message(role=Role.MODEL, text="Hello!")], "Rome", Language.UR)

        assert request[0].content == instruction_for(Language.UR)
        assert [m.role for m in request[1:]] == ["model", "user"]
        assert request[-1].content == "Rome"

    @pytest.mark.asyncio
    async def test_send_issues_one_grounded_request(self, provider):
        client = ConversationClient(provider)

        reply = await client.send([Message(role=Role.USER, text="Paris")], "Paris", Language.EN)

        assert reply.text == "Here is your plan."
        assert reply.grounding_chunks is None
        assert len(provider.calls) == 1
        assert provider.calls[0]["temperature"] == 0.7
        assert provider.calls[0]["maps_grounding"] is True

    @pytest.mark.asyncio
    async def test_send_returns_grounding_chunks(self, web_chunk):
        client = ConversationClient(FakeProvider(grounding_chunks=(web_chunk,)))

        reply = await client.send([], "Paris", Language.EN)

        assert reply.grounding_chunks == (web_chunk,)

    @pytest.mark.asyncio
    async def test_empty_reply_uses_fallback_text(self):
        client = ConversationClient(FakeProvider(content="", grounding_chunks=()))

        reply = await client.send([], "Paris", Language.EN)

        assert reply.text == NO_RESPONSE_TEXT
        assert reply.grounding_chunks is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("language", list(Language))
    async def test_provider_failure_becomes_localized_apology(self, language, caplog):
        provider = FakeProvider(error=ConnectionError("network down"))
        client = ConversationClient(provider)

        reply = await client.send([], "Paris", language)

        assert reply.text == APOLOGY_TEXT[language]
        assert reply.grounding_chunks is None
        assert len(provider.calls) == 1
        assert "Model request failed" in caplog.text


class TestSessionController:
    """Tests for SessionController."""

    @pytest.mark.asyncio
    async def test_start_seeds_greeting_when_nothing_saved(self, controller, backend, session):
        messages = await controller.start()

        assert len(messages) == 1
        assert messages[0].role is Role.MODEL
        assert messages[0].text == GREETING_TEXT
        assert await backend.get(session.key) is not None

    @pytest.mark.asyncio
    async def test_start_restores_saved_log(self, backend, provider):
        saved = [Message(role=Role.USER, text="hi"), Message(role=Role.MODEL, text="hello")]
        await backend.set("wanderlust_chat", serialize_log(saved))
        controller = SessionController(MessageStore(backend, Session()), ConversationClient(provider))

        assert await controller.start() == tuple(saved)

    @pytest.mark.asyncio
    async def test_start_with_corrupt_log_seeds_greeting(self, backend, provider):
        await backend.set("wanderlust_chat", "{not json")
        controller = SessionController(MessageStore(backend, Session()), ConversationClient(provider))

        messages = await controller.start()

        assert [m.text for m in messages] == [GREETING_TEXT]

    @pytest.mark.asyncio
    async def test_start_with_undecodable_file_seeds_greeting(self, tmp_path, provider):
        (tmp_path / "wanderlust_chat.json").write_bytes(b"\xff{not json")
        controller = SessionController(
            MessageStore(JSONFileBackend(tmp_path), Session()), ConversationClient(provider)
        )

        messages = await controller.start()

        assert [m.text for m in messages] == [GREETING_TEXT]
        assert deserialize_log((tmp_path / "wanderlust_chat.json").read_text(encoding="utf-8")) == list(messages)

    @pytest.mark.asyncio
    async def test_send_appends_user_then_model(self, controller):
        await controller.start()

        reply = await controller.send("  Plan a 3-day trip to Paris  ")

        messages = controller.messages
        assert len(messages) == 3
        assert messages[1].role is Role.USER
        assert messages[1].text == "Plan a 3-day trip to Paris"
        assert messages[2] == reply
        assert reply.role is Role.MODEL
        assert reply.text == "Here is your plan."
        timestamps = [m.timestamp for m in messages]
        assert timestamps == sorted(timestamps)
        assert controller.state is TurnState.IDLE

    @pytest.mark.asyncio
    async def test_send_passes_history_with_user_turn_and_new_turn(self, controller, provider):
        await controller.start()

        await controller.send("  Best food in Tokyo ")

        request = provider.calls[0]["messages"]
        assert [(m.role, m.content) for m in request[1:]] == [
            ("model", GREETING_TEXT),
            ("user", "Best food in Tokyo"),
            ("user", "Best food in Tokyo"),
        ]

    @pytest.mark.asyncio
    async def test_send_with_grounding_scenario(self, backend, web_chunk):
        session = Session()
        store = MessageStore(backend, session)
        controller = SessionController(store, ConversationClient(FakeProvider(grounding_chunks=(web_chunk,))))

        await controller.send("Plan a 3-day trip to Paris")

        assert len(session.messages) == 2
        assert session.messages[1].role is Role.MODEL
        assert len(session.messages[1].grounding_chunks) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["", "   ", "\n\t"])
    async def test_blank_send_is_ignored(self, controller, provider, text):
        await controller.start()
        before = controller.messages

        assert await controller.send(text) is None

        assert controller.messages == before
        assert provider.calls == []

    @pytest.mark.asyncio
    async def test_send_while_sending_is_ignored(self, store):
        release = asyncio.Event()

        class SlowProvider(FakeProvider):
            async def chat_completion(self, messages, **kwargs):
                await release.wait()
                return await super().chat_completion(messages, **kwargs)

        provider = SlowProvider()
        controller = SessionController(store, ConversationClient(provider))

        first = asyncio.create_task(controller.send("Rome"))
        await asyncio.sleep(0)
        assert controller.is_sending
        snapshot = controller.messages

        assert await controller.send("Milan") is None
        assert controller.messages == snapshot

        release.set()
        await first
        assert [m.role for m in controller.messages] == [Role.USER, Role.MODEL]
        assert len(provider.calls) == 1
        assert not controller.is_sending

    @pytest.mark.asyncio
    async def test_provider_failure_appends_apology(self, store):
        controller = SessionController(store, ConversationClient(FakeProvider(error=RuntimeError("401"))))
        controller.toggle_language()

        reply = await controller.send("لاہور")

        assert reply.text == APOLOGY_TEXT[Language.UR]
        assert reply.text
        assert len(controller.messages) == 2
        assert controller.state is TurnState.IDLE

    @pytest.mark.asyncio
    async def test_state_returns_to_idle_on_local_error(self, session, provider):
        class FailingStore(MessageStore):
            async def append(self, message):
                raise RuntimeError("boom")

        controller = SessionController(FailingStore(InMemoryBackend(), session), ConversationClient(provider))

        with pytest.raises(RuntimeError):
            await controller.send("Rome")

        assert controller.state is TurnState.IDLE

    @pytest.mark.asyncio
    async def test_timestamps_never_decrease(self, store, provider):
        clock = StepClock(start=10_000, step=-1000)
        controller = SessionController(store, ConversationClient(provider), clock=clock)

        await controller.send("Bali")
        await controller.send("Budget?")

        timestamps = [m.timestamp for m in controller.messages]
        assert timestamps == sorted(timestamps)

    def test_toggle_language(self, controller, session):
        assert controller.language is Language.EN
        assert controller.quick_replies() == QUICK_REPLIES[Language.EN]

        assert controller.toggle_language() is Language.UR
        assert session.language is Language.UR
        assert controller.quick_replies() == QUICK_REPLIES[Language.UR]

        assert controller.toggle_language() is Language.EN

    @pytest.mark.asyncio
    async def test_toggle_language_affects_next_request_only(self, controller, provider):
        await controller.start()
        await controller.send("Rome")
        controller.toggle_language()
        await controller.send("Rome again")

        assert provider.calls[0]["messages"][0].content == instruction_for(Language.EN)
        assert provider.calls[1]["messages"][0].content == instruction_for(Language.UR)
        assert controller.messages[0].text == GREETING_TEXT

    @pytest.mark.asyncio
    async def test_clear_requires_confirmation(self, controller):
        await controller.start()
        await controller.send("Rome")
        before = controller.messages

        assert await controller.clear_conversation(confirmed=False) is False
        assert controller.messages == before

    @pytest.mark.asyncio
    @pytest.mark.parametrize("language", list(Language))
    async def test_clear_reseeds_greeting_in_current_language(self, controller, backend, session, language):
        await controller.start()
        for text in ("Rome", "Milan", "Venice"):
            await controller.send(text)
        session.language = language

        assert await controller.clear_conversation(confirmed=True) is True

        assert len(controller.messages) == 1
        assert controller.messages[0].text == CLEARED_TEXT[language]
        assert controller.messages[0].role is Role.MODEL
        assert await backend.get(session.key) == serialize_log(controller.messages)

    @pytest.mark.asyncio
    async def test_message_callback(self, controller):
        seen = []
        controller.set_message_callback(seen.append)

        await controller.start()
        await controller.send("Rome")

        assert [m.role for m in seen] == [Role.MODEL, Role.USER, Role.MODEL]
        assert tuple(seen) == controller.messages

    @pytest.mark.asyncio
    async def test_maps_chunk_survives_reload(self, backend):
        chunk = MapsChunk(maps=MapsSource(uri="https://maps.google.com/?cid=9", title="Colosseum"))
        controller = SessionController(
            MessageStore(backend, Session()),
            ConversationClient(FakeProvider(grounding_chunks=(chunk,))),
        )
        await controller.send("Historical places in Rome")

        reloaded = MessageStore(backend, Session())
        messages = await reloaded.load()

        assert messages[1].grounding_chunks == (chunk,)
