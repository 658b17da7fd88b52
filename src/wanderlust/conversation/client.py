"""The boundary between the conversation log and the model provider.

Everything provider-specific stops here: the controller only ever sees a
ConversationReply, even when the remote call fails.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from ..llm import ChatMessage, LLMProvider
from ..locale import APOLOGY_TEXT, NO_RESPONSE_TEXT, Language
from ..memory.models import GroundingChunk, Message, Role
from ..prompts import instruction_for

logger = logging.getLogger(__name__)

DEFAULT_TEMPERATURE = 0.7

_PROVIDER_ROLES = {
    Role.USER: "user",
    Role.MODEL: "model",
}


@dataclass(frozen=True)
class ConversationReply:
    """Text and optional citations for one model turn."""

    text: str
    grounding_chunks: tuple[GroundingChunk, ...] | None = None


class ConversationClient:
    """Turns stored history plus a new user turn into one provider request."""

    def __init__(
        self,
        llm: LLMProvider,
        model: str | None = None,
        temperature: float = DEFAULT_TEMPERATURE,
    ):
        self._llm = llm
        self._model = model
        self._temperature = temperature

    @property
    def model_name(self) -> str:
        return self._model or self._llm.model

    def build_request(
        self,
        history: Sequence[Message],
        new_message: str,
        language: Language,
    ) -> list[ChatMessage]:
        """Build the provider message list for one turn.

        The request is the system instruction, the full history (which
        already ends with the new user turn), then the new turn itself.
        Grounding chunks never travel upstream, only the text of each turn.
        """
        request = [ChatMessage(role="system", content=instruction_for(language))]
        request.extend(
            ChatMessage(role=_PROVIDER_ROLES[msg.role], content=msg.text)
            for msg in history
        )
        request.append(ChatMessage(role="user", content=new_message))
        return request

    async def send(
        self,
        history: Sequence[Message],
        new_message: str,
        language: Language,
    ) -> ConversationReply:
        """Send one turn to the model.

        Never raises: transport, auth and provider errors are logged and
        turned into a reply carrying the localized apology.
        """
        try:
            request = self.build_request(history, new_message, language)
            response = await self._llm.chat_completion(
                request,
                model=self._model,
                temperature=self._temperature,
                maps_grounding=True,
            )
        except Exception:
            logger.exception("Model request failed (%d turn(s) of history)", len(history))
            return ConversationReply(text=APOLOGY_TEXT[Language(language)])

        if response.usage:
            logger.debug("Token usage: %s", response.usage)

        return ConversationReply(
            text=response.content or NO_RESPONSE_TEXT,
            grounding_chunks=response.grounding_chunks or None,
        )
