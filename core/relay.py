import logging
import re

from core.llm.provider import LLMProvider, UpstreamError


logger = logging.getLogger(__name__)


MESSAGE_PREVIEW_LENGTH = 50
INVALID_MESSAGE_ERROR = "The message is invalid or empty."

# Unicode whitespace plus the byte order mark, which str.strip keeps
_EDGE_WHITESPACE = re.compile(r"^[\s\ufeff]+|[\s\ufeff]+\Z")


class InvalidMessageError(Exception):
    pass


def trim_message(message: str) -> str:
    return _EDGE_WHITESPACE.sub("", message)


def _build_messages(history: list[dict], user_message: str) -> list[dict]:
    return list(history) + [{"role": "user", "content": user_message}]


class ChatRelay:
    """Forwards one user message, plus prior turns, to the completions API."""

    def __init__(self, llm: LLMProvider, llm_model: str):
        self.llm = llm
        self.llm_model = llm_model

    @staticmethod
    def _is_valid_message(message) -> bool:
        return isinstance(message, str) and bool(trim_message(message))

    def build_messages(self, message: str, history: list[dict] | None = None) -> list[dict]:
        if not self._is_valid_message(message):
            raise InvalidMessageError(INVALID_MESSAGE_ERROR)
        return _build_messages(history or [], trim_message(message))

    async def answer(self, message: str, history: list[dict] | None = None) -> str:
        messages = self.build_messages(message, history)

        preview = messages[-1]["content"][:MESSAGE_PREVIEW_LENGTH]
        logger.debug(f"Relaying message ({len(messages) - 1} prior turns): {preview!r}")

        response = await self.llm.complete(model=self.llm_model, messages=messages)
        content = response.message.content
        if content is None:
            raise UpstreamError("chat completion returned an empty message")
        return content
