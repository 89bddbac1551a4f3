from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.llm.types import CompletionResponse


class UpstreamError(Exception):
    """
    Raised when the chat-completions API cannot produce an answer.

    Covers network failures, non-2xx responses and response bodies that do not
    carry a usable first choice. The message is meant for server logs only.
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@runtime_checkable
class LLMProvider(Protocol):
    """
    Boundary between the relay and the chat-completions API.

    The relay only depends on this protocol, so tests can swap in a fake
    provider and inspect the exact payload that would have been sent upstream.
    """

    async def complete(
        self,
        *,
        model: str,
        messages: list[dict],
    ) -> CompletionResponse: ...
