from __future__ import annotations

from openai import APIConnectionError, APIError, APIStatusError, AsyncOpenAI

from core.llm.provider import LLMProvider, UpstreamError
from core.llm.types import CompletionMessage, CompletionResponse


class OpenAICompatibleProvider(LLMProvider):
    """
    OpenAI SDK wrapper for the chat-completions endpoint.

    Works with any OpenAI-compatible API by setting base_url. The SDK's
    built-in retries are turned off: one relay request makes exactly one
    outbound call, and the SDK's default timeout applies.
    """

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str | None = None,
        max_retries: int = 0,
    ) -> None:
        self._async_client = AsyncOpenAI(api_key=api_key, base_url=base_url, max_retries=max_retries)

    async def complete(
        self,
        *,
        model: str,
        messages: list[dict],
    ) -> CompletionResponse:
        try:
            response = await self._async_client.chat.completions.create(model=model, messages=messages)
        except APIStatusError as e:
            raise UpstreamError(
                f"chat completion returned HTTP {e.status_code}: {e.body!r}",
                status_code=e.status_code,
            ) from e
        except APIConnectionError as e:
            raise UpstreamError(f"could not reach chat completion API: {e}") from e
        except APIError as e:
            raise UpstreamError(f"chat completion failed: {e}") from e

        choices = getattr(response, "choices", None)
        if not choices:
            raise UpstreamError("chat completion response contained no choices")

        choice = choices[0]
        msg = getattr(choice, "message", None)
        content = getattr(msg, "content", None)
        if not isinstance(content, str):
            raise UpstreamError("chat completion response had no text content in its first choice")

        return CompletionResponse(
            finish_reason=getattr(choice, "finish_reason", None),
            message=CompletionMessage(role=getattr(msg, "role", "assistant"), content=content),
        )
