import httpx
import pytest
from unittest.mock import AsyncMock, MagicMock
from openai import APIConnectionError, AuthenticationError, InternalServerError

from core.llm.provider import UpstreamError
from core.llm.providers.openai_compatible import OpenAICompatibleProvider


COMPLETIONS_URL = "https://api.openai.com/v1/chat/completions"


def _status_error(error_cls, status_code: int, body: dict):
    request = httpx.Request("POST", COMPLETIONS_URL)
    response = httpx.Response(status_code, request=request, json=body)
    return error_cls("upstream failed", response=response, body=body)


def _completion(content="Hello!", choices=True):
    response = MagicMock()
    if choices:
        response.choices = [MagicMock()]
        response.choices[0].finish_reason = "stop"
        response.choices[0].message = MagicMock(role="assistant", content=content)
    else:
        response.choices = []
    return response


@pytest.fixture
def provider():
    return OpenAICompatibleProvider(api_key="test-key")


def test_sdk_retries_are_disabled(provider):
    assert provider._async_client.max_retries == 0


async def test_complete_sends_model_and_messages(provider):
    provider._async_client.chat.completions.create = AsyncMock(return_value=_completion())
    messages = [{"role": "user", "content": "test"}]

    result = await provider.complete(model="gpt-3.5-turbo", messages=messages)

    assert result.message.content == "Hello!"
    assert result.finish_reason == "stop"
    provider._async_client.chat.completions.create.assert_awaited_once_with(
        model="gpt-3.5-turbo", messages=messages
    )


async def test_status_error_becomes_upstream_error(provider):
    provider._async_client.chat.completions.create = AsyncMock(
        side_effect=_status_error(InternalServerError, 500, {"error": {"message": "overloaded"}})
    )

    with pytest.raises(UpstreamError) as exc_info:
        await provider.complete(model="gpt-3.5-turbo", messages=[{"role": "user", "content": "test"}])

    assert exc_info.value.status_code == 500
    assert "overloaded" in str(exc_info.value)
    assert provider._async_client.chat.completions.create.call_count == 1


async def test_auth_error_becomes_upstream_error(provider):
    provider._async_client.chat.completions.create = AsyncMock(
        side_effect=_status_error(AuthenticationError, 401, {"error": {"message": "bad key"}})
    )

    with pytest.raises(UpstreamError) as exc_info:
        await provider.complete(model="gpt-3.5-turbo", messages=[{"role": "user", "content": "test"}])

    assert exc_info.value.status_code == 401


async def test_connection_error_becomes_upstream_error(provider):
    provider._async_client.chat.completions.create = AsyncMock(
        side_effect=APIConnectionError(request=httpx.Request("POST", COMPLETIONS_URL))
    )

    with pytest.raises(UpstreamError) as exc_info:
        await provider.complete(model="gpt-3.5-turbo", messages=[{"role": "user", "content": "test"}])

    assert exc_info.value.status_code is None


async def test_response_without_choices_is_upstream_error(provider):
    provider._async_client.chat.completions.create = AsyncMock(return_value=_completion(choices=False))

    with pytest.raises(UpstreamError):
        await provider.complete(model="gpt-3.5-turbo", messages=[{"role": "user", "content": "test"}])


async def test_response_without_content_is_upstream_error(provider):
    provider._async_client.chat.completions.create = AsyncMock(return_value=_completion(content=None))

    with pytest.raises(UpstreamError):
        await provider.complete(model="gpt-3.5-turbo", messages=[{"role": "user", "content": "test"}])
