import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_llm_provider
from api.main import create_app
from api.middleware.rate_limit_state import FixedWindowRateLimiter
from config import Config
from core.llm.types import CompletionMessage, CompletionResponse


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeLLM:
    """Fake completions provider that records every outbound payload."""

    def __init__(self, answer: str = "Mock LLM response", error: Exception | None = None):
        self.answer = answer
        self.error = error
        self.calls: list[dict] = []

    async def complete(self, *, model: str, messages: list[dict]) -> CompletionResponse:
        self.calls.append({"model": model, "messages": messages})
        if self.error is not None:
            raise self.error
        return CompletionResponse(
            finish_reason="stop",
            message=CompletionMessage(role="assistant", content=self.answer),
        )


@pytest.fixture
def mock_env_vars():
    """Provide fake environment variables for testing."""

    return {
        "OPENAI_API_KEY": "test-key-123",
        "OPENAI_MODEL": "gpt-4o-mini",
        "PORT": "8080",
        "ALLOWED_ORIGINS": "http://localhost:3000",
    }


@pytest.fixture
def config():
    return Config(
        openai_api_key="test-key-123",
        openai_model="gpt-3.5-turbo",
        rate_limit_max_requests=100,
        rate_limit_window_seconds=900,
    )


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def limiter(config, fake_clock):
    return FixedWindowRateLimiter(
        limit=config.rate_limit_max_requests,
        window_seconds=config.rate_limit_window_seconds,
        clock=fake_clock,
    )


@pytest.fixture
def mock_llm_provider():
    return FakeLLM()


@pytest.fixture
def app(config, limiter, mock_llm_provider):
    app = create_app(config, limiter=limiter)
    app.dependency_overrides[get_llm_provider] = lambda: mock_llm_provider
    return app


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def sample_chat_history():
    """Example of chat history for testing conversations."""
    return [
        {"role": "user", "content": "hi"},
        {"role": "assistant", "content": "hello"},
    ]
