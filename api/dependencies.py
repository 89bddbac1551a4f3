from functools import lru_cache

from fastapi import Request

from config import Config
from core.llm import LLMProvider, OpenAICompatibleProvider


@lru_cache()
def get_config() -> Config:
    """
    Get singleton Config instance.
    Uses lru_cache to ensure config is loaded once and reused.
    """
    return Config.from_env()


def create_llm_provider(config: Config) -> LLMProvider:
    return OpenAICompatibleProvider(
        api_key=config.openai_api_key,
        base_url=config.openai_base_url,
    )


def get_app_config(request: Request) -> Config:
    """Config the running application was built with."""
    return request.app.state.config


def get_llm_provider(request: Request) -> LLMProvider:
    """
    Provider shared by every request of one application.

    Created on first use so that building the app never touches the SDK.
    """
    state = request.app.state
    if getattr(state, "llm_provider", None) is None:
        state.llm_provider = create_llm_provider(state.config)
    return state.llm_provider
