from core.llm.provider import LLMProvider, UpstreamError
from core.llm.providers.openai_compatible import OpenAICompatibleProvider

__all__ = ["LLMProvider", "OpenAICompatibleProvider", "UpstreamError"]
