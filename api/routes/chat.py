from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from typing import Annotated
import logging

from config import Config
from core.llm import LLMProvider, UpstreamError
from core.relay import ChatRelay, InvalidMessageError
from models.requests import ChatRequest
from models.responses import ChatResponse, ErrorResponse
from api.dependencies import get_app_config, get_llm_provider

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])

GENERIC_ERROR = "An error occurred while processing your request."


def get_chat_relay(
    config: Annotated[Config, Depends(get_app_config)],
    llm: Annotated[LLMProvider, Depends(get_llm_provider)],
) -> ChatRelay:
    return ChatRelay(llm, config.openai_model)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Message missing, empty or malformed"},
        429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
        500: {"model": ErrorResponse, "description": "Completion API failure"},
    },
)
async def chat_endpoint(
    chat_request: ChatRequest,
    relay: Annotated[ChatRelay, Depends(get_chat_relay)],
):
    """
    Relay one message, with optional prior turns, to the completions API.

    The history is forwarded as-is and the trimmed message is appended as the
    final user turn. Upstream failures are logged in full and reported to the
    client with a generic message.
    """
    try:
        answer = await relay.answer(chat_request.message, chat_request.history_payload())
    except InvalidMessageError as e:
        return _error(status.HTTP_400_BAD_REQUEST, str(e))
    except UpstreamError as e:
        logger.error(f"Error contacting completion API: {e}")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR)
    except Exception:
        logger.exception("Unexpected error while relaying chat message")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR)

    return ChatResponse(answer=answer)
