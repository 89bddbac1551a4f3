from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator

from core.relay import trim_message


class HistoryMessage(BaseModel):
    """One prior conversation turn, in the chat-completions wire format."""

    model_config = ConfigDict(extra="ignore")

    role: Literal["user", "assistant", "system"] = Field(..., description="Author of the turn")
    content: StrictStr = Field(..., description="Text of the turn")


class ChatRequest(BaseModel):
    """Request model for chat endpoint."""

    message: StrictStr = Field(..., description="User's message")
    history: list[HistoryMessage] = Field(
        default_factory=list, description="Conversation history in OpenAI format"
    )

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "message": "How are you?",
                "history": [
                    {"role": "user", "content": "Hi"},
                    {"role": "assistant", "content": "Hello! How can I help?"},
                ],
            }
        },
    )

    @field_validator("message")
    @classmethod
    def message_not_blank(cls, value: str) -> str:
        stripped = trim_message(value)
        if not stripped:
            raise ValueError("message must not be empty")
        return stripped

    def history_payload(self) -> list[dict]:
        return [turn.model_dump() for turn in self.history]
