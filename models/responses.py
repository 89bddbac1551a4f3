from pydantic import BaseModel, Field


class ChatResponse(BaseModel):
    """Response model for chat endpoint."""

    answer: str = Field(..., description="Completion text returned by the model")


class ErrorResponse(BaseModel):
    """Error response model."""

    error: str = Field(..., description="Error description")


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str = Field(..., description="Service status")
    message: str = Field(..., description="Human readable status")
