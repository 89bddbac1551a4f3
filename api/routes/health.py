from fastapi import APIRouter

from models.responses import HealthResponse


router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness probe. Never calls the completions API."""
    return HealthResponse(status="ok", message="Server is healthy")
