from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from api.dependencies import get_config
from api.middleware.access_log import AccessLogMiddleware
from api.middleware.cors import setup_cors
from api.middleware.rate_limit import RateLimitMiddleware
from api.middleware.rate_limit_state import FixedWindowRateLimiter
from api.middleware.security_headers import setup_security_headers
from api.routes import chat, health
from config import Config
from core.logging import configure_logging
from core.relay import INVALID_MESSAGE_ERROR

logger = logging.getLogger(__name__)

INVALID_HISTORY_ERROR = "The history must be a list of messages with a role and a content."

API_TITLE = "Chat Relay API"
API_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    config: Config = app.state.config
    if not config.openai_api_key:
        logger.warning("OPENAI_API_KEY is not set; chat requests will fail upstream.")
    logger.info(
        f"Relaying to {config.openai_base_url} with model {config.openai_model}; "
        f"rate limit {app.state.limiter.get_settings()}"
    )
    yield


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Map request body validation failures to a 400 with a short error."""
    history_only = all(
        len(err.get("loc", ())) > 1 and err["loc"][1] == "history" for err in exc.errors()
    )
    message = INVALID_HISTORY_ERROR if exc.errors() and history_only else INVALID_MESSAGE_ERROR
    logger.info(f"Rejected {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


def create_app(
    config: Config | None = None,
    limiter: FixedWindowRateLimiter | None = None,
) -> FastAPI:
    config = config or get_config()
    configure_logging(config)

    if limiter is None:
        limiter = FixedWindowRateLimiter(
            limit=config.rate_limit_max_requests,
            window_seconds=config.rate_limit_window_seconds,
            enabled=config.rate_limit_enabled,
        )

    app = FastAPI(
        title=API_TITLE,
        description="Relays chat messages to an OpenAI-compatible completions API",
        version=API_VERSION,
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.limiter = limiter
    app.state.llm_provider = None

    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Added innermost first: CORS -> security headers -> access log -> rate limit -> routes
    app.add_middleware(RateLimitMiddleware, limiter=limiter)
    app.add_middleware(AccessLogMiddleware)
    setup_security_headers(app)
    setup_cors(app, config)

    app.include_router(health.router)
    app.include_router(chat.router)

    @app.get("/", tags=["root"])
    async def root():
        return JSONResponse(
            content={
                "name": API_TITLE,
                "version": API_VERSION,
                "docs": "/docs",
                "health": "/health",
                "endpoints": {
                    "chat": "POST /chat",
                    "health": "GET /health",
                },
            }
        )

    return app


app = create_app()


def main() -> None:
    import uvicorn

    config = get_config()
    logger.info(f"Server listening on port {config.port}")
    uvicorn.run(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        access_log=False,
    )


if __name__ == "__main__":
    main()
