import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import Config


logger = logging.getLogger(__name__)


def setup_cors(app: FastAPI, config: Config) -> None:
    if not config.allowed_origins:
        logger.info("No ALLOWED_ORIGINS configured. CORS enabled for all origins.")
        allowed_origins = ["*"]
    else:
        allowed_origins = config.allowed_origins
        logger.info(f"CORS enabled for origins: {allowed_origins}")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
