from __future__ import annotations

import logging

from config import Config


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(config: Config) -> None:
    level = getattr(logging, config.log_level)

    logging.basicConfig(level=level, format=LOG_FORMAT)

    logging.getLogger("uvicorn.error").setLevel(level)
    logging.getLogger("uvicorn.access").setLevel(level)
    logging.getLogger("relay").setLevel(level)
