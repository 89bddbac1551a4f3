from dataclasses import dataclass, field
import os
from dotenv import load_dotenv


DEFAULT_OPENAI_MODEL = "gpt-3.5-turbo"
DEFAULT_OPENAI_BASE_URL = "https://api.openai.com/v1"

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")
LOG_LEVEL_ALIASES = {"WARN": "WARNING", "FATAL": "CRITICAL"}


def _getenv(name: str, default: str) -> str:
    # Set-but-empty counts as unset, so `PORT=` in a .env keeps the default
    return (os.getenv(name) or "").strip() or default


def _parse_bool(name: str, default: str) -> bool:
    return _getenv(name, default).lower() in {"1", "true", "yes", "on"}


def _parse_positive_int(name: str, default: str) -> int:
    raw = _getenv(name, default)
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < 1:
        raise ValueError(f"{name} must be at least 1, got {value}")
    return value


def normalize_log_level(level: str | None) -> str:
    name = (level or "INFO").strip().upper() or "INFO"
    name = LOG_LEVEL_ALIASES.get(name, name)
    if name not in LOG_LEVELS:
        raise ValueError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {level!r}")
    return name


@dataclass
class Config:
    openai_api_key: str = ""
    openai_model: str = DEFAULT_OPENAI_MODEL
    openai_base_url: str = DEFAULT_OPENAI_BASE_URL
    host: str = "0.0.0.0"
    port: int = 3000
    rate_limit_enabled: bool = True
    rate_limit_max_requests: int = 100
    rate_limit_window_seconds: int = 15 * 60
    allowed_origins: list[str] = field(default_factory=list)
    log_level: str = "INFO"

    def __post_init__(self):
        self.log_level = normalize_log_level(self.log_level)

    @classmethod
    def from_env(cls) -> "Config":
        load_dotenv()

        # Parse allowed origins
        origins_str = os.getenv("ALLOWED_ORIGINS", "")
        allowed_origins = [o.strip() for o in origins_str.split(",") if o.strip()]

        return cls(
            openai_api_key=os.getenv("OPENAI_API_KEY", ""),
            openai_model=_getenv("OPENAI_MODEL", DEFAULT_OPENAI_MODEL),
            openai_base_url=_getenv("OPENAI_BASE_URL", DEFAULT_OPENAI_BASE_URL),
            host=_getenv("HOST", "0.0.0.0"),
            port=_parse_positive_int("PORT", "3000"),
            rate_limit_enabled=_parse_bool("RATE_LIMIT_ENABLED", "true"),
            rate_limit_max_requests=_parse_positive_int("RATE_LIMIT_MAX_REQUESTS", "100"),
            rate_limit_window_seconds=_parse_positive_int("RATE_LIMIT_WINDOW_SECONDS", "900"),
            allowed_origins=allowed_origins,
            log_level=_getenv("LOG_LEVEL", "INFO"),
        )
