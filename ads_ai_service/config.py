import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

# load .env from the project root (if present)
load_dotenv()


def _optional_float(name: str) -> Optional[float]:
    raw = os.getenv(name, "").strip()
    return float(raw) if raw else None


def _csv(name: str) -> tuple[str, ...]:
    raw = os.getenv(name, "").strip()
    return tuple(item.strip() for item in raw.split(",") if item.strip())


class Settings:
    # Server
    AI_SERVICE_HOST: str = os.getenv("AI_SERVICE_HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "3000"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "info")
    STATIC_DIR: str = os.getenv("STATIC_DIR", "public")
    RELOAD: bool = os.getenv("AI_SERVICE_RELOAD", "0").strip() in ("1", "true", "yes", "on")

    # Comma-separated list; empty means no CORS middleware at all
    CORS_ORIGINS: tuple[str, ...] = _csv("CORS_ORIGIN")

    # Upstream text generation (never hardcode the key)
    OPENAI_API_KEY: Optional[str] = os.getenv("OPENAI_API_KEY") or None
    OPENAI_BASE_URL: str = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")
    OPENAI_MODEL_JSON: str = os.getenv("OPENAI_MODEL_JSON", "gpt-4o-mini")
    OPENAI_MODEL_TEXT: str = os.getenv("OPENAI_MODEL_TEXT", "gpt-4o-mini")
    LLM_TEMPERATURE_JSON: float = float(os.getenv("LLM_TEMPERATURE_JSON", "0.3"))
    LLM_TEMPERATURE_TEXT: float = float(os.getenv("LLM_TEMPERATURE_TEXT", "0.5"))
    # None = wait for the provider as long as the client connection lives
    UPSTREAM_TIMEOUT_SEC: Optional[float] = _optional_float("UPSTREAM_TIMEOUT_SEC")

    @property
    def upstream_configured(self) -> bool:
        return bool(self.OPENAI_API_KEY)

    @property
    def cors_enabled(self) -> bool:
        return bool(self.CORS_ORIGINS)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
