import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Completion provider
    openai_api_key: str | None = os.getenv("OPENAI_API_KEY")
    openai_base_url: str = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")
    system_prompt: str = os.getenv("CHAT_SYSTEM_PROMPT", "")

    # Timeouts (seconds)
    request_timeout: float = float(os.getenv("REQUEST_TIMEOUT", "10"))
    client_timeout: float = float(os.getenv("CLIENT_TIMEOUT", "15"))

    # Cache
    cache_ttl: float = float(os.getenv("CACHE_TTL", "300"))  # 5 minutes default

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "true").lower() == "true"

    @property
    def has_credential(self) -> bool:
        """Check if a bearer credential is configured.

        Returns:
            True if OPENAI_API_KEY is set and non-empty, False otherwise
        """
        return bool(self.openai_api_key)

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.request_timeout <= 0:
            raise ValueError("REQUEST_TIMEOUT must be positive")

        if self.client_timeout <= 0:
            raise ValueError("CLIENT_TIMEOUT must be positive")

        if self.cache_ttl <= 0:
            raise ValueError("CACHE_TTL must be positive")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def configure_logging(level: str | None = None) -> None:
    """Install a basic stream handler on the root logger."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
