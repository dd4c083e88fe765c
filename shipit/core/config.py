"""
Client configuration

Credentials are normally passed to ShipitClient directly. Settings exists for
callers that keep them in the environment or a .env file.
"""
import logging
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://api.shipit.cl"
# Same as httpx's own default timeout
DEFAULT_TIMEOUT_SECONDS = 5.0


class Settings(BaseSettings):
    SHIPIT_EMAIL: str = ""
    SHIPIT_ACCESS_TOKEN: str = ""
    SHIPIT_DEVELOPMENT: bool = False
    SHIPIT_API_BASE: str = DEFAULT_API_BASE
    SHIPIT_TIMEOUT_SECONDS: float = DEFAULT_TIMEOUT_SECONDS

    @field_validator("SHIPIT_API_BASE", mode="before")
    @classmethod
    def normalize_api_base(cls, v):
        """Strip trailing slashes and require an http(s) URL."""
        if not v:
            return DEFAULT_API_BASE
        v = str(v).strip().rstrip("/")
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"SHIPIT_API_BASE must be an http(s) URL, got {v!r}")
        if v.startswith("http://"):
            logger.warning("SHIPIT_API_BASE uses plain HTTP; credentials will be sent unencrypted")
        return v

    @field_validator("SHIPIT_TIMEOUT_SECONDS")
    @classmethod
    def positive_timeout(cls, v):
        if v <= 0:
            raise ValueError("SHIPIT_TIMEOUT_SECONDS must be positive")
        return v

    @property
    def has_credentials(self) -> bool:
        return bool(self.SHIPIT_EMAIL and self.SHIPIT_ACCESS_TOKEN)

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings once per process."""
    return Settings()
