"""Client configuration loaded from the environment (and an optional .env file)."""
import os
from dataclasses import dataclass
from functools import cache
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_API_URL = "http://localhost:3000"
DEFAULT_HTTP_TIMEOUT = 10.0
DEFAULT_LOGIN_PATH = "/login"


@dataclass(frozen=True)
class Settings:
    """Resolved client settings."""
    api_url: str = DEFAULT_API_URL
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    login_path: str = DEFAULT_LOGIN_PATH

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from STOREFRONT_* environment variables."""
        raw_timeout = os.environ.get("STOREFRONT_HTTP_TIMEOUT", "")
        try:
            timeout = float(raw_timeout) if raw_timeout else DEFAULT_HTTP_TIMEOUT
        except ValueError as e:
            raise ValueError(f"STOREFRONT_HTTP_TIMEOUT must be a number, got {raw_timeout!r}") from e

        return cls(
            api_url=os.environ.get("STOREFRONT_API_URL", DEFAULT_API_URL).rstrip("/"),
            http_timeout=timeout,
            login_path=os.environ.get("STOREFRONT_LOGIN_PATH", DEFAULT_LOGIN_PATH),
        )


@cache
def get_settings() -> Settings:
    """Load settings once per process. A .env in the working directory is honoured."""
    env_path = Path.cwd() / ".env"
    if env_path.exists():
        load_dotenv(env_path)
    return Settings.from_env()
