"""Configuration for the API client and the development backend.

Values are read from the environment after loading a ``.env`` file:

    ENVIRONMENT               development (default) or production
    JOBBOARD_API_URL          overrides the environment's default base address
    JOBBOARD_TIMEOUT          request timeout in seconds (default 10)
    JOBBOARD_JWT_SECRET       signing key for the development backend's session cookie
    JOBBOARD_JWT_EXPIRE_DAYS  session lifetime in days (default 7)
    JOBBOARD_PORT             port for the development backend (default 4000)
"""
import os
from typing import Dict

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()

DEVELOPMENT_API_URL = "http://localhost:4000"
PRODUCTION_API_URL = "https://next-hire-an-online-job-portal-37t9.vercel.app"
DEFAULT_TIMEOUT = 10.0


def get_environment() -> str:
    return os.getenv("ENVIRONMENT", "development").strip().lower()


def resolve_base_url(environment: str = None) -> str:
    """Pick the backend address for an environment, honoring JOBBOARD_API_URL."""
    override = os.getenv("JOBBOARD_API_URL", "").strip()
    if override:
        return override.rstrip("/")
    environment = environment or get_environment()
    return PRODUCTION_API_URL if environment == "production" else DEVELOPMENT_API_URL


class ClientConfig(BaseModel):
    """Transport settings shared by every orchestrated action."""
    base_url: str = DEVELOPMENT_API_URL
    timeout: float = Field(DEFAULT_TIMEOUT, gt=0)
    with_credentials: bool = True
    headers: Dict[str, str] = Field(
        default_factory=lambda: {"Content-Type": "application/json"}
    )

    @classmethod
    def from_env(cls) -> "ClientConfig":
        return cls(
            base_url=resolve_base_url(),
            timeout=float(os.getenv("JOBBOARD_TIMEOUT", DEFAULT_TIMEOUT)),
        )


class ServerSettings(BaseModel):
    """Settings for the in-memory development backend."""
    jwt_secret: str = "jobboard-development-secret"
    jwt_algorithm: str = "HS256"
    jwt_expire_days: int = Field(7, gt=0)
    cookie_name: str = "token"
    port: int = 4000

    @classmethod
    def from_env(cls) -> "ServerSettings":
        defaults = cls()
        return cls(
            jwt_secret=os.getenv("JOBBOARD_JWT_SECRET", defaults.jwt_secret),
            jwt_expire_days=int(os.getenv("JOBBOARD_JWT_EXPIRE_DAYS", defaults.jwt_expire_days)),
            port=int(os.getenv("JOBBOARD_PORT", defaults.port)),
        )
