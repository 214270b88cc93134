from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    # -------------------------------------------------
    # General
    # -------------------------------------------------
    PROJECT_NAME: str = "EEU Complaint Management API"
    ENV: str = "development"

    # -------------------------------------------------
    # Frontend Domains
    # -------------------------------------------------
    FRONTEND_DOMAINS: List[str] = [
        "http://localhost:5173",
        "http://localhost:8080",
    ]

    # -------------------------------------------------
    # CORS (auto-built below)
    # -------------------------------------------------
    BACKEND_CORS_ORIGINS: List[str] = []

    # -------------------------------------------------
    # Spreadsheet backend (Apps Script web app)
    # -------------------------------------------------
    SHEETS_API_URL: Optional[str] = Field(None, description="Apps Script web app /exec URL")
    SHEETS_TIMEOUT_SECONDS: float = Field(15.0, description="HTTP timeout for spreadsheet calls")
    SHEETS_CACHE_TTL_SECONDS: int = Field(30, description="How long list snapshots are reused (0 disables)")

    # Raw /api pass-through for local SPA development
    PROXY_ENABLED: bool = False

    # -------------------------------------------------
    # Auth
    # -------------------------------------------------
    JWT_SECRET_KEY: Optional[str] = None
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 480

    # Demo accounts (development only)
    DEMO_AUTH_ENABLED: bool = False

    # Login throttling
    LOGIN_MAX_ATTEMPTS: int = Field(5, description="Failed logins allowed per window")
    LOGIN_WINDOW_SECONDS: int = Field(300, description="Login throttling window")

    # -------------------------------------------------
    # Model Config
    # -------------------------------------------------
    class Config:
        case_sensitive = True


# Instantiate settings
settings = Settings()

# -------------------------------------------------
# Build CORS list dynamically after loading settings
# -------------------------------------------------
settings.BACKEND_CORS_ORIGINS = sorted(
    {d.rstrip("/") for d in settings.FRONTEND_DOMAINS}
)


def is_development() -> bool:
    return settings.ENV.lower() == "development"
