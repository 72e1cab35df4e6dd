"""Application configuration using Pydantic Settings."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="forbid",
    )

    # API
    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "Taskboard"
    VERSION: str = "0.1.0"

    # CORS
    CORS_ORIGINS: list[str] = Field(
        default=["*"],
        description=(
            "Allowed CORS origins. Defaults to any origin; restrict it in production, "
            "e.g. CORS_ORIGINS='[\"https://tasks.example.com\"]'"
        ),
    )

    # Browser client hosting
    SERVE_FRONTEND: bool = Field(
        default=False,
        description="Serve the static browser client via StaticFiles",
    )
    FRONTEND_DIST_PATH: str = Field(
        default=str(Path(__file__).resolve().parents[2] / "public"),
        description="Directory holding the browser client (must contain index.html)",
    )
    FRONTEND_ROUTE: str = Field(
        default="/app",
        description="Route prefix where the browser client is mounted",
    )
    APP_BASE_URL: str = Field(
        default="http://localhost:8000",
        description="Public base URL used when logging the UI location",
    )


settings = Settings()
