from typing import List

from pydantic_settings import BaseSettings
from pydantic import Field


class Config(BaseSettings):
    # Database Configuration (any SQLAlchemy async URL)
    database_url: str = Field(
        default="sqlite+aiosqlite:///./data/bookstore.db", alias="DB_URL"
    )

    # AI Configuration - Gemini via its OpenAI-compatible endpoint
    gemini_api_key: str = Field(default="", alias="GEMINI_API_KEY")
    ai_model: str = Field(default="gemini-2.5-pro", alias="AI_MODEL")
    ai_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta/openai/",
        alias="AI_BASE_URL",
    )
    ai_temperature: float = Field(default=0.5, alias="AI_TEMPERATURE")
    ai_timeout_seconds: float = Field(default=60.0, alias="AI_TIMEOUT_SECONDS")
    ai_max_retries: int = Field(default=3, ge=0, alias="AI_MAX_RETRIES")

    # Upper bound on aggregation queries in flight per service instance
    dashboard_query_concurrency: int = Field(
        default=8, ge=1, alias="DASHBOARD_QUERY_CONCURRENCY"
    )

    # Comma separated list of allowed origins
    cors_origins: str = Field(
        default="http://localhost,http://localhost:5173", alias="CORS_ORIGINS"
    )

    environment: str = Field(default="development", alias="ENVIRONMENT")

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def cors_origin_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        populate_by_name = True
        extra = "ignore"


# Instantiate the settings
config = Config()
