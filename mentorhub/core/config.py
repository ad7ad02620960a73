from pydantic import Field
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application configuration loaded from environment variables / .env file."""

    app_name: str = "MentorHub API"
    app_env: str = "development"
    app_port: int = 8000
    frontend_url: str = "http://localhost:3000"

    # Database (PostgreSQL via asyncpg in production or SQLite for local dev)
    database_url: str = Field(
        default="sqlite+aiosqlite:///./mentorhub_dev.db",
        alias="DATABASE_URL",
    )

    # Bearer tokens are issued by the auth service; we only verify them
    jwt_secret: str = Field(default="change_me", alias="JWT_SECRET")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_ttl_minutes: int = Field(default=240, alias="ACCESS_TOKEN_TTL_MINUTES")

    # Platform rules
    mentor_capacity: int = Field(
        default=5, alias="MENTOR_CAPACITY",
    )  # Active mentees a mentor may carry before dropping off the mentor list
    recommendation_limit: int = Field(default=5, alias="RECOMMENDATION_LIMIT")
    search_default_limit: int = Field(default=20, alias="SEARCH_DEFAULT_LIMIT")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "populate_by_name": True,
    }

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

settings = Settings()
