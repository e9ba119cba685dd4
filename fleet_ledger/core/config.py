from typing import List, Optional
from pydantic import PostgresDsn
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Values from .env take precedence over system-wide environment variables.
load_dotenv(override=True)

class Settings(BaseSettings):
    """Base settings for the fleet ledger service."""

    # API settings
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Fleet Ledger"

    # CORS settings, JSON list in the environment (e.g. '["http://localhost:3000"]')
    BACKEND_CORS_ORIGINS: List[str] = ["*"]

    # Database settings
    # Default values for local development, override these in .env file
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "fleet_ledger"
    POSTGRES_PORT: int = 5432

    # A full URL wins over the individual parts (hosted Postgres, SQLite for tests)
    DATABASE_URL: Optional[str] = None

    # Create missing tables when the API starts
    CREATE_TABLES_ON_STARTUP: bool = True

    # JWT Authentication settings
    JWT_SECRET_KEY: str = "dev-secret"  # Change this in production
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7  # 7 days

    LOG_LEVEL: str = "INFO"

    model_config = {
        "case_sensitive": True,
        "env_file": ".env",
        "extra": "ignore",
    }

    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL

        # Otherwise, build the connection string from individual components
        return str(PostgresDsn.build(
            scheme="postgresql",
            username=self.POSTGRES_USER,
            password=self.POSTGRES_PASSWORD,
            host=self.POSTGRES_SERVER,
            port=self.POSTGRES_PORT,
            path=self.POSTGRES_DB,
        ))

# Create settings instance
settings = Settings()
