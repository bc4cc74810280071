from typing import Optional, List
from pydantic_settings import BaseSettings, SettingsConfigDict

from common.core.constants import Environment


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Environment Profile
    environment: Environment = Environment.LOCAL

    # API Settings
    app_name: str = "agora-calendar"
    api_version: str = "v1"
    debug: bool = False

    # Database Components
    db_user: str = "postgres"
    db_password: str = "postgres"
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "agora"
    db_use_nullpool: bool = False
    db_pool_size: int = 10
    db_pool_overflow: int = 5

    @property
    def database_url(self) -> str:
        """Construct database URL from components."""
        return f"postgresql://{self.db_user}:{self.db_password}@{self.db_host}:{self.db_port}/{self.db_name}"

    @property
    def async_database_url(self) -> str:
        """Database URL using the asyncpg driver."""
        return self.database_url.replace("postgresql://", "postgresql+asyncpg://")

    # OpenTelemetry
    otel_service_name: str = "agora-calendar"
    otel_service_version: str = "0.1.0"

    # Axiom (traces are only exported when a token is configured)
    axiom_token: Optional[str] = None
    axiom_dataset: Optional[str] = None

    # Service accounts (billing callbacks, event administration)
    service_api_key: Optional[str] = None
    service_account_name: str = "internal"

    # Subscriptions
    subscription_default_days: int = 30  # until real billing sets expiry

    # Search
    search_result_limit: int = 10
    search_min_query_length: int = 2

    @property
    def cors_allowed_origins(self) -> List[str]:
        """Auto-select CORS origins based on environment."""
        if self.environment == Environment.LOCAL:
            return [
                "http://localhost:3000",
                "https://localhost:3000",
            ]
        return [
            "https://agora-calendar.com",
            "https://outlook.office.com",
        ]


settings = Settings()
