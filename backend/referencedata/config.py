"""
Service settings, read from the environment or a local .env file.
"""
from typing import List

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings

PRODUCTION_ENVIRONMENTS = {"prod", "production"}


class Settings(BaseSettings):
    # service
    APP_NAME: str = "ReferenceData"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    CORS_ORIGINS: str = "http://localhost:5173,http://localhost:3000"

    # persistence
    DATABASE_URL: str = "sqlite:///./referencedata.db"
    AUTO_CREATE_TABLES: bool = True
    READINESS_CHECK_DATABASE: bool = True

    # observability
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"
    ENABLE_REQUEST_ID: bool = True
    ENABLE_REQUEST_LOGGING: bool = True
    SEARCH_PROFILING_ENABLED: bool = True

    # paging and export
    DEFAULT_PAGE_SIZE: int = 20
    MAX_PAGE_SIZE: int = 1000
    EXPORT_FILE_NAME: str = "OLMIS_configuration_data.zip"

    class Config:
        env_file = ".env"
        extra = "ignore"

    @property
    def cors_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() in PRODUCTION_ENVIRONMENTS

    @property
    def uses_sqlite(self) -> bool:
        return self.DATABASE_URL.lower().startswith("sqlite")

    @field_validator("LOG_FORMAT")
    @classmethod
    def normalize_log_format(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in {"json", "standard"}:
            raise ValueError("LOG_FORMAT must be 'json' or 'standard'")
        return value

    @model_validator(mode="after")
    def check_consistency(self):
        if not 0 < self.DEFAULT_PAGE_SIZE <= self.MAX_PAGE_SIZE:
            raise ValueError("DEFAULT_PAGE_SIZE must be between 1 and MAX_PAGE_SIZE")

        if self.is_production:
            if self.uses_sqlite:
                raise ValueError("SQLite cannot back a production deployment")
            if self.AUTO_CREATE_TABLES:
                raise ValueError("Production schema is managed by Alembic; set AUTO_CREATE_TABLES=false")
        return self


settings = Settings()
