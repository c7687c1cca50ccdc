from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "LocalConnect API"
    app_env: str = "dev"
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
    api_prefix: str = "/api"

    mongo_uri: str = "mongodb://localhost:27017"
    db_name: str = "localconnect"

    jwt_secret_key: str = "localconnect-dev-secret-change-me-in-production"
    jwt_algorithm: str = "HS256"
    jwt_access_token_expires_s: int = 86400

    nearby_default_radius_km: float = 5.0
    earth_radius_km: float = 6378.1
    trending_window_days: int = 7
    trending_limit: int = 10
    trending_max_limit: int = 50
    analytics_top_n: int = 5

    # "optimistic" serializes rating recomputation per business with a version
    # compare-and-set; "unguarded" is last-write-wins.
    rating_consistency: str = "optimistic"
    rating_recompute_max_attempts: int = 5

    cors_origins: Annotated[list[str], NoDecode] = Field(default_factory=lambda: ["*"])

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, value: object) -> object:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("rating_consistency", mode="before")
    @classmethod
    def parse_rating_consistency(cls, value: object) -> object:
        if isinstance(value, str):
            normalized = value.strip().lower()
            if normalized not in {"optimistic", "unguarded"}:
                raise ValueError("rating_consistency must be 'optimistic' or 'unguarded'.")
            return normalized
        return value

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
