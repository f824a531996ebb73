"""Application settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    # Hosted data backend (PostgREST-style REST endpoint)
    store_url: str
    store_api_key: str
    store_timeout_seconds: float = 10.0

    import_batch_size: int = Field(default=100, ge=1, le=100)
    # Written as owner_id on every imported record
    import_owner_id: str | None = None

    prometheus_enabled: bool = False
    prometheus_port: int = 9300

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="",
        extra="ignore",
    )
