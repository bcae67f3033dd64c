"""
Configuration for the image transform service.

Settings are read from environment variables (prefix ``TRANSFORM_``,
nested sections separated by ``__``) or a local ``.env`` file, e.g.::

    TRANSFORM_SYSTEM__LOG_LEVEL=DEBUG
    TRANSFORM_STORAGE__BACKEND=memory
    TRANSFORM_STORAGE__ENDPOINT_URL=http://localhost:9000
"""

from functools import lru_cache
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SystemSettings(BaseModel):
    """Logging and debug settings"""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    debug: bool = False


class ApiSettings(BaseModel):
    """HTTP server settings"""

    host: str = "0.0.0.0"
    port: int = Field(default=8000, ge=1, le=65535)
    cors_enabled: bool = False
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])


class StorageSettings(BaseModel):
    """Storage gateway settings"""

    backend: Literal["s3", "memory"] = "s3"
    region: Optional[str] = None
    endpoint_url: Optional[str] = None
    addressing_style: Literal["auto", "path", "virtual"] = "auto"
    max_attempts: int = Field(default=3, ge=1)
    connect_timeout: int = Field(default=10, ge=1)
    read_timeout: int = Field(default=60, ge=1)


class Settings(BaseSettings):
    """Application configuration"""

    model_config = SettingsConfigDict(
        env_prefix="TRANSFORM_",
        env_nested_delimiter="__",
        env_file=".env",
        extra="ignore",
    )

    environment: str = "development"
    system: SystemSettings = Field(default_factory=SystemSettings)
    api: ApiSettings = Field(default_factory=ApiSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()


@lru_cache()
def get_settings() -> Settings:
    """Return a cached Settings instance so it is only parsed once."""
    return Settings()
