"""
Configuration management using Pydantic Settings.
Loads environment variables from .env file with validation.
"""

from pathlib import Path
from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # MongoDB Configuration
    mongodb_uri: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection URI"
    )
    mongodb_database: str = Field(
        default="briki",
        description="MongoDB database name"
    )

    # Chat assistant context persistence
    context_store: str = Field(
        default="memory",
        description="Backing store for user context: 'memory' or 'mongodb'"
    )

    # API Configuration
    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=8000)

    # Logging
    log_level: str = Field(default="INFO")

    # RUNT (Registro Unico Nacional de Transito) Configuration
    use_mock_runt: bool = Field(
        default=True,
        description="Serve generated vehicle data instead of calling RUNT"
    )
    runt_api_url: Optional[str] = Field(default=None, description="RUNT API base URL")
    runt_api_key: Optional[str] = Field(default=None, description="RUNT API bearer token")
    runt_timeout_seconds: float = Field(default=10.0)
    runt_mock_delay_seconds: float = Field(
        default=0.0,
        description="Simulated network latency for the mock RUNT service"
    )

    class Config:
        env_file = Path(__file__).parent.parent / ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
