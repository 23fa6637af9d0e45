"""Application settings and configuration management."""

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""
    
    # Application
    app_name: str = Field(default="People Finder")
    app_version: str = Field(default="1.0.0")
    debug: bool = Field(default=False)
    
    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)
    workers: int = Field(default=1)
    
    # Record store (None keeps records in memory only)
    store_path: Optional[str] = Field(default=None)
    
    # Search Configuration
    match_threshold: float = Field(default=0.35, ge=0.0, le=1.0)
    min_match_length: int = Field(default=2, ge=1)
    max_query_length: int = Field(default=200)
    search_debounce_ms: int = Field(default=200)  # advertised to clients
    
    # Logging
    log_level: str = Field(default="INFO")
    
    # CORS
    cors_origins: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:8080", "http://localhost:8000"]
    )
    
    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
