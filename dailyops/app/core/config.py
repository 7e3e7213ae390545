"""
Configuration settings for the Daily Operations Report Backend.

This module handles application configuration using Pydantic settings.
"""

from pydantic_settings import BaseSettings
from typing import Literal


class Settings(BaseSettings):
    """Application settings."""
    
    # Application
    app_name: str = "Daily Operations Report Backend"
    api_version: str = "1.0.0"
    api_prefix: str = "/api"
    debug: bool = False
    log_level: str = "INFO"
    
    # Storage Configuration
    storage_backend: Literal["file", "database"] = "file"
    data_dir: str = "server-data"
    database_url: str = "sqlite+aiosqlite:///./dailyops.db"
    db_echo: bool = False
    seed_on_startup: bool = True
    
    # Session token signing
    secret_key: str = "dev-secret-key-change-this-in-production-min-32-chars"
    algorithm: str = "HS256"
    
    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
