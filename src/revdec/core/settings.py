"""Configuration settings module."""

from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

from revdec.core.constants import ENV_PATH
from revdec.core.models import CollisionPolicy
from revdec.core.utils import singleton


@singleton
class Settings(BaseSettings):
    """Application Settings loaded from environment and .env file."""

    abi_path: Optional[Path] = None
    collision_policy: CollisionPolicy = CollisionPolicy.FIRST
    include_builtins: bool = True
    log_level: str = "WARNING"
    log_file: Optional[Path] = None

    model_config = SettingsConfigDict(
        env_prefix="REVDEC_",
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def __init__(self, **values):
        """Initialize Settings and load environment variables."""
        load_dotenv(ENV_PATH, override=False)
        super().__init__(**values)


# Global settings instance
settings = Settings()
