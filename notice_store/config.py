"""Notice store configuration loaded from environment variables."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings

from .kvmap import DEFAULT_MAX_KEY_SIZE, DEFAULT_MAX_VALUE_SIZE


class Settings(BaseSettings):
    """Application settings loaded from NOTICE_* variables or a .env file."""

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "NOTICE_",
        "extra": "ignore",
    }

    # Storage; no path keeps notices in memory only
    data_path: Optional[Path] = Path("notices_data.json")
    max_key_size: int = Field(default=DEFAULT_MAX_KEY_SIZE, gt=0)
    max_value_size: int = Field(default=DEFAULT_MAX_VALUE_SIZE, gt=0)

    # MCP server
    host: str = "0.0.0.0"
    port: int = 8001
    log_level: str = "INFO"
