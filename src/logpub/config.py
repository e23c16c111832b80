"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "LOGPUB_"


class Settings(BaseModel):
    app_name:      str  = "logpub"
    db_url:        str  = "sqlite:///logpub.db"
    strict:        bool = Field(default=False, description="Fail on malformed markdown instead of degrading to text")
    words_per_minute: int = Field(default=200, ge=1, description="Reading speed used for read-time estimates")
    output_dir:    str  = Field(default="dist", description="Directory for exported MD/MDX + JSON files")
    output_format: str  = Field(default="mdx", pattern="^(md|mdx)$", description="md or mdx")
    staging_dir:   str  = Field(default=".logpub/staging", description="Staging directory for extracted post JSON")
    log_level:     str  = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then LOGPUB_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e

    for name in Settings.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
