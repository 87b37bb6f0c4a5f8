"""Application configuration: settings schema and pubarchive.yaml loader"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from pubarchive.core.models import Site


CONFIG_FILE = "pubarchive.yaml"
ENV_PREFIX = "PUBARCHIVE_"


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    data_dir:     Optional[str] = Field(default=None, description="Root directory scanned for public directories")
    output_dir:   str = Field(default="./output",       description="Directory for rendered pages, indexes and feed")
    extensions:   list[str] = Field(default=["html", "md", "txt"], description="Allowed extensions; first match wins")
    public_dir:   str = Field(default="public_archive", description="Directory-name suffix marking publishable folders")
    overwrite:    bool = Field(default=False,           description="Re-render pages whose output already exists")
    template_dir: str = Field(default="template",       description="Directory holding the HTML templates")
    recent_count: int = Field(default=5, ge=0,          description="Documents rendered into {{recent-posts}}")
    site_title:       str = ""
    site_url:         str = ""
    site_description: str = ""
    log_level:    str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")

    @field_validator("extensions", mode="before")
    @classmethod
    def _split_extensions(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.split(",")
        if isinstance(value, (list, tuple)):
            value = [str(v).strip().lstrip(".") for v in value]
            return [v for v in value if v]
        return value

    @field_validator("site_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    @property
    def site(self) -> Site:
        return Site(title=self.site_title, url=self.site_url, description=self.site_description)


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from pubarchive.yaml, then PUBARCHIVE_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return Settings(**data)
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}") from e


def require_data_dir(settings: Settings) -> Path:
    """Return the configured data root, raising ValueError when it is unset."""
    if not settings.data_dir:
        raise ValueError(f"data_dir is not set (use --data-dir or {ENV_PREFIX}DATA_DIR)")
    return Path(settings.data_dir)
