"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "SITESEARCH_"

DEFAULT_ROUTES = {
    "docs":          "/docs/{slug}",
    "tool-articles": "/tools/{tool}/{slug}",
    "pages":         "/{slug}",
}


class Settings(BaseModel):
    app_name:      str = "sitesearch"
    content_dir:   str = Field(default="src/content", description="Root holding docs/, tool-articles/, pages/")
    output_dir:    str = Field(default="dist",        description="Directory for generated search artifacts")
    index_file:    str = Field(default="search.json", description="Bare record array consumed by the client engine")
    comprehensive_file: str = Field(default="search/comprehensive.json", description="Full index envelope")
    routes:        dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_ROUTES))
    cache_max_age: int = Field(default=1800, ge=0, description="Cache-Control max-age in seconds")
    fetch_workers: int = Field(default=3,  ge=1, description="Threads used to load content sources")
    posts_per_page:    int = Field(default=6,  ge=1)
    max_visible_pages: int = Field(default=10, ge=1, description="Page-number buttons shown at once")
    locale:        str = Field(default="id_ID", description="Babel locale for card dates")
    link_base:     str = Field(default="/docs", description="Card link prefix when a record has no url")
    fetch_timeout: float = Field(default=10.0, gt=0, description="Client fetch timeout in seconds")
    log_level:     str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR)$")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then SITESEARCH_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e

    for name in Settings.model_fields:
        if name == "routes":
            continue  # mapping; config.yaml only
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
