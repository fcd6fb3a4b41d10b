"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field

from mdpress.core.models import ProcessOptions


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    app_name:         str = "mdpress"
    storage_url:      Optional[str] = Field(default=None, description="Object storage base URL for relative images")
    storage_bucket:   str = Field(default="blog-images", description="Public bucket holding post images")
    excerpt_length:   int = Field(default=160, ge=1, description="Max generated excerpt length in characters")
    words_per_minute: int = Field(default=225, ge=1, description="Reading speed used for reading time")
    toc_max_level:    int = Field(default=3,   ge=1, le=6, description="Deepest heading level in the TOC")
    line_numbers:     bool = Field(default=False, description="Annotate code blocks for line numbering")
    gfm:              bool = Field(default=True,  description="Enable GitHub-flavored extensions")
    output_dir:       str = Field(default="dist", description="Directory for rendered HTML + JSON files")

    def process_options(self, **overrides: Any) -> ProcessOptions:
        """Build pipeline options from these settings, with explicit keyword overrides."""
        data = {
            "excerpt_length":   self.excerpt_length,
            "words_per_minute": self.words_per_minute,
            "toc_max_level":    self.toc_max_level,
            "line_numbers":     self.line_numbers,
            "gfm":              self.gfm,
        }
        data.update({k: v for k, v in overrides.items() if v is not None})
        return ProcessOptions(**data)


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MDPRESS_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e

    for name in Settings.model_fields:
        if val := os.getenv(f"MDPRESS_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
