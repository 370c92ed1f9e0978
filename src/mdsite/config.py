"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    source_dir:    str = Field(default="content",     description="Directory of markdown sources")
    output_dir:    str = Field(default="dist",        description="Directory for generated HTML pages")
    template_file: Optional[str] = Field(default=None, description="Page template with a {{ content }} marker")
    header_file:   str = Field(default="header.html", description="Header fragment looked up in source_dir")
    footer_file:   str = Field(default="footer.html", description="Footer fragment looked up in source_dir")
    standalone:    bool = Field(default=True,  description="Wrap pages in a minimal HTML document when no template is found")
    frontmatter:   bool = Field(default=True,  description="Strip YAML frontmatter from sources")
    log_level:     str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR)$")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MDSITE_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"MDSITE_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
