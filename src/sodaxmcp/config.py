"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Environment variables  (SODAXMCP__SERVER__TRANSPORT=stdio)
  2. sodaxmcp.yaml          (searched in cwd, then platform config dir)
  3. Hardcoded defaults

The config file is optional — all fields have sensible defaults.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

_DEFAULT_CONFIG_DIR = platformdirs.user_config_dir("sodaxmcp")

BRAND_BIBLE_URL = "https://iconfoundation.notion.site/brand-bible-v1"
SODAX_API_BASE = "https://api.sodax.com/v1/be"


def _find_config_file() -> str | None:
    """Return the path of the first sodaxmcp.yaml found, or None."""
    candidates = [
        Path("sodaxmcp.yaml"),
        Path(_DEFAULT_CONFIG_DIR) / "sodaxmcp.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class ServerSettings(BaseModel):
    transport: Literal["stdio", "http"] = "http"
    host: str = "0.0.0.0"
    port: int = 3000
    auth_enabled: bool = False
    auth_key: str = ""
    # Browser origins allowed besides loopback; "*" allows any. Public by default.
    allowed_origins: list[str] = ["*"]


class BrandBibleSettings(BaseModel):
    url: str = BRAND_BIBLE_URL
    ttl_seconds: int = Field(default=300, ge=0)
    timeout_seconds: float = 30.0
    user_agent: str = "Mozilla/5.0 (compatible; SODAX-Brand-Bible-MCP/1.0)"


class ApiSettings(BaseModel):
    base_url: str = SODAX_API_BASE
    docs_url: str = f"{SODAX_API_BASE}/docs"
    timeout_seconds: float = 30.0


class LoggingSettings(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: SODAXMCP__SERVER__PORT=9090
        env_prefix="SODAXMCP__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    server: ServerSettings = ServerSettings()
    brand_bible: BrandBibleSettings = BrandBibleSettings()
    api: ApiSettings = ApiSettings()
    logging: LoggingSettings = LoggingSettings()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
        **kwargs: Any,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,  # Constructor args (highest priority)
            env_settings,  # Environment variables
            YamlConfigSettingsSource(settings_cls),  # YAML file
            # dotenv and file secrets intentionally excluded
        )
