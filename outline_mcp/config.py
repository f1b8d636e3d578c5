from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

from .utils.config_guard import OutlineConfig


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # --- Outline instance ---
    # Plain strings; malformed values are reported by the config guard at call time
    outline_base_url: Optional[str] = Field(default=None, validation_alias="OUTLINE_BASE_URL")
    outline_api_token: Optional[str] = Field(default=None, repr=False, validation_alias="OUTLINE_API_TOKEN")

    # --- Transport ---
    request_timeout: float = Field(default=30.0, gt=0, validation_alias="REQUEST_TIMEOUT")

    # --- MCP server ---
    mcp_host: str = Field(default="127.0.0.1", validation_alias="MCP_HOST")
    mcp_port: int = Field(default=3001, ge=1, le=65535, validation_alias="MCP_PORT")
    security_headers_enabled: bool = Field(default=True, validation_alias="SECURITY_HEADERS_ENABLED")

    # --- Logging ---
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: Optional[str] = Field(default=None, validation_alias="LOG_FILE")

    def outline_config(self) -> OutlineConfig:
        return OutlineConfig(base_url=self.outline_base_url, api_token=self.outline_api_token)


@lru_cache
def get_settings() -> Settings:
    return Settings()
