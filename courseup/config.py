"""
Configuration management using Pydantic Settings.

All values can be set through environment variables prefixed with COURSEUP_
(or a .env file in the working directory). Lists and mappings are JSON:

    COURSEUP_TERMS='["202109", "202201"]'
    COURSEUP_KUALI_CATALOGS='{"202109": "<catalog id>"}'
"""

from __future__ import annotations

from functools import lru_cache
from typing import Dict, List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from courseup.provider import BANNER_URL, KUALI_HOST


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(env_prefix="COURSEUP_", env_file=".env", extra="ignore")

    # Application
    app_name: str = "CourseUp"
    log_level: str = Field(default="INFO", description="Logging level")
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=3000, ge=1, le=65535, description="API port")

    # Catalog
    terms: List[str] = Field(default_factory=lambda: ["202109", "202201"], description="Known term codes")
    default_limit: int = Field(default=10, ge=1, description="Page size when no limit is given")
    strict_identifiers: bool = Field(default=True, description="Reject catalog ids that split badly")

    # Course data provider
    provider: Literal["kuali", "snapshot"] = Field(default="kuali", description="Course data provider")
    snapshot_dir: str = Field(default="data/snapshot", description="Root of the JSON snapshot")
    kuali_host: str = Field(default=KUALI_HOST, description="Kuali catalog host")
    kuali_catalogs: Dict[str, str] = Field(default_factory=dict, description="Term -> Kuali catalog id")
    banner_url: str = Field(default=BANNER_URL, description="Banner section listing URL")
    request_timeout: float = Field(default=30.0, gt=0, description="Upstream request timeout (seconds)")


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
