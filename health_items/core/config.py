"""
Configuration module for the health item data model.
Uses Pydantic BaseSettings for validation - bad values fail fast on import.
"""
import logging
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Library settings with validation.
    Every field has a default; override with HEALTH_ITEMS_* environment variables.
    """

    model_config = SettingsConfigDict(
        env_prefix="HEALTH_ITEMS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Log level used by setup_logging")
    log_format: str = Field(default="json", description="Log format: 'json' or 'text'")

    # XML Output Configuration
    xml_encoding: str = Field(default="utf-8", description="Encoding used when writing XML strings")
    xml_pretty_print: bool = Field(default=False, description="Indent written XML")

    # XML Input Configuration
    max_fragment_bytes: int = Field(
        default=10485760,
        gt=0,
        description="Largest XML fragment accepted by parse_fragment (10MB)",
    )

    # Item type catalog
    catalog_path: Optional[str] = Field(
        default=None,
        description="Override path of the thing type catalog YAML",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Normalize and check the log level name."""
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: '{value}'")
        return level

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, value: str) -> str:
        """Only json and text formatters exist."""
        fmt = value.lower()
        if fmt not in {"json", "text"}:
            raise ValueError(f"Unknown log format: '{value}'")
        return fmt

    @property
    def resolved_catalog_path(self) -> Path:
        """Get the catalog path, falling back to the bundled thing_types.yaml."""
        if self.catalog_path:
            return Path(self.catalog_path)
        return Path(__file__).parent / "thing_types.yaml"


# Create global settings instance
settings = Settings()
