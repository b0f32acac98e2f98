"""Application settings and configuration."""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Crafting simulator settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CRAFTING_",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = Field(default="INFO")
    log_file: Optional[str] = Field(default=None)

    # Catalog data
    data_dir: Path = Field(default=Path("./data"))
    mods_file: str = Field(default="mods.min.json")
    bases_file: str = Field(default="base_items.min.json")
    descriptions_file: str = Field(default="stat_translations.min.json")

    # Generation
    seed: Optional[int] = Field(default=None)
    batch_size: int = Field(default=100)
    item_class: str = Field(default="Two Hand Sword")
    item_name: str = Field(default="Imaginary Sword")
    item_level: int = Field(default=1)
    quality_amount: int = Field(default=20, ge=0)
    quality_kind: str = Field(default="normal")

    @field_validator("batch_size")
    @classmethod
    def validate_batch_size(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"batch_size must be positive, got {v}")
        return v

    @field_validator("item_level")
    @classmethod
    def validate_item_level(cls, v: int) -> int:
        if not 1 <= v <= 100:
            raise ValueError(f"item_level must be between 1 and 100, got {v}")
        return v

    @field_validator("quality_kind")
    @classmethod
    def validate_quality_kind(cls, v: str) -> str:
        normalized = v.lower()
        if normalized not in ("normal", "imbued"):
            raise ValueError(f"quality_kind must be 'normal' or 'imbued', got {v!r}")
        return normalized

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        return v.upper()


# Global settings instance
settings = Settings()
