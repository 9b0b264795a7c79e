"""
Configuration management using Pydantic Settings.
Layout constants are loaded from environment variables with sensible defaults.
"""

from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="STATEMENT_SERIES_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Application
    log_level: str = Field(default="INFO")

    # Statement layout
    sign_column_threshold: float = Field(default=500.0)
    total_line_pattern: str = Field(default=r"^SOLDE\s+.*(\d{2}\.\d{2}\.\d{4})")
    skip_line_prefixes: List[str] = Field(
        default_factory=lambda: ["TOTAL DES MONTANTS"]
    )
    stop_line_prefixes: List[str] = Field(
        default_factory=lambda: [
            "BNP PARIBAS SA : capital de",
            "Montant de votre autorisation",
        ]
    )
    date_format: str = Field(default="%d.%m.%Y")

    # Diagnostics
    dump_path: Optional[Path] = Field(default=None)

    def is_debit_column(self, column: float) -> bool:
        """Amounts starting left of the threshold belong to the debit column."""
        return column < self.sign_column_threshold


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
