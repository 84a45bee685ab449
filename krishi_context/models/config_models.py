from __future__ import annotations

from dataclasses import dataclass, field

"""Config dataclasses for the context engine.

The loader (config/loader.py) builds these from config/krishi.yml after
schema validation.
"""

SUPPORTED_LANGUAGES = ("en", "hi", "ml")


@dataclass(frozen=True)
class DatabaseConfig:
    """Record store connection settings.

    Used as fallback when environment variables are not set.
    Environment variables take precedence over these values.
    """
    host: str | None = None
    port: int | None = None
    user: str | None = None
    password: str | None = None
    database: str | None = None
    dsn: str | None = None


@dataclass(frozen=True)
class AppConfig:
    """Root configuration object."""
    data_directory: str  # Directory holding the .xlsx datasets
    ranking_dataset: str = "top10_crops_kerala"  # Stem of the top crops workbook
    region: str = "Kerala"  # Region label used in the prompt
    language: str = "en"  # Default reply language tag
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
