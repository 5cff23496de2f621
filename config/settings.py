"""
Application settings loaded from environment variables.

Uses Pydantic Settings for type-safe configuration with validation.
All settings can be overridden via SPARKLINES_* environment variables or a
.env file. These are the defaults applied when a chart's own settings omit a
value; per-chart settings always take precedence.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Engine-wide configuration.

    All settings are loaded from environment variables or .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="SPARKLINES_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Chart defaults
    default_width: float = Field(
        default=200,
        ge=1,
        le=8092,
        description="Width in pixels used when a chart does not specify one",
    )
    default_height: float = Field(
        default=100,
        ge=1,
        le=8092,
        description="Height in pixels used when a chart does not specify one",
    )
    default_color: str = Field(
        default="currentColor",
        description="Stroke/fill color used when a chart does not specify one",
    )
    default_stroke_width: float = Field(
        default=1.67,
        gt=0,
        description="Line stroke width in pixels",
    )
    default_dot_size: float = Field(
        default=3.67,
        gt=0,
        description="Dot diameter in pixels",
    )

    # Geometry limits
    max_dimension: float = Field(
        default=8092,
        ge=1,
        description="Upper bound for chart width and height in pixels",
    )
    large_value_threshold: float = Field(
        default=5000,
        gt=0,
        description=(
            "Value range above which values are scaled down; some SVG renderers "
            "lose precision on large coordinates"
        ),
    )

    # Logging Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are loaded only once. Tests that
    change SPARKLINES_* variables call get_settings.cache_clear().

    Returns:
        Settings instance with all configuration loaded.

    Example:
        >>> get_settings().default_color
        'currentColor'
    """
    return Settings()
