"""Configuration loading and validation module."""

from curation.config.loader import ConfigLoader, ConfigValidationError, load_config
from curation.config.schemas import (
    HomepageConfig,
    LanguageConfig,
    SectionLimits,
    StoreLayoutConfig,
)


__all__ = [
    "ConfigLoader",
    "ConfigValidationError",
    "HomepageConfig",
    "LanguageConfig",
    "SectionLimits",
    "StoreLayoutConfig",
    "load_config",
]
