"""Configuration schemas."""

from curation.config.schemas.homepage import (
    HomepageConfig,
    LanguageConfig,
    SectionLimits,
    StoreLayoutConfig,
)


__all__ = [
    "HomepageConfig",
    "LanguageConfig",
    "SectionLimits",
    "StoreLayoutConfig",
]
