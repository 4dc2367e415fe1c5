"""Constants for homepage curation."""

from typing import Final


# Section caps applied by the homepage assembler
DEFAULT_BANNER_MAX: Final[int] = 5
DEFAULT_RANKED_MAX: Final[int] = 6
DEFAULT_NEW_LAUNCH_MAX: Final[int] = 8

# Number of conflicting titles named in confirmations and warnings
CONFLICT_TITLE_PREVIEW: Final[int] = 2

# Languages offered by the language filter, with display labels
DEFAULT_LANGUAGE_LABELS: Final[dict[str, str]] = {
    "en": "English",
    "hi": "Hindi",
    "ta": "Tamil",
}

# Item store table layout
DEFAULT_ITEMS_TABLE: Final[str] = "stories"
DEFAULT_CHILDREN_TABLE: Final[str] = "episodes"
DEFAULT_CHILD_FOREIGN_KEY: Final[str] = "story_id"

# Log component names
COMPONENT_CONFIG: Final[str] = "config"
COMPONENT_COORDINATOR: Final[str] = "coordinator"
COMPONENT_STORE: Final[str] = "store"
COMPONENT_CLI: Final[str] = "cli"
