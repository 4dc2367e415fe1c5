"""Homepage configuration schema."""

from typing import Annotated

from pydantic import Field, model_validator

from curation.config.constants import (
    DEFAULT_BANNER_MAX,
    DEFAULT_CHILD_FOREIGN_KEY,
    DEFAULT_CHILDREN_TABLE,
    DEFAULT_ITEMS_TABLE,
    DEFAULT_LANGUAGE_LABELS,
    DEFAULT_NEW_LAUNCH_MAX,
    DEFAULT_RANKED_MAX,
)
from curation.data_model import StrictBaseModel


_IDENTIFIER = r"^[a-z_][a-z0-9_]*$"


class SectionLimits(StrictBaseModel):
    """Maximum number of items shown per homepage section.

    Attributes:
        banner_max: Banner carousel slots.
        ranked_max: Ranked list slots.
        new_launch_max: New launch grid tiles.
    """

    banner_max: Annotated[int, Field(ge=0, le=50)] = DEFAULT_BANNER_MAX
    ranked_max: Annotated[int, Field(ge=0, le=50)] = DEFAULT_RANKED_MAX
    new_launch_max: Annotated[int, Field(ge=0, le=50)] = DEFAULT_NEW_LAUNCH_MAX


class LanguageConfig(StrictBaseModel):
    """A language tag offered by the language filter.

    Attributes:
        code: Tag stored on items.
        label: Display name.
    """

    code: Annotated[str, Field(min_length=2, max_length=8, pattern=r"^[a-z]+$")]
    label: Annotated[str, Field(min_length=1, max_length=50)]


def _default_languages() -> list[LanguageConfig]:
    return [
        LanguageConfig(code=code, label=label)
        for code, label in DEFAULT_LANGUAGE_LABELS.items()
    ]


class StoreLayoutConfig(StrictBaseModel):
    """Table layout of the item store.

    Attributes:
        items_table: Table holding stories.
        children_table: Table whose rows are counted per story.
        child_foreign_key: Column on the children table referencing the story.
    """

    items_table: Annotated[str, Field(pattern=_IDENTIFIER)] = DEFAULT_ITEMS_TABLE
    children_table: Annotated[str, Field(pattern=_IDENTIFIER)] = DEFAULT_CHILDREN_TABLE
    child_foreign_key: Annotated[str, Field(pattern=_IDENTIFIER)] = (
        DEFAULT_CHILD_FOREIGN_KEY
    )


class HomepageConfig(StrictBaseModel):
    """Root configuration for homepage.yaml.

    Attributes:
        version: Schema version.
        limits: Section caps.
        languages: Languages offered by the filter.
        store: Item store table layout.
    """

    version: Annotated[str, Field(pattern=r"^\d+\.\d+$")] = "1.0"
    limits: SectionLimits = Field(default_factory=SectionLimits)
    languages: list[LanguageConfig] = Field(default_factory=_default_languages)
    store: StoreLayoutConfig = Field(default_factory=StoreLayoutConfig)

    @model_validator(mode="after")
    def validate_unique_languages(self) -> "HomepageConfig":
        """Ensure each language code is declared once."""
        codes = [language.code for language in self.languages]
        if len(codes) != len(set(codes)):
            msg = "Language codes must be unique"
            raise ValueError(msg)
        return self

    def language_label(self, code: str) -> str:
        """Display label for a language tag, or the tag itself if unknown."""
        for language in self.languages:
            if language.code == code:
                return language.label
        return code
