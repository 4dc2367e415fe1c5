"""Base model for curation records and config schemas."""

from pydantic import BaseModel, ConfigDict


class StrictBaseModel(BaseModel):
    """Frozen model that rejects unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid")
