"""Result models for item store writes."""

from typing import Self

from pydantic import BaseModel, ConfigDict, Field


class WriteResult(BaseModel):
    """Outcome of an update or delete against the item store.

    A failed write carries a human-readable reason instead of raising, so the
    coordinator can surface it verbatim.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    ok: bool = Field(description="Whether the write was applied")
    reason: str | None = Field(default=None, description="Failure reason")
    status_code: int | None = Field(default=None, description="HTTP status if remote")

    @classmethod
    def success(cls, status_code: int | None = None) -> Self:
        """Build a successful result."""
        return cls(ok=True, status_code=status_code)

    @classmethod
    def failure(cls, reason: str, status_code: int | None = None) -> Self:
        """Build a failed result with a reason."""
        return cls(ok=False, reason=reason, status_code=status_code)
