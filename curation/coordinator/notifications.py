"""User-facing notifications emitted by the coordinator."""

from collections import deque
from datetime import UTC, datetime
from enum import Enum
from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field


class NotificationLevel(str, Enum):
    """How a notification is presented."""

    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


class Notification(BaseModel):
    """A toast-style message for the presentation layer.

    Attributes:
        level: Presentation level.
        title: Short heading ("Success", "Error", "Not found").
        message: Detail text; carries the store's reason on failures.
        item_id: Item the notification concerns, if any.
        field_name: Field the notification concerns, if any.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    level: NotificationLevel
    title: str
    message: str
    item_id: str | None = None
    field_name: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class Notifier(Protocol):
    """Sink for notifications."""

    def notify(self, notification: Notification) -> None:
        """Deliver one notification."""
        ...


class NotificationLog:
    """Notifier that keeps the most recent notifications in memory."""

    def __init__(self, maxlen: int = 100) -> None:
        """Initialize the log.

        Args:
            maxlen: Number of notifications retained.
        """
        self._entries: deque[Notification] = deque(maxlen=maxlen)

    def notify(self, notification: Notification) -> None:
        """Append a notification."""
        self._entries.append(notification)

    @property
    def entries(self) -> list[Notification]:
        """Retained notifications, oldest first."""
        return list(self._entries)

    @property
    def last(self) -> Notification | None:
        """Most recent notification."""
        return self._entries[-1] if self._entries else None

    def clear(self) -> None:
        """Drop all retained notifications."""
        self._entries.clear()
