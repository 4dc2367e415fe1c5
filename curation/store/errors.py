"""Exceptions raised by item store adapters."""


class ItemStoreError(Exception):
    """Base exception for item store failures."""


class ItemStoreReadError(ItemStoreError):
    """Raised when listing or counting items fails."""

    def __init__(self, operation: str, reason: str) -> None:
        """Initialize the error.

        Args:
            operation: Read operation that failed (e.g., 'list_items').
            reason: Human-readable failure reason.
        """
        self.operation = operation
        self.reason = reason
        super().__init__(f"{operation} failed: {reason}")


class UnknownFieldError(ItemStoreError):
    """Raised when an update names a field the item model does not have."""

    def __init__(self, field_name: str) -> None:
        """Initialize the error.

        Args:
            field_name: The unknown field.
        """
        self.field_name = field_name
        super().__init__(f"Unknown item field: {field_name}")
