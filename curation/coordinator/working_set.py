"""The coordinator-owned item collection and its unsaved rank edits."""

from collections.abc import Iterable, Iterator
from typing import Any

from curation.coordinator.errors import StaleReferenceError
from curation.items.models import Item, RankSlot


class WorkingSet:
    """Last-fetched items, in store order, keyed by id.

    Items are immutable; changing a field swaps in a copy. Callers outside the
    coordinator only ever receive copies of the ordering.
    """

    def __init__(self, items: Iterable[Item] = ()) -> None:
        self._items: dict[str, Item] = {item.id: item for item in items}

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._items

    def __iter__(self) -> Iterator[Item]:
        return iter(list(self._items.values()))

    def items(self) -> list[Item]:
        """Items in working-set order."""
        return list(self._items.values())

    def get(self, item_id: str) -> Item | None:
        """Item by id, or None if it is not in the working set."""
        return self._items.get(item_id)

    def replace_all(self, items: Iterable[Item]) -> None:
        """Swap in a freshly fetched collection."""
        self._items = {item.id: item for item in items}

    def set_field(self, item_id: str, field_name: str, value: Any) -> Any:
        """Change one field and return its previous value.

        Raises:
            StaleReferenceError: If the item is not in the working set.
        """
        item = self._items.get(item_id)
        if item is None:
            raise StaleReferenceError(item_id)
        prior = getattr(item, field_name)
        self._items[item_id] = item.model_copy(update={field_name: value})
        return prior

    def restore_field(self, item_id: str, field_name: str, prior: Any) -> bool:
        """Put back a field's previous value on the current item.

        Only the one field is touched, so concurrent edits to other fields or
        other items survive the rollback.

        Returns:
            False if the item disappeared in the meantime.
        """
        item = self._items.get(item_id)
        if item is None:
            return False
        self._items[item_id] = item.model_copy(update={field_name: prior})
        return True


class RankEdits:
    """Unsaved rank values typed by the editor, per item and slot."""

    def __init__(self) -> None:
        self._edits: dict[tuple[str, RankSlot], int | None] = {}

    def __len__(self) -> int:
        return len(self._edits)

    def stage(self, item_id: str, slot: RankSlot, rank: int | None) -> None:
        """Record an unsaved rank."""
        self._edits[(item_id, slot)] = rank

    def discard(self, item_id: str, slot: RankSlot) -> None:
        """Forget an unsaved rank."""
        self._edits.pop((item_id, slot), None)

    def has(self, item_id: str, slot: RankSlot) -> bool:
        """Whether an unsaved rank exists."""
        return (item_id, slot) in self._edits

    def get(self, item_id: str, slot: RankSlot) -> int | None:
        """The unsaved rank (None also means "cleared")."""
        return self._edits.get((item_id, slot))

    def prune(self, known_ids: Iterable[str]) -> None:
        """Drop edits for items that no longer exist."""
        known = set(known_ids)
        self._edits = {key: v for key, v in self._edits.items() if key[0] in known}

    def overlay(self, items: Iterable[Item], slot: RankSlot) -> list[Item]:
        """Items with unsaved ranks for ``slot`` applied."""
        overlaid: list[Item] = []
        for item in items:
            if (item.id, slot) in self._edits:
                item = item.model_copy(
                    update={slot.field_name: self._edits[(item.id, slot)]}
                )
            overlaid.append(item)
        return overlaid

    def snapshot(self) -> dict[str, dict[str, int | None]]:
        """Unsaved ranks as ``{item_id: {slot: rank}}``."""
        result: dict[str, dict[str, int | None]] = {}
        for (item_id, slot), rank in self._edits.items():
            result.setdefault(item_id, {})[slot.value] = rank
        return result
