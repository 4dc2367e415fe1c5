"""Item store doubles with scripted failures."""

import asyncio
from collections.abc import Iterable
from typing import Any

from curation.items.models import Item
from curation.ranker.models import FilterCriteria
from curation.store.errors import ItemStoreReadError
from curation.store.memory import InMemoryItemStore
from curation.store.models import WriteResult


class ScriptedStore(InMemoryItemStore):
    """In-memory store whose reads and writes can be made to fail or block.

    Attributes:
        update_calls: Every ``(item_id, fields)`` passed to ``update_item``.
        fail_fields: Field name -> failure reason returned for writes to it.
        raise_on_update: Exception raised by every write, if set.
        gates: Field name -> event a write to that field waits on.
        list_error: Exception raised by ``list_items``, if set.
        failing_counts: Item ids whose child count raises.
    """

    def __init__(
        self,
        items: Iterable[Item] = (),
        child_counts: dict[str, int] | None = None,
    ) -> None:
        super().__init__(items, child_counts)
        self.update_calls: list[tuple[str, dict[str, Any]]] = []
        self.fail_fields: dict[str, str] = {}
        self.raise_on_update: Exception | None = None
        self.gates: dict[str, asyncio.Event] = {}
        self.list_error: Exception | None = None
        self.failing_counts: set[str] = set()

    def gate(self, field_name: str) -> asyncio.Event:
        """Hold writes to ``field_name`` until the returned event is set."""
        event = asyncio.Event()
        self.gates[field_name] = event
        return event

    async def list_items(self, criteria: FilterCriteria | None = None) -> list[Item]:
        if self.list_error is not None:
            raise self.list_error
        return await super().list_items(criteria)

    async def count_children(self, item_id: str) -> int:
        if item_id in self.failing_counts:
            raise ItemStoreReadError("count_children", "timeout")
        return await super().count_children(item_id)

    async def update_item(self, item_id: str, fields: dict[str, Any]) -> WriteResult:
        self.update_calls.append((item_id, dict(fields)))
        for name in fields:
            gate = self.gates.get(name)
            if gate is not None:
                await gate.wait()
        if self.raise_on_update is not None:
            raise self.raise_on_update
        for name in fields:
            if name in self.fail_fields:
                return WriteResult.failure(self.fail_fields[name])
        return await super().update_item(item_id, fields)
