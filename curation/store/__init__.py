"""Item store interface, adapters and working-set loading."""

from curation.store.errors import ItemStoreError, ItemStoreReadError, UnknownFieldError
from curation.store.loader import load_working_set
from curation.store.memory import InMemoryItemStore, listing_order
from curation.store.models import WriteResult
from curation.store.protocols import ItemStore
from curation.store.rest import RestItemStore


__all__ = [
    "InMemoryItemStore",
    "ItemStore",
    "ItemStoreError",
    "ItemStoreReadError",
    "RestItemStore",
    "UnknownFieldError",
    "WriteResult",
    "listing_order",
    "load_working_set",
]
