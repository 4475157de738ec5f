"""Entity persistence layer."""

from quotebook.store.entity_store import (
    ADDRESSES_SLOT,
    QUOTES_SLOT,
    TEMPLATES_SLOT,
    Collection,
    EntityStore,
)
from quotebook.store.errors import EntityNotFoundError, PayloadError
from quotebook.store.ids import IdGenerator
from quotebook.store.models import ClientAddress, Draft, LineItem, Persisted, Quote, QuoteItemTemplate
from quotebook.store.storage import JsonFileStorage, KeyValueStorage, MemoryStorage

__all__ = [
    "ADDRESSES_SLOT",
    "QUOTES_SLOT",
    "TEMPLATES_SLOT",
    "ClientAddress",
    "Collection",
    "Draft",
    "EntityNotFoundError",
    "EntityStore",
    "IdGenerator",
    "JsonFileStorage",
    "KeyValueStorage",
    "LineItem",
    "MemoryStorage",
    "PayloadError",
    "Persisted",
    "Quote",
    "QuoteItemTemplate",
]
