"""Entity store: three independently keyed collections with write-through persistence."""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, Generic, List, Optional, Tuple, TypeVar

from quotebook.store.errors import EntityNotFoundError, PayloadError
from quotebook.store.ids import IdGenerator
from quotebook.store.models import ClientAddress, Draft, Persisted, Quote, QuoteItemTemplate, Record
from quotebook.store.serialization import (
    address_from_dict,
    address_to_dict,
    decode_collection,
    quote_from_dict,
    quote_to_dict,
    template_from_dict,
    template_to_dict,
)
from quotebook.store.storage import KeyValueStorage

QUOTES_SLOT = "quotes"
ADDRESSES_SLOT = "clientAddresses"
TEMPLATES_SLOT = "quoteItemTemplates"

_LOGGER = logging.getLogger(__name__)

T = TypeVar("T")
Listener = Callable[[Tuple[Persisted[Any], ...]], None]


class Collection(Generic[T]):
    """An ordered collection of persisted entities bound to one storage slot.

    Every mutation swaps ``self.items`` for a new tuple and only then writes
    the whole collection to the slot.
    """

    def __init__(
        self,
        slot: str,
        storage: KeyValueStorage,
        id_generator: IdGenerator,
        encode: Callable[[Persisted[T]], Dict[str, Any]],
        decode: Callable[[Dict[str, Any]], Persisted[T]],
    ) -> None:
        self.slot = slot
        self._storage = storage
        self._new_id = id_generator.new_id
        self._encode = encode
        self._decode = decode
        self._listeners: List[Listener] = []
        self.items: Tuple[Persisted[T], ...] = ()

    def load(self) -> None:
        """Replace the in-memory collection with the slot's contents.

        A missing slot, unparseable JSON or a malformed record all yield an
        empty collection.
        """
        raw = self._storage.read(self.slot)
        if raw is None:
            self.items = ()
            return
        try:
            self.items = tuple(decode_collection(json.loads(raw), self._decode))
        except (ValueError, RecursionError, PayloadError) as exc:
            _LOGGER.warning(
                "Discarding unreadable payload in slot %s: %s",
                self.slot,
                exc,
                extra={"slot": self.slot},
            )
            self.items = ()

    def list(self) -> Tuple[Persisted[T], ...]:
        return self.items

    def get(self, entity_id: str) -> Persisted[T]:
        for record in self.items:
            if record.id == entity_id:
                return record
        raise EntityNotFoundError(self.slot, entity_id)

    def find(self, entity_id: str) -> Optional[Persisted[T]]:
        return next((record for record in self.items if record.id == entity_id), None)

    def save(self, record: Record[T]) -> Persisted[T]:
        if isinstance(record, Draft):
            persisted = Persisted(id=self._new_id(), entity=record.entity)
            self._commit(self.items + (persisted,))
            _LOGGER.info("Created %s entry %s", self.slot, persisted.id, extra={"slot": self.slot})
            return persisted

        if not any(existing.id == record.id for existing in self.items):
            raise EntityNotFoundError(self.slot, record.id)
        self._commit(tuple(record if existing.id == record.id else existing for existing in self.items))
        _LOGGER.info("Updated %s entry %s", self.slot, record.id, extra={"slot": self.slot})
        return record

    def delete(self, entity_id: str) -> bool:
        remaining = tuple(record for record in self.items if record.id != entity_id)
        if len(remaining) == len(self.items):
            return False
        self._commit(remaining)
        _LOGGER.info("Deleted %s entry %s", self.slot, entity_id, extra={"slot": self.slot})
        return True

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with the new tuple after each mutation; returns an unsubscribe callable."""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def _commit(self, items: Tuple[Persisted[T], ...]) -> None:
        self.items = items
        payload = json.dumps([self._encode(record) for record in items], ensure_ascii=False)
        self._storage.write(self.slot, payload)
        for listener in list(self._listeners):
            listener(items)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)


class EntityStore:
    """Owner of the quotes, client addresses and item templates.

    Construct it with a storage backend and call :meth:`init` once to load the
    persisted collections.
    """

    def __init__(self, storage: KeyValueStorage, id_generator: Optional[IdGenerator] = None) -> None:
        self.id_generator = id_generator or IdGenerator()
        self.quotes: Collection[Quote] = Collection(
            QUOTES_SLOT, storage, self.id_generator, quote_to_dict, quote_from_dict
        )
        self.client_addresses: Collection[ClientAddress] = Collection(
            ADDRESSES_SLOT, storage, self.id_generator, address_to_dict, address_from_dict
        )
        self.quote_item_templates: Collection[QuoteItemTemplate] = Collection(
            TEMPLATES_SLOT, storage, self.id_generator, template_to_dict, template_from_dict
        )

    @property
    def collections(self) -> Tuple[Collection[Any], ...]:
        return (self.quotes, self.client_addresses, self.quote_item_templates)

    def init(self) -> "EntityStore":
        for collection in self.collections:
            collection.load()
        _LOGGER.debug(
            "Entity store loaded",
            extra={collection.slot: len(collection) for collection in self.collections},
        )
        return self
