"""JSON shapes of the stored collections.

Each slot holds a JSON array of flat records with camelCase keys, e.g.::

    [
      {
        "id": "id_1718000000000_k3j9x0a1b",
        "quoteNumber": "0001",
        "date": "2024-06-10",
        "fromName": "...",
        "lineItems": [{"id": "...", "description": "...", "quantity": 2, "unitPrice": 100}],
        "taxRate": 21,
        ...
      }
    ]

Optional keys may be absent in older payloads and fall back to defaults.
"""

from __future__ import annotations

import math
from datetime import date
from typing import Any, Callable, Dict, List, Optional

from quotebook.store.errors import PayloadError
from quotebook.store.models import ClientAddress, LineItem, Persisted, Quote, QuoteItemTemplate


def _text(record: Dict[str, Any], key: str, default: str = "") -> str:
    value = record.get(key, default)
    if value is None:
        return default
    if not isinstance(value, str):
        raise PayloadError(f"Field {key!r} must be text, got {type(value).__name__}")
    return value


def _number(record: Dict[str, Any], key: str, default: float = 0) -> float:
    value = record.get(key, default)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise PayloadError(f"Field {key!r} must be a number, got {value!r}")
    if isinstance(value, float) and not math.isfinite(value):
        raise PayloadError(f"Field {key!r} must be finite, got {value!r}")
    return value


def _required_id(record: Dict[str, Any]) -> str:
    value = record.get("id")
    if not isinstance(value, str) or not value:
        raise PayloadError(f"Record without a usable id: {record!r}")
    return value


def _date(record: Dict[str, Any], key: str) -> date:
    raw = record.get(key)
    if not isinstance(raw, str):
        raise PayloadError(f"Field {key!r} must be an ISO date string")
    try:
        return date.fromisoformat(raw[:10])
    except ValueError as exc:
        raise PayloadError(f"Field {key!r} is not an ISO date: {raw!r}") from exc


def line_item_to_dict(item: LineItem) -> Dict[str, Any]:
    return {
        "id": item.id,
        "description": item.description,
        "quantity": item.quantity,
        "unitPrice": item.unit_price,
    }


def line_item_from_dict(record: Dict[str, Any]) -> LineItem:
    return LineItem(
        id=_required_id(record),
        description=_text(record, "description"),
        quantity=_number(record, "quantity", 1),
        unit_price=_number(record, "unitPrice"),
    )


def quote_to_dict(record: Persisted[Quote]) -> Dict[str, Any]:
    quote = record.entity
    payload = {
        "id": record.id,
        "quoteNumber": quote.quote_number,
        "date": quote.date.isoformat(),
        "fromName": quote.from_name,
        "fromAddress": quote.from_address,
        "toName": quote.to_name,
        "toAddress": quote.to_address,
        "lineItems": [line_item_to_dict(item) for item in quote.line_items],
        "taxRate": quote.tax_rate,
        "notes": quote.notes,
        "terms": quote.terms,
    }
    if quote.logo_image is not None:
        payload["logoImage"] = quote.logo_image
    return payload


def quote_from_dict(record: Dict[str, Any]) -> Persisted[Quote]:
    raw_items = record.get("lineItems") or []
    if not isinstance(raw_items, list):
        raise PayloadError("Field 'lineItems' must be a list")
    logo: Optional[str] = _text(record, "logoImage") or _text(record, "logoUrl") or None
    quote = Quote(
        quote_number=_text(record, "quoteNumber"),
        date=_date(record, "date"),
        from_name=_text(record, "fromName"),
        from_address=_text(record, "fromAddress"),
        to_name=_text(record, "toName"),
        to_address=_text(record, "toAddress"),
        line_items=[line_item_from_dict(_as_object(item)) for item in raw_items],
        tax_rate=_number(record, "taxRate"),
        notes=_text(record, "notes"),
        terms=_text(record, "terms"),
        logo_image=logo,
    )
    return Persisted(id=_required_id(record), entity=quote)


def address_to_dict(record: Persisted[ClientAddress]) -> Dict[str, Any]:
    address = record.entity
    return {
        "id": record.id,
        "name": address.name,
        "street": address.street,
        "houseNumber": address.house_number,
        "city": address.city,
        "postalCode": address.postal_code,
        "country": address.country,
    }


def address_from_dict(record: Dict[str, Any]) -> Persisted[ClientAddress]:
    address = ClientAddress(
        name=_text(record, "name"),
        street=_text(record, "street"),
        house_number=_text(record, "houseNumber"),
        city=_text(record, "city"),
        postal_code=_text(record, "postalCode"),
        country=_text(record, "country"),
    )
    return Persisted(id=_required_id(record), entity=address)


def template_to_dict(record: Persisted[QuoteItemTemplate]) -> Dict[str, Any]:
    return {
        "id": record.id,
        "description": record.entity.description,
        "unitPrice": record.entity.unit_price,
    }


def template_from_dict(record: Dict[str, Any]) -> Persisted[QuoteItemTemplate]:
    template = QuoteItemTemplate(
        description=_text(record, "description"),
        unit_price=_number(record, "unitPrice"),
    )
    return Persisted(id=_required_id(record), entity=template)


def _as_object(value: Any) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise PayloadError(f"Expected a JSON object, got {type(value).__name__}")
    return value


def decode_collection(payload: Any, decode: Callable[[Dict[str, Any]], Persisted[Any]]) -> List[Persisted[Any]]:
    """Decode a parsed JSON array with ``decode``; any bad record fails the whole payload."""
    if not isinstance(payload, list):
        raise PayloadError(f"Expected a JSON array, got {type(payload).__name__}")
    return [decode(_as_object(entry)) for entry in payload]
