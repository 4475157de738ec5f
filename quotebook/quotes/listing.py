"""Quote overview: totals per quote, newest first, optional filters."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional

from quotebook.quotes.calculation import calculate_totals
from quotebook.store.models import Persisted, Quote


@dataclass(frozen=True)
class QuoteSummary:
    id: str
    quote_number: str
    client: str
    date: date
    total: float


@dataclass(frozen=True)
class QuoteFilters:
    quote_number: str = ""
    client_name: str = ""
    date: Optional[date] = None

    def matches(self, summary: QuoteSummary) -> bool:
        if self.quote_number and self.quote_number.lower() not in summary.quote_number.lower():
            return False
        if self.client_name and self.client_name.lower() not in summary.client.lower():
            return False
        if self.date is not None and summary.date != self.date:
            return False
        return True


def summarize(record: Persisted[Quote]) -> QuoteSummary:
    quote = record.entity
    return QuoteSummary(
        id=record.id,
        quote_number=quote.quote_number,
        client=quote.to_name,
        date=quote.date,
        total=calculate_totals(quote).total,
    )


def overview(records: Iterable[Persisted[Quote]], filters: Optional[QuoteFilters] = None) -> List[QuoteSummary]:
    """Summaries sorted newest date first; quotes sharing a date keep store order."""
    summaries = sorted((summarize(record) for record in records), key=lambda s: s.date, reverse=True)
    if filters is None:
        return summaries
    return [summary for summary in summaries if filters.matches(summary)]
