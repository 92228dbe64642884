from __future__ import annotations

from datetime import date, timedelta
from functools import lru_cache
from typing import List, Optional, Sequence, Tuple

from pyuca import Collator

from ticketing.models import Ticket

SORT_KEYS = ("id", "name", "date")


def search_tickets(tickets: Sequence[Ticket], query: str) -> List[Ticket]:
    """
    Filter tickets by id (case-sensitive) or by first, last or full name
    (case-insensitive). Matches keep their input order.
    """
    q = query.lower()
    return [
        t
        for t in tickets
        if query in t.id
        or q in t.f_name.lower()
        or q in t.l_name.lower()
        or q in t.full_name.lower()
    ]


@lru_cache(maxsize=1)
def _collator() -> Collator:
    # Loading the DUCET table is slow; build it once on first sort.
    return Collator()


def collation_key(value: str) -> Tuple[int, ...]:
    """Unicode Collation Algorithm sort key (root locale ordering)."""
    return _collator().sort_key(value)


def parse_request_date(value: str) -> Optional[date]:
    """
    Build a calendar date from mm/dd/yyyy.
    Day and month overflow roll forward the way Date(y, m - 1, d) does,
    and years 0-99 read as 1900-1999.
    Returns None when the string cannot be read as three integers.
    """
    parts = value.split("/")
    if len(parts) != 3:
        return None
    try:
        month, day, year = (int(p) for p in parts)
        if 0 <= year <= 99:
            year += 1900
        year += (month - 1) // 12
        month = (month - 1) % 12 + 1
        return date(year, month, 1) + timedelta(days=day - 1)
    except (ValueError, OverflowError):
        return None


def _date_sort_key(ticket: Ticket) -> Tuple[bool, date]:
    parsed = parse_request_date(ticket.req_date)
    return parsed is not None, parsed or date.min


def sort_tickets(tickets: Sequence[Ticket], key: str) -> List[Ticket]:
    """
    Return a new list ordered by ``key``: ``id`` and ``name`` ascending,
    ``date`` newest first. Unrecognised keys leave the order unchanged.
    """
    if key == "id":
        return sorted(tickets, key=lambda t: collation_key(t.id))
    if key == "name":
        return sorted(tickets, key=lambda t: (collation_key(t.l_name), collation_key(t.f_name)))
    if key == "date":
        # reverse=True keeps equal dates in input order
        return sorted(tickets, key=_date_sort_key, reverse=True)
    return list(tickets)
