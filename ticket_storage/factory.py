from __future__ import annotations

from ticket_storage.samples import load_sample_tickets
from ticket_storage.store import InMemoryTicketStore, JsonFileTicketStore, TicketStore

BACKENDS = ("memory", "file")


def build_store(backend: str, tickets_file: str, seed_samples: bool = True) -> TicketStore:
    name = backend.lower()
    if name == "memory":
        return InMemoryTicketStore(load_sample_tickets() if seed_samples else None)
    if name == "file":
        return JsonFileTicketStore(tickets_file)
    raise ValueError(f"Unknown ticket storage backend: {backend}")
