from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, List, Optional, Protocol

from jsonschema import Draft202012Validator
from pydantic import ValidationError

from ticketing.models import Ticket

_SCHEMA_PATH = Path(__file__).resolve().parent / "ticket_schema.json"


class StorageError(RuntimeError):
    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code


class TicketStore(Protocol):
    def list(self) -> List[Ticket]:
        ...

    def append(self, ticket: Ticket) -> None:
        ...

    def find(self, ticket_id: str) -> Optional[Ticket]:
        ...


class InMemoryTicketStore:
    """
    Process-local ticket list. Contents are lost on restart.
    """

    def __init__(self, seed: Iterable[Ticket] | None = None):
        self._tickets: List[Ticket] = list(seed or [])

    def list(self) -> List[Ticket]:
        return list(self._tickets)

    def append(self, ticket: Ticket) -> None:
        self._tickets.append(ticket)

    def find(self, ticket_id: str) -> Optional[Ticket]:
        return next((t for t in self._tickets if t.id == ticket_id), None)

    def count(self) -> int:
        return len(self._tickets)


def load_ticket_schema() -> dict[str, Any]:
    return json.loads(_SCHEMA_PATH.read_text(encoding="utf-8"))


class JsonFileTicketStore:
    """
    Tickets kept as one JSON array on disk.
    The file is re-read on every access and rewritten whole on append.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._validator = Draft202012Validator(load_ticket_schema())

    def _ensure_file(self) -> None:
        if not self.path.exists():
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text("[]", encoding="utf-8")

    def _read_raw(self) -> List[dict[str, Any]]:
        try:
            self._ensure_file()
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise StorageError("READ_FAILED", "Error reading tickets data") from exc
        except json.JSONDecodeError as exc:
            raise StorageError("PARSE_FAILED", "Error parsing tickets data") from exc

        errors = sorted(self._validator.iter_errors(data), key=lambda e: [str(p) for p in e.path])
        if errors:
            joined = "; ".join(e.message for e in errors)
            raise StorageError("SCHEMA_INVALID", f"tickets file failed schema validation: {joined}")
        return data

    def list(self) -> List[Ticket]:
        try:
            return [Ticket(**raw) for raw in self._read_raw()]
        except ValidationError as exc:
            raise StorageError("SCHEMA_INVALID", f"tickets file holds an invalid ticket: {exc}") from exc

    def append(self, ticket: Ticket) -> None:
        raw = self._read_raw()
        raw.append(ticket.to_wire())
        try:
            self.path.write_text(json.dumps(raw, indent=2, ensure_ascii=False), encoding="utf-8")
        except OSError as exc:
            raise StorageError("WRITE_FAILED", "Error saving ticket") from exc

    def find(self, ticket_id: str) -> Optional[Ticket]:
        return next((t for t in self.list() if t.id == ticket_id), None)

    def count(self) -> int:
        return len(self._read_raw())
