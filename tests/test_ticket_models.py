from __future__ import annotations

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from ticketing import models
from ticketing.models import build_ticket, generate_ticket_id
from ticketing.validators import validate_ticket

BASE = {
    "reqDate": "05/08/2025",
    "empID": "B54321",
    "fName": "John",
    "lName": "Smith",
    "probDesc": "Drive unavailable, email john.smith@example.com or help@corp.io",
    "ticketType": "software",
}


def test_generate_ticket_id_uses_last_six_millis_digits() -> None:
    assert generate_ticket_id(1715000123456) == "TK123456"


def test_generated_id_when_none_supplied(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(models.time, "time_ns", lambda: 1715000987654_000_000)
    ticket = build_ticket(BASE)
    assert ticket.id == "TK987654"


def test_supplied_id_is_kept() -> None:
    assert build_ticket({**BASE, "id": "T9000"}).id == "T9000"


def test_build_ticket_sets_status_emails_and_timestamp() -> None:
    now = datetime(2025, 5, 8, 12, 0, tzinfo=UTC)
    ticket = build_ticket(BASE, now=now)
    assert ticket.status == "Open"
    assert ticket.created_at == now
    assert ticket.contact_emails == ["john.smith@example.com", "help@corp.io"]


def test_type_specific_fields_attached_only_for_matching_type() -> None:
    data = {
        **BASE,
        "softwareName": "Explorer",
        "softwareVersion": "11.0",
        "computerModel": "Dell",
        "serialNumber": "X1",
    }
    wire = build_ticket(data).to_wire()
    assert wire["softwareName"] == "Explorer"
    assert wire["softwareVersion"] == "11.0"
    assert "computerModel" not in wire
    assert "serialNumber" not in wire


def test_type_specific_pair_requires_both_fields() -> None:
    wire = build_ticket({**BASE, "softwareName": "Explorer"}).to_wire()
    assert "softwareName" not in wire


def test_to_wire_uses_camel_case_names() -> None:
    wire = build_ticket({**BASE, "id": "T1"}, now=datetime(2025, 1, 1, tzinfo=UTC)).to_wire()
    assert wire["id"] == "T1"
    assert wire["reqDate"] == "05/08/2025"
    assert wire["empID"] == "B54321"
    assert wire["contactEmails"] == ["john.smith@example.com", "help@corp.io"]
    assert wire["createdAt"].startswith("2025-01-01T00:00:00")
    assert "macAddress" not in wire


def test_built_ticket_revalidates_cleanly() -> None:
    for ticket_type in ("computer", "software", "network"):
        ticket = build_ticket({**BASE, "ticketType": ticket_type})
        assert validate_ticket(ticket.to_wire()) == []


def test_ticket_is_immutable() -> None:
    ticket = build_ticket(BASE)
    with pytest.raises(ValidationError):
        ticket.status = "Closed"  # type: ignore[misc]
