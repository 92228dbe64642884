from __future__ import annotations

import time
from datetime import UTC, datetime
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from ticketing.validators import extract_emails

# ticket type -> (wire name, wire name) of the optional detail pair
TYPE_DETAIL_FIELDS: Dict[str, tuple[str, str]] = {
    "computer": ("computerModel", "serialNumber"),
    "software": ("softwareName", "softwareVersion"),
    "network": ("networkLocation", "macAddress"),
}


class Ticket(BaseModel):
    """
    Immutable support ticket record.
    Attributes are snake_case; JSON uses the camelCase aliases.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    req_date: str = Field(alias="reqDate")
    emp_id: str = Field(alias="empID")
    f_name: str = Field(alias="fName")
    l_name: str = Field(alias="lName")
    prob_desc: str = Field(alias="probDesc")
    ticket_type: str = Field(alias="ticketType")
    status: str = "Open"
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC), alias="createdAt")
    contact_emails: List[str] = Field(default_factory=list, alias="contactEmails")

    computer_model: Optional[str] = Field(default=None, alias="computerModel")
    serial_number: Optional[str] = Field(default=None, alias="serialNumber")
    software_name: Optional[str] = Field(default=None, alias="softwareName")
    software_version: Optional[str] = Field(default=None, alias="softwareVersion")
    network_location: Optional[str] = Field(default=None, alias="networkLocation")
    mac_address: Optional[str] = Field(default=None, alias="macAddress")

    @property
    def full_name(self) -> str:
        return f"{self.f_name} {self.l_name}"

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def generate_ticket_id(now_ms: int | None = None) -> str:
    # Not collision-checked: two tickets created in the same millisecond share an id.
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    return "TK" + str(now_ms)[-6:]


def _detail_fields(data: Mapping[str, Any]) -> Dict[str, Any]:
    ticket_type = data.get("ticketType")
    pair = TYPE_DETAIL_FIELDS.get(ticket_type) if isinstance(ticket_type, str) else None
    if pair is None:
        return {}
    first, second = pair
    if data.get(first) and data.get(second):
        return {first: str(data[first]), second: str(data[second])}
    return {}


def build_ticket(data: Mapping[str, Any], now: datetime | None = None) -> Ticket:
    """Create a ticket from already-validated raw fields."""
    supplied_id = data.get("id")
    ticket_id = supplied_id if isinstance(supplied_id, str) and supplied_id else generate_ticket_id()
    payload: Dict[str, Any] = {
        "id": ticket_id,
        "reqDate": data["reqDate"],
        "empID": data["empID"],
        "fName": data["fName"],
        "lName": data["lName"],
        "probDesc": data["probDesc"],
        "ticketType": data["ticketType"],
        "status": "Open",
        "contactEmails": extract_emails(data["probDesc"]),
        **_detail_fields(data),
    }
    if now is not None:
        payload["createdAt"] = now
    return Ticket(**payload)
