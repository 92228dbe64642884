from __future__ import annotations

import re
from typing import Any, List, Mapping

TICKET_TYPES = ("computer", "software", "network")

_REQ_DATE_RE = re.compile(r"(0[1-9]|1[0-2])/(0[1-9]|[12]\d|3[01])/\d{4}", re.ASCII)
_EMP_ID_RE = re.compile(r"[A-Z]\d{5}", re.ASCII)
_CAPITALIZED_RE = re.compile(r"[A-Z]")
_EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")

MSG_REQ_DATE = "Request date must be in mm/dd/yyyy format"
MSG_EMP_ID = "Employee ID must start with a capital letter followed by 5 numbers"
MSG_FIRST_NAME = "First name must start with a capital letter"
MSG_LAST_NAME = "Last name must start with a capital letter"
MSG_PROB_DESC = "Problem description is required"
MSG_TICKET_TYPE = "Invalid ticket type"


def _fullmatch(pattern: re.Pattern[str], value: Any) -> bool:
    return isinstance(value, str) and pattern.fullmatch(value) is not None


def _starts_capitalized(value: Any) -> bool:
    return isinstance(value, str) and _CAPITALIZED_RE.match(value) is not None


def validate_ticket(data: Mapping[str, Any]) -> List[str]:
    """
    Check raw ticket fields and return every failing rule's message.

    All rules run; an empty list means the ticket may be created.
    Missing or non-string values fail their rule instead of raising.
    """
    errors: List[str] = []

    if not _fullmatch(_REQ_DATE_RE, data.get("reqDate")):
        errors.append(MSG_REQ_DATE)

    if not _fullmatch(_EMP_ID_RE, data.get("empID")):
        errors.append(MSG_EMP_ID)

    if not _starts_capitalized(data.get("fName")):
        errors.append(MSG_FIRST_NAME)

    if not _starts_capitalized(data.get("lName")):
        errors.append(MSG_LAST_NAME)

    prob_desc = data.get("probDesc")
    if not isinstance(prob_desc, str) or not prob_desc.strip():
        errors.append(MSG_PROB_DESC)

    if data.get("ticketType") not in TICKET_TYPES:
        errors.append(MSG_TICKET_TYPE)

    return errors


def extract_emails(text: Any) -> List[str]:
    if not isinstance(text, str):
        return []
    return _EMAIL_RE.findall(text)
