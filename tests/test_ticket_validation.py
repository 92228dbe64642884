from __future__ import annotations

import pytest

from ticketing.validators import (
    MSG_EMP_ID,
    MSG_FIRST_NAME,
    MSG_LAST_NAME,
    MSG_PROB_DESC,
    MSG_REQ_DATE,
    MSG_TICKET_TYPE,
    extract_emails,
    validate_ticket,
)

VALID = {
    "reqDate": "05/09/2025",
    "empID": "A12345",
    "fName": "Jane",
    "lName": "Doe",
    "probDesc": "Monitor flickers",
    "ticketType": "computer",
}


def test_valid_ticket_has_no_errors() -> None:
    assert validate_ticket(VALID) == []


def test_all_failures_reported_in_fixed_order() -> None:
    errors = validate_ticket(
        {
            "reqDate": "13/01/2025",
            "empID": "A1234",
            "fName": "bob",
            "lName": "Smith",
            "probDesc": "",
            "ticketType": "printer",
        }
    )
    assert errors == [MSG_REQ_DATE, MSG_EMP_ID, MSG_FIRST_NAME, MSG_PROB_DESC, MSG_TICKET_TYPE]


def test_empty_mapping_fails_every_rule() -> None:
    assert validate_ticket({}) == [
        MSG_REQ_DATE,
        MSG_EMP_ID,
        MSG_FIRST_NAME,
        MSG_LAST_NAME,
        MSG_PROB_DESC,
        MSG_TICKET_TYPE,
    ]


@pytest.mark.parametrize(
    "field,message",
    [
        ("reqDate", MSG_REQ_DATE),
        ("empID", MSG_EMP_ID),
        ("fName", MSG_FIRST_NAME),
        ("lName", MSG_LAST_NAME),
        ("probDesc", MSG_PROB_DESC),
    ],
)
def test_missing_field_reports_its_message(field: str, message: str) -> None:
    data = {k: v for k, v in VALID.items() if k != field}
    assert validate_ticket(data) == [message]


def test_non_string_values_fail_without_raising() -> None:
    errors = validate_ticket(
        {"reqDate": 5092025, "empID": None, "fName": ["Jane"], "lName": 3, "probDesc": {}, "ticketType": ["computer"]}
    )
    assert len(errors) == 6


def test_date_is_not_calendar_checked() -> None:
    assert validate_ticket({**VALID, "reqDate": "02/30/2025"}) == []


@pytest.mark.parametrize("value", ["5/09/2025", "05/32/2025", "00/10/2025", "05/09/25", "05/09/2025\n", "05-09-2025"])
def test_bad_request_dates(value: str) -> None:
    assert validate_ticket({**VALID, "reqDate": value}) == [MSG_REQ_DATE]


@pytest.mark.parametrize("value", ["a12345", "A123456", "AB1234", "A12345\n", "A١٢٣٤٥"])
def test_bad_employee_ids(value: str) -> None:
    assert validate_ticket({**VALID, "empID": value}) == [MSG_EMP_ID]


def test_whitespace_description_is_empty() -> None:
    assert validate_ticket({**VALID, "probDesc": "   \t "}) == [MSG_PROB_DESC]


def test_names_only_need_capital_first_letter() -> None:
    assert validate_ticket({**VALID, "fName": "J", "lName": "D'arcy-9"}) == []
    assert validate_ticket({**VALID, "lName": "Élise"}) == [MSG_LAST_NAME]


def test_extract_emails_in_order() -> None:
    assert extract_emails("contact me at a.b+c@test.co.uk or x@y.io") == ["a.b+c@test.co.uk", "x@y.io"]


def test_extract_emails_none_found() -> None:
    assert extract_emails("no emails here") == []


def test_extract_emails_keeps_duplicates_and_case() -> None:
    text = "Mail Jo@Example.COM, then jo@example.com, then Jo@Example.COM"
    assert extract_emails(text) == ["Jo@Example.COM", "jo@example.com", "Jo@Example.COM"]


def test_extract_emails_non_string() -> None:
    assert extract_emails(None) == []
