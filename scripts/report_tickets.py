from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, List

from ticket_storage.store import JsonFileTicketStore
from ticketing.models import Ticket
from ticketing.query import SORT_KEYS, sort_tickets


def md_table(rows: List[List[Any]], headers: List[str]) -> str:
    out = ["| " + " | ".join(headers) + " |", "|" + "|".join(["---"] * len(headers)) + "|"]
    for row in rows:
        out.append("| " + " | ".join(str(x) for x in row) + " |")
    return "\n".join(out) + "\n"


def ticket_rows(tickets: List[Ticket]) -> List[List[Any]]:
    return [
        [t.id, t.req_date, t.full_name, t.ticket_type, t.status, ", ".join(t.contact_emails)]
        for t in tickets
    ]


def main() -> None:
    ap = argparse.ArgumentParser(description="Render a tickets JSON file as a Markdown table.")
    ap.add_argument("--file", type=Path, default=Path("data/tickets.json"))
    ap.add_argument("--sort", choices=SORT_KEYS, default="date")
    args = ap.parse_args()

    tickets = sort_tickets(JsonFileTicketStore(args.file).list(), args.sort)
    headers = ["ID", "Date", "Name", "Type", "Status", "Contacts"]
    print(md_table(ticket_rows(tickets), headers), end="")


if __name__ == "__main__":
    main()
