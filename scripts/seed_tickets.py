from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Dict, List

import httpx
import yaml

_DEFAULT_SAMPLES = Path(__file__).resolve().parents[1] / "ticket_storage" / "sample_tickets.yaml"

# Fields the server derives itself; sending them would be ignored anyway.
_SERVER_FIELDS = ("status", "createdAt", "contactEmails")


def load_ticket_payloads(path: Path) -> List[Dict[str, Any]]:
    doc = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    payloads = []
    for raw in doc.get("tickets") or []:
        payloads.append({k: v for k, v in raw.items() if k not in _SERVER_FIELDS})
    return payloads


def main() -> None:
    ap = argparse.ArgumentParser(description="POST sample tickets to a running ticket desk API.")
    ap.add_argument("--base-url", default="http://localhost:3000")
    ap.add_argument("--file", type=Path, default=_DEFAULT_SAMPLES)
    ap.add_argument("--timeout", type=float, default=5.0)
    args = ap.parse_args()

    payloads = load_ticket_payloads(args.file)
    url = args.base_url.rstrip("/") + "/api/tickets"
    with httpx.Client(timeout=args.timeout) as client:
        for payload in payloads:
            r = client.post(url, json=payload)
            if r.status_code == 201:
                print(f"created {r.json()['id']}")
            else:
                print(f"rejected {payload.get('id', '?')}: {r.status_code} {r.text}")


if __name__ == "__main__":
    main()
