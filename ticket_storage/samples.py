from __future__ import annotations

from pathlib import Path
from typing import List

import yaml

from ticketing.models import Ticket

_SAMPLES_PATH = Path(__file__).resolve().parent / "sample_tickets.yaml"


def load_sample_tickets(path: str | Path = _SAMPLES_PATH) -> List[Ticket]:
    with open(path, "r", encoding="utf-8") as f:
        doc = yaml.safe_load(f) or {}
    return [Ticket(**raw) for raw in doc.get("tickets") or []]
