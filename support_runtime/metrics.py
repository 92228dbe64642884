from __future__ import annotations

import threading
from collections import Counter
from dataclasses import dataclass
from typing import Dict, Tuple

REQUESTS_TOTAL = "ticket_api_requests_total"
EVENTS_TOTAL = "ticket_api_events_total"
LATENCY = "ticket_api_request_latency_ms"


@dataclass
class RouteLatency:
    count: int = 0
    total_ms: float = 0.0
    max_ms: float = 0.0

    def add(self, latency_ms: float) -> None:
        self.count += 1
        self.total_ms += latency_ms
        self.max_ms = max(self.max_ms, latency_ms)

    @property
    def mean_ms(self) -> float:
        return self.total_ms / self.count if self.count else 0.0


class MetricsCollector:
    """
    Request and ticket-event counters for the ticket API, plus a per-route
    latency summary. Rendered in the Prometheus text format.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counters: Counter[Tuple[str, str]] = Counter()
        self._latency: Dict[str, RouteLatency] = {}

    def inc(self, name: str, label: str, n: int = 1) -> None:
        with self._lock:
            self._counters[(name, label)] += n

    def get(self, name: str, label: str) -> int:
        with self._lock:
            return self._counters[(name, label)]

    def observe_latency(self, route: str, latency_ms: float) -> None:
        with self._lock:
            self._latency.setdefault(route, RouteLatency()).add(latency_ms)

    def latency(self, route: str) -> RouteLatency:
        with self._lock:
            summary = self._latency.get(route, RouteLatency())
            return RouteLatency(summary.count, summary.total_ms, summary.max_ms)

    def _counter_lines(self, name: str, label_name: str) -> list[str]:
        lines = [f"# TYPE {name} counter"]
        for (metric, label), value in sorted(self._counters.items()):
            if metric == name:
                lines.append(f'{name}{{{label_name}="{label}"}} {value}')
        return lines

    def render_prometheus(self) -> str:
        with self._lock:
            lines = self._counter_lines(REQUESTS_TOTAL, "route")
            lines += self._counter_lines(EVENTS_TOTAL, "event")
            lines.append(f"# TYPE {LATENCY} summary")
            for route, summary in sorted(self._latency.items()):
                lines.append(f'{LATENCY}_count{{route="{route}"}} {summary.count}')
                lines.append(f'{LATENCY}_sum{{route="{route}"}} {summary.total_ms:.3f}')
                lines.append(f'{LATENCY}_max{{route="{route}"}} {summary.max_ms:.3f}')
        return "\n".join(lines) + "\n"


metrics = MetricsCollector()
