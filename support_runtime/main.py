from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

from fastapi import Body, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel

from support_runtime.audit import AuditLogger
from support_runtime.config import Settings, settings as default_settings
from support_runtime.login import login_user
from support_runtime.metrics import EVENTS_TOTAL, REQUESTS_TOTAL, MetricsCollector, metrics as default_metrics
from ticket_storage.factory import build_store
from ticket_storage.store import StorageError, TicketStore
from ticketing.models import build_ticket
from ticketing.query import search_tickets, sort_tickets
from ticketing.validators import validate_ticket

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


class LoginRequest(BaseModel):
    # Non-string credentials are rejected by login_user, not by the schema.
    username: Any = None
    password: Any = None


def create_app(
    settings: Settings | None = None,
    store: TicketStore | None = None,
    audit: AuditLogger | None = None,
    collector: MetricsCollector | None = None,
) -> FastAPI:
    cfg = settings or default_settings
    configure_logging(cfg.log_level)
    tickets: TicketStore = store or build_store(cfg.ticket_storage, cfg.tickets_file, cfg.seed_sample_tickets)
    audit_log = audit or AuditLogger(cfg.audit_log_path)
    stats = collector or default_metrics

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        mode = "production" if cfg.is_production else "development"
        logger.info("Running in %s mode with %s ticket storage", mode, cfg.ticket_storage)
        try:
            logger.info("Loaded %d tickets", len(tickets.list()))
        except StorageError as e:
            logger.error("Error loading tickets (%s): %s", e.code, e)
        yield
        logger.info("Shutting down ticket desk API")

    app = FastAPI(title="IT Support Ticket Desk", version="1.0.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        t0 = time.perf_counter()
        logger.info("%s %s", request.method, request.url.path)
        response = await call_next(request)
        route = getattr(request.scope.get("route"), "path", "unmatched")
        stats.inc(REQUESTS_TOTAL, route)
        stats.observe_latency(route, (time.perf_counter() - t0) * 1000.0)
        return response

    @app.exception_handler(StorageError)
    async def storage_error_handler(_request: Request, exc: StorageError) -> JSONResponse:
        logger.error("Storage failure (%s): %s", exc.code, exc)
        return JSONResponse(status_code=500, content={"error": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def request_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.warning("Unreadable request to %s: %s", request.url.path, exc.errors())
        return JSONResponse(status_code=500, content={"error": "Server error"})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(_request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Server error: %s", exc)
        return JSONResponse(status_code=500, content={"error": "Server error"})

    @app.get("/health")
    def health() -> Dict[str, str]:
        return {"status": "ok"}

    @app.get("/api/ping")
    def ping() -> Dict[str, Any]:
        return {"success": True, "message": "API is working!"}

    @app.post("/api/login")
    def login(req: LoginRequest) -> JSONResponse:
        result = login_user(req.username, req.password)
        audit_log.emit("login_attempt", username=result.username, success=result.success)
        if not result.success:
            return JSONResponse(status_code=400, content={"success": False, "error": result.error})
        return JSONResponse(content={"success": True, "username": result.username})

    @app.get("/api/tickets")
    def list_tickets(sort: Optional[str] = None) -> List[Dict[str, Any]]:
        found = tickets.list()
        if sort:
            found = sort_tickets(found, sort)
        return [t.to_wire() for t in found]

    @app.get("/api/tickets/search")
    def search(query: str = "") -> Any:
        if not query:
            return JSONResponse(status_code=400, content={"error": "Search query is required"})
        results = search_tickets(tickets.list(), query)
        audit_log.emit("ticket_search", query=query, matches=len(results))
        stats.inc(EVENTS_TOTAL, "ticket_search")
        return [t.to_wire() for t in results]

    @app.get("/api/tickets/{ticket_id}")
    def get_ticket(ticket_id: str) -> Any:
        ticket = tickets.find(ticket_id)
        if ticket is None:
            return JSONResponse(status_code=404, content={"error": "Ticket not found"})
        return ticket.to_wire()

    @app.post("/api/tickets", status_code=201)
    def create_ticket(payload: Any = Body(default=None)) -> Any:
        data: Dict[str, Any] = payload if isinstance(payload, dict) else {}
        errors = validate_ticket(data)
        if errors:
            logger.info("Validation errors: %s", errors)
            audit_log.emit("ticket_rejected", errors=errors)
            stats.inc(EVENTS_TOTAL, "ticket_rejected")
            return JSONResponse(status_code=400, content={"errors": errors})

        ticket = build_ticket(data)
        tickets.append(ticket)
        logger.info("Ticket created: %s", ticket.id)
        audit_log.emit("ticket_created", ticket_id=ticket.id, ticket_type=ticket.ticket_type)
        stats.inc(EVENTS_TOTAL, "ticket_created")
        return ticket.to_wire()

    @app.get(cfg.metrics_path, response_class=PlainTextResponse)
    def metrics_export() -> str:
        if not cfg.metrics_enabled:
            return ""
        return stats.render_prometheus()

    @app.api_route("/api/{rest:path}", methods=["GET", "POST", "PUT", "PATCH", "DELETE"])
    def api_not_found(rest: str) -> JSONResponse:
        return JSONResponse(status_code=404, content={"error": "API endpoint not found"})

    return app


app = create_app()
