from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator
from dotenv import load_dotenv
import os

from ticket_storage.factory import BACKENDS

load_dotenv()


def _default_backend() -> str:
    explicit = os.getenv("TICKET_STORAGE")
    if explicit:
        return explicit
    return "memory" if os.getenv("APP_ENV", "development").lower() == "production" else "file"


class Settings(BaseModel):
    model_config = ConfigDict(validate_default=True)

    app_env: str = Field(default_factory=lambda: os.getenv("APP_ENV", "development"))
    ticket_storage: str = Field(default_factory=_default_backend)
    tickets_file: str = Field(default_factory=lambda: os.getenv("TICKETS_FILE", "data/tickets.json"))
    seed_sample_tickets: bool = Field(
        default_factory=lambda: os.getenv("SEED_SAMPLE_TICKETS", "true").lower() == "true"
    )
    audit_log_path: str = Field(default_factory=lambda: os.getenv("AUDIT_LOG_PATH", "results/audit.jsonl"))
    log_level: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    metrics_enabled: bool = Field(
        default_factory=lambda: os.getenv("METRICS_ENABLED", "true").lower() == "true"
    )
    metrics_path: str = Field(default_factory=lambda: os.getenv("METRICS_PATH", "/metrics"))
    cors_allow_origins: str = Field(default_factory=lambda: os.getenv("CORS_ALLOW_ORIGINS", "*"))

    @field_validator("ticket_storage")
    @classmethod
    def known_backend(cls, value: str) -> str:
        name = value.lower()
        if name not in BACKENDS:
            raise ValueError(f"TICKET_STORAGE must be one of {', '.join(BACKENDS)}, got {value!r}")
        return name

    @property
    def is_production(self) -> bool:
        return self.app_env.lower() == "production"

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_allow_origins.split(",") if o.strip()]


settings = Settings()
