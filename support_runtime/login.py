from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class LoginResult:
    success: bool
    username: str
    error: str | None = None


def login_user(username: Any, password: Any) -> LoginResult:
    """
    Simulated login. Succeeds whenever both fields are non-empty.
    No credentials are checked; this is not authentication.
    """
    user = username.strip() if isinstance(username, str) else ""
    secret = password.strip() if isinstance(password, str) else ""
    if not user or not secret:
        return LoginResult(success=False, username=user, error="Username and password are required.")
    return LoginResult(success=True, username=user)
