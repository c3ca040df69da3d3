"""Domain entities for authenticated users and their sessions."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class AuthUser:
    """The user the gateway's auth subsystem reports as signed in."""

    id: str
    email: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class AuthSession:
    """Tokens issued by a successful password sign-in."""

    access_token: str
    user: AuthUser
    refresh_token: str | None = None
    expires_in: int | None = None


@dataclass(frozen=True)
class AuthStateChange:
    """Event emitted whenever the signed-in user changes."""

    event: str  # "SIGNED_IN" | "SIGNED_OUT" | "SESSION_RESTORED"
    user: AuthUser | None
