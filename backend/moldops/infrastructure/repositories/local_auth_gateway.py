"""Local auth gateway — bcrypt-hashed users stored as ``auth_users`` rows.

Issued tokens are opaque random strings held in memory, so every session
ends when the process restarts.
"""

import secrets
import time

import bcrypt

from moldops.application.interfaces import AuthGateway, DataGateway
from moldops.domain.entities import AuthSession, AuthUser, Filter, Record
from moldops.domain.exceptions import AuthenticationError
from moldops.infrastructure.logging.gateway_logger import GatewayCallLogger, GatewayStage

AUTH_USERS_TABLE = "auth_users"
INVALID_CREDENTIALS = "Invalid login credentials"


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password with bcrypt (12 rounds)."""
    salt = bcrypt.gensalt(rounds=12)
    return bcrypt.hashpw(plain_password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    if not password_hash:
        return False
    return bcrypt.checkpw(plain_password.encode("utf-8"), password_hash.encode("utf-8"))


def _to_user(row: Record) -> AuthUser:
    return AuthUser(id=str(row["id"]), email=row.get("email"), metadata=row.get("user_metadata") or {})


class LocalAuthGateway(AuthGateway):
    def __init__(self, data_gateway: DataGateway, token_ttl: int = 3600):
        self._data = data_gateway
        self._token_ttl = token_ttl
        self._tokens: dict[str, tuple[str, float]] = {}
        self._log = GatewayCallLogger("LocalAuthGateway")

    async def _find_by_email(self, email: str) -> Record | None:
        rows = await self._data.select(AUTH_USERS_TABLE, "*", [Filter.eq("email", email.strip().lower())])
        return rows[0] if rows else None

    async def create_user(
        self,
        email: str,
        password: str,
        user_id: str | None = None,
        metadata: dict | None = None,
    ) -> AuthUser:
        """Register a user (seeding and tests); the email must be unused."""
        if await self._find_by_email(email) is not None:
            raise AuthenticationError("User already registered", status_code=422)
        row: Record = {
            "email": email.strip().lower(),
            "password_hash": hash_password(password),
            "user_metadata": metadata or {},
        }
        if user_id:
            row["id"] = user_id
        return _to_user(await self._data.insert(AUTH_USERS_TABLE, row))

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        with self._log.timed_step(GatewayStage.AUTH, "sign in", email=email):
            row = await self._find_by_email(email)
            if row is None or not verify_password(password, row.get("password_hash", "")):
                raise AuthenticationError(INVALID_CREDENTIALS, status_code=400)

        token = secrets.token_urlsafe(32)
        self._tokens[token] = (str(row["id"]), time.monotonic() + self._token_ttl)
        return AuthSession(access_token=token, user=_to_user(row), expires_in=self._token_ttl)

    async def get_current_user(self, access_token: str) -> AuthUser | None:
        entry = self._tokens.get(access_token)
        if entry is None:
            return None
        user_id, expires_at = entry
        if time.monotonic() >= expires_at:
            self._tokens.pop(access_token, None)
            return None
        rows = await self._data.select(AUTH_USERS_TABLE, "*", [Filter.eq("id", user_id)])
        return _to_user(rows[0]) if rows else None

    async def sign_out(self, access_token: str) -> None:
        self._tokens.pop(access_token, None)
