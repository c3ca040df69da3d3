"""In-memory gateway fakes shared by unit and integration tests."""

import asyncio
import uuid

from moldops.application.interfaces import AuthGateway, DataGateway
from moldops.domain.entities import AuthSession, AuthUser, Filter, Order, Record
from moldops.domain.exceptions import AuthenticationError, GatewayError


class FakeDataGateway(DataGateway):
    """In-memory tables; every call is recorded as ``(operation, table)``.

    ``fail`` maps ``(operation, table)`` to the status code the call should
    fail with. Setting ``gate`` to an unset :class:`asyncio.Event` holds
    every select until it is set.
    """

    def __init__(self, tables: dict[str, list[Record]] | None = None):
        self.tables: dict[str, list[Record]] = {
            name: [dict(row) for row in rows] for name, rows in (tables or {}).items()
        }
        self.calls: list[tuple[str, str]] = []
        self.fail: dict[tuple[str, str], int] = {}
        self.gate: asyncio.Event | None = None
        self.token: str | None = None

    def authorize(self, access_token: str | None) -> None:
        self.token = access_token

    def _check(self, operation: str, table: str) -> None:
        self.calls.append((operation, table))
        code = self.fail.get((operation, table))
        if code is not None:
            raise GatewayError(operation, table, code, f"{operation} failed")

    def count_calls(self, operation: str, table: str | None = None) -> int:
        return sum(1 for op, t in self.calls if op == operation and (table is None or t == table))

    async def select(
        self,
        table: str,
        columns: str = "*",
        filters: list[Filter] | None = None,
        *,
        order: Order | None = None,
        limit: int | None = None,
    ) -> list[Record]:
        self._check("select", table)
        if self.gate is not None:
            await self.gate.wait()
        rows = [dict(r) for r in self.tables.get(table, [])]
        rows = [r for r in rows if all(f.matches(r.get(f.column)) for f in filters or [])]
        if order is not None:
            rows.sort(key=lambda r: r.get(order.column) or "", reverse=not order.ascending)
        return rows[:limit] if limit is not None else rows

    async def insert(self, table: str, row: Record) -> Record:
        self._check("insert", table)
        stored = {"id": str(uuid.uuid4()), **row}
        self.tables.setdefault(table, []).append(stored)
        return dict(stored)

    async def update(self, table: str, record_id: str, patch: Record) -> Record:
        self._check("update", table)
        for row in self.tables.get(table, []):
            if str(row["id"]) == str(record_id):
                row.update(patch)
                return dict(row)
        raise GatewayError("update", table, 404, "not found")

    async def delete(self, table: str, record_id: str) -> None:
        self._check("delete", table)
        self.tables[table] = [r for r in self.tables.get(table, []) if str(r["id"]) != str(record_id)]

    async def count(self, table: str, filters: list[Filter] | None = None) -> int:
        self._check("count", table)
        return len([r for r in self.tables.get(table, []) if all(f.matches(r.get(f.column)) for f in filters or [])])


class FakeAuthGateway(AuthGateway):
    """Accepts the passwords in ``users``; tokens are ``token-<user id>``."""

    def __init__(self, users: dict[str, tuple[str, AuthUser]] | None = None):
        self.users = users or {}
        self.tokens: dict[str, AuthUser] = {}
        self.signed_out: list[str] = []
        self.fail_sign_out = False

    def add_user(self, email: str, password: str, user_id: str) -> AuthUser:
        user = AuthUser(id=user_id, email=email)
        self.users[email] = (password, user)
        return user

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        entry = self.users.get(email)
        if entry is None or entry[0] != password:
            raise AuthenticationError("Invalid login credentials", status_code=400)
        user = entry[1]
        token = f"token-{user.id}"
        self.tokens[token] = user
        return AuthSession(access_token=token, user=user, expires_in=3600)

    async def get_current_user(self, access_token: str) -> AuthUser | None:
        return self.tokens.get(access_token)

    async def sign_out(self, access_token: str) -> None:
        self.signed_out.append(access_token)
        if self.fail_sign_out:
            raise GatewayError("auth", "/auth/v1/logout", 500, "logout failed")
        self.tokens.pop(access_token, None)


def role_row(user_id: str, name: str, is_active: bool = True) -> Record:
    """A ``user_roles`` row as the gateway returns it with the embedded role."""
    return {
        "id": str(uuid.uuid4()),
        "user_id": user_id,
        "role_id": f"role-{name}",
        "roles": {"name": name, "is_active": is_active},
    }
