"""Supabase auth gateway — password sign-in and session lookup over GoTrue (``/auth/v1``)."""

from typing import Any

import httpx

from moldops.application.interfaces import AuthGateway
from moldops.domain.entities import AuthSession, AuthUser
from moldops.domain.exceptions import AuthenticationError, GatewayError
from moldops.infrastructure.logging.gateway_logger import GatewayCallLogger, GatewayStage

from .base import SupabaseHTTP, error_message


def _to_user(data: dict[str, Any]) -> AuthUser:
    return AuthUser(
        id=str(data["id"]),
        email=data.get("email"),
        metadata=data.get("user_metadata") or {},
    )


class SupabaseAuthGateway(AuthGateway):
    def __init__(
        self,
        url: str,
        anon_key: str,
        *,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._http = SupabaseHTTP(url, anon_key, timeout=timeout, http_client=http_client)
        self._log = GatewayCallLogger("SupabaseAuthGateway")

    async def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            return await self._http.send(method, path, **kwargs)
        except httpx.HTTPError as exc:
            raise GatewayError("auth", path, 503, f"Gateway unreachable: {exc}") from exc

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        with self._log.timed_step(GatewayStage.AUTH, "sign in", email=email):
            response = await self._send(
                "POST",
                "/auth/v1/token",
                params={"grant_type": "password"},
                json={"email": email, "password": password},
                headers=self._http.headers(),
            )
        if response.status_code != 200:
            raise AuthenticationError(error_message(response), status_code=response.status_code)

        data = response.json()
        return AuthSession(
            access_token=data["access_token"],
            refresh_token=data.get("refresh_token"),
            expires_in=data.get("expires_in"),
            user=_to_user(data["user"]),
        )

    async def get_current_user(self, access_token: str) -> AuthUser | None:
        response = await self._send("GET", "/auth/v1/user", headers=self._http.headers(access_token))
        if response.status_code in (401, 403):
            return None
        if response.status_code != 200:
            raise GatewayError("auth", "user", response.status_code, error_message(response))
        return _to_user(response.json())

    async def sign_out(self, access_token: str) -> None:
        with self._log.timed_step(GatewayStage.AUTH, "sign out"):
            response = await self._send("POST", "/auth/v1/logout", headers=self._http.headers(access_token))
        # An already-expired token is as good as signed out.
        if response.status_code >= 400 and response.status_code not in (401, 403):
            raise GatewayError("auth", "logout", response.status_code, error_message(response))
