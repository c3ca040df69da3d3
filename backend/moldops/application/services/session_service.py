"""Session service — the signed-in user, their roles and their display theme.

One :class:`AppContext` is built per request from the bearer token. It is
passed explicitly to every controller instead of being read from globals.
"""

import inspect
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from moldops.application.interfaces import AuthGateway, DataGateway
from moldops.domain.entities import (
    DEFAULT_THEME,
    AuthSession,
    AuthStateChange,
    AuthUser,
    Filter,
    ThemePalette,
    get_palette,
    theme_keys,
)
from moldops.domain.exceptions import AuthenticationError, GatewayError

logger = logging.getLogger(__name__)

AuthListener = Callable[[AuthStateChange], Awaitable[None] | None]

USER_ROLES_TABLE = "user_roles"
USER_ROLES_PROJECTION = "role_id, roles(name, is_active)"


@dataclass
class AppContext:
    """Explicit application context: session, role set and theme."""

    user: AuthUser | None = None
    access_token: str | None = None
    roles: frozenset[str] = field(default_factory=frozenset)
    roles_loading: bool = False
    theme: str = DEFAULT_THEME
    light_mode: bool = False

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def palette(self) -> ThemePalette:
        return get_palette(self.theme, self.light_mode)

    def set_theme(self, key: str) -> None:
        if key not in theme_keys():
            raise ValueError(f"Unknown theme '{key}'")
        self.theme = key

    def toggle_light_mode(self) -> bool:
        self.light_mode = not self.light_mode
        return self.light_mode

    def clear(self) -> None:
        self.user = None
        self.access_token = None
        self.roles = frozenset()
        self.roles_loading = False


class SessionService:
    """Boots, signs in and signs out the user held by an :class:`AppContext`."""

    def __init__(
        self,
        auth_gateway: AuthGateway,
        data_gateway: DataGateway,
        context: AppContext | None = None,
    ):
        self._auth = auth_gateway
        self._data = data_gateway
        self.context = context or AppContext()
        self._listeners: list[AuthListener] = []

    # ── Subscriptions ────────────────────────────────────────────────

    def on_auth_state_change(self, callback: AuthListener) -> Callable[[], None]:
        """Register ``callback`` for auth-state changes; returns the unsubscriber."""
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    async def _emit(self, event: str) -> None:
        # Roles are revalidated on every change, before anyone hears about it.
        if self.context.user is not None:
            await self.refresh_roles()
        else:
            self.context.roles = frozenset()

        change = AuthStateChange(event=event, user=self.context.user)
        for listener in list(self._listeners):
            result = listener(change)
            if inspect.isawaitable(result):
                await result

    # ── Lifecycle ────────────────────────────────────────────────────

    async def boot(self, access_token: str | None) -> AppContext:
        """Restore the session owning ``access_token``.

        Any auth failure is logged and treated as "not logged in".
        """
        if not access_token:
            self.context.clear()
            return self.context

        self._data.authorize(access_token)
        try:
            user = await self._auth.get_current_user(access_token)
        except (AuthenticationError, GatewayError) as exc:
            logger.warning("Session restore failed: %s", exc)
            user = None

        if user is None:
            self.context.clear()
            self._data.authorize(None)
            return self.context

        self.context.user = user
        self.context.access_token = access_token
        await self._emit("SESSION_RESTORED")
        return self.context

    async def sign_in(self, email: str, password: str) -> AuthSession:
        """Password sign-in.

        Raises:
            AuthenticationError: carrying the gateway's raw message.
        """
        session = await self._auth.sign_in_with_password(email, password)
        self.context.user = session.user
        self.context.access_token = session.access_token
        self._data.authorize(session.access_token)
        logger.info("User %s signed in", session.user.email or session.user.id)
        await self._emit("SIGNED_IN")
        return session

    async def sign_out(self) -> None:
        """End the session. Local state is torn down even if the gateway call fails."""
        token = self.context.access_token
        try:
            if token:
                await self._auth.sign_out(token)
        except (AuthenticationError, GatewayError) as exc:
            logger.warning("Gateway sign-out failed: %s", exc)
        finally:
            self.context.clear()
            self._data.authorize(None)
        await self._emit("SIGNED_OUT")

    # ── Roles ────────────────────────────────────────────────────────

    async def get_user_roles(self, user_id: str) -> frozenset[str]:
        """Names of the active roles assigned to ``user_id``; empty on any failure."""
        try:
            rows = await self._data.select(
                USER_ROLES_TABLE,
                USER_ROLES_PROJECTION,
                [Filter.eq("user_id", user_id)],
            )
        except GatewayError as exc:
            logger.error("Could not load roles for user %s: %s", user_id, exc)
            return frozenset()

        names: set[str] = set()
        for row in rows:
            role = row.get("roles")
            if not isinstance(role, dict):
                continue
            if role.get("is_active") is False:
                continue
            if role.get("name"):
                names.add(role["name"])
        return frozenset(names)

    async def refresh_roles(self) -> frozenset[str]:
        user = self.context.user
        if user is None:
            self.context.roles = frozenset()
            return self.context.roles

        self.context.roles_loading = True
        try:
            self.context.roles = await self.get_user_roles(user.id)
        finally:
            self.context.roles_loading = False
        return self.context.roles
