"""Abstract interface (port) for the gateway's authentication subsystem."""

from abc import ABC, abstractmethod

from moldops.domain.entities import AuthSession, AuthUser


class AuthGateway(ABC):
    """Port for password sign-in and session lookup."""

    @abstractmethod
    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        """Exchange credentials for a session.

        Raises:
            AuthenticationError: with the gateway's raw message on rejection.
        """
        ...

    @abstractmethod
    async def get_current_user(self, access_token: str) -> AuthUser | None:
        """Return the user owning ``access_token``, or None if it is not valid."""
        ...

    @abstractmethod
    async def sign_out(self, access_token: str) -> None:
        """Invalidate ``access_token``."""
        ...
