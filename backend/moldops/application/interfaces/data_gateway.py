"""Abstract gateway interface (port) for the hosted tabular backend."""

from abc import ABC, abstractmethod

from moldops.domain.entities import Filter, Order, Record


class DataGateway(ABC):
    """Port for table CRUD — implemented in the infrastructure layer.

    Implementations raise :class:`moldops.domain.exceptions.GatewayError`
    on any transport or backend failure.
    """

    def authorize(self, access_token: str | None) -> None:
        """Bind the signed-in user's token to subsequent calls (None = anonymous).

        Gateways without row-level security ignore it.
        """

    @abstractmethod
    async def select(
        self,
        table: str,
        columns: str = "*",
        filters: list[Filter] | None = None,
        *,
        order: Order | None = None,
        limit: int | None = None,
    ) -> list[Record]:
        """Return rows of ``table`` projected through ``columns``.

        ``columns`` may embed relation projections such as
        ``"id, machines(name)"``; embedded rows come back as nested dicts.
        """
        ...

    @abstractmethod
    async def insert(self, table: str, row: Record) -> Record:
        """Insert one row and return it as stored (with its ``id``)."""
        ...

    @abstractmethod
    async def update(self, table: str, record_id: str, patch: Record) -> Record:
        """Patch the row with ``record_id`` and return it as stored."""
        ...

    @abstractmethod
    async def delete(self, table: str, record_id: str) -> None:
        """Delete the row with ``record_id``."""
        ...

    @abstractmethod
    async def count(self, table: str, filters: list[Filter] | None = None) -> int:
        """Return the exact number of rows matching ``filters``."""
        ...
