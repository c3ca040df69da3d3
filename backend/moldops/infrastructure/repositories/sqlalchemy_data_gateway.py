"""Local data gateway — the DataGateway port backed by one SQLAlchemy table.

Every logical table is stored as JSON rows in ``table_rows``. Embedded
relation projections such as ``"id, machines(name)"`` are resolved through
the ``<singular>_id`` column of the parent row (``machine_id``), recursively.
"""

import uuid
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from moldops.application.interfaces import DataGateway
from moldops.domain.entities import Filter, Order, Projection, Record, parse_projection
from moldops.domain.exceptions import GatewayError
from moldops.infrastructure.database.models import TableRowModel
from moldops.infrastructure.logging.gateway_logger import GatewayCallLogger, GatewayStage


def foreign_key_for(relation: str) -> str:
    """``"machines"`` → ``"machine_id"``."""
    singular = relation[:-1] if relation.endswith("s") else relation
    return f"{singular}_id"


def _sort_key(order: Order):
    def key(row: Record) -> tuple[bool, Any]:
        value = row.get(order.column)
        # Missing values sort last in both directions.
        return (value is None) != (not order.ascending), value if value is not None else ""

    return key


class SQLAlchemyDataGateway(DataGateway):
    """Implements the DataGateway port using SQLAlchemy async sessions.

    Each call opens its own session so concurrent calls (``asyncio.gather``)
    never share one.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory
        self._log = GatewayCallLogger("SQLAlchemyDataGateway")

    @staticmethod
    def _to_record(model: TableRowModel) -> Record:
        return {"id": model.id, "created_at": model.created_at.isoformat(), **model.data}

    async def _models(self, session: AsyncSession, table: str) -> list[TableRowModel]:
        stmt = select(TableRowModel).where(TableRowModel.table_name == table).order_by(TableRowModel.seq)
        result = await session.execute(stmt)
        return list(result.scalars().all())

    async def _get(self, session: AsyncSession, table: str, record_id: str) -> TableRowModel | None:
        stmt = select(TableRowModel).where(
            TableRowModel.table_name == table, TableRowModel.id == str(record_id)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def _index(
        self, session: AsyncSession, table: str, cache: dict[str, dict[str, Record]]
    ) -> dict[str, Record]:
        if table not in cache:
            cache[table] = {m.id: self._to_record(m) for m in await self._models(session, table)}
        return cache[table]

    async def _project(
        self,
        session: AsyncSession,
        row: Record,
        projection: Projection,
        cache: dict[str, dict[str, Record]],
    ) -> Record:
        if projection.selects_all:
            out = dict(row)
        else:
            out = {name: row.get(name) for name in projection.fields}

        for embed in projection.embeds:
            target_id = row.get(foreign_key_for(embed.name))
            target = None
            if target_id is not None:
                target = (await self._index(session, embed.name, cache)).get(str(target_id))
            out[embed.name] = await self._project(session, target, embed, cache) if target else None
        return out

    # ── Port ─────────────────────────────────────────────────────────

    async def select(
        self,
        table: str,
        columns: str = "*",
        filters: list[Filter] | None = None,
        *,
        order: Order | None = None,
        limit: int | None = None,
    ) -> list[Record]:
        try:
            projection = parse_projection(columns)
        except ValueError as exc:
            raise GatewayError("select", table, 400, str(exc)) from exc

        with self._log.timed_step(GatewayStage.SELECT, table, columns=columns):
            try:
                async with self._session_factory() as session:
                    rows = [self._to_record(m) for m in await self._models(session, table)]
                    rows = [r for r in rows if all(f.matches(r.get(f.column)) for f in filters or [])]
                    if order is not None:
                        rows.sort(key=_sort_key(order), reverse=not order.ascending)
                    if limit is not None:
                        rows = rows[:limit]
                    cache: dict[str, dict[str, Record]] = {}
                    return [await self._project(session, row, projection, cache) for row in rows]
            except SQLAlchemyError as exc:
                raise GatewayError("select", table, 500, str(exc)) from exc

    async def insert(self, table: str, row: Record) -> Record:
        data = dict(row)
        record_id = str(data.pop("id", None) or uuid.uuid4())
        with self._log.timed_step(GatewayStage.INSERT, table):
            try:
                async with self._session_factory() as session:
                    model = TableRowModel(table_name=table, id=record_id, data=data)
                    session.add(model)
                    await session.commit()
                    return self._to_record(model)
            except IntegrityError as exc:
                raise GatewayError("insert", table, 409, f"Duplicate id '{record_id}'") from exc
            except SQLAlchemyError as exc:
                raise GatewayError("insert", table, 500, str(exc)) from exc

    async def update(self, table: str, record_id: str, patch: Record) -> Record:
        changes = {k: v for k, v in patch.items() if k not in ("id", "created_at")}
        with self._log.timed_step(GatewayStage.UPDATE, table, id=record_id):
            try:
                async with self._session_factory() as session:
                    model = await self._get(session, table, record_id)
                    if model is None:
                        raise GatewayError("update", table, 404, f"No row with id '{record_id}'")
                    # A new dict so the JSON column is flagged as modified.
                    model.data = {**model.data, **changes}
                    await session.commit()
                    return self._to_record(model)
            except SQLAlchemyError as exc:
                raise GatewayError("update", table, 500, str(exc)) from exc

    async def delete(self, table: str, record_id: str) -> None:
        with self._log.timed_step(GatewayStage.DELETE, table, id=record_id):
            try:
                async with self._session_factory() as session:
                    model = await self._get(session, table, record_id)
                    if model is not None:
                        await session.delete(model)
                        await session.commit()
            except SQLAlchemyError as exc:
                raise GatewayError("delete", table, 500, str(exc)) from exc

    async def count(self, table: str, filters: list[Filter] | None = None) -> int:
        rows = await self.select(table, "*", filters)
        return len(rows)
