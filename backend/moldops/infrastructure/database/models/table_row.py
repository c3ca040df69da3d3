"""SQLAlchemy ORM model holding the rows of every local-gateway table."""

from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from moldops.infrastructure.database.base import Base


class TableRowModel(Base):
    """ORM model — maps to the 'table_rows' table.

    One row per record of any logical table; the record's columns live in
    ``data``. ``seq`` preserves insertion order.
    """

    __tablename__ = "table_rows"

    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    table_name: Mapped[str] = mapped_column(String(100), nullable=False)
    id: Mapped[str] = mapped_column(String(36), nullable=False)
    data: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    __table_args__ = (
        Index("ux_table_rows_identity", "table_name", "id", unique=True),
        Index("ix_table_rows_table", "table_name"),
    )

    def __repr__(self) -> str:
        return f"<TableRowModel(table='{self.table_name}', id={self.id})>"
