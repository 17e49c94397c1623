"""Memento persisted in a SQL key/value table."""

from __future__ import annotations

from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Dialect,
    MetaData,
    String,
    Table,
    TypeDecorator,
    create_engine,
    delete,
    insert,
    select,
    update,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

    from authprofiles.domain.ports.persistence import JsonValue

log = getLogger(__name__)


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


metadata = MetaData()

memento_table = Table(
    "memento_entries",
    metadata,
    Column("key", String(255), primary_key=True),
    Column("value", JSON, nullable=False),
    Column("updated_at", UTCDateTime, nullable=False),
)


def create_memento_tables(engine: Engine) -> None:
    metadata.create_all(engine, checkfirst=True)


class SqlAlchemyMemento:
    """Memento backed by ``memento_entries``; every update is its own transaction.

    Statements run synchronously on the calling thread, also inside ``update``.
    The profile blob is small and SQLite connections (including ``:memory:``
    databases) are bound to the thread that opened them.
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    @classmethod
    def from_uri(cls, database_uri: str) -> SqlAlchemyMemento:
        engine = create_engine(database_uri, future=True)
        create_memento_tables(engine)
        return cls(engine)

    def get(self, key: str, default: JsonValue = None) -> JsonValue:
        stmt = select(memento_table.c.value).where(memento_table.c.key == key)
        with self.engine.connect() as connection:
            row = connection.execute(stmt).first()
        return default if row is None else row[0]

    async def update(self, key: str, value: JsonValue) -> None:
        now = datetime.now(tz=UTC)
        with self.engine.begin() as connection:
            if value is None:
                connection.execute(delete(memento_table).where(memento_table.c.key == key))
                return
            result = connection.execute(
                update(memento_table)
                .where(memento_table.c.key == key)
                .values(value=value, updated_at=now)
            )
            if result.rowcount == 0:
                connection.execute(insert(memento_table).values(key=key, value=value, updated_at=now))
        log.debug("memento %s updated", key)

    def dispose(self) -> None:
        self.engine.dispose()
