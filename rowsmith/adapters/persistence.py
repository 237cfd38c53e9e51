"""Persistence collaborator used by ``RecordBuilder.build()``."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

from sqlalchemy import and_, insert, select
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.orm import Session

from .schema import Record

logger = logging.getLogger(__name__)


class RecordPersister(ABC):
    """Insert a record into its table and return the stored row."""

    @abstractmethod
    def insert(self, record: Record) -> Record:
        """Persist *record*.

        Returns:
            A new record carrying every column of the stored row, including
            database-generated values such as autoincrement keys.
        """

        raise NotImplementedError


class SQLAlchemyRecordPersister(RecordPersister):
    """Persister backed by a SQLAlchemy engine, connection or session.

    With an :class:`Engine` every insert runs in its own ``begin()`` block.
    A :class:`Connection` or :class:`Session` is used as-is, so the insert
    joins whatever transaction the caller has open.
    """

    def __init__(self, bind: Engine | Connection | Session):
        self._bind = bind

    def insert(self, record: Record) -> Record:
        if isinstance(self._bind, Engine):
            with self._bind.begin() as connection:
                return self._insert(connection, record)
        return self._insert(self._bind, record)

    def _insert(self, executor: Connection | Session, record: Record) -> Record:
        table = record.table
        statement = insert(table).values(**record.as_dict())
        dialect = (
            executor.dialect
            if isinstance(executor, Connection)
            else executor.get_bind().dialect
        )

        if dialect.insert_returning:
            row = executor.execute(statement.returning(*table.c)).one()
        else:
            result = executor.execute(statement)
            primary_key = list(table.primary_key.columns)
            if not primary_key:
                logger.debug("Inserted row into %s (no primary key)", table.name)
                return Record(table, record.as_dict())
            identity = result.inserted_primary_key or ()
            condition = and_(
                *(column == value for column, value in zip(primary_key, identity))
            )
            row = executor.execute(select(table).where(condition)).one()

        stored: dict[str, Any] = {column.key: row._mapping[column] for column in table.c}
        logger.debug("Inserted row into %s: %s", table.name, stored)
        return Record(table, stored)


__all__ = ["RecordPersister", "SQLAlchemyRecordPersister"]
