"""Database engine and session management for enum tables.

This module provides:
- Database: engine owner with ORM sessions and tracked transactions
- Transaction tracking, so class-level initialization can refuse to run
  inside an application transaction

Usage:
- Use session() for short read/write units (the enum initializer does)
- Use transaction() for application writes; anything that calls
  in_transaction() sees the open transaction on the current thread/task
"""

from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import TYPE_CHECKING, Any

import structlog
from sqlalchemy import event, inspect, text
from sqlmodel import Session, SQLModel, create_engine

if TYPE_CHECKING:
    from sqlalchemy import Engine

    from persistent_enum.config.models import DatabaseConfig

logger = structlog.get_logger()


class Database:
    """SQLAlchemy engine owner.

    Tracks open transactions per Database in a context variable so that
    enum declaration can detect it is running inside one.
    """

    def __init__(self, url: str, echo: bool = False) -> None:
        self.url = url
        self.engine = self._create_engine(echo)
        self._transaction_depth: ContextVar[int] = ContextVar(
            f"transaction_depth_{id(self)}", default=0
        )

    @classmethod
    def from_config(cls, config: DatabaseConfig) -> Database:
        return cls(config.url, echo=config.echo)

    def _create_engine(self, echo: bool) -> Engine:
        connect_args: dict[str, Any] = {}
        if self.url.startswith("sqlite"):
            connect_args["check_same_thread"] = False
        engine = create_engine(
            self.url,
            echo=echo,
            connect_args=connect_args,
            pool_pre_ping=True,
        )
        if engine.dialect.name == "sqlite":
            event.listen(engine, "connect", _configure_pragmas)
        return engine

    @property
    def dialect(self) -> str:
        return self.engine.dialect.name

    def create_all(self, tables: list[Any] | None = None) -> None:
        """Create tables from SQLModel metadata (all of them by default)."""
        SQLModel.metadata.create_all(self.engine, tables=tables)

    def drop_all(self, tables: list[Any] | None = None) -> None:
        """Drop tables. Use with caution."""
        SQLModel.metadata.drop_all(self.engine, tables=tables)

    def has_table(self, table_name: str, schema: str | None = None) -> bool:
        return inspect(self.engine).has_table(table_name, schema=schema)

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """ORM session whose objects stay readable after commit and close."""
        with Session(self.engine, expire_on_commit=False) as session:
            yield session

    @contextmanager
    def transaction(self) -> Generator[Session, None, None]:
        """
        Session wrapped in a tracked transaction.

        The session auto-commits on successful exit and rolls back
        on exception. While it is open, in_transaction() is True for
        the current context.
        """
        token = self._transaction_depth.set(self._transaction_depth.get() + 1)
        try:
            with Session(self.engine, expire_on_commit=False) as session:
                try:
                    yield session
                    session.commit()
                except Exception:
                    session.rollback()
                    raise
        finally:
            self._transaction_depth.reset(token)

    def in_transaction(self) -> bool:
        return self._transaction_depth.get() > 0

    def execute_raw(self, sql: str, params: dict[str, Any] | None = None) -> list[Any]:
        """Execute raw SQL, bypassing ORM events. Returns the fetched rows, if any."""
        with self.engine.connect() as conn:
            result = conn.execute(text(sql), params or {})
            rows = list(result.all()) if result.returns_rows else []
            conn.commit()
            return rows

    def dispose(self) -> None:
        self.engine.dispose()
        logger.debug("database_disposed", url=self.engine.url.render_as_string())


def _configure_pragmas(dbapi_conn: Any, _connection_record: Any) -> None:
    """Configure SQLite for referential integrity."""
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()
