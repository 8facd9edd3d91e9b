"""Row store adapter over a single SQLModel table class.

The enum layer talks to the database only through RowStore: create a row,
find one by column value, load the rows outside an ordinal set, check that
the table exists, introspect columns and pluck a column.
"""

from __future__ import annotations

from collections.abc import Collection, Generator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import structlog
from sqlalchemy import inspect as sa_inspect
from sqlalchemy import text
from sqlmodel import Session, SQLModel, col, select

from persistent_enum.core.errors import InternalError

if TYPE_CHECKING:
    from sqlalchemy.orm import Mapper

    from persistent_enum.db.database import Database

logger = structlog.get_logger()


@dataclass(frozen=True)
class ColumnInfo:
    """What the materializer needs to know about one mapped column."""

    key: str
    nullable: bool
    has_default: bool
    primary_key: bool

    @property
    def required(self) -> bool:
        return not self.nullable and not self.has_default


_PK_ATTR = "__persistent_enum_pk__"


def primary_key_attr(model: type[SQLModel]) -> str:
    """Attribute name of the single primary key column of ``model``.

    Remembered on the class itself, so it goes away with the class.
    """
    cached = model.__dict__.get(_PK_ATTR)
    if cached is not None:
        return cached
    mapper: Mapper[Any] = sa_inspect(model)
    if len(mapper.primary_key) != 1:
        raise InternalError.unexpected(
            "enum models require exactly one primary key column",
            model=model.__name__,
            primary_key=[c.name for c in mapper.primary_key],
        )
    key = mapper.get_property_by_column(mapper.primary_key[0]).key
    setattr(model, _PK_ATTR, key)
    return key


class RowStore:
    """CRUD surface over ``model``'s table, bound to one session."""

    def __init__(self, session: Session, model: type[SQLModel]) -> None:
        self.session = session
        self.model = model
        self._mapper: Mapper[Any] = sa_inspect(model)
        self.ordinal_attr = primary_key_attr(model)

    @property
    def table(self) -> Any:
        return self.model.__table__  # type: ignore[attr-defined]

    def table_exists(self) -> bool:
        conn = self.session.connection()
        return sa_inspect(conn).has_table(self.table.name, schema=self.table.schema)

    def columns(self) -> dict[str, ColumnInfo]:
        """Mapped columns keyed by attribute name.

        A column has a default if SQL, the server, the model field or
        autoincrement would supply one.
        """
        fields = getattr(self.model, "model_fields", {})
        result: dict[str, ColumnInfo] = {}
        for prop in self._mapper.column_attrs:
            column = prop.columns[0]
            field_info = fields.get(prop.key)
            has_default = (
                column.default is not None
                or column.server_default is not None
                or (field_info is not None and not field_info.is_required())
                or column.table.autoincrement_column is column
            )
            result[prop.key] = ColumnInfo(
                key=prop.key,
                nullable=bool(column.nullable),
                has_default=has_default,
                primary_key=bool(column.primary_key),
            )
        return result

    def find_by(self, attr: str, value: Any) -> SQLModel | None:
        stmt = select(self.model).where(getattr(self.model, attr) == value)
        return self.session.exec(stmt).first()

    def find_excluding(self, ordinals: Collection[Any]) -> list[SQLModel]:
        """All rows whose primary key is not in ``ordinals``."""
        pk = col(getattr(self.model, self.ordinal_attr))
        stmt = select(self.model).where(pk.not_in(list(ordinals))).order_by(pk)
        return list(self.session.exec(stmt).all())

    def create(self, attributes: dict[str, Any]) -> SQLModel:
        row = self.model(**attributes)
        self.session.add(row)
        self.session.flush()
        # Load server-side defaults now; rows outlive the session
        self.session.refresh(row)
        return row

    def pluck(self, attr: str) -> list[Any]:
        stmt = select(getattr(self.model, attr))
        return list(self.session.exec(stmt).all())

    def ensure_enum_label(self, sql_enum_type: str, label: str) -> None:
        """Add ``label`` to a PostgreSQL enum type if it is not there yet.

        Runs on an autocommit connection: a label added inside a
        transaction cannot be used until that transaction commits.
        """
        engine = self.session.get_bind()
        if engine.dialect.name != "postgresql":
            logger.debug(
                "enum_label_skipped", sql_enum_type=sql_enum_type, dialect=engine.dialect.name
            )
            return
        literal = label.replace("'", "''")
        with engine.connect().execution_options(isolation_level="AUTOCOMMIT") as conn:
            conn.execute(text(f"ALTER TYPE {sql_enum_type} ADD VALUE IF NOT EXISTS '{literal}'"))


@contextmanager
def open_store(db: Database, model: type[SQLModel]) -> Generator[RowStore, None, None]:
    """
    RowStore in a fresh session.

    Auto-commits on successful exit, rolls back on exception.
    """
    with db.session() as session:
        store = RowStore(session, model)
        try:
            yield store
            session.commit()
        except Exception:
            session.rollback()
            raise
