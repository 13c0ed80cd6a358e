"""
Ship maintenance: Core database layer.

Provides the SQLAlchemy engine factory, table creation, and the Storage
client every service is constructed with. Storage exposes four operations:

    execute(statement, params)   -> ExecResult(inserted_id, rows_affected)
    query_one(statement, params) -> dict | None
    query_many(statement, params) -> list[dict]
    transaction()                -> context manager (commit / rollback)

Statements are SQLAlchemy Core constructs built from the ORM tables, so
column types (DateTime, Date, Float) are converted on the way in and out.
"""

import importlib
import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.pool import NullPool, StaticPool

from core.base import Base
from core.errors import Conflict, StorageError

log = logging.getLogger("shipmaint.db")

# Model modules whose tables make up the schema. Imported before create_all
# so Base.metadata knows every table even when the app factory is bypassed.
MODEL_MODULES = (
    "modules.users.models",
    "modules.components.models",
    "modules.maintenance.models",
    "modules.inventory.models",
    "modules.purchasing.models",
    "modules.crewing.models",
)


def _is_memory_url(database_url: str) -> bool:
    return database_url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in database_url


def _sqlite_pragmas(dbapi_conn, _record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.execute("PRAGMA busy_timeout=5000")
    cursor.close()


def make_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine for the given URL.

    SQLite connections get foreign key enforcement switched on. File databases
    use NullPool (one connection per unit of work); in-memory databases must
    share a single connection or every checkout would see an empty schema.
    """
    if not database_url.startswith("sqlite"):
        return create_engine(database_url, echo=echo)

    poolclass = StaticPool if _is_memory_url(database_url) else NullPool
    engine = create_engine(
        database_url,
        echo=echo,
        poolclass=poolclass,
        connect_args={"check_same_thread": False},
    )
    event.listen(engine, "connect", _sqlite_pragmas)
    if poolclass is NullPool:
        with engine.connect() as conn:
            conn.exec_driver_sql("PRAGMA journal_mode=WAL")
    return engine


def init_db(engine: Engine) -> None:
    """Create all tables (idempotent)."""
    for name in MODEL_MODULES:
        importlib.import_module(name)
    Base.metadata.create_all(bind=engine)


@dataclass
class ExecResult:
    inserted_id: Optional[int]
    rows_affected: int


class Storage:
    """Storage client over a single engine.

    Outside a transaction every call runs in its own short transaction.
    Inside ``with storage.transaction():`` all calls share one connection and
    are committed together, or rolled back together when anything raises.
    Nested transaction() scopes join the outermost one. The open transaction
    belongs to the calling thread, so requests served concurrently from the
    threadpool only ever read committed state.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self._local = threading.local()

    @property
    def _conn(self) -> Optional[Connection]:
        return getattr(self._local, "conn", None)

    @_conn.setter
    def _conn(self, conn: Optional[Connection]) -> None:
        self._local.conn = conn

    @property
    def in_transaction(self) -> bool:
        return self._conn is not None

    @contextmanager
    def _translate_errors(self):
        try:
            yield
        except IntegrityError as exc:
            detail = str(exc.orig) if exc.orig is not None else str(exc)
            if "UNIQUE" in detail.upper():
                raise Conflict(f"Duplicate value: {detail}") from exc
            raise StorageError(f"Integrity error: {detail}") from exc
        except SQLAlchemyError as exc:
            detail = str(getattr(exc, "orig", None) or exc)
            raise StorageError(f"Database error: {detail}") from exc

    @contextmanager
    def _connection(self):
        if self._conn is not None:
            yield self._conn
            return
        with self.engine.begin() as conn:
            yield conn

    def _run(self, conn: Connection, statement, params):
        if params:
            return conn.execute(statement, params)
        return conn.execute(statement)

    def execute(self, statement, params: Optional[dict] = None) -> ExecResult:
        with self._translate_errors():
            with self._connection() as conn:
                result = self._run(conn, statement, params)
                inserted_id = None
                if getattr(result, "is_insert", False) and result.inserted_primary_key:
                    inserted_id = result.inserted_primary_key[0]
                return ExecResult(inserted_id=inserted_id, rows_affected=result.rowcount)

    def query_one(self, statement, params: Optional[dict] = None) -> Optional[dict]:
        with self._translate_errors():
            with self._connection() as conn:
                row = self._run(conn, statement, params).first()
                return dict(row._mapping) if row is not None else None

    def query_many(self, statement, params: Optional[dict] = None) -> List[dict]:
        with self._translate_errors():
            with self._connection() as conn:
                return [dict(row._mapping) for row in self._run(conn, statement, params)]

    def scalar(self, statement, params: Optional[dict] = None):
        with self._translate_errors():
            with self._connection() as conn:
                return self._run(conn, statement, params).scalar()

    @contextmanager
    def transaction(self):
        if self._conn is not None:
            yield self
            return

        with self._translate_errors():
            conn = self.engine.connect()
            trans = conn.begin()
        self._conn = conn
        try:
            yield self
        except Exception as exc:
            trans.rollback()
            if isinstance(exc, StorageError):
                log.error(f"Transaction rolled back: {exc.message}")
            raise
        else:
            try:
                with self._translate_errors():
                    trans.commit()
            except StorageError as exc:
                log.error(f"Commit failed: {exc.message}")
                raise
        finally:
            self._conn = None
            conn.close()
