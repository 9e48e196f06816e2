import logging
from contextlib import contextmanager
from typing import Generator

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

log = logging.getLogger(__name__)

# Bump whenever a model changes shape; older stores are dropped and recreated.
SCHEMA_VERSION = 3

# Define the base class that all models should inherit from
class Base(DeclarativeBase):
    pass


class Store:
    """One engine plus session factory. Build it once at startup and pass it down."""

    def __init__(self, url: str, *, timeout: float = 5.0, echo: bool = False):
        self.url = url
        connect_args = {}
        if url.startswith("sqlite"):
            # Request handlers run in a threadpool
            connect_args = {"check_same_thread": False, "timeout": timeout}
        self.engine: Engine = create_engine(url, echo=echo, pool_pre_ping=True, connect_args=connect_args)

        if self.engine.dialect.name == "sqlite":
            @event.listens_for(self.engine, "connect")
            def _set_sqlite_pragma(dbapi_conn, _connection_record):
                cursor = dbapi_conn.cursor()
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.close()

        self.SessionLocal = sessionmaker(bind=self.engine, autocommit=False, autoflush=False, expire_on_commit=False)

    def init_schema(self) -> None:
        """Create tables if absent; a store from another schema version is recreated from scratch."""
        from gymprogress import models  # noqa: F401  # registers tables on Base.metadata

        # The version stamp lives in PRAGMA user_version, so only SQLite gets the
        # destructive recreate; other backends just create missing tables.
        versioned = self.engine.dialect.name == "sqlite"
        with self.engine.begin() as conn:
            current = SCHEMA_VERSION
            if versioned:
                current = conn.exec_driver_sql("PRAGMA user_version").scalar() or 0
            if current not in (0, SCHEMA_VERSION):
                log.warning("schema version %s != %s, dropping all tables", current, SCHEMA_VERSION)
                Base.metadata.drop_all(conn)
            Base.metadata.create_all(conn)
            if current != SCHEMA_VERSION:
                conn.exec_driver_sql(f"PRAGMA user_version = {SCHEMA_VERSION}")

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        db = self.SessionLocal()
        try:
            yield db
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def dispose(self) -> None:
        self.engine.dispose()


# Dependency for FastAPI routes
def get_db(request: Request):
    store: Store = request.app.state.store
    db = store.SessionLocal()
    try:
        yield db
    finally:
        db.close()
