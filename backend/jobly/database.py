from collections.abc import Iterator

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import database_url_for_log, get_database_uri

Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Owns the engine and session factory for one database URL.

    Nothing is connected until open() is called; close() disposes the pool.
    """

    def __init__(self, url: str | None = None):
        self.url = url or get_database_uri()
        self.engine: Engine | None = None
        self._sessionmaker: sessionmaker | None = None

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    @property
    def is_open(self) -> bool:
        return self.engine is not None

    def open(self) -> "Database":
        if self.is_open:
            return self

        if self.is_sqlite:
            kwargs = {"connect_args": {"check_same_thread": False}}
            if self.url in ("sqlite://", "sqlite:///:memory:"):
                kwargs["poolclass"] = StaticPool
            self.engine = create_engine(self.url, **kwargs)
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)
        else:
            self.engine = create_engine(self.url, pool_pre_ping=True)

        self._sessionmaker = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        return self

    def close(self) -> None:
        if self.engine is not None:
            self.engine.dispose()
        self.engine = None
        self._sessionmaker = None

    def create_all(self) -> None:
        if not self.is_open:
            raise RuntimeError("Database is not open.")
        Base.metadata.create_all(bind=self.engine)

    def session(self) -> Session:
        if self._sessionmaker is None:
            raise RuntimeError("Database is not open.")
        return self._sessionmaker()

    def url_for_log(self) -> str:
        return database_url_for_log(self.url)


def get_db(request: Request) -> Iterator[Session]:
    db = request.app.state.db.session()
    try:
        yield db
    finally:
        db.close()
