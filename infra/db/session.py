from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, text
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from domain.errors import StoreUnavailable


class Base(DeclarativeBase):
    pass


class Database:
    """Owns the engine and its connection pool; handed to every repository."""

    def __init__(self, url: str, pool_size: int = 10, echo: bool = False):
        kwargs = {}
        if url.startswith("sqlite"):
            kwargs["connect_args"] = {"check_same_thread": False}
            if url in ("sqlite://", "sqlite:///:memory:"):
                # one shared connection, otherwise every checkout sees an empty database
                kwargs["poolclass"] = StaticPool
            else:
                kwargs["pool_size"] = pool_size
        else:
            kwargs["pool_size"] = pool_size
            kwargs["max_overflow"] = 0
            kwargs["pool_pre_ping"] = True
        self.engine = create_engine(url, echo=echo, future=True, **kwargs)
        self.SessionLocal = sessionmaker(
            bind=self.engine, autoflush=False, autocommit=False,
            expire_on_commit=False, future=True)

    @contextmanager
    def session(self) -> Iterator[Session]:
        s = self.SessionLocal()
        try:
            yield s
        except OperationalError as exc:
            s.rollback()
            raise StoreUnavailable(f"Database unavailable: {exc.orig}") from exc
        finally:
            s.close()

    def ping(self) -> None:
        with self.session() as s:
            s.execute(text("SELECT 1"))

    def dispose(self) -> None:
        self.engine.dispose()


def init_db(db: Database):
    from infra.db.models import JobRecord, ApplicationRecord
    Base.metadata.create_all(bind=db.engine)
