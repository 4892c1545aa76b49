from pathlib import Path
from typing import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from config import settings


class Base(DeclarativeBase):
    pass


def _ensure_dir(url: str) -> None:
    if not url.startswith("sqlite:///"):
        return
    path = url.replace("sqlite:///", "", 1)
    if not path or path == ":memory:":
        return
    Path(path).expanduser().parent.mkdir(parents=True, exist_ok=True)


def _is_sqlite_url(url: str) -> bool:
    return url.startswith("sqlite://")


def _engine_args(url: str) -> dict:
    args = {
        "connect_args": {"check_same_thread": False, "timeout": 30} if _is_sqlite_url(url) else {},
        "echo": settings.debug,
    }
    if url == "sqlite:///:memory:":
        args["poolclass"] = StaticPool
    return args


_ensure_dir(settings.database_url)
engine = create_engine(settings.database_url, **_engine_args(settings.database_url))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def _apply_sqlite_pragmas(dbapi_connection, _):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA busy_timeout=5000")
    cursor.close()


if _is_sqlite_url(settings.database_url):
    event.listen(engine, "connect", _apply_sqlite_pragmas)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    from models import domain  # noqa: F401

    Base.metadata.create_all(bind=engine)
