from typing import Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from employee_tracker.core.config import settings


class Base(DeclarativeBase):
    pass


def create_db_engine(url: Optional[str] = None, **kwargs) -> Engine:
    """Create the process-wide engine. Postgres connections get a connect timeout."""
    url = url or settings.database_url
    connect_args = kwargs.pop("connect_args", {})
    if url.startswith("postgresql"):
        connect_args.setdefault("connect_timeout", settings.DB_CONNECT_TIMEOUT)

    engine = create_engine(url, pool_pre_ping=True, connect_args=connect_args, **kwargs)

    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)

    return engine


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)
