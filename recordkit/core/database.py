from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from adapters.persistence.orm.record_store import SqlAlchemyRecordStore
from recordkit.core.config import settings


def _enable_sqlite_wal(dbapi_connection, connection_record):
    # WAL reduces writer/reader locking on file databases
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL;")
    cursor.execute("PRAGMA synchronous=NORMAL;")
    cursor.close()


def make_engine(url: str, echo: bool = False) -> Engine:
    engine_args = {"echo": echo, "pool_pre_ping": True}

    if "sqlite" not in url:
        engine_args.update({"pool_size": 3, "max_overflow": 2, "pool_recycle": 300})

    engine = create_engine(url, **engine_args)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_wal)
    return engine


engine = make_engine(settings.SQLALCHEMY_DATABASE_URI, echo=settings.SQL_ECHO)
SessionLocal = sessionmaker(engine, class_=Session, expire_on_commit=False)


def get_db():
    with SessionLocal() as session:
        yield session


def get_record_store():
    """Yields a record store bound to a fresh session."""
    for session in get_db():
        yield SqlAlchemyRecordStore(session)
