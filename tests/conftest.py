import os

# Set test environment variables BEFORE any recordkit imports
os.environ.setdefault("SQLALCHEMY_DATABASE_URI", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

import pytest
from sqlalchemy.orm import sessionmaker

from adapters.persistence.orm.record_store import SqlAlchemyRecordStore
from recordkit.core.database import make_engine
from recordkit.models import Base
from tests.support.models import WidgetRegistrar

DATABASE_URL = "sqlite://"


@pytest.fixture
def engine():
    # In-memory SQLite, one connection shared by every session of a test
    engine = make_engine(DATABASE_URL)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(engine, expire_on_commit=False)


@pytest.fixture
def db_session(session_factory):
    with session_factory() as session:
        yield session


@pytest.fixture
def store(db_session):
    return SqlAlchemyRecordStore(db_session)


@pytest.fixture(autouse=True)
def reset_metadata_spy():
    WidgetRegistrar.stamped.clear()
    yield
    WidgetRegistrar.stamped.clear()
