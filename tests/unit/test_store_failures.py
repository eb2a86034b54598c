import uuid
from unittest.mock import patch

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import sessionmaker

from adapters.persistence.orm.record_store import SqlAlchemyRecordStore
from domain.exceptions import RecordNotFoundError, RegistrarError, UnexpectedStoreError
from recordkit.core.database import make_engine
from recordkit.models import Base
from tests.support.models import Widget, WidgetRegistrar

FETCH_ERROR = OperationalError("SELECT", {}, Exception("disk I/O error"))


@pytest.fixture
def failing_store(db_session):
    with patch.object(db_session, "execute", side_effect=FETCH_ERROR):
        yield SqlAlchemyRecordStore(db_session)


@pytest.mark.parametrize(
    "operation",
    [
        lambda r: r.query(),
        lambda r: r.insert(save=False),
        lambda r: r.query_or_insert(save=False),
        lambda r: r.load(),
    ],
    ids=["query", "insert", "query_or_insert", "load"],
)
def test_fetch_failure_surfaces_wrapped(failing_store, operation):
    registrar = WidgetRegistrar(uuid.uuid4(), failing_store)

    with pytest.raises(UnexpectedStoreError) as exc_info:
        operation(registrar)

    assert exc_info.value.cause is FETCH_ERROR
    assert exc_info.value.__cause__ is FETCH_ERROR
    # Never mistaken for "not found", so nothing is created
    assert not isinstance(exc_info.value, RecordNotFoundError)
    assert WidgetRegistrar.stamped == []
    assert failing_store.has_pending_changes() is False


def test_commit_failure_rolls_back_pending_record(db_session, store):
    identifier = uuid.uuid4()
    commit_error = IntegrityError("INSERT", {}, Exception("constraint failed"))

    with patch.object(db_session, "commit", side_effect=commit_error):
        with pytest.raises(UnexpectedStoreError) as exc_info:
            WidgetRegistrar(identifier, store).insert(save=True)

    assert exc_info.value.cause is commit_error
    assert store.has_pending_changes() is False
    assert WidgetRegistrar(identifier, store).exists() is False


def test_errors_share_a_base_class():
    assert issubclass(UnexpectedStoreError, RegistrarError)
    assert issubclass(RecordNotFoundError, RegistrarError)
    assert "disk I/O error" in str(UnexpectedStoreError(FETCH_ERROR))


def test_concurrent_sessions_race_on_create(tmp_path):
    """
    Query-then-create is not atomic across sessions: both miss, and the unique
    constraint makes the later commit fail.
    """
    engine = make_engine(f"sqlite:///{tmp_path / 'race.db'}")
    Base.metadata.create_all(engine)
    factory = sessionmaker(engine, expire_on_commit=False)
    identifier = uuid.uuid4()

    with factory() as session_a, factory() as session_b:
        store_a = SqlAlchemyRecordStore(session_a)
        store_b = SqlAlchemyRecordStore(session_b)

        # Both registrars miss; A stages its record without committing
        WidgetRegistrar(identifier, store_a).query_or_insert(save=False)
        WidgetRegistrar(identifier, store_b).query_or_insert(save=True)

        with pytest.raises(UnexpectedStoreError) as exc_info:
            store_a.commit()

        assert isinstance(exc_info.value.cause, IntegrityError)
        assert len(WidgetRegistrar.stamped) == 2

    with factory() as session:
        rows = session.query(Widget).filter(Widget.identifier == identifier).all()
        assert len(rows) == 1

    engine.dispose()
