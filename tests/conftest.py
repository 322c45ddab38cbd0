import pytest

from core.services import Database
from infrastructure.notifier import PollingNotifier
from tests.fakes import FakeDocumentStore

POLL_INTERVAL = 0.05


@pytest.fixture
def store():
    return FakeDocumentStore()


@pytest.fixture
def notifier():
    return PollingNotifier(interval=POLL_INTERVAL)


@pytest.fixture
def database(store, notifier):
    db = Database(store, notifier)
    yield db
    db.dispose()
