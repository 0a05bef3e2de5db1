import logging
import pytest
from taskbook.adapters.memory.task_storage import InMemoryTaskStorage
from taskbook.domain.errors import PersistenceError
from taskbook.domain.records import LoadResult
from taskbook.services.task_service import TaskService


class FailingStorage:
    """Magazyn, który wczytuje pustą listę, ale każdy zapis kończy błędem."""
    def __init__(self):
        self.attempts = 0
    def load(self) -> LoadResult:
        return LoadResult()
    def save(self, tasks) -> None:
        self.attempts += 1
        raise PersistenceError("dysk tylko do odczytu")


@pytest.fixture(autouse=True)
def restore_root_logging():
    """CLI przestawia root logger w callbacku; przywracamy go po każdym teście."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def storage():
    return InMemoryTaskStorage()


@pytest.fixture
def service(storage):
    svc = TaskService(storage)
    svc.start()
    return svc


@pytest.fixture
def failing_storage():
    return FailingStorage()
