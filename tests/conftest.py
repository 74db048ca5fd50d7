import pytest

from helpers import CallsRegistry, ManualScheduler
from thenable.scheduling import get_default_scheduler, set_default_scheduler


@pytest.fixture
def calls_registry():
    return CallsRegistry


@pytest.fixture
def manual():
    return ManualScheduler()


@pytest.fixture
def restore_default_scheduler():
    previous = get_default_scheduler()
    yield
    replaced = set_default_scheduler(previous)
    if replaced is not previous and hasattr(replaced, 'shutdown'):
        replaced.shutdown()
