import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from thenable import from_task, from_value, result, wait
from thenable.config import Settings
from thenable.scheduling import (
    ExecutorScheduler,
    ThreadScheduler,
    get_default_scheduler,
    scheduler_from_settings,
    set_default_scheduler,
)

TIMEOUT = 2.0


def test_thread_scheduler_names_threads():
    names = []
    done = threading.Event()

    def unit():
        names.append(threading.current_thread().name)
        done.set()

    ThreadScheduler('unit')(unit)

    assert done.wait(TIMEOUT)
    assert names == ['unit-1']


def test_handlers_do_not_run_in_registering_thread():
    threads = []
    derived = from_value(1).then(lambda value: threads.append(threading.current_thread()))

    assert wait(derived, TIMEOUT)
    assert threads and threads[0] is not threading.current_thread()


def test_scheduler_from_settings():
    assert isinstance(scheduler_from_settings(Settings()), ThreadScheduler)

    pooled = scheduler_from_settings(Settings(max_workers=2, thread_name_prefix='pool'))
    try:
        assert isinstance(pooled, ExecutorScheduler)
        assert pooled.executor._max_workers == 2
    finally:
        pooled.shutdown()


def test_executor_scheduler_runs_chains():
    with ThreadPoolExecutor(max_workers=2) as executor:
        scheduler = ExecutorScheduler(executor)
        promise = from_task(lambda resolve, reject: resolve(2), scheduler=scheduler)
        derived = promise.then(lambda value: value * 21).finally_(lambda: None)

        assert result(derived, TIMEOUT) == 42


def test_executor_scheduler_logs_escaped_failures(caplog):
    def unit():
        raise RuntimeError('escaped')

    with ThreadPoolExecutor(max_workers=1) as executor:
        ExecutorScheduler(executor)(unit)

    assert 'Unit of work failed' in caplog.text


@pytest.mark.usefixtures('restore_default_scheduler')
def test_set_default_scheduler(manual):
    set_default_scheduler(manual)

    assert get_default_scheduler() is manual
    derived = from_value(1).then(lambda value: value + 1)
    manual.run_all()
    assert derived.value == 2


@pytest.mark.usefixtures('restore_default_scheduler')
def test_default_scheduler_rebuilds_from_environment(monkeypatch):
    monkeypatch.delenv('THENABLE_MAX_WORKERS', raising=False)
    set_default_scheduler(None)

    assert isinstance(get_default_scheduler(), ThreadScheduler)


def test_set_default_scheduler_rejects_non_callable():
    with pytest.raises(TypeError):
        set_default_scheduler(42)
