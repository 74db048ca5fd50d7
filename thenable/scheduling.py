import itertools
import logging
import threading
from concurrent.futures import ThreadPoolExecutor

from thenable.config import Settings

logger = logging.getLogger(__name__)

_default = None
_default_lock = threading.Lock()


class ThreadScheduler:
    """Runs every unit of work on its own daemon thread."""

    def __init__(self, thread_name_prefix='thenable'):
        self.thread_name_prefix = thread_name_prefix
        self._counter = itertools.count(1)

    def __call__(self, fn, *args):
        name = '%s-%d' % (self.thread_name_prefix, next(self._counter))
        thread = threading.Thread(target=fn, args=args, name=name, daemon=True)
        thread.start()


class ExecutorScheduler:
    """Submits units of work to a ``concurrent.futures.Executor``.

    The executor swallows exceptions into its futures, so anything escaping
    a unit is logged here instead.
    """

    def __init__(self, executor):
        self.executor = executor

    def __call__(self, fn, *args):
        future = self.executor.submit(fn, *args)
        future.add_done_callback(_log_failure)

    def shutdown(self, wait=True):
        self.executor.shutdown(wait=wait)


def _log_failure(future):
    if future.cancelled():
        return
    error = future.exception()
    if error is not None:
        logger.error('Unit of work failed', exc_info=(type(error), error, error.__traceback__))


def scheduler_from_settings(settings):
    if settings.max_workers is None:
        return ThreadScheduler(settings.thread_name_prefix)
    executor = ThreadPoolExecutor(
        max_workers=settings.max_workers,
        thread_name_prefix=settings.thread_name_prefix,
    )
    return ExecutorScheduler(executor)


def get_default_scheduler():
    global _default
    with _default_lock:
        if _default is None:
            settings = Settings.from_env()
            logger.debug('Building default scheduler from %r', settings)
            _default = scheduler_from_settings(settings)
        return _default


def set_default_scheduler(scheduler):
    """Replaces the default scheduler and returns the previous one.

    Passing ``None`` makes the next promise rebuild it from the environment.
    """
    global _default
    if scheduler is not None and not callable(scheduler):
        raise TypeError('Scheduler must be callable, got %r' % (scheduler,))
    with _default_lock:
        previous, _default = _default, scheduler
    return previous
