"""Blocking helpers for code that has to wait on a promise.

They are built only on :meth:`Promise.finally_` and are not used by the
promise machinery itself. Never call them from inside a handler running on a
bounded executor: the handler would occupy the worker it is waiting for.
"""
import threading

from thenable.errors import PromiseException, PromiseTimeoutError


def wait(promise, timeout=None):
    """Blocks until ``promise`` settles. Returns ``False`` on timeout."""
    if promise.is_settled:
        return True
    settled = threading.Event()
    promise.finally_(settled.set)
    return settled.wait(timeout)


def result(promise, timeout=None):
    """Returns the value, waiting for it if necessary.

    If the promise was rejected, its reason is raised; reasons that are not
    exceptions are wrapped in :class:`PromiseException`.
    """
    if not wait(promise, timeout):
        raise PromiseTimeoutError(promise)
    if promise.is_fulfilled:
        return promise.value
    if isinstance(promise.reason, BaseException):
        raise promise.reason
    raise PromiseException(promise.reason)
