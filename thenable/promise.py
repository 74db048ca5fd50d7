"""Settle-once promises with chainable continuations.

A promise starts out pending (or settling, while the task behind it is still
running) and moves exactly once to fulfilled, carrying a value, or to
rejected, carrying a reason. Handlers attached with :meth:`Promise.then`,
:meth:`Promise.catch` and :meth:`Promise.finally_` each return a new derived
promise. Handlers registered before settlement run in registration order on
one scheduled unit of work once the source settles; a handler registered
after settlement gets a unit of its own. Neither runs inside the call that
registered it.
"""
import logging
import threading
from collections import deque

from thenable.continuation import FINALLY, FULFILL, REJECT, Continuation
from thenable.errors import FulfillNotPendingError, RejectNotPendingError
from thenable.scheduling import get_default_scheduler

logger = logging.getLogger(__name__)

PENDING = 'pending'
SETTLING = 'settling'
FULFILLED = 'fulfilled'
REJECTED = 'rejected'

UNSETTLED = (PENDING, SETTLING)
TERMINAL = (FULFILLED, REJECTED)


def _ensure_callable(handler):
    if not callable(handler):
        raise TypeError('Handler must be callable, got %r' % (handler,))
    return handler


class Promise:
    """A value or failure that becomes available later.

    ``Promise()`` is a pending promise settled by calling :meth:`fulfill` or
    :meth:`reject`. ``Promise(fn)`` runs ``fn(resolve, reject)`` as a task on
    the scheduler; the first call to either capability settles the promise
    and later calls are ignored. If the task returns without settling, the
    promise becomes pending and can be settled manually.
    """
    __slots__ = (
        'state', 'value', 'reason',
        '_continuations', '_lock', '_scheduler',
    )

    def __init__(self, fn=None, scheduler=None):
        #: one of PENDING, SETTLING, FULFILLED, REJECTED
        self.state = PENDING
        #: the value, meaningful once fulfilled
        self.value = None
        #: the reason, meaningful once rejected
        self.reason = None
        # continuations registered before settlement
        self._continuations = []
        self._lock = threading.Lock()
        self._scheduler = scheduler if scheduler is not None else get_default_scheduler()

        if fn is not None:
            self.state = SETTLING
            self._scheduler(self._run_task, _ensure_callable(fn))

    @classmethod
    def from_value(cls, value, scheduler=None):
        """Creates a promise fulfilled with ``value``."""
        promise = cls(scheduler=scheduler)
        promise.state = FULFILLED
        promise.value = value
        return promise

    @classmethod
    def from_error(cls, reason, scheduler=None):
        """Creates a promise rejected with ``reason``."""
        promise = cls(scheduler=scheduler)
        promise.state = REJECTED
        promise.reason = reason
        return promise

    @classmethod
    def pending(cls, scheduler=None):
        """Creates a pending promise, settled only through :meth:`fulfill`
        or :meth:`reject`.
        """
        return cls(scheduler=scheduler)

    @classmethod
    def from_task(cls, fn, scheduler=None):
        """Creates a promise settled by ``fn(resolve, reject)``, which runs as
        an independent unit of work.
        """
        return cls(fn, scheduler=scheduler)

    @property
    def is_pending(self):
        return self.state == PENDING

    @property
    def is_settling(self):
        return self.state == SETTLING

    @property
    def is_fulfilled(self):
        return self.state == FULFILLED

    @property
    def is_rejected(self):
        return self.state == REJECTED

    @property
    def is_settled(self):
        return self.state in TERMINAL

    def fulfill(self, value):
        """Fulfills a pending promise with ``value``.

        Raises :class:`FulfillNotPendingError` if the promise is not pending.
        """
        if not self._settle(FULFILLED, value, None, (PENDING,)):
            raise FulfillNotPendingError(self.state)

    def reject(self, reason):
        """Rejects a pending promise with ``reason``.

        Raises :class:`RejectNotPendingError` if the promise is not pending.
        """
        if not self._settle(REJECTED, None, reason, (PENDING,)):
            raise RejectNotPendingError(self.state)

    def then(self, on_fulfilled):
        """Runs ``on_fulfilled(value)`` once this promise is fulfilled.

        The returned promise fulfills with the handler's result, adopts it if
        it is a promise, or rejects with whatever the handler raised. A
        rejection of this promise passes through untouched.
        """
        return self._register(FULFILL, _ensure_callable(on_fulfilled))

    def catch(self, on_rejected):
        """Runs ``on_rejected(reason)`` once this promise is rejected.

        The rejection counts as handled: the returned promise fulfills with
        ``None``, or adopts the handler's result if that is a promise. A
        fulfillment of this promise passes through untouched.
        """
        return self._register(REJECT, _ensure_callable(on_rejected))

    def finally_(self, on_settled):
        """Runs ``on_settled()`` once this promise settles either way.

        The returned promise settles exactly like this one.
        """
        return self._register(FINALLY, _ensure_callable(on_settled))

    def _register(self, kind, handler):
        derived = self.__class__(scheduler=self._scheduler)
        derived.state = SETTLING
        self._attach(Continuation(kind, handler, derived))
        return derived

    def _attach(self, job):
        with self._lock:
            if self.state in UNSETTLED:
                self._continuations.append(job)
                return
        logger.debug('Late registration of %r on %r', job, self)
        self._scheduler(self._notify, job)

    def _drain(self, jobs):
        while jobs:
            job = jobs.popleft()
            try:
                self._notify(job)
            except BaseException:
                # the remaining jobs still run, on a fresh unit
                if jobs:
                    self._scheduler(self._drain, jobs)
                raise

    def _settle(self, state, value, reason, accepted):
        with self._lock:
            if self.state not in accepted:
                return False
            self.state = state
            self.value = value
            self.reason = reason
            jobs, self._continuations = deque(self._continuations), []
        logger.debug('Settled %r', self)
        if jobs:
            self._scheduler(self._drain, jobs)
        return True

    def _resolve(self, value):
        if not self._settle(FULFILLED, value, None, UNSETTLED):
            logger.debug('Ignoring resolve(%r) on already settled %r', value, self)

    def _reject(self, reason):
        if not self._settle(REJECTED, None, reason, UNSETTLED):
            logger.debug('Ignoring reject(%r) on already settled %r', reason, self)

    def _receive(self, state, value=None, reason=None):
        if not self._settle(state, value, reason, UNSETTLED):
            raise AssertionError('%r received a second outcome (%s)' % (self, state))

    def _run_task(self, fn):
        try:
            fn(self._resolve, self._reject)
        except Exception as e:
            logger.debug('Task of %r raised %r', self, e)
            self._reject(e)

        with self._lock:
            if self.state != SETTLING:
                return
            self.state = PENDING
        logger.debug('Task returned without settling %r; it is now pending', self)

    def _notify(self, job):
        if self.state not in TERMINAL:
            raise AssertionError('Dispatching %r from unsettled %r' % (job, self))

        derived = job.promise
        if job.kind == FULFILL:
            if self.state == REJECTED:
                derived._receive(REJECTED, reason=self.reason)
                return
            self._execute_job(job, self.value, keep_result=True)
        elif job.kind == REJECT:
            if self.state == FULFILLED:
                derived._receive(FULFILLED, value=self.value)
                return
            self._execute_job(job, self.reason, keep_result=False)
        elif job.kind == FINALLY:
            if job.handler is not None:
                try:
                    job.handler()
                except Exception:
                    logger.warning(
                        'Finally handler %r raised; passing %s outcome through',
                        job.handler, self.state, exc_info=True,
                    )
            derived._receive(self.state, self.value, self.reason)
        else:
            raise AssertionError('Unknown continuation kind: %r' % (job.kind,))

    def _execute_job(self, job, argument, keep_result):
        derived = job.promise
        try:
            result = job.handler(argument)
        except Exception as e:
            logger.debug('Handler %r raised %r, rejecting %r', job.handler, e, derived)
            derived._receive(REJECTED, reason=e)
            return

        if isinstance(result, Promise):
            derived._adopt(result)
        elif keep_result:
            derived._receive(FULFILLED, value=result)
        else:
            derived._receive(FULFILLED)

    def _adopt(self, inner):
        if inner is self:
            self._receive(REJECTED, reason=TypeError('Cannot adopt promise with itself.'))
            return
        logger.debug('%r adopts %r', self, inner)
        inner._attach(Continuation(FINALLY, None, self))

    def __repr__(self):
        if self.state == FULFILLED:
            v = repr(self.value)
        elif self.state == REJECTED:
            v = repr(self.reason) + ' (rejected)'
        else:
            v = '(%s)' % self.state
        return '<%s %s>' % (self.__class__.__name__, v)


from_value = Promise.from_value
from_error = Promise.from_error
pending = Promise.pending
from_task = Promise.from_task
