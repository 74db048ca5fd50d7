import logging

from thenable.config import Settings
from thenable.continuation import FINALLY, FULFILL, REJECT, Continuation
from thenable.errors import (
    FulfillNotPendingError,
    NotPendingError,
    PromiseException,
    PromiseTimeoutError,
    RejectNotPendingError,
)
from thenable.promise import (
    FULFILLED,
    PENDING,
    REJECTED,
    SETTLING,
    Promise,
    from_error,
    from_task,
    from_value,
    pending,
)
from thenable.scheduling import (
    ExecutorScheduler,
    ThreadScheduler,
    get_default_scheduler,
    set_default_scheduler,
)
from thenable.sync import result, wait

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = '0.1.0'

__all__ = [
    'FINALLY',
    'FULFILL',
    'FULFILLED',
    'PENDING',
    'REJECT',
    'REJECTED',
    'SETTLING',
    'Continuation',
    'ExecutorScheduler',
    'FulfillNotPendingError',
    'NotPendingError',
    'Promise',
    'PromiseException',
    'PromiseTimeoutError',
    'RejectNotPendingError',
    'Settings',
    'ThreadScheduler',
    'from_error',
    'from_task',
    'from_value',
    'get_default_scheduler',
    'pending',
    'result',
    'set_default_scheduler',
    'wait',
]
