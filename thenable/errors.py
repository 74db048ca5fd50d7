class PromiseException(Exception):
    def __init__(self, value):
        super().__init__(value)
        self.value = value

    def __str__(self):
        return repr(self.value)


class NotPendingError(PromiseException):
    """Manual settlement of a promise that is not in the pending state.

    ``value`` is the state the promise was found in.
    """
    operation = None

    def __str__(self):
        return 'cannot %s promise that is not in pending state (state: %s)' % (
            self.operation,
            self.value,
        )


class FulfillNotPendingError(NotPendingError):
    operation = 'fulfill'


class RejectNotPendingError(NotPendingError):
    operation = 'reject'


class PromiseTimeoutError(PromiseException, TimeoutError):
    """Waiting for the promise took too long."""
