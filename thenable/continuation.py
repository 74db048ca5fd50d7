FULFILL = 'fulfill'
REJECT = 'reject'
FINALLY = 'finally'

KINDS = (FULFILL, REJECT, FINALLY)


class Continuation:
    """A handler registered against a promise, paired with the promise it
    derives.

    ``handler`` may be ``None`` for a ``FINALLY`` record; such a record just
    forwards the outcome, which is how a derived promise adopts an inner one.
    """
    __slots__ = ('kind', 'handler', 'promise')

    def __init__(self, kind, handler, promise):
        if kind not in KINDS:
            raise ValueError('Unknown continuation kind: %r' % (kind,))
        self.kind = kind
        self.handler = handler
        self.promise = promise

    def __repr__(self):
        return '<%s %s -> %r>' % (self.__class__.__name__, self.kind, self.promise)
