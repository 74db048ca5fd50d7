import os

ENV_MAX_WORKERS = 'THENABLE_MAX_WORKERS'
ENV_THREAD_NAME_PREFIX = 'THENABLE_THREAD_NAME_PREFIX'

DEFAULT_THREAD_NAME_PREFIX = 'thenable'


class Settings:
    """How the default scheduler runs units of work.

    ``max_workers`` of ``None`` means one thread per unit; a number means a
    shared pool of that size.
    """
    __slots__ = ('max_workers', 'thread_name_prefix')

    def __init__(self, max_workers=None, thread_name_prefix=DEFAULT_THREAD_NAME_PREFIX):
        self.max_workers = max_workers
        self.thread_name_prefix = thread_name_prefix

    @classmethod
    def from_env(cls, environ=None):
        if environ is None:
            environ = os.environ

        max_workers = None
        raw = environ.get(ENV_MAX_WORKERS, '').strip()
        if raw:
            try:
                max_workers = int(raw)
            except ValueError:
                raise ValueError('%s must be an integer, got %r' % (ENV_MAX_WORKERS, raw)) from None
            if max_workers < 1:
                raise ValueError('%s must be positive, got %d' % (ENV_MAX_WORKERS, max_workers))

        prefix = environ.get(ENV_THREAD_NAME_PREFIX, '').strip() or DEFAULT_THREAD_NAME_PREFIX
        return cls(max_workers=max_workers, thread_name_prefix=prefix)

    def __eq__(self, other):
        if not isinstance(other, Settings):
            return NotImplemented
        return (self.max_workers, self.thread_name_prefix) == (
            other.max_workers, other.thread_name_prefix)

    def __hash__(self):
        return hash((self.max_workers, self.thread_name_prefix))

    def __repr__(self):
        return '<%s max_workers=%r thread_name_prefix=%r>' % (
            self.__class__.__name__, self.max_workers, self.thread_name_prefix)
