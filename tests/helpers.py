import threading
from collections import deque

TIMEOUT = 2.0


class CallsRegistry:
    """Records named checkpoints in the order handlers reach them."""

    def __init__(self, expected_calls):
        self._lock = threading.Lock()
        self._calls = []
        self._expected_calls = expected_calls
        self._completed = threading.Event()
        if expected_calls == 0:
            self._completed.set()

    def register(self, place):
        with self._lock:
            if self._expected_calls == 0:
                raise AssertionError('trying to register unexpected call: ' + place)
            self._calls.append(place)
            self._expected_calls -= 1
            if self._expected_calls == 0:
                self._completed.set()

    @property
    def calls(self):
        with self._lock:
            return list(self._calls)

    @property
    def calls_left(self):
        with self._lock:
            return self._expected_calls

    def summarize(self):
        return '|'.join(self.calls)

    def wait_completed(self, timeout=TIMEOUT):
        assert self._completed.wait(timeout), (
            'There are still %d expected call(s) left. Calls registered: %r'
            % (self.calls_left, self.calls)
        )

    def assert_completed_before(self, expected, timeout=TIMEOUT):
        self.wait_completed(timeout)
        assert self.summarize() == expected

    def assert_order(self, *places):
        calls = self.calls
        positions = [calls.index(place) for place in places]
        assert positions == sorted(positions), calls


class ManualScheduler:
    """Queues units of work until the test runs them."""

    def __init__(self):
        self.units = deque()

    def __call__(self, fn, *args):
        self.units.append((fn, args))

    def run_all(self):
        count = 0
        while self.units:
            fn, args = self.units.popleft()
            fn(*args)
            count += 1
        return count
