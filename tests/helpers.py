"""Thread and factory helpers shared by the test modules."""

import threading
import time


class CountingFactory:
    """Zero-argument factory that counts calls, optionally slow or failing."""

    def __init__(self, delay: float = 0.0, failures: int = 0, result=None):
        self.delay = delay
        self.failures = failures
        self.result = result
        self.calls = 0
        self._lock = threading.Lock()

    def __call__(self):
        with self._lock:
            self.calls += 1
            call_number = self.calls
        if self.delay:
            time.sleep(self.delay)
        if call_number <= self.failures:
            raise RuntimeError(f"boom #{call_number}")
        if self.result is not None:
            return self.result
        return object()


class SlowEntryLock:
    """Wraps a lock and sleeps before acquiring it in one named thread."""

    def __init__(self, lock, delay: float, thread_name: str):
        self._lock = lock
        self.delay = delay
        self.thread_name = thread_name
        self.waiting = threading.Event()

    def __enter__(self):
        if threading.current_thread().name == self.thread_name:
            self.waiting.set()
            time.sleep(self.delay)
        return self._lock.__enter__()

    def __exit__(self, *exc_info):
        return self._lock.__exit__(*exc_info)


def run_concurrently(func, callers: int):
    """Start ``callers`` threads at once through a barrier and collect results."""
    barrier = threading.Barrier(callers)
    results = [None] * callers
    errors = []

    def worker(index):
        barrier.wait()
        try:
            results[index] = func()
        except Exception as e:  # collected for the test to assert on
            errors.append(e)

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(callers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return results, errors
