import threading

WAIT = 5.0


def wait_for(predicate, timeout: float = WAIT) -> bool:
    ticker = threading.Event()
    for _ in range(int(timeout / 0.01)):
        if predicate():
            return True
        ticker.wait(0.01)
    return predicate()


class FakeObserver:
    """Stands in for a watchdog Observer; events are injected by the test."""

    def __init__(self):
        self.scheduled = []
        self.alive = False

    def schedule(self, handler, path, recursive=False):
        self.scheduled.append((handler, path, recursive))

    def start(self):
        self.alive = True

    def stop(self):
        self.alive = False

    def join(self, timeout=None):
        pass

    def is_alive(self):
        return self.alive
