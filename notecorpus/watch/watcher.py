"""File change watcher built on watchdog.

Events are debounced and turned into a single ``on_change`` call on the
watcher's worker thread. Watch failures (a directory disappearing, lost
permissions, a dead observer) are logged and retried with exponential
backoff. Waits go through ``threading.Event`` so ``stop()`` interrupts them.
"""

import errno
import logging
import os
import threading
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Sequence

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from notecorpus.shared.hashing import HashingService

logger = logging.getLogger(__name__)

IGNORED_EVENTS = ("opened", "closed_no_write")


@dataclass(frozen=True)
class WatchTarget:
    """A file or directory to watch.

    Directories are watched recursively for files with accepted extensions.
    """

    path: str
    is_dir: bool = False

    @property
    def key(self) -> str:
        return HashingService.normalize_source(self.path)

    @property
    def watch_dir(self) -> str:
        return self.key if self.is_dir else os.path.dirname(self.key)


class _ChangeHandler(FileSystemEventHandler):
    def __init__(self, watcher: "ChangeWatcher"):
        super().__init__()
        self._watcher = watcher

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.event_type in IGNORED_EVENTS:
            return
        for raw in (event.src_path, getattr(event, "dest_path", "")):
            if not raw:
                continue
            path = os.fsdecode(raw)
            if self._watcher.is_watched(path):
                self._watcher.notify(path)
                return


class ChangeWatcher:
    """Trigger re-indexing when watched files change.

    Example:
        >>> watcher = ChangeWatcher(targets, on_change=index.refresh)
        >>> watcher.start()
        >>> ...
        >>> watcher.stop()
    """

    def __init__(
        self,
        targets: Iterable[WatchTarget],
        on_change: Callable[[], None],
        extensions: Sequence[str] = (),
        debounce: float = 0.25,
        backoff_initial: float = 0.5,
        backoff_max: float = 30.0,
        poll_interval: float = 0.5,
        observer_factory: Callable[[], object] = Observer,
    ):
        self.targets: List[WatchTarget] = list(targets)
        if not self.targets:
            raise ValueError("nothing to watch")
        self.on_change = on_change
        self.extensions = tuple(ext.lower() for ext in extensions)
        self.debounce = max(0.0, debounce)
        self.backoff_initial = max(0.01, backoff_initial)
        self.backoff_max = max(self.backoff_initial, backoff_max)
        self.poll_interval = poll_interval
        self.observer_factory = observer_factory

        self._files = {t.key for t in self.targets if not t.is_dir}
        self._dirs = [t.key for t in self.targets if t.is_dir]
        self._handler = _ChangeHandler(self)
        self._pending = threading.Event()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

        self.reindex_count = 0
        self.error_count = 0

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def is_watched(self, path: str) -> bool:
        key = HashingService.normalize_source(path)
        if key in self._files:
            return True
        for root in self._dirs:
            if key.startswith(root + os.sep):
                if not self.extensions or os.path.splitext(key)[1].lower() in self.extensions:
                    return True
        return False

    def notify(self, path: Optional[str] = None) -> None:
        """Record a change; the worker re-indexes once the debounce settles."""
        logger.debug("change detected: %s", path or "<manual>")
        self._pending.set()

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="note-watcher", daemon=True)
        self._thread.start()

    def join(self, timeout: Optional[float] = None) -> bool:
        """Block until the worker exits or ``timeout`` passes; True if it exited."""
        thread = self._thread
        if thread is None:
            return True
        thread.join(timeout)
        return not thread.is_alive()

    def stop(self, timeout: Optional[float] = 5.0) -> None:
        self._stop.set()
        self._pending.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    def _run(self) -> None:
        delay = self.backoff_initial
        failed = False
        while not self._stop.is_set():
            observer = None
            error: Optional[OSError] = None
            try:
                observer = self._start_observer()
                if failed:
                    # files may have changed while we were not watching
                    self._pending.set()
                    failed = False
                delay = self.backoff_initial
                self._serve(observer)
            except OSError as exc:
                error = exc
            finally:
                if observer is not None:
                    self._shutdown(observer)
            if error is None:
                continue
            # the failed observer is already stopped; nothing is watched during the wait
            failed = True
            self.error_count += 1
            logger.warning("watch error: %s; retrying in %.2fs", error, delay)
            if self._stop.wait(delay):
                break
            delay = min(delay * 2, self.backoff_max)

    def _start_observer(self):
        self._check_dirs()
        observer = self.observer_factory()
        scheduled = set()
        for target in self.targets:
            key = (target.watch_dir, target.is_dir)
            if key in scheduled:
                continue
            scheduled.add(key)
            observer.schedule(self._handler, target.watch_dir, recursive=target.is_dir)
        observer.start()
        logger.info("watching %d location(s)", len(scheduled))
        return observer

    def _check_dirs(self) -> None:
        for target in self.targets:
            if not os.path.isdir(target.watch_dir):
                raise FileNotFoundError(errno.ENOENT, "watched directory is missing", target.watch_dir)

    def _serve(self, observer) -> None:
        while not self._stop.is_set():
            if self._pending.wait(self.poll_interval):
                if self._stop.is_set():
                    return
                self._pending.clear()
                if not self._settle():
                    return
                self._fire()
            if not observer.is_alive():
                raise OSError("watch observer stopped unexpectedly")
            self._check_dirs()

    def _settle(self) -> bool:
        while True:
            if self._stop.wait(self.debounce):
                return False
            if not self._pending.is_set():
                return True
            self._pending.clear()

    def _fire(self) -> None:
        try:
            self.on_change()
            self.reindex_count += 1
        except Exception:
            logger.exception("re-index after change failed")

    @staticmethod
    def _shutdown(observer) -> None:
        try:
            observer.stop()
            observer.join(2.0)
        except RuntimeError as exc:
            logger.debug("observer shutdown: %s", exc)


__all__ = ["ChangeWatcher", "WatchTarget"]
