"""Change watching: re-index when source files are modified."""

from .watcher import ChangeWatcher, WatchTarget

__all__ = ["ChangeWatcher", "WatchTarget"]
