# thumbgallery/services/thumbnail_pipeline/services/watch_service.py
"""
Directory Watch Service - filesystem creation notifications for the image tree.

watchdog's observer thread produces events; a bounded FIFO queue hands
them to whoever consumes next_event(). When the queue is full the
observer thread blocks instead of dropping events.
"""

import os
import queue
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Tuple, Union

from watchdog.events import EVENT_TYPE_CREATED, FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from ....constants import DEFAULT_WATCH_QUEUE_SIZE
from ....enums import LogEmoji, LoggerName, LogSource
from ....exceptions import WatchSubscriptionError
from ....services.logger import get_service_logger

logger = get_service_logger(LoggerName.DIRECTORY_WATCHER, LogSource.WORKER)

# Granularity of the observer thread's blocking put, so close() never hangs
PUT_RETRY_SECONDS = 0.5
OBSERVER_JOIN_TIMEOUT_SECONDS = 5.0


@dataclass(frozen=True)
class WatchEvent:
    """A filesystem notification as seen by the processing loop."""

    kind: str
    paths: Tuple[str, ...]


class CreationEventHandler(FileSystemEventHandler):
    """Forwards file creations into a queue; directory creations are ignored."""

    def __init__(self, events: "queue.Queue[WatchEvent]", closed: threading.Event):
        super().__init__()
        self._events = events
        self._closed = closed

    def on_created(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            return

        watch_event = WatchEvent(
            kind=EVENT_TYPE_CREATED, paths=(os.fsdecode(event.src_path),)
        )
        while not self._closed.is_set():
            try:
                self._events.put(watch_event, timeout=PUT_RETRY_SECONDS)
                return
            except queue.Full:
                logger.debug("Watch queue full, observer waiting for the consumer")


class DirectoryWatchService:
    """Recursive creation watch on one directory tree."""

    def __init__(
        self,
        root: Union[str, Path],
        queue_size: int = DEFAULT_WATCH_QUEUE_SIZE,
        observer_factory: Callable[[], Observer] = Observer,
    ):
        """
        Args:
            root: Directory to watch recursively
            queue_size: Capacity of the event queue
            observer_factory: Builds the watchdog observer (swappable in tests)
        """
        self.root = Path(root).expanduser().resolve()
        self._events: "queue.Queue[WatchEvent]" = queue.Queue(maxsize=queue_size)
        self._closed = threading.Event()
        self._handler = CreationEventHandler(self._events, self._closed)
        self._observer_factory = observer_factory
        self._observer: Optional[Observer] = None

    @property
    def subscribed(self) -> bool:
        return self._observer is not None

    @property
    def is_alive(self) -> bool:
        """
        False once the observer or any of its emitters has stopped.

        An emitter ends on its own when its watch goes away (e.g. the root
        is deleted) while the observer thread keeps running.
        """
        observer = self._observer
        if observer is None or not observer.is_alive():
            return False
        return all(emitter.is_alive() for emitter in observer.emitters)

    @property
    def pending(self) -> int:
        return self._events.qsize()

    def subscribe(self) -> None:
        """
        Start the recursive watch.

        Raises:
            WatchSubscriptionError: Root missing or the OS watch could not start
        """
        if self._observer is not None:
            return
        if not self.root.is_dir():
            raise WatchSubscriptionError(f"Cannot watch {self.root}: not a directory")

        observer = self._observer_factory()
        try:
            observer.schedule(self._handler, str(self.root), recursive=True)
            observer.start()
        except Exception as e:
            raise WatchSubscriptionError(f"Cannot watch {self.root}: {e}") from e

        self._closed.clear()
        self._observer = observer
        logger.info(f"Watching {self.root} for new files", emoji=LogEmoji.WATCH)

    def next_event(self, timeout: Optional[float] = None) -> Optional[WatchEvent]:
        """Block up to timeout seconds for the next event; None if none arrived."""
        try:
            return self._events.get(timeout=timeout)
        except queue.Empty:
            return None

    def close(self) -> None:
        """Stop the observer. Events still queued stay readable."""
        self._closed.set()
        observer, self._observer = self._observer, None
        if observer is None:
            return
        observer.stop()
        observer.join(timeout=OBSERVER_JOIN_TIMEOUT_SECONDS)
        logger.info(f"Stopped watching {self.root}", emoji=LogEmoji.STOPPED)
