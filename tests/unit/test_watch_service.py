#!/usr/bin/env python3
"""
Unit tests for the directory watch service and its event handler.
"""

import queue
import shutil
import sys
import threading
import time

import pytest
from watchdog.events import DirCreatedEvent, FileCreatedEvent, FileModifiedEvent

from thumbgallery.exceptions import WatchSubscriptionError
from thumbgallery.services.thumbnail_pipeline import (
    CreationEventHandler,
    DirectoryWatchService,
    WatchEvent,
)


class FailingObserver:
    """Observer stand-in whose start() fails like an exhausted inotify limit."""

    def schedule(self, handler, path, recursive=False):
        return None

    def start(self):
        raise OSError(28, "inotify watch limit reached")


@pytest.mark.unit
class TestCreationEventHandler:
    """Filtering and queueing of watchdog events."""

    @pytest.fixture
    def events(self):
        return queue.Queue(maxsize=10)

    @pytest.fixture
    def handler(self, events):
        return CreationEventHandler(events, threading.Event())

    def test_file_creation_is_queued(self, handler, events):
        handler.dispatch(FileCreatedEvent("/img/photos/a.jpg"))

        event = events.get_nowait()
        assert isinstance(event, WatchEvent)
        assert event.kind == "created"
        assert event.paths == ("/img/photos/a.jpg",)

    def test_events_compare_by_kind_and_paths(self, handler, events):
        handler.dispatch(FileCreatedEvent("/img/a.jpg"))
        handler.dispatch(FileCreatedEvent("/img/a.jpg"))

        assert events.get_nowait() == events.get_nowait()

    def test_bytes_paths_are_decoded(self, handler, events):
        handler.dispatch(FileCreatedEvent(b"/img/a.jpg"))

        assert events.get_nowait().paths == ("/img/a.jpg",)

    def test_directory_creation_is_ignored(self, handler, events):
        handler.dispatch(DirCreatedEvent("/img/new_folder"))

        assert events.empty()

    def test_other_event_kinds_are_ignored(self, handler, events):
        handler.dispatch(FileModifiedEvent("/img/a.jpg"))

        assert events.empty()

    def test_full_queue_blocks_until_consumed(self):
        events = queue.Queue(maxsize=1)
        handler = CreationEventHandler(events, threading.Event())
        handler.dispatch(FileCreatedEvent("/img/first.jpg"))

        producer = threading.Thread(
            target=handler.dispatch, args=(FileCreatedEvent("/img/second.jpg"),)
        )
        producer.start()
        time.sleep(0.2)
        assert producer.is_alive()

        assert events.get(timeout=1).paths == ("/img/first.jpg",)
        producer.join(timeout=2)
        assert not producer.is_alive()
        assert events.get(timeout=1).paths == ("/img/second.jpg",)

    def test_closed_handler_stops_blocking(self):
        events = queue.Queue(maxsize=1)
        closed = threading.Event()
        handler = CreationEventHandler(events, closed)
        handler.dispatch(FileCreatedEvent("/img/first.jpg"))

        producer = threading.Thread(
            target=handler.dispatch, args=(FileCreatedEvent("/img/second.jpg"),)
        )
        producer.start()
        closed.set()
        producer.join(timeout=2)

        assert not producer.is_alive()


@pytest.mark.unit
class TestDirectoryWatchService:
    """Subscription lifecycle."""

    def test_missing_root_raises(self, tmp_path):
        service = DirectoryWatchService(tmp_path / "missing")

        with pytest.raises(WatchSubscriptionError):
            service.subscribe()
        assert service.subscribed is False

    def test_observer_start_failure_raises(self, tmp_path):
        service = DirectoryWatchService(tmp_path, observer_factory=FailingObserver)

        with pytest.raises(WatchSubscriptionError, match="inotify watch limit"):
            service.subscribe()
        assert service.is_alive is False

    def test_next_event_times_out(self, tmp_path):
        service = DirectoryWatchService(tmp_path)

        assert service.next_event(timeout=0.01) is None

    def test_close_without_subscribe(self, tmp_path):
        service = DirectoryWatchService(tmp_path)
        service.close()
        assert service.is_alive is False


@pytest.mark.integration
class TestDirectoryWatchServiceLive:
    """Real watchdog observer on a temporary tree."""

    def test_reports_files_created_in_new_subdirectories(self, tmp_path):
        service = DirectoryWatchService(tmp_path)
        service.subscribe()
        try:
            assert service.is_alive is True
            nested = tmp_path / "new" / "deeper"
            nested.mkdir(parents=True)
            time.sleep(0.3)
            (nested / "file.jpg").write_bytes(b"x")

            deadline = time.monotonic() + 10
            seen = []
            while time.monotonic() < deadline:
                event = service.next_event(timeout=0.2)
                if event is not None:
                    seen.extend(event.paths)
                    if any(p.endswith("file.jpg") for p in seen):
                        break

            assert any(p.endswith("file.jpg") for p in seen)
            assert not any(p.endswith("deeper") for p in seen)
        finally:
            service.close()

        assert service.is_alive is False

    @pytest.mark.skipif(
        not sys.platform.startswith("linux"),
        reason="inotify ends the watch when its root is deleted",
    )
    def test_deleted_root_ends_the_watch(self, tmp_path):
        root = tmp_path / "images"
        root.mkdir()
        service = DirectoryWatchService(root)
        service.subscribe()
        try:
            assert service.is_alive is True

            shutil.rmtree(root)

            deadline = time.monotonic() + 5
            while service.is_alive and time.monotonic() < deadline:
                time.sleep(0.05)

            assert service.is_alive is False
        finally:
            service.close()
