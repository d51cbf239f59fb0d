# thumbgallery/worker.py
"""
Standalone thumbnail sync process.

Runs the reconciliation pass and the watch session without the web
server, until SIGINT/SIGTERM.
"""

import asyncio
import contextlib
import signal

from .config import Settings, get_settings
from .enums import LogEmoji, LoggerName, LogSource
from .services.logger import get_service_logger, initialize_global_logger
from .workers.thumbnail_sync_worker import ThumbnailSyncWorker

logger = get_service_logger(LoggerName.SYSTEM, LogSource.WORKER)


async def run_worker(settings: Settings) -> None:
    """Run the sync worker until a termination signal arrives."""
    stop_requested = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        # Not available on Windows event loops; Ctrl+C still interrupts there
        with contextlib.suppress(NotImplementedError):
            loop.add_signal_handler(sig, stop_requested.set)

    worker = ThumbnailSyncWorker.from_settings(settings)
    await worker.start()
    try:
        await stop_requested.wait()
    finally:
        await worker.stop()


def main() -> None:
    settings = get_settings()
    initialize_global_logger(settings.log_level, settings.log_file)
    settings.ensure_directories()
    logger.info("Thumbnail sync worker process starting", emoji=LogEmoji.STARTUP)
    asyncio.run(run_worker(settings))


if __name__ == "__main__":
    main()
