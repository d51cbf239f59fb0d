"""
Base worker class for thumbgallery background workers.

Provides common interfaces and utilities for all worker types.

Lifecycle:
- start()/stop() manage the worker: they set self.running and call
  initialize()/cleanup().
- Workers that process continuously implement run() and schedule it
  from their own start().
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from loguru import logger


class BaseWorker(ABC):
    """
    Abstract base class for all thumbgallery workers.

    Each worker is responsible for a specific domain of functionality.
    """

    def __init__(self, name: str):
        """
        Initialize base worker.

        Args:
            name: Worker name for logging and identification
        """
        self.name = name
        self.running = False
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        """Get the event loop the worker runs on."""
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    async def start(self) -> None:
        """Start the worker."""
        logger.info(f"Starting {self.name} worker")
        self.running = True
        await self.initialize()

    async def stop(self) -> None:
        """Stop the worker."""
        logger.info(f"Stopping {self.name} worker")
        self.running = False
        await self.cleanup()

    @abstractmethod
    async def initialize(self) -> None:
        """Initialize worker-specific resources."""
        pass

    @abstractmethod
    async def cleanup(self) -> None:
        """Cleanup worker-specific resources."""
        pass

    async def run_in_executor(self, func, *args) -> Any:
        """Run a blocking function in the default executor."""
        return await self.loop.run_in_executor(None, func, *args)

    def get_status(self) -> Dict[str, Any]:
        """
        Get current worker status.

        Returns:
            Dictionary with worker status information
        """
        return {
            "name": self.name,
            "running": self.running,
            "worker_type": self.__class__.__name__,
        }

    def is_healthy(self) -> bool:
        """
        Check if worker is in a healthy state.

        Returns:
            True if worker is healthy, False otherwise
        """
        return self.running
