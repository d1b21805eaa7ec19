"""
Start/stop lifecycle shared by the bot's services.
"""

import asyncio
from abc import ABC, abstractmethod

from utils.logging import get_logger


class BaseService(ABC):
    """
    A service is started once by the ServiceContainer and stopped on close.

    ``initialize`` is serialized and idempotent; a failing ``_initialize_impl``
    leaves the service stopped and propagates. ``shutdown`` never raises, so
    one broken service cannot keep the others from stopping.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self.logger = get_logger(f"services.{name}")
        self._initialized = False
        self._start_lock = asyncio.Lock()

    @property
    def initialized(self) -> bool:
        return self._initialized

    async def initialize(self) -> None:
        async with self._start_lock:
            if self._initialized:
                return
            try:
                await self._initialize_impl()
            except Exception as e:
                self.logger.exception("%s service failed to start", self.name, exc_info=e)
                raise
            self._initialized = True
            self.logger.info("%s service started", self.name)

    async def shutdown(self) -> None:
        if not self._initialized:
            return
        try:
            await self._shutdown_impl()
        except Exception as e:
            self.logger.exception("%s service failed to stop cleanly", self.name, exc_info=e)
        finally:
            self._initialized = False
            self.logger.info("%s service stopped", self.name)

    @abstractmethod
    async def _initialize_impl(self) -> None: ...

    async def _shutdown_impl(self) -> None:
        return None
