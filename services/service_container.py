"""
Service Container

Central registry for all bot services providing dependency injection and service lifecycle management.
"""

from typing import TYPE_CHECKING, Optional

from utils.errors import ServiceError
from utils.logging import get_logger

from .activity_log_service import VoiceActivityLogger
from .audio_service import WelcomeAudioService
from .channel_registry import ChannelRegistry
from .name_allocator import NameAllocator
from .session_tracker import SessionTracker
from .stats_service import StatsService
from .voice_service import VoiceService

if TYPE_CHECKING:
    from discord.ext.commands import Bot

    from config.settings import Settings


class ServiceContainer:
    """
    Central container for managing all bot services.

    Provides a centralized access point for services throughout the bot,
    handles initialization order, and manages service dependencies.
    """

    def __init__(self, settings: "Settings", bot: Optional["Bot"] = None) -> None:
        self.logger = get_logger("services.container")
        self.settings = settings
        self.bot = bot
        self._stats: StatsService | None = None
        self._audio: WelcomeAudioService | None = None
        self._activity_log: VoiceActivityLogger | None = None
        self._voice: VoiceService | None = None
        self._initialized = False

    @property
    def stats(self) -> StatsService:
        """Get the voice statistics service."""
        if self._stats is None:
            raise ServiceError("StatsService not initialized")
        return self._stats

    @property
    def audio(self) -> WelcomeAudioService:
        """Get the welcome audio service."""
        if self._audio is None:
            raise ServiceError("WelcomeAudioService not initialized")
        return self._audio

    @property
    def activity_log(self) -> VoiceActivityLogger:
        """Get the voice activity logger."""
        if self._activity_log is None:
            raise ServiceError("VoiceActivityLogger not initialized")
        return self._activity_log

    @property
    def voice(self) -> VoiceService:
        """Get the voice service."""
        if self._voice is None:
            raise ServiceError("VoiceService not initialized")
        return self._voice

    @property
    def initialized(self) -> bool:
        return self._initialized

    async def initialize(self) -> None:
        """Initialize all services in dependency order."""
        if self._initialized:
            self.logger.warning("ServiceContainer already initialized")
            return

        try:
            self.logger.info("Initializing services")

            # Stats degrade to no-op writes instead of failing startup
            self._stats = StatsService(self.settings.database_url)
            await self._stats.initialize()
            self.logger.debug("StatsService initialized")

            self._audio = WelcomeAudioService(self.settings, self.bot)
            await self._audio.initialize()
            self.logger.debug("WelcomeAudioService initialized")

            self._activity_log = VoiceActivityLogger(self.settings, self.bot)
            await self._activity_log.initialize()
            self.logger.debug("VoiceActivityLogger initialized")

            self._voice = VoiceService(
                self.settings,
                sessions=SessionTracker(),
                registry=ChannelRegistry(),
                names=NameAllocator(self.settings.channel_names),
                stats=self._stats,
                audio=self._audio,
                activity_log=self._activity_log,
                bot=self.bot,
            )
            await self._voice.initialize()
            self.logger.debug("VoiceService initialized")

            self._initialized = True
            self.logger.info("All services initialized successfully")

        except Exception as e:
            self.logger.exception("Failed to initialize services", exc_info=e)
            raise

    async def cleanup(self) -> None:
        """Clean up all services in reverse dependency order."""
        if not self._initialized:
            return

        self.logger.info("Cleaning up services")

        if self._voice:
            await self._voice.shutdown()
            self._voice = None

        if self._activity_log:
            await self._activity_log.shutdown()
            self._activity_log = None

        if self._audio:
            await self._audio.shutdown()
            self._audio = None

        if self._stats:
            await self._stats.shutdown()
            self._stats = None

        self._initialized = False
        self.logger.info("Services cleaned up")
