"""
Welcome audio for freshly created voice channels.

Playback is best effort: any failure is logged here and never reaches the
channel lifecycle. Disconnect timers check the connection state when they
fire instead of being cancelled.
"""

import asyncio
import shutil
from pathlib import Path
from typing import TYPE_CHECKING, Optional

import discord

from .base import BaseService

if TYPE_CHECKING:
    from config.settings import Settings


class WelcomeAudioService(BaseService):
    def __init__(self, settings: "Settings", bot: Optional["discord.Client"] = None) -> None:
        super().__init__("audio")
        self.settings = settings
        self.bot = bot
        self.ffmpeg_path: str | None = None

    async def _initialize_impl(self) -> None:
        self.ffmpeg_path = shutil.which("ffmpeg")
        if self.ffmpeg_path:
            self.logger.info("Audio playback supported (ffmpeg at %s)", self.ffmpeg_path)
        else:
            self.logger.warning("ffmpeg not found; welcome audio playback disabled")

        if not Path(self.settings.welcome_audio_path).is_file():
            self.logger.warning(
                "Welcome audio file %s not found; playback will be skipped",
                self.settings.welcome_audio_path,
            )

    @property
    def supported(self) -> bool:
        return self.ffmpeg_path is not None

    async def play_welcome(self, channel_id: int) -> None:
        """Join ``channel_id``, play the welcome clip once, then leave."""
        try:
            await asyncio.sleep(self.settings.audio_start_delay_ms / 1000.0)
            await self._play_welcome(channel_id)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            self.logger.exception(
                "Error playing welcome audio", exc_info=e, extra={"channel_id": channel_id}
            )

    async def _play_welcome(self, channel_id: int) -> None:
        if not self.supported:
            self.logger.debug("Audio playback disabled due to missing ffmpeg")
            return

        channel = self.bot.get_channel(channel_id) if self.bot else None
        if channel is None or not hasattr(channel, "connect"):
            self.logger.warning(
                "Channel not found for audio playback", extra={"channel_id": channel_id}
            )
            return

        audio_path = Path(self.settings.welcome_audio_path)
        if not audio_path.is_file():
            self.logger.info("%s not found, skipping audio playback", audio_path)
            return

        voice_client: discord.VoiceClient | None = None
        try:
            async with asyncio.timeout(self.settings.audio_emergency_ms / 1000.0):
                voice_client = await channel.connect(reconnect=False)
                await self._play_until_done(voice_client, audio_path)
        except TimeoutError:
            self.logger.warning(
                "Emergency disconnect after %sms", self.settings.audio_emergency_ms,
                extra={"channel_id": channel_id},
            )
        finally:
            if voice_client is not None and voice_client.is_connected():
                await voice_client.disconnect(force=True)
                self.logger.debug("Voice connection closed", extra={"channel_id": channel_id})

    async def _play_until_done(self, voice_client: discord.VoiceClient, audio_path: Path) -> None:
        loop = asyncio.get_running_loop()
        done = asyncio.Event()

        def _after_playback(err: Exception | None) -> None:
            if err:
                self.logger.warning("Audio player error: %s", err)
            loop.call_soon_threadsafe(done.set)

        source = discord.PCMVolumeTransformer(
            discord.FFmpegPCMAudio(str(audio_path), executable=self.ffmpeg_path),
            volume=self.settings.audio_volume,
        )
        voice_client.play(source, after=_after_playback)
        self.logger.info("Playing welcome audio", extra={"channel_id": voice_client.channel.id})

        try:
            await asyncio.wait_for(
                done.wait(), timeout=self.settings.audio_playback_limit_ms / 1000.0
            )
            self.logger.info("Audio playback finished")
        except TimeoutError:
            self.logger.info(
                "Stopping playback after %sms", self.settings.audio_playback_limit_ms
            )
            if voice_client.is_playing():
                voice_client.stop()
