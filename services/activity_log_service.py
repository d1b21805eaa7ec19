"""
Voice activity notifications posted to a log channel.
"""

from typing import TYPE_CHECKING, Optional

import discord

from helpers.embeds import create_voice_activity_embed
from utils.types import VoiceEventKind

from .base import BaseService

if TYPE_CHECKING:
    from config.settings import Settings


class VoiceActivityLogger(BaseService):
    """Sends join/leave/move embeds when voice logging is enabled."""

    def __init__(self, settings: "Settings", bot: Optional["discord.Client"] = None) -> None:
        super().__init__("activity_log")
        self.settings = settings
        self.bot = bot

    async def _initialize_impl(self) -> None:
        if self.enabled and self.settings.voice_log_channel_id is None:
            self.logger.warning("Voice logging enabled but VOICE_LOG_CHANNEL_ID is not set")

    @property
    def enabled(self) -> bool:
        return self.settings.voice_logging_enabled

    async def log_join(self, member: discord.Member, channel: discord.abc.GuildChannel) -> None:
        await self._send(VoiceEventKind.JOIN, member, after=channel)

    async def log_leave(
        self,
        member: discord.Member,
        channel: discord.abc.GuildChannel,
        duration_ms: int,
    ) -> None:
        await self._send(VoiceEventKind.LEAVE, member, before=channel, duration_ms=duration_ms)

    async def log_move(
        self,
        member: discord.Member,
        before: discord.abc.GuildChannel,
        after: discord.abc.GuildChannel,
        duration_ms: int,
    ) -> None:
        await self._send(
            VoiceEventKind.MOVE, member, before=before, after=after, duration_ms=duration_ms
        )

    async def _send(
        self,
        kind: VoiceEventKind,
        member: discord.Member,
        *,
        before: discord.abc.GuildChannel | None = None,
        after: discord.abc.GuildChannel | None = None,
        duration_ms: int | None = None,
    ) -> None:
        if not self.enabled or self.settings.voice_log_channel_id is None or self.bot is None:
            return

        log_channel = self.bot.get_channel(self.settings.voice_log_channel_id)
        if log_channel is None or not hasattr(log_channel, "send"):
            self.logger.debug("Voice log channel not found; skipping %s notification", kind.value)
            return

        try:
            embed = create_voice_activity_embed(kind, member, before, after, duration_ms)
            await log_channel.send(embed=embed)
        except discord.HTTPException as e:
            self.logger.exception(
                "Error logging voice activity", exc_info=e, extra={"user_id": member.id}
            )
