"""
Voice service for managing temporary voice channels and voice session time.
"""

import asyncio
from collections.abc import Coroutine
from typing import TYPE_CHECKING, Any, Optional

import discord

from utils.tasks import spawn
from utils.types import VoiceEventKind

from .base import BaseService

if TYPE_CHECKING:
    from config.settings import Settings

    from .activity_log_service import VoiceActivityLogger
    from .audio_service import WelcomeAudioService
    from .channel_registry import ChannelRegistry
    from .name_allocator import NameAllocator
    from .session_tracker import SessionTracker
    from .stats_service import StatsService


def classify_transition(
    before_channel_id: int | None, after_channel_id: int | None
) -> VoiceEventKind | None:
    """Map a (before, after) channel pair to join/leave/move, or None if membership didn't change."""
    if before_channel_id is None and after_channel_id is not None:
        return VoiceEventKind.JOIN
    if before_channel_id is not None and after_channel_id is None:
        return VoiceEventKind.LEAVE
    if (
        before_channel_id is not None
        and after_channel_id is not None
        and before_channel_id != after_channel_id
    ):
        return VoiceEventKind.MOVE
    return None


class VoiceService(BaseService):
    """
    Creates a temporary channel when a member joins the trigger channel and
    deletes managed channels once they are empty.

    All state lives in the injected SessionTracker and ChannelRegistry and is
    only touched from the bot's event loop. Deferred deletions carry just the
    channel id and re-check the registry and live occupancy when they fire.
    """

    def __init__(
        self,
        settings: "Settings",
        sessions: "SessionTracker",
        registry: "ChannelRegistry",
        names: "NameAllocator",
        stats: "StatsService",
        audio: Optional["WelcomeAudioService"] = None,
        activity_log: Optional["VoiceActivityLogger"] = None,
        bot: Optional["discord.Client"] = None,
    ) -> None:
        super().__init__("voice")
        self.settings = settings
        self.sessions = sessions
        self.registry = registry
        self.names = names
        self.stats = stats
        self.audio = audio
        self.activity_log = activity_log
        self.bot = bot
        self._background_tasks: set[asyncio.Task] = set()
        # Users whose trigger join is still being turned into a channel
        self._users_creating_channels: set[int] = set()

    def _spawn_background_task(
        self, coro: Coroutine[Any, Any, Any], *, name: str
    ) -> asyncio.Task:
        """Create and track a background task; failures are logged by ``spawn``."""

        task = spawn(coro, name=name)
        self._background_tasks.add(task)
        task.add_done_callback(self._background_tasks.discard)
        return task

    async def _initialize_impl(self) -> None:
        self.logger.info(
            "Voice lifecycle ready: trigger=%s category=%s delete_delay=%sms protected=%s",
            self.settings.create_channel_id,
            self.settings.category_id,
            self.settings.delete_delay_ms,
            sorted(self.settings.protected_channel_ids) or "none",
        )

    async def _shutdown_impl(self) -> None:
        for task in list(self._background_tasks):
            task.cancel()
        if self._background_tasks:
            await asyncio.gather(*self._background_tasks, return_exceptions=True)
        self._background_tasks.clear()

    # ------------------------------------------------------------------
    # Event entry points
    # ------------------------------------------------------------------

    async def handle_voice_state_change(
        self,
        member: discord.Member,
        before_channel: discord.VoiceChannel | None,
        after_channel: discord.VoiceChannel | None,
    ) -> None:
        """
        Handle one voice state change for ``member``.

        Args:
            member: Discord member
            before_channel: Channel member left (if any)
            after_channel: Channel member joined (if any)
        """
        kind = classify_transition(
            before_channel.id if before_channel else None,
            after_channel.id if after_channel else None,
        )
        if kind is None:
            return

        if kind is VoiceEventKind.JOIN:
            await self._handle_join(member, after_channel)
        elif kind is VoiceEventKind.LEAVE:
            await self._handle_leave(member, before_channel)
        else:
            await self._handle_move(member, before_channel, after_channel)

    async def handle_channel_deleted(self, channel_id: int) -> None:
        """Forget a managed channel that was deleted outside the bot."""
        entry = self.registry.unregister(channel_id)
        if entry is not None:
            self.logger.info(
                f"Managed channel {entry.name} deleted externally; removed from registry",
                extra={"channel_id": channel_id},
            )

    def bootstrap_sessions(self, guilds: list[discord.Guild]) -> int:
        """Open sessions for members already in voice (e.g. after a restart)."""
        started = 0
        for guild in guilds:
            for channel in guild.voice_channels:
                for member in channel.members:
                    if not self._tracks(member) or member.id in self.sessions:
                        continue
                    self.sessions.on_join(member.id, channel.id)
                    started += 1
        self.logger.info(f"Voice session bootstrap: {started} session(s) opened")
        return started

    # ------------------------------------------------------------------
    # Transition handlers
    # ------------------------------------------------------------------

    def _tracks(self, member: discord.Member) -> bool:
        return not (self.settings.ignore_bots and member.bot)

    async def _handle_join(self, member: discord.Member, channel: discord.VoiceChannel) -> None:
        if not self._tracks(member):
            return

        self.sessions.on_join(member.id, channel.id)

        if channel.id == self.settings.create_channel_id:
            await self._create_temporary_channel(member)
            return

        self._notify_join(member, channel)

    async def _handle_leave(self, member: discord.Member, channel: discord.VoiceChannel) -> None:
        if self._tracks(member):
            elapsed = await self._close_session(member)
            # Left/Moved embeds carry a duration, so they need a session
            if self.activity_log and elapsed is not None:
                self._spawn_background_task(
                    self.activity_log.log_leave(member, channel, elapsed),
                    name=f"voice.log_leave.{member.id}",
                )

        self._maybe_schedule_cleanup(channel)

    async def _handle_move(
        self,
        member: discord.Member,
        before: discord.VoiceChannel,
        after: discord.VoiceChannel,
    ) -> None:
        if self._tracks(member):
            elapsed = await self._close_session(member)
            self.sessions.on_join(member.id, after.id)
            if self.activity_log and elapsed is not None:
                self._spawn_background_task(
                    self.activity_log.log_move(member, before, after, elapsed),
                    name=f"voice.log_move.{member.id}",
                )

        self._maybe_schedule_cleanup(before)

    async def _close_session(self, member: discord.Member) -> int | None:
        elapsed = self.sessions.on_leave_or_move(member.id)
        if elapsed is not None:
            await self.stats.flush(member.id, member.name, elapsed)
        return elapsed

    def _notify_join(self, member: discord.Member, channel: discord.VoiceChannel) -> None:
        if self.activity_log:
            self._spawn_background_task(
                self.activity_log.log_join(member, channel),
                name=f"voice.log_join.{member.id}",
            )

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    async def _create_temporary_channel(self, member: discord.Member) -> None:
        """Create a channel for ``member`` and move them into it."""
        if member.id in self._users_creating_channels:
            self.logger.debug(
                "Ignoring duplicate trigger join; creation already in progress",
                extra={"user_id": member.id},
            )
            return

        self._users_creating_channels.add(member.id)
        try:
            guild = member.guild
            name = self.names.allocate(self.registry.active_names())
            category = self._resolve_category(guild)

            try:
                channel = await guild.create_voice_channel(
                    name,
                    category=category,
                    user_limit=0,
                    reason=f"Temporary voice channel for {member}",
                )
            except discord.HTTPException as e:
                self.logger.exception(
                    f"Error creating voice channel for {member.display_name}",
                    exc_info=e,
                    extra={"user_id": member.id, "guild_id": guild.id},
                )
                return

            self.registry.register(channel.id, name)

            try:
                await member.move_to(channel, reason="Moved into temporary voice channel")
            except (discord.HTTPException, discord.ClientException) as e:
                self.logger.exception(
                    f"Created {name} but could not move {member.display_name} into it",
                    exc_info=e,
                    extra={"user_id": member.id, "channel_id": channel.id},
                )
                self._schedule_cleanup(channel.id)
                return

            self.sessions.on_join(member.id, channel.id)

            if self.audio:
                self._spawn_background_task(
                    self.audio.play_welcome(channel.id),
                    name=f"voice.welcome_audio.{channel.id}",
                )
            self._notify_join(member, channel)

            self.logger.info(
                f"Created and moved user to: {name}",
                extra={"user_id": member.id, "channel_id": channel.id},
            )
        finally:
            self._users_creating_channels.discard(member.id)

    def _resolve_category(self, guild: discord.Guild) -> discord.CategoryChannel | None:
        if self.settings.category_id is None:
            return None
        category = guild.get_channel(self.settings.category_id)
        if isinstance(category, discord.CategoryChannel):
            return category
        self.logger.warning(
            "Configured category %s not found; creating channel without a category",
            self.settings.category_id,
            extra={"guild_id": guild.id},
        )
        return None

    # ------------------------------------------------------------------
    # Reclamation
    # ------------------------------------------------------------------

    def _is_reclaimable(self, channel_id: int) -> bool:
        return self.registry.is_managed(channel_id) and not self.settings.is_protected(channel_id)

    def _maybe_schedule_cleanup(self, channel: discord.VoiceChannel) -> None:
        """Schedule a deferred delete if ``channel`` is ours and empty right now."""
        if not self._is_reclaimable(channel.id):
            return
        if len(channel.members) > 0:
            self.logger.debug(
                f"Channel {channel.name} still has {len(channel.members)} members, no cleanup needed"
            )
            return
        self._schedule_cleanup(channel.id)

    def _schedule_cleanup(self, channel_id: int) -> asyncio.Task:
        return self._spawn_background_task(
            self._cleanup_after_delay(channel_id),
            name=f"voice.cleanup_after_delay.{channel_id}",
        )

    async def _cleanup_after_delay(self, channel_id: int) -> None:
        await asyncio.sleep(self.settings.delete_delay_seconds)

        if not self._is_reclaimable(channel_id):
            return

        channel = self.bot.get_channel(channel_id) if self.bot else None
        if channel is None:
            entry = self.registry.unregister(channel_id)
            self.logger.info(
                f"Channel {entry.name if entry else channel_id} already gone; removed from registry",
                extra={"channel_id": channel_id},
            )
            return

        if len(channel.members) > 0:
            self.logger.info(
                f"Channel {channel_id} no longer empty, skipping cleanup",
                extra={"channel_id": channel_id},
            )
            return

        try:
            await channel.delete(reason="Empty temporary voice channel cleanup")
        except discord.NotFound:
            self.logger.info(f"Channel {channel_id} already deleted during cleanup")
        except discord.HTTPException as e:
            # Still registered, so a later empty check can retry
            self.logger.exception(
                "Error deleting channel", exc_info=e, extra={"channel_id": channel_id}
            )
            return

        entry = self.registry.unregister(channel_id)
        self.logger.info(
            f"Deleted empty channel: {entry.name if entry else 'Unknown'}",
            extra={"channel_id": channel_id},
        )
