"""
Voice Commands Cog

Admin-only voice statistics leaderboard. Data access is delegated to the
StatsService.
"""

from typing import TYPE_CHECKING

import discord
from discord import app_commands
from discord.ext import commands

from helpers.constants import LEADERBOARD_LIMIT
from helpers.discord_reply import respond, send_user_error
from helpers.embeds import create_leaderboard_embed
from helpers.permissions_helper import has_admin_role
from utils.errors import DatabaseError
from utils.logging import get_logger

if TYPE_CHECKING:
    from config.settings import Settings
    from services.stats_service import StatsService

logger = get_logger(__name__)


class VoiceCommands(commands.Cog):
    """Voice statistics commands."""

    def __init__(self, bot: commands.Bot) -> None:
        self.bot = bot

    @property
    def stats_service(self) -> "StatsService":
        """Get the stats service from the bot's service container."""
        if not hasattr(self.bot, "services") or self.bot.services is None:
            raise RuntimeError("Bot services not initialized")
        return self.bot.services.stats

    @property
    def settings(self) -> "Settings":
        return self.bot.settings

    @app_commands.command(
        name="voice-channel-log",
        description="Show the top 25 users by total voice channel time (admin only)",
    )
    @app_commands.guild_only()
    async def voice_channel_log(self, interaction: discord.Interaction) -> None:
        """Post the voice time leaderboard."""
        if not has_admin_role(interaction.user, self.settings.admin_role_id):
            await send_user_error(
                interaction, "You need administrator permissions to use this command."
            )
            return

        if not self.stats_service.available:
            await send_user_error(
                interaction, "Database is not available. Voice logging features are disabled."
            )
            return

        try:
            records = await self.stats_service.top_records(LEADERBOARD_LIMIT)
        except DatabaseError as e:
            logger.exception(
                "Error fetching voice logs",
                exc_info=e,
                extra={"user_id": interaction.user.id, "command_name": "voice-channel-log"},
            )
            await send_user_error(interaction, "Error fetching voice channel statistics.")
            return

        if not records:
            await respond(interaction, "📊 No voice channel data available yet.", ephemeral=True)
            return

        await respond(interaction, embed=create_leaderboard_embed(records), ephemeral=False)
        logger.info(
            f"Voice leaderboard shown ({len(records)} users)",
            extra={"user_id": interaction.user.id, "command_name": "voice-channel-log"},
        )


async def setup(bot: commands.Bot) -> None:
    """Set up the Voice Commands cog."""
    await bot.add_cog(VoiceCommands(bot))
