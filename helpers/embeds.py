"""
Embed Helper Module

Builds the Discord embeds used by the voice activity log and the
statistics report.
"""

from collections.abc import Sequence

import discord

from helpers.constants import (
    COLOR_JOIN,
    COLOR_LEAVE,
    COLOR_MOVE,
    COLOR_REPORT,
    LEADERBOARD_LIMIT,
)
from helpers.formatting import format_duration, format_leaderboard_table
from utils.types import VoiceEventKind, VoiceRecord


def _channel_name(channel: discord.abc.GuildChannel | None) -> str:
    return channel.name if channel is not None else "Unknown"


def create_voice_activity_embed(
    kind: VoiceEventKind,
    member: discord.Member,
    before: discord.abc.GuildChannel | None = None,
    after: discord.abc.GuildChannel | None = None,
    duration_ms: int | None = None,
) -> discord.Embed:
    """
    Build the log embed for a join, leave or move.

    Args:
        kind: Which transition happened.
        member: The member whose voice state changed.
        before: Channel the member left (leave/move).
        after: Channel the member entered (join/move).
        duration_ms: Time spent in ``before``, when known.

    Returns:
        discord.Embed: Embed ready to send to the log channel.
    """
    embed = discord.Embed(timestamp=discord.utils.utcnow())
    embed.set_author(name=member.name, icon_url=member.display_avatar.url)
    user_value = f"<@{member.id}>"

    if kind is VoiceEventKind.JOIN:
        embed.colour = discord.Colour(COLOR_JOIN)
        embed.title = "🔊 User Joined Voice Channel"
        embed.add_field(name="Channel", value=_channel_name(after), inline=True)
        embed.add_field(name="User", value=user_value, inline=True)
    elif kind is VoiceEventKind.LEAVE:
        embed.colour = discord.Colour(COLOR_LEAVE)
        embed.title = "🔇 User Left Voice Channel"
        embed.add_field(name="Channel", value=_channel_name(before), inline=True)
        embed.add_field(name="User", value=user_value, inline=True)
        if duration_ms is not None:
            embed.add_field(name="Duration", value=format_duration(duration_ms), inline=True)
    else:
        embed.colour = discord.Colour(COLOR_MOVE)
        embed.title = "🔄 User Moved Voice Channel"
        embed.add_field(name="From", value=_channel_name(before), inline=True)
        embed.add_field(name="To", value=_channel_name(after), inline=True)
        embed.add_field(name="User", value=user_value, inline=True)
        if duration_ms is not None:
            embed.add_field(
                name="Time in Previous", value=format_duration(duration_ms), inline=True
            )

    return embed


def create_leaderboard_embed(records: Sequence[VoiceRecord]) -> discord.Embed:
    """Embed holding the ranked voice statistics table."""
    return discord.Embed(
        title=f"🎤 Top {LEADERBOARD_LIMIT} Voice Channel Statistics",
        description=format_leaderboard_table(records),
        color=COLOR_REPORT,
        timestamp=discord.utils.utcnow(),
    )
