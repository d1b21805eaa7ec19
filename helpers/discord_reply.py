"""
Centralized Discord reply helpers for consistent message delivery.

Slash-command errors are always ephemeral; every send failure is logged
here instead of propagating into the command.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import discord

from utils.logging import get_logger

if TYPE_CHECKING:
    from discord import Embed, Interaction

logger = get_logger(__name__)


async def respond(
    interaction: Interaction,
    content: str | None = None,
    *,
    embed: Embed | None = None,
    ephemeral: bool = True,
) -> None:
    """
    Reply to an interaction, falling back to a followup if it was already answered.

    Args:
        interaction: Discord interaction
        content: Optional text content
        embed: Optional embed
        ephemeral: Whether to send as ephemeral (default: True)
    """
    kwargs: dict = {"ephemeral": ephemeral}
    if content:
        kwargs["content"] = content
    if embed:
        kwargs["embed"] = embed

    try:
        if interaction.response.is_done():
            await interaction.followup.send(**kwargs)
        else:
            await interaction.response.send_message(**kwargs)
    except discord.NotFound:
        logger.warning("Interaction expired before response could be sent")
    except discord.HTTPException as e:
        logger.exception(f"Failed to send response: {e}")


async def send_user_error(interaction: Interaction, text: str) -> None:
    """Send an ephemeral error, prefixing ❌ when the text lacks it."""
    if not text.startswith("❌"):
        text = f"❌ {text}"
    await respond(interaction, text, ephemeral=True)
