"""
Tests for the /voice-channel-log command.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import discord
import pytest
import pytest_asyncio

from cogs.voice.commands import VoiceCommands
from services.stats_service import StatsService
from tests.factories import make_bot, make_interaction, make_member, make_role, make_settings
from tests.factories.config_factories import ADMIN_ROLE_ID
from utils.errors import DatabaseError
from utils.types import VoiceRecord


def _admin():
    return make_member(1, "admin", roles=[make_role(ADMIN_ROLE_ID, "Admin")])


def _stats(available=True, records=None, error=None):
    stats = MagicMock()
    stats.available = available
    stats.top_records = AsyncMock(return_value=records or [], side_effect=error)
    return stats


def _cog(stats, settings=None):
    bot = make_bot()
    bot.settings = settings or make_settings()
    bot.services = SimpleNamespace(stats=stats)
    return VoiceCommands(bot)


async def _invoke(cog, interaction):
    await cog.voice_channel_log.callback(cog, interaction)


class TestVoiceChannelLog:
    @pytest.mark.asyncio
    async def test_non_admin_is_rejected(self):
        stats = _stats()
        cog = _cog(stats)
        interaction = make_interaction(user=make_member(2, "pleb", roles=[make_role(1, "Member")]))

        await _invoke(cog, interaction)

        message = interaction.messages[0]
        assert message["content"] == "❌ You need administrator permissions to use this command."
        assert message["ephemeral"] is True
        stats.top_records.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unconfigured_admin_role_rejects_everyone(self):
        cog = _cog(_stats(), settings=make_settings(admin_role_id=None))
        interaction = make_interaction(user=_admin())

        await _invoke(cog, interaction)

        assert interaction.messages[0]["content"].startswith("❌ You need administrator")

    @pytest.mark.asyncio
    async def test_unavailable_database(self):
        cog = _cog(_stats(available=False))
        interaction = make_interaction(user=_admin())

        await _invoke(cog, interaction)

        message = interaction.messages[0]
        assert message["content"] == (
            "❌ Database is not available. Voice logging features are disabled."
        )
        assert message["ephemeral"] is True

    @pytest.mark.asyncio
    async def test_no_data(self):
        cog = _cog(_stats(records=[]))
        interaction = make_interaction(user=_admin())

        await _invoke(cog, interaction)

        message = interaction.messages[0]
        assert message["content"] == "📊 No voice channel data available yet."
        assert message["ephemeral"] is True

    @pytest.mark.asyncio
    async def test_query_failure(self):
        cog = _cog(_stats(error=DatabaseError("boom")))
        interaction = make_interaction(user=_admin())

        await _invoke(cog, interaction)

        message = interaction.messages[0]
        assert message["content"] == "❌ Error fetching voice channel statistics."
        assert message["ephemeral"] is True

    @pytest.mark.asyncio
    async def test_leaderboard_is_public(self):
        records = [VoiceRecord(1, "alice", 3_600_000, 2), VoiceRecord(2, "bob", 60_000, 1)]
        cog = _cog(_stats(records=records))
        interaction = make_interaction(user=_admin())

        await _invoke(cog, interaction)

        message = interaction.messages[0]
        assert message["ephemeral"] is False
        embed = message["embed"]
        assert isinstance(embed, discord.Embed)
        assert "alice" in embed.description
        assert embed.description.index("alice") < embed.description.index("bob")


class TestVoiceChannelLogWithDatabase:
    @pytest_asyncio.fixture
    async def stats(self, temp_db):
        service = StatsService(f"sqlite:///{temp_db}")
        await service.initialize()
        yield service
        await service.shutdown()

    @pytest.mark.asyncio
    async def test_shows_top_users(self, stats):
        await stats.flush(10, "carol", 5_000)
        await stats.flush(11, "dave", 9_000)
        cog = _cog(stats)
        interaction = make_interaction(user=_admin())

        await _invoke(cog, interaction)

        description = interaction.messages[0]["embed"].description
        assert description.index("dave") < description.index("carol")
