"""
Test Factories Module

Centralized factory functions for creating test objects.
Provides DRY utilities for Discord mocks and settings.
"""

from .async_helpers import drain_tasks
from .config_factories import make_config, make_settings, temp_config_file
from .db_helpers import fetch_voice_record
from .discord_factories import (
    FakeBot,
    FakeChannel,
    FakeGuild,
    FakeInteraction,
    FakeMember,
    FakeRole,
    FakeUser,
    FakeVoiceChannel,
    FakeVoiceState,
    make_bot,
    make_guild,
    make_interaction,
    make_member,
    make_role,
    make_voice_channel,
)

__all__ = [
    "FakeBot",
    "FakeChannel",
    "FakeGuild",
    "FakeInteraction",
    "FakeMember",
    "FakeRole",
    "FakeUser",
    "FakeVoiceChannel",
    "FakeVoiceState",
    "drain_tasks",
    "fetch_voice_record",
    "make_bot",
    "make_config",
    "make_guild",
    "make_interaction",
    "make_member",
    "make_role",
    "make_settings",
    "make_voice_channel",
    "temp_config_file",
]
