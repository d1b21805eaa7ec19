"""
Registry of temporary voice channels created by the bot.

Membership in this registry is what makes a channel eligible for automatic
deletion; nothing else is consulted.
"""

import time
from collections.abc import Callable

from utils.types import ManagedChannel


class ChannelRegistry:
    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._channels: dict[int, ManagedChannel] = {}

    def register(self, channel_id: int, name: str) -> ManagedChannel:
        entry = ManagedChannel(channel_id=channel_id, name=name, created_at=self._clock())
        self._channels[channel_id] = entry
        return entry

    def is_managed(self, channel_id: int) -> bool:
        return channel_id in self._channels

    def unregister(self, channel_id: int) -> ManagedChannel | None:
        """Remove a channel; returns the removed entry, or None if it wasn't registered."""
        return self._channels.pop(channel_id, None)

    def lookup(self, channel_id: int) -> str | None:
        entry = self._channels.get(channel_id)
        return entry.name if entry else None

    def get(self, channel_id: int) -> ManagedChannel | None:
        return self._channels.get(channel_id)

    def active_names(self) -> set[str]:
        """Display names of every channel currently registered."""
        return {entry.name for entry in self._channels.values()}

    def __contains__(self, channel_id: object) -> bool:
        return channel_id in self._channels

    def __len__(self) -> int:
        return len(self._channels)
