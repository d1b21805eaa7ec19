"""
Display-name selection for new temporary channels.
"""

import random
from collections.abc import Iterable, Sequence

from helpers.constants import DEFAULT_CHANNEL_NAMES, NAME_SUFFIX_MAX


class NameAllocator:
    """
    Picks a channel name from a fixed pool, avoiding names already in use.

    Once every pool name is taken a random pool name gets a numeric suffix
    in [1, NAME_SUFFIX_MAX]. That fallback can collide; it is not retried.
    """

    def __init__(
        self,
        pool: Sequence[str] = DEFAULT_CHANNEL_NAMES,
        rng: random.Random | None = None,
    ) -> None:
        if not pool:
            raise ValueError("Channel name pool must not be empty")
        self.pool: tuple[str, ...] = tuple(pool)
        self._rng = rng or random.Random()

    def allocate(self, active_names: Iterable[str]) -> str:
        used = set(active_names)
        available = [name for name in self.pool if name not in used]
        if available:
            return self._rng.choice(available)

        base = self._rng.choice(self.pool)
        return f"{base} {self._rng.randint(1, NAME_SUFFIX_MAX)}"
