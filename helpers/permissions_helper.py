"""
Permission checks for privileged commands.
"""

import discord

from utils.logging import get_logger

logger = get_logger(__name__)


def has_admin_role(user: discord.abc.User, admin_role_id: int | None) -> bool:
    """
    Return True when ``user`` is a guild member holding the configured admin role.

    With no role configured nobody qualifies.
    """
    if admin_role_id is None:
        logger.debug("Admin role not configured; denying access")
        return False
    roles = getattr(user, "roles", None)
    if not roles:
        return False
    return any(role.id == admin_role_id for role in roles)
