import os
import time

import discord
from discord.ext import commands
from dotenv import load_dotenv

from config.config_loader import ConfigLoader
from config.settings import Settings, load_settings
from utils.errors import TempVoiceError
from utils.logging import get_logger

# Initialize logger
logger = get_logger(__name__)

# Load environment variables
load_dotenv()

# Configure intents - start from none and enable only what's required
intents = discord.Intents.none()
intents.guilds = True  # Required: Guild events, channels, categories
intents.members = True  # Required: Member objects and roles for the admin check
intents.voice_states = True  # Required: Voice channel join/leave for voice system

# List of initial extensions to load
initial_extensions = [
    "cogs.voice.events",
    "cogs.voice.commands",
]


class MyBot(commands.Bot):
    """Bot with project-specific attributes and helpers."""

    def __init__(self, *args, settings: Settings | None = None, **kwargs) -> None:
        super().__init__(*args, **kwargs)

        # Assign the entire config to the bot instance
        self.config = ConfigLoader.load_config()
        self.settings = settings or load_settings(self.config)
        self.services = None

        # Initialize uptime tracking
        self.start_time = time.monotonic()

    async def setup_hook(self) -> None:
        """Initialize services, load cogs, and sync commands."""
        from services.service_container import ServiceContainer

        self.services = ServiceContainer(self.settings, self)
        await self.services.initialize()
        logger.info("ServiceContainer initialized")

        for ext in initial_extensions:
            try:
                await self.load_extension(ext)
                logger.info(f"Loaded extension: {ext}")
            except commands.ExtensionError as e:
                logger.exception(f"Failed to load extension {ext}", exc_info=e)
                raise

        # Sync the command tree after loading all cogs
        try:
            await self.tree.sync()
            logger.info("All commands synced globally.")
        except discord.HTTPException as e:
            logger.exception("Failed to sync commands", exc_info=e)

        logger.info("Registered commands: ")
        for command in self.tree.walk_commands():
            logger.info(
                f"- Command: {command.name}, Description: {command.description}"
            )

    async def on_ready(self) -> None:
        """Called when the bot is ready."""
        if not self.user:
            logger.warning("Bot user is not initialized")
            return
        logger.info(f"Logged in as {self.user} (ID: {self.user.id})")
        logger.info("Bot is ready and online!")

        settings = self.settings
        stats_available = self.services is not None and self.services.stats.available
        audio_supported = self.services is not None and self.services.audio.supported
        logger.info(f"Config: {ConfigLoader.summary()}")
        logger.info(f"Create channel ID: {settings.create_channel_id}")
        logger.info(f"Category ID: {settings.category_id}")
        logger.info(f"Delete delay: {settings.delete_delay_ms}ms")
        logger.info(
            f"Protected channels: {sorted(settings.protected_channel_ids) or 'None'}"
        )
        logger.info(f"Available channel names: {len(settings.channel_names)}")
        logger.info(f"Audio playback: {'Enabled' if audio_supported else 'Disabled'}")
        logger.info(f"Audio volume: {settings.audio_volume}")
        logger.info(
            f"Voice logging: {'Enabled' if settings.voice_logging_enabled else 'Disabled'}"
        )
        logger.info(
            f"Voice time tracking: {'Enabled' if stats_available else 'Disabled (no database)'}"
        )

        for guild in self.guilds:
            await self.check_bot_permissions(guild)

    async def check_bot_permissions(self, guild: discord.Guild) -> None:
        """Verify required guild-level permissions and log any missing ones."""
        required_permissions = [
            "manage_channels",
            "move_members",
            "view_channel",
            "connect",
            "speak",
            "send_messages",
            "embed_links",
            "use_application_commands",
        ]

        if not guild or not guild.me:
            logger.warning(
                "Bot permissions cannot be checked because the bot is not in the guild or the guild is None."
            )
            return

        bot_member = guild.me
        if missing_permissions := [
            perm
            for perm in required_permissions
            if not getattr(bot_member.guild_permissions, perm, False)
        ]:
            logger.warning(
                f"Missing permissions in guild '{guild.name}': {', '.join(missing_permissions)}"
            )
        else:
            logger.info(
                f"All required permissions are present in guild '{guild.name}'."
            )

    async def close(self) -> None:
        """
        Closes the bot and cleans up all resources.
        """
        logger.info("Shutting down the bot.")

        # Cleanup services
        if self.services:
            try:
                await self.services.cleanup()
                logger.info("Services cleaned up")
            except Exception as e:
                logger.exception("Error cleaning up services", exc_info=e)

        # Call parent close
        await super().close()


def main() -> None:
    token = os.getenv("DISCORD_TOKEN")
    if not token:
        logger.critical("DISCORD_TOKEN not found in environment variables.")
        raise ValueError("DISCORD_TOKEN not set.")

    try:
        bot = MyBot(command_prefix=commands.when_mentioned, intents=intents)
    except TempVoiceError as e:
        logger.critical("Bot could not be configured", exc_info=e)
        raise

    try:
        bot.run(token, log_handler=None)
    except discord.LoginFailure as e:
        logger.critical("Failed to log in to Discord", exc_info=e)
        raise


if __name__ == "__main__":
    main()
