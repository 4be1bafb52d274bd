from typing import List

from telegram import BotCommand
from telegram.ext import Application
import logging

logger = logging.getLogger(__name__)

class BotCore:
    """
    Core bot implementation with common functionality.

    This class handles:
    1. Bot initialization
    2. Application setup
    3. Registering the command menu once the bot is up
    """

    def __init__(self, token: str, commands: List[BotCommand]):
        """
        Initialize the bot core.

        Args:
            token: Telegram bot token
            commands: Commands to publish in the bot menu
        """
        logger.info("Initializing bot core...")
        self.commands = commands
        builder = Application.builder().token(token)
        builder.post_init(self._register_bot_commands)
        self.application = builder.build()
        logger.info("Bot core initialized")

    def run(self):
        """Run the bot"""
        logger.info("Starting bot...")
        self.application.run_polling()

    def stop(self):
        """Stop the bot"""
        logger.info("Stopping bot...")
        self.application.stop()

    async def _register_bot_commands(self, application: Application):
        """Register bot commands once the application is ready."""
        await application.bot.set_my_commands(commands=self.commands)
