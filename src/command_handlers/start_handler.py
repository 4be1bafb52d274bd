from telegram import Update
from telegram.ext import CommandHandler, ContextTypes
from localization import Key, LocaleKeyAccessor
import logging

logger = logging.getLogger(__name__)

class StartHandler:
    """Handler for the /start command."""

    def __init__(self, trigger_text: str, texts: LocaleKeyAccessor = Key):
        self.trigger_text = trigger_text
        self.texts = texts

    def get_handler(self) -> CommandHandler:
        """Get the start command handler.

        Returns:
            CommandHandler: The start command handler
        """
        return CommandHandler("start", self._start_command)

    async def _start_command(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Handle the /start command by telling the user how to register.

        Args:
            update: The update object
            context: The context object
        """
        try:
            logger.info(f"Start command received from user {update.effective_user.id}")
            await update.message.reply_text(self.texts.start.greeting.format(trigger=self.trigger_text))
            logger.info("Start command response sent")
        except Exception as e:
            logger.error(f"Error in start command: {str(e)}", exc_info=True)
            raise
