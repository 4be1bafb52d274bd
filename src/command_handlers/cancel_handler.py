from telegram import Update
from telegram.ext import CommandHandler, ContextTypes
import logging

from conversations.turn_router import TurnRouter

logger = logging.getLogger(__name__)

class CancelHandler:
    """Handler for the /cancel command."""

    def __init__(self, router: TurnRouter):
        self.router = router

    def get_handler(self) -> CommandHandler:
        """Get the cancel command handler.

        Returns:
            CommandHandler: The cancel command handler
        """
        return CommandHandler("cancel", self._cancel_command)

    async def _cancel_command(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Handle the /cancel command.

        Aborts the registration in progress for this user, if any.

        Args:
            update: The update object
            context: The context object
        """
        try:
            logger.info(f"Cancel command received from user {update.effective_user.id}")
            messages = await self.router.cancel(update.effective_user.id, update.effective_chat.id)
            for message in messages:
                await update.message.reply_text(message.text)
            logger.info("Cancel command response sent")
        except Exception as e:
            logger.error(f"Error in cancel command: {str(e)}", exc_info=True)
            raise
