from telegram import BotCommand

from bots.bot_core import BotCore
from command_handlers.cancel_handler import CancelHandler
from command_handlers.conversations.registration_conversation import RegistrationConversation
from command_handlers.start_handler import StartHandler
from config.settings import Settings
from controllers.registration_controller import FakeRegistrationController, RegistrationControlling
from conversations.turn_router import TurnRouter
from forms.registration_form import RegistrationForm
from localization import Key
from providers.state_provider_impl import InMemoryDialogStateStore, InMemoryProfileStore

import logging

logger = logging.getLogger(__name__)


def build_router(settings: Settings, controller: RegistrationControlling) -> TurnRouter:
    """Assemble the turn router and registration form from settings."""
    texts = Key.for_locale(settings.locale)
    form = RegistrationForm(controller=controller, texts=texts, trigger_text=settings.trigger_text)
    return TurnRouter(
        form=form,
        profiles=InMemoryProfileStore(),
        dialogs=InMemoryDialogStateStore(),
        trigger_text=settings.trigger_text,
        scope=settings.dialog_state_scope,
        texts=texts,
    )


class RegistrationBot:
    """
    Registration bot implementation.

    This bot is responsible for:
    1. Setting up command handlers (/start, /cancel)
    2. Setting up the registration conversation (messages, choice buttons, new members)
    3. Managing the bot lifecycle
    """

    def __init__(self, settings: Settings):
        """
        Initialize the registration bot.

        Args:
            settings: Application settings, including the Telegram bot token
        """
        logger.info("Initializing registration bot...")
        texts = Key.for_locale(settings.locale)
        self.router = build_router(settings, FakeRegistrationController())
        self.core = BotCore(
            token=settings.telegram_bot_token,
            commands=[
                BotCommand("start", texts.commands.start),
                BotCommand("cancel", texts.commands.cancel),
            ],
        )
        self._setup_command_handlers(settings.trigger_text, texts)
        logger.info("Registration bot initialized")

    def _setup_command_handlers(self, trigger_text, texts):
        """Setup handlers of the registration bot.

        Command handlers go first so /start and /cancel never reach the form.
        """
        logger.info("Setting up command handlers...")
        self.core.application.add_handler(StartHandler(trigger_text, texts).get_handler())
        self.core.application.add_handler(CancelHandler(self.router).get_handler())
        logger.info("Command handlers set up")

        registration_conversation = RegistrationConversation(router=self.router)
        for handler in registration_conversation.handlers:
            self.core.application.add_handler(handler)

    def run(self):
        """Run the bot"""
        logger.info("Starting registration bot...")
        self.core.run()

    def stop(self):
        """Stop the bot"""
        logger.info("Stopping registration bot...")
        self.core.stop()
