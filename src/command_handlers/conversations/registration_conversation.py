import logging
from typing import List, Optional, Tuple

from telegram import InlineKeyboardButton, InlineKeyboardMarkup, Update
from telegram.ext import BaseHandler, CallbackContext, CallbackQueryHandler, MessageHandler, filters

from command_handlers.conversations.conversation_flow import ConversationFlow
from conversations.turn_router import TurnRouter
from models.enums import FormStep
from models.models import ChannelAccount, OutgoingMessage

logger = logging.getLogger(__name__)

CHOICE_PREFIX = "choice:"


class RegistrationConversation(ConversationFlow):
    """
    Telegram front end of the registration form.

    Text messages and inline-keyboard answers are both handed to the turn
    router as plain text; the router decides whether the form runs. Choice
    prompts are rendered as inline keyboards whose callback data carries the
    step being answered and the option label, so presses on an old keyboard
    are ignored once the form has moved on.
    """

    def __init__(self, router: TurnRouter):
        self.router = router

    @property
    def handlers(self) -> List[BaseHandler]:
        return [
            MessageHandler(filters.StatusUpdate.NEW_CHAT_MEMBERS, self.welcome_members),
            CallbackQueryHandler(self.handle_choice, pattern=f"^{CHOICE_PREFIX}"),
            MessageHandler(filters.UpdateType.MESSAGE & filters.TEXT & ~filters.COMMAND, self.handle_message),
        ]

    async def handle_message(self, update: Update, context: CallbackContext):
        user = update.effective_user
        chat = update.effective_chat
        text = update.message.text

        messages = await self.router.on_message(user.id, chat.id, text)
        if messages:
            logger.info(f"Registration turn for user {user.id} produced {len(messages)} message(s)")
        await self._send(context, chat.id, messages)

    async def handle_choice(self, update: Update, context: CallbackContext):
        query = update.callback_query
        await query.answer()

        step, label = self.parse_choice(query.data)
        # The keyboard has been used; drop it so it can't be pressed twice
        await query.edit_message_reply_markup(reply_markup=None)

        user = update.effective_user
        chat = update.effective_chat
        messages = await self.router.on_message(user.id, chat.id, label, expected_step=step)
        await self._send(context, chat.id, messages)

    async def welcome_members(self, update: Update, context: CallbackContext):
        members = [
            ChannelAccount(id=member.id, name=member.full_name)
            for member in update.message.new_chat_members
        ]
        messages = self.router.on_members_added(members, bot_id=context.bot.id)
        await self._send(context, update.effective_chat.id, messages)

    async def _send(self, context: CallbackContext, chat_id: int, messages: List[OutgoingMessage]):
        for message in messages:
            await context.bot.send_message(
                chat_id=chat_id,
                text=message.text,
                reply_markup=self._keyboard(message),
            )

    @staticmethod
    def parse_choice(data: str) -> Tuple[FormStep, str]:
        """Split ``choice:<step>:<label>`` callback data."""
        step, label = data[len(CHOICE_PREFIX):].split(":", 1)
        return FormStep(step), label

    @staticmethod
    def _keyboard(message: OutgoingMessage) -> Optional[InlineKeyboardMarkup]:
        if not message.choices:
            return None
        buttons = [
            [InlineKeyboardButton(text=choice, callback_data=f"{CHOICE_PREFIX}{message.step.value}:{choice}")]
            for choice in message.choices
        ]
        return InlineKeyboardMarkup(buttons)
