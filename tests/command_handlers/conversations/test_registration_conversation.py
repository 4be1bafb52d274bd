from unittest.mock import AsyncMock, MagicMock

import pytest
from telegram import Bot, CallbackQuery, Chat, InlineKeyboardMarkup, Message, Update, User as TgUser
from telegram.ext import CallbackContext, CallbackQueryHandler, MessageHandler

from command_handlers.conversations.registration_conversation import CHOICE_PREFIX, RegistrationConversation
from conversations.turn_router import TurnRouter
from localization import Key
from models.enums import FormStep
from models.models import ChannelAccount, OutgoingMessage


@pytest.fixture
def turn_router() -> AsyncMock:
    return AsyncMock(spec=TurnRouter)


def make_context() -> MagicMock:
    context = MagicMock(spec=CallbackContext)
    context.bot = AsyncMock(spec=Bot)
    context.bot.id = 999
    return context


def make_update(user_id=5, chat_id=50) -> MagicMock:
    update = MagicMock(spec=Update)
    update.effective_user = MagicMock(spec=TgUser, id=user_id, username="tester")
    update.effective_chat = MagicMock(spec=Chat, id=chat_id)
    return update


class TestRegistrationConversation:
    @pytest.fixture(autouse=True)
    def _setup(self, turn_router):
        self.router = turn_router
        self.conversation = RegistrationConversation(router=turn_router)

    def test_handlers_cover_members_choices_and_text(self):
        handlers = self.conversation.handlers

        assert isinstance(handlers[0], MessageHandler)
        assert isinstance(handlers[1], CallbackQueryHandler)
        assert isinstance(handlers[2], MessageHandler)

    @pytest.mark.asyncio
    async def test_text_message_is_routed_and_replies_sent(self):
        update = make_update()
        update.message = AsyncMock(spec=Message)
        update.message.text = "REGISTRAMI"
        context = make_context()
        self.router.on_message.return_value = [OutgoingMessage(text=Key.registration.prompt_name)]

        await self.conversation.handle_message(update, context)

        self.router.on_message.assert_awaited_once_with(5, 50, "REGISTRAMI")
        context.bot.send_message.assert_awaited_once_with(
            chat_id=50, text=Key.registration.prompt_name, reply_markup=None
        )

    @pytest.mark.asyncio
    async def test_ignored_message_sends_nothing(self):
        update = make_update()
        update.message = AsyncMock(spec=Message)
        update.message.text = "ciao"
        context = make_context()
        self.router.on_message.return_value = []

        await self.conversation.handle_message(update, context)

        context.bot.send_message.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_choices_rendered_as_inline_keyboard(self):
        update = make_update()
        update.message = AsyncMock(spec=Message)
        update.message.text = "Mario"
        context = make_context()
        self.router.on_message.return_value = [
            OutgoingMessage(text="Grazie mille, Mario."),
            OutgoingMessage(text=Key.registration.prompt_share_age, choices=["Si", "No"], step=FormStep.AGE),
        ]

        await self.conversation.handle_message(update, context)

        assert context.bot.send_message.await_count == 2
        keyboard = context.bot.send_message.await_args.kwargs["reply_markup"]
        assert isinstance(keyboard, InlineKeyboardMarkup)
        assert [row[0].text for row in keyboard.inline_keyboard] == ["Si", "No"]
        assert keyboard.inline_keyboard[0][0].callback_data == f"{CHOICE_PREFIX}age:Si"

    @pytest.mark.asyncio
    async def test_choice_button_answers_with_label(self):
        update = make_update()
        query = MagicMock(spec=CallbackQuery)
        query.data = f"{CHOICE_PREFIX}age:No"
        query.answer = AsyncMock()
        query.edit_message_reply_markup = AsyncMock()
        update.callback_query = query
        context = make_context()
        self.router.on_message.return_value = [OutgoingMessage(text=Key.registration.prompt_city)]

        await self.conversation.handle_choice(update, context)

        query.answer.assert_awaited_once()
        query.edit_message_reply_markup.assert_awaited_once_with(reply_markup=None)
        self.router.on_message.assert_awaited_once_with(5, 50, "No", expected_step=FormStep.AGE)
        context.bot.send_message.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_new_members_are_welcomed(self):
        update = make_update()
        update.message = MagicMock(spec=Message)
        update.message.new_chat_members = [
            MagicMock(spec=TgUser, id=1, full_name="Mario Rossi"),
            MagicMock(spec=TgUser, id=999, full_name="Registration Bot"),
        ]
        context = make_context()
        self.router.on_members_added = MagicMock(
            return_value=[OutgoingMessage(text="Benvenuto, Mario Rossi: digita REGISTRAMI per registrarti.")]
        )

        await self.conversation.welcome_members(update, context)

        members, = self.router.on_members_added.call_args.args
        assert members == [ChannelAccount(id=1, name="Mario Rossi"), ChannelAccount(id=999, name="Registration Bot")]
        assert self.router.on_members_added.call_args.kwargs == {"bot_id": 999}
        context.bot.send_message.assert_awaited_once()

    def test_parse_choice_keeps_colons_in_label(self):
        assert RegistrationConversation.parse_choice(f"{CHOICE_PREFIX}favourite_language:C#") == (
            FormStep.FAVOURITE_LANGUAGE,
            "C#",
        )
        assert RegistrationConversation.parse_choice(f"{CHOICE_PREFIX}summary:a:b") == (FormStep.SUMMARY, "a:b")
