import logging
from typing import Iterable, List, Optional

from forms.registration_form import DEFAULT_TRIGGER_TEXT, RegistrationForm
from localization import Key, LocaleKeyAccessor
from models.enums import DialogStateScope, FormStep
from models.models import ChannelAccount, OutgoingMessage
from providers.state_provider import DialogStateStoring, ProfileStoring

logger = logging.getLogger(__name__)


def dialog_state_key(scope: DialogStateScope, user_id: int, conversation_id: int) -> str:
    """
    Key under which a form session is stored.

    - CONVERSATION: one session shared by everyone in the chat
    - USER: one session per user, whatever chat they write from
    - PRIVATE_CONVERSATION: one session per user in each chat
    """
    if scope == DialogStateScope.CONVERSATION:
        return f"conversation:{conversation_id}"
    if scope == DialogStateScope.USER:
        return f"user:{user_id}"
    return f"conversation:{conversation_id}/user:{user_id}"


class TurnRouter:
    """
    Decides, per inbound message, whether the registration form runs.

    The form runs when the user already has a registration in progress or the
    message contains the trigger text. Profile and dialog state are written
    back once at the end of every turn that ran the form.
    """

    def __init__(
        self,
        form: RegistrationForm,
        profiles: ProfileStoring,
        dialogs: DialogStateStoring,
        trigger_text: str = DEFAULT_TRIGGER_TEXT,
        scope: DialogStateScope = DialogStateScope.USER,
        texts: LocaleKeyAccessor = Key,
    ):
        self.form = form
        self.profiles = profiles
        self.dialogs = dialogs
        self.trigger_text = trigger_text
        self.scope = scope
        self.texts = texts

    def should_run(self, is_registering: bool, text: str) -> bool:
        return is_registering or self.trigger_text in (text or "")

    async def on_message(
        self,
        user_id: int,
        conversation_id: int,
        text: str,
        expected_step: Optional[FormStep] = None,
    ) -> List[OutgoingMessage]:
        """
        Run one turn. ``expected_step`` marks an answer given to a specific
        prompt (a keyboard button); it is dropped unless that prompt is the
        one still pending.
        """
        profile = await self.profiles.get(user_id)
        if not self.should_run(profile.is_registering, text):
            return []

        key = dialog_state_key(self.scope, user_id, conversation_id)
        session = await self.dialogs.get(key)
        if expected_step is not None and session.step != expected_step:
            logger.info(f"Ignoring stale answer from user {user_id} for step {expected_step.value}")
            return []

        messages = await self.form.run(user_id, profile, session, text)

        await self.profiles.set(user_id, profile)
        await self.dialogs.set(key, session)
        return messages

    def on_members_added(self, members: Iterable[ChannelAccount], bot_id: int) -> List[OutgoingMessage]:
        return [
            OutgoingMessage(text=self.texts.start.welcome.format(name=member.name, trigger=self.trigger_text))
            for member in members
            if member.id != bot_id
        ]

    async def cancel(self, user_id: int, conversation_id: int) -> List[OutgoingMessage]:
        """Abort a registration in progress. Fields already copied to the profile are kept."""
        profile = await self.profiles.get(user_id)
        key = dialog_state_key(self.scope, user_id, conversation_id)
        session = await self.dialogs.get(key)

        if not profile.is_registering and not session.active:
            return [OutgoingMessage(text=self.texts.cancel.nothing_to_cancel)]

        logger.info(f"Registration cancelled by user {user_id}")
        profile.is_registering = False
        session.reset()
        await self.profiles.set(user_id, profile)
        await self.dialogs.set(key, session)
        return [OutgoingMessage(text=self.texts.registration.discarded.format(trigger=self.trigger_text))]
