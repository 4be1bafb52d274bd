import logging
from typing import Any, Awaitable, Callable, Dict, List, NamedTuple, Optional, Tuple, Union

from controllers.registration_controller import RegistrationControlling
from forms.prompts import VALIDATORS, PromptValidationError, recognize_choice, recognize_number, unique_choices
from localization import Key, LocaleKeyAccessor
from models.enums import FormStep, ProgrammingLanguage, PromptKind
from models.models import AGE_NOT_SHARED, FormSession, OutgoingMessage, PendingPrompt, UserProfile

logger = logging.getLogger(__name__)

DEFAULT_TRIGGER_TEXT = "REGISTRAMI"

LANGUAGE_CHOICES = unique_choices([
    ProgrammingLanguage.CSHARP.value,
    ProgrammingLanguage.JAVA.value,
    ProgrammingLanguage.JAVASCRIPT.value,
    ProgrammingLanguage.TYPESCRIPT.value,
    ProgrammingLanguage.JAVA.value,
    ProgrammingLanguage.PYTHON.value,
    ProgrammingLanguage.GO.value,
    ProgrammingLanguage.R.value,
    ProgrammingLanguage.OTHER.value,
])


class FormStateError(RuntimeError):
    """Raised when a persisted session cannot be resumed."""


class Advance(NamedTuple):
    """Step outcome that moves straight to the next step with ``value`` as its input."""

    value: Any


class FormTurn:
    """Everything one step can touch during a single inbound message."""

    def __init__(self, user_id: int, profile: UserProfile, session: FormSession):
        self.user_id = user_id
        self.profile = profile
        self.session = session
        self.outbox: List[OutgoingMessage] = []

    @property
    def values(self) -> Dict[str, Any]:
        return self.session.values

    def send(self, text: str, choices: Optional[List[str]] = None):
        self.outbox.append(OutgoingMessage(text=text, choices=list(choices or [])))


StepOutcome = Union[PendingPrompt, Advance, None]
StepHandler = Callable[[FormTurn, Any], Awaitable[StepOutcome]]


class RegistrationForm:
    """
    Registration waterfall as an explicit state machine.

    Each step consumes the answer to the previous step's prompt and returns
    one of:
    - a ``PendingPrompt``: the flow suspends until the next message, which
      resumes at the step listed after it in ``steps``
    - ``Advance(value)``: the next step runs immediately with ``value``
    - ``None``: the flow is over and the session is reset
    """

    def __init__(
        self,
        controller: RegistrationControlling,
        texts: LocaleKeyAccessor = Key,
        trigger_text: str = DEFAULT_TRIGGER_TEXT,
    ):
        self.controller = controller
        self.texts = texts
        self.trigger_text = trigger_text
        self.steps: Dict[FormStep, Tuple[StepHandler, Optional[FormStep]]] = {
            FormStep.NAME: (self.name_step, FormStep.NAME_CONFIRM),
            FormStep.NAME_CONFIRM: (self.name_confirm_step, FormStep.AGE),
            FormStep.AGE: (self.age_step, FormStep.CITY),
            FormStep.CITY: (self.city_step, FormStep.FAVOURITE_LANGUAGE),
            FormStep.FAVOURITE_LANGUAGE: (self.favourite_language_step, FormStep.CONFIRM),
            FormStep.CONFIRM: (self.confirm_step, FormStep.SUMMARY),
            FormStep.SUMMARY: (self.summary_step, None),
        }

    @property
    def yes(self) -> str:
        return self.texts.registration.yes

    @property
    def no(self) -> str:
        return self.texts.registration.no

    async def run(self, user_id: int, profile: UserProfile, session: FormSession, text: str) -> List[OutgoingMessage]:
        """Feed one inbound message to the form, mutating profile and session in place."""
        turn = FormTurn(user_id, profile, session)

        if not session.active:
            logger.info(f"Starting registration for user {user_id}")
            await self._run_from(turn, FormStep.NAME, None)
            return turn.outbox

        if session.prompt is None:
            raise FormStateError(f"Session at step {session.step} has no pending prompt")

        try:
            answer = self._recognize(session.prompt, text)
        except PromptValidationError as e:
            logger.info(f"Rejected answer from user {user_id} at step {session.step}: {e}")
            turn.outbox.append(session.prompt.as_message(step=session.step, retry=True))
            return turn.outbox

        await self._run_from(turn, session.step, answer)
        return turn.outbox

    async def _run_from(self, turn: FormTurn, step: Optional[FormStep], value: Any):
        while step is not None:
            if step not in self.steps:
                raise FormStateError(f"Unknown form step {step!r}")
            handler, next_step = self.steps[step]
            logger.debug(f"User {turn.user_id}: running step {step.value}")
            outcome = await handler(turn, value)

            if isinstance(outcome, PendingPrompt):
                turn.outbox.append(outcome.as_message(step=next_step))
                turn.session.step = next_step
                turn.session.prompt = outcome
                return

            if isinstance(outcome, Advance):
                step, value = next_step, outcome.value
                continue

            break

        logger.info(f"Registration flow ended for user {turn.user_id}")
        turn.session.reset()

    def _recognize(self, prompt: PendingPrompt, text: str) -> Any:
        if prompt.kind == PromptKind.TEXT:
            return text

        if prompt.kind == PromptKind.CHOICE:
            choice = recognize_choice(text, prompt.choices)
            if choice is None:
                raise PromptValidationError(f"{text!r} is not one of {prompt.choices}")
            return choice

        number = recognize_number(text)
        if prompt.validator:
            return VALIDATORS[prompt.validator](number)
        if number is None:
            raise PromptValidationError(f"{text!r} is not a number")
        return number

    def _text_prompt(self, text: str) -> PendingPrompt:
        return PendingPrompt(kind=PromptKind.TEXT, text=text)

    def _choice_prompt(self, text: str, choices: List[str]) -> PendingPrompt:
        return PendingPrompt(kind=PromptKind.CHOICE, text=text, choices=choices)

    def summary_text(self, profile: UserProfile) -> str:
        t = self.texts.registration
        summary = t.summary_name.format(name=profile.name)
        if profile.shared_age:
            summary += t.summary_age.format(age=profile.age)
        summary += t.summary_rest.format(city=profile.city, language=profile.language)
        return summary

    async def name_step(self, turn: FormTurn, _result) -> StepOutcome:
        turn.profile.is_registering = True
        return self._text_prompt(self.texts.registration.prompt_name)

    async def name_confirm_step(self, turn: FormTurn, name: str) -> StepOutcome:
        turn.values["name"] = name
        turn.send(self.texts.registration.thanks_name.format(name=name))
        return self._choice_prompt(self.texts.registration.prompt_share_age, [self.yes, self.no])

    async def age_step(self, turn: FormTurn, share_age: str) -> StepOutcome:
        if share_age == self.yes:
            return PendingPrompt(
                kind=PromptKind.NUMBER,
                text=self.texts.registration.prompt_age,
                retry_text=self.texts.registration.retry_age,
                validator="age",
            )

        turn.send(self.texts.registration.skip_age.format(name=turn.values["name"]))
        return Advance(AGE_NOT_SHARED)

    async def city_step(self, turn: FormTurn, age: int) -> StepOutcome:
        turn.values["age"] = age
        return self._text_prompt(self.texts.registration.prompt_city)

    async def favourite_language_step(self, turn: FormTurn, city: str) -> StepOutcome:
        turn.values["city"] = city
        return self._choice_prompt(self.texts.registration.prompt_language, LANGUAGE_CHOICES)

    async def confirm_step(self, turn: FormTurn, language: str) -> StepOutcome:
        turn.values["language"] = language
        turn.send(self.texts.registration.summary_intro.format(name=turn.values["name"]))

        # Copied before confirmation; a later discard does not undo this
        profile = turn.profile
        profile.name = turn.values["name"]
        profile.age = turn.values["age"]
        profile.city = turn.values["city"]
        profile.language = turn.values["language"]

        turn.send(self.summary_text(profile))
        return self._choice_prompt(self.texts.registration.prompt_confirm, [self.yes, self.no])

    async def summary_step(self, turn: FormTurn, confirmed: str) -> StepOutcome:
        profile = turn.profile
        if confirmed == self.yes:
            await self.controller.submit_registration(turn.user_id, profile)
            turn.send(self.texts.registration.completed)
            turn.send(self.texts.registration.completed_thanks.format(name=profile.name))
            turn.send(self.texts.registration.completed_goodbye)
        else:
            turn.values.clear()
            turn.send(self.texts.registration.discarded.format(trigger=self.trigger_text))

        profile.is_registering = False
        return None
