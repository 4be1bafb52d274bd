from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from models.enums import FormStep, PromptKind

AGE_NOT_SHARED = -1


class UserProfile(BaseModel):
    name: str = ""
    age: int = AGE_NOT_SHARED
    city: str = ""
    language: str = ""
    is_registering: bool = False

    @property
    def shared_age(self) -> bool:
        return self.age != AGE_NOT_SHARED


class ChannelAccount(BaseModel):
    id: int
    name: str = ""


class OutgoingMessage(BaseModel):
    text: str
    choices: List[str] = Field(default_factory=list)
    # Step the choices answer; set on choice prompts only
    step: Optional[FormStep] = None


class PendingPrompt(BaseModel):
    """A question the form is waiting on, as persisted between turns."""

    kind: PromptKind
    text: str
    choices: List[str] = Field(default_factory=list)
    retry_text: Optional[str] = None
    validator: Optional[str] = None

    def as_message(self, step: Optional[FormStep] = None, retry: bool = False) -> OutgoingMessage:
        text = self.retry_text if retry and self.retry_text else self.text
        return OutgoingMessage(text=text, choices=list(self.choices), step=step if self.choices else None)


class FormSession(BaseModel):
    """
    Dialog state of one registration flow.

    ``step`` is the step the next answer resumes at; ``values`` holds the
    scratch answers collected so far. A session without a step is idle.
    """

    step: Optional[FormStep] = None
    prompt: Optional[PendingPrompt] = None
    values: Dict[str, Any] = Field(default_factory=dict)

    @property
    def active(self) -> bool:
        return self.step is not None

    def reset(self) -> None:
        self.step = None
        self.prompt = None
        self.values.clear()
