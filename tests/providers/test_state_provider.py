import pytest

from models.enums import FormStep, PromptKind
from models.models import FormSession, PendingPrompt, UserProfile
from providers.state_provider_impl import InMemoryDialogStateStore, InMemoryProfileStore


@pytest.mark.asyncio
async def test_unknown_user_gets_default_profile_without_storing_it():
    profiles = InMemoryProfileStore()

    profile = await profiles.get(1)

    assert profile == UserProfile(name="", age=-1, city="", language="", is_registering=False)
    profile.is_registering = True
    assert (await profiles.get(1)).is_registering is False


@pytest.mark.asyncio
async def test_profile_changes_need_set():
    profiles = InMemoryProfileStore()
    await profiles.set(1, UserProfile(name="Mario", is_registering=True))

    loaded = await profiles.get(1)
    loaded.name = "Luigi"

    assert (await profiles.get(1)).name == "Mario"


@pytest.mark.asyncio
async def test_dialog_store_round_trips_active_sessions():
    dialogs = InMemoryDialogStateStore()
    session = FormSession(
        step=FormStep.CITY,
        prompt=PendingPrompt(kind=PromptKind.NUMBER, text="Età?", validator="age"),
        values={"name": "Anna"},
    )

    await dialogs.set("user:1", session)
    session.values["name"] = "changed"

    stored = await dialogs.get("user:1")
    assert stored.step == FormStep.CITY
    assert stored.values == {"name": "Anna"}


@pytest.mark.asyncio
async def test_idle_session_clears_stored_state():
    dialogs = InMemoryDialogStateStore()
    await dialogs.set("user:1", FormSession(step=FormStep.AGE, values={"name": "Anna"}))

    await dialogs.set("user:1", FormSession())

    assert (await dialogs.get("user:1")).active is False
