import asyncio
import inspect

import pytest

from controllers.registration_controller import FakeRegistrationController
from conversations.turn_router import TurnRouter
from forms.registration_form import RegistrationForm
from providers.state_provider_impl import InMemoryDialogStateStore, InMemoryProfileStore


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "asyncio: mark test to run inside a simple asyncio event loop"
    )


@pytest.hookimpl
def pytest_pyfunc_call(pyfuncitem):
    if inspect.iscoroutinefunction(pyfuncitem.obj):
        marker = pyfuncitem.get_closest_marker("asyncio")
        if marker is not None:
            testargs = {
                arg: pyfuncitem.funcargs[arg]
                for arg in pyfuncitem._fixtureinfo.argnames
            }
            loop = asyncio.new_event_loop()
            try:
                asyncio.set_event_loop(loop)
                loop.run_until_complete(pyfuncitem.obj(**testargs))
            finally:
                asyncio.set_event_loop(None)
                loop.close()
            return True


@pytest.fixture
def registration_controller() -> FakeRegistrationController:
    return FakeRegistrationController()


@pytest.fixture
def profiles() -> InMemoryProfileStore:
    return InMemoryProfileStore()


@pytest.fixture
def dialogs() -> InMemoryDialogStateStore:
    return InMemoryDialogStateStore()


@pytest.fixture
def form(registration_controller) -> RegistrationForm:
    return RegistrationForm(controller=registration_controller)


@pytest.fixture
def router(form, profiles, dialogs) -> TurnRouter:
    return TurnRouter(form=form, profiles=profiles, dialogs=dialogs)
