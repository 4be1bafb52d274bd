from abc import ABC, abstractmethod
from typing import Dict, Optional

from models.models import UserProfile


class RegistrationControlling(ABC):

    @abstractmethod
    async def submit_registration(self, user_id: int, profile: UserProfile):
        """
        Commit a confirmed registration.

        Called once the user has confirmed the summary. Persisting to a
        database and sending the confirmation e-mail belong here.

        Args:
            user_id (int): Id of the registering user.
            profile (UserProfile): The profile exactly as confirmed.
        """
        pass

    @abstractmethod
    async def get_registration(self, user_id: int) -> Optional[UserProfile]:
        """Return the last confirmed registration of a user, if any."""
        pass


class FakeRegistrationController(RegistrationControlling):
    """Lightweight fake controller keeping confirmed registrations in memory."""

    def __init__(self):
        self.registrations: Dict[int, UserProfile] = {}

    async def submit_registration(self, user_id: int, profile: UserProfile):
        # Mimic persisting the registration by storing a snapshot locally
        self.registrations[user_id] = profile.model_copy(update={"is_registering": False})

    async def get_registration(self, user_id: int) -> Optional[UserProfile]:
        return self.registrations.get(user_id)
