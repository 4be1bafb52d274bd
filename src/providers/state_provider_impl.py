from typing import Dict

from models.models import FormSession, UserProfile
from providers.state_provider import DialogStateStoring, ProfileStoring


class InMemoryProfileStore(ProfileStoring):
    """Keeps profiles in a dict. Copies on the way in and out so callers can't alias stored state."""

    def __init__(self):
        self._profiles: Dict[int, UserProfile] = {}

    async def get(self, user_id: int) -> UserProfile:
        stored = self._profiles.get(user_id)
        if stored is None:
            return UserProfile()
        return stored.model_copy(deep=True)

    async def set(self, user_id: int, profile: UserProfile) -> None:
        self._profiles[user_id] = profile.model_copy(deep=True)


class InMemoryDialogStateStore(DialogStateStoring):

    def __init__(self):
        self._sessions: Dict[str, FormSession] = {}

    async def get(self, key: str) -> FormSession:
        stored = self._sessions.get(key)
        if stored is None:
            return FormSession()
        return stored.model_copy(deep=True)

    async def set(self, key: str, session: FormSession) -> None:
        if not session.active:
            self._sessions.pop(key, None)
            return
        self._sessions[key] = session.model_copy(deep=True)
