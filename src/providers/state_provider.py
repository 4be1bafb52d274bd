from abc import ABC, abstractmethod

from models.models import FormSession, UserProfile


class ProfileStoring(ABC):
    """
    Abstract per-user profile store.

    ``get`` never fails for an unknown user: it hands back a fresh default
    profile without persisting it, so reading alone never mutates the store.
    """

    @abstractmethod
    async def get(self, user_id: int) -> UserProfile:
        """Get the profile of a user, or a new default one"""
        pass

    @abstractmethod
    async def set(self, user_id: int, profile: UserProfile) -> None:
        """Persist the profile of a user"""
        pass


class DialogStateStoring(ABC):
    """Abstract store of form sessions, keyed by a dialog scope key."""

    @abstractmethod
    async def get(self, key: str) -> FormSession:
        """Get the session stored under key, or an idle one"""
        pass

    @abstractmethod
    async def set(self, key: str, session: FormSession) -> None:
        """Persist the session under key"""
        pass
