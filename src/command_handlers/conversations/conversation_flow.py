from abc import ABC, abstractmethod
from typing import List

from telegram.ext import BaseHandler


class ConversationFlow(ABC):
    """
    Abstract base class for all conversation flows in the Telegram bot.

    A conversation flow adapts Telegram updates to a chat-independent flow
    and exposes the handlers the bot must register for it. Step tracking
    lives in the flow's own state stores, so a flow is a set of plain
    handlers rather than a ``ConversationHandler``.
    """

    @property
    @abstractmethod
    def handlers(self) -> List[BaseHandler]:
        """
        The Telegram handlers for this conversation flow.

        Returns:
            List[BaseHandler]: Handlers to add to the application, in order
        """
        pass
