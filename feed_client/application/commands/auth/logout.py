"""Logout Command."""

from dataclasses import dataclass
from feed_client.application.common.interfaces import Command, CommandHandler
from feed_client.application.services.feed_synchronizer import FeedSynchronizer
from feed_client.application.services.session import Session


@dataclass(frozen=True)
class LogoutCommand(Command[None]):
    pass


class LogoutHandler(CommandHandler[None]):
    def __init__(self, session: Session, synchronizer: FeedSynchronizer):
        self._session = session
        self._synchronizer = synchronizer

    async def execute(self, command: LogoutCommand) -> None:
        self._session.logout()
        # Also drops any refresh still in flight, so the next account never
        # sees the previous account's feed
        self._synchronizer.clear()
