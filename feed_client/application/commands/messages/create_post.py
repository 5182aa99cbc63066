"""
Create Post Command.

Guidelines:
- Command: @dataclass(frozen=True) holding the raw text from the form
- Handler: delegates to FeedSynchronizer, which stamps the current account
  as owner and re-reads the feed
- Returns: the Message as persisted by the server
"""

from dataclasses import dataclass
from feed_client.application.common.interfaces import Command, CommandHandler
from feed_client.application.services.feed_synchronizer import FeedSynchronizer
from feed_client.domain.entities.message import Message


@dataclass(frozen=True)
class CreatePostCommand(Command[Message]):
    text: str


class CreatePostHandler(CommandHandler[Message]):
    _synchronizer: FeedSynchronizer

    def __init__(self, synchronizer: FeedSynchronizer):
        self._synchronizer = synchronizer

    async def execute(self, command: CreatePostCommand) -> Message:
        return await self._synchronizer.create_and_refresh(command.text)
