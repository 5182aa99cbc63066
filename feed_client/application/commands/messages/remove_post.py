"""Remove Post Command."""

from dataclasses import dataclass
from feed_client.application.common.interfaces import Command, CommandHandler
from feed_client.application.services.feed_synchronizer import FeedSynchronizer
from feed_client.domain.value_objects.message_id import MessageId
from feed_client.domain.value_objects.mutation_result import MutationResult


@dataclass(frozen=True)
class RemovePostCommand(Command[MutationResult]):
    message_id: MessageId


class RemovePostHandler(CommandHandler[MutationResult]):
    def __init__(self, synchronizer: FeedSynchronizer):
        self._synchronizer = synchronizer

    async def execute(self, command: RemovePostCommand) -> MutationResult:
        return await self._synchronizer.delete_and_refresh(command.message_id)
