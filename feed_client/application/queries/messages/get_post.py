"""GetPost Query - One message straight from the server, or None."""

from dataclasses import dataclass
from typing import Optional
from feed_client.application.common.interfaces import Query, QueryHandler
from feed_client.domain.entities.message import Message
from feed_client.domain.ports.repositories import MessageRepository
from feed_client.domain.value_objects.message_id import MessageId


@dataclass(frozen=True)
class GetPostQuery(Query[Optional[Message]]):
    message_id: MessageId


class GetPostHandler(QueryHandler[Optional[Message]]):
    def __init__(self, message_repository: MessageRepository):
        self._message_repository = message_repository

    async def execute(self, query: GetPostQuery) -> Optional[Message]:
        return await self._message_repository.get_message(query.message_id)
