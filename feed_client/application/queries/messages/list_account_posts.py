"""ListAccountPosts Query - Messages owned by one account, newest first."""

from dataclasses import dataclass
from feed_client.application.common.interfaces import Query, QueryHandler
from feed_client.application.services.feed_synchronizer import sort_feed
from feed_client.domain.entities.message import Message
from feed_client.domain.ports.repositories import MessageRepository
from feed_client.domain.value_objects.account_id import AccountId


@dataclass(frozen=True)
class ListAccountPostsQuery(Query[list[Message]]):
    account_id: AccountId


class ListAccountPostsHandler(QueryHandler[list[Message]]):
    def __init__(self, message_repository: MessageRepository):
        self._message_repository = message_repository

    async def execute(self, query: ListAccountPostsQuery) -> list[Message]:
        messages = await self._message_repository.fetch_messages_for_owner(
            query.account_id
        )
        return list(sort_feed(messages))
