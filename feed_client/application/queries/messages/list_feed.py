"""
ListFeed Query - The feed as currently displayed.

Returns the synchronizer's snapshot. With refresh=True the feed is re-read
from the server first (joining a refresh already in flight).
"""

from dataclasses import dataclass
from feed_client.application.common.interfaces import Query, QueryHandler
from feed_client.application.services.feed_synchronizer import FeedSynchronizer
from feed_client.domain.entities.message import Message


@dataclass(frozen=True)
class ListFeedQuery(Query[list[Message]]):
    refresh: bool = False


class ListFeedHandler(QueryHandler[list[Message]]):
    def __init__(self, synchronizer: FeedSynchronizer):
        self._synchronizer = synchronizer

    async def execute(self, query: ListFeedQuery) -> list[Message]:
        if query.refresh:
            return list(await self._synchronizer.refresh())
        return list(self._synchronizer.snapshot)
