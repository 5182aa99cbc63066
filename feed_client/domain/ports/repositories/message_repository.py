"""
Message Repository Port - Interface for the remote message store.
Implementation: feed_client/infrastructure/remote/http_message_repository.py
"""

from abc import ABC, abstractmethod
from typing import Optional

from feed_client.domain.entities.message import Message
from feed_client.domain.value_objects.account_id import AccountId
from feed_client.domain.value_objects.message_id import MessageId
from feed_client.domain.value_objects.mutation_result import MutationResult


class MessageRepository(ABC):
    @abstractmethod
    async def list_messages(self) -> list[Message]: ...

    @abstractmethod
    async def fetch_messages_for_owner(self, account_id: AccountId) -> list[Message]: ...

    @abstractmethod
    async def get_message(self, message_id: MessageId) -> Optional[Message]: ...

    @abstractmethod
    async def create_message(self, text: str, owner_id: AccountId) -> Message: ...

    @abstractmethod
    async def update_message(
        self, message_id: MessageId, text: str
    ) -> MutationResult: ...

    @abstractmethod
    async def delete_message(self, message_id: MessageId) -> MutationResult: ...
