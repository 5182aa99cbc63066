"""
HTTP Message Repository Implementation (Remote Message Store).

Guidelines:
- Implements MessageRepository port from domain layer
- Exactly one HTTP exchange per call, no retries, no request coalescing
- Maps wire payloads through EntityMapper
- Classifies HTTP failures into domain exceptions

Endpoints:
    GET    /messages                      → array of messages
    GET    /accounts/{accountId}/messages → array of messages
    GET    /messages/{messageId}          → message, or empty body if unknown
    POST   /messages                      → created message        (400, 401)
    PATCH  /messages/{messageId}          → affected count          (400)
    DELETE /messages/{messageId}          → affected count, JSON or plain text

Status mapping:
- 2xx with empty body on a listing → []
- 400 on create/update → InvalidInputError
- 401 on create → UnauthenticatedError
- anything else non-2xx → RemoteUnavailableError(status_code)
- body that fails mapping → MalformedEntityError
"""

import logging
from typing import Optional

import httpx

from feed_client.domain.entities.message import Message
from feed_client.domain.exceptions.invalid_input import InvalidInputError
from feed_client.domain.exceptions.unauthenticated import UnauthenticatedError
from feed_client.domain.ports.repositories.message_repository import MessageRepository
from feed_client.domain.value_objects.account_id import AccountId
from feed_client.domain.value_objects.message_id import MessageId
from feed_client.domain.value_objects.mutation_result import MutationResult
from feed_client.infrastructure.remote.entity_mapper import EntityMapper
from feed_client.infrastructure.remote.http_client import (
    affected_count,
    json_body,
    send,
    unexpected_status,
)

logger = logging.getLogger(__name__)


class HttpMessageRepository(MessageRepository):
    """
    httpx implementation of MessageRepository.

    Talks to the feed service through a shared AsyncClient.
    """

    _client: httpx.AsyncClient
    _mapper: EntityMapper

    def __init__(self, client: httpx.AsyncClient, mapper: EntityMapper):
        """
        Initialize repository.

        Args:
            client: Shared AsyncClient with base_url set (injected by DI container)
            mapper: EntityMapper configured with the active backend contract
        """
        self._client = client
        self._mapper = mapper

    async def list_messages(self) -> list[Message]:
        """
        Get every message on the feed.

        Returns:
            Messages in the order the server sent them (the synchronizer sorts)
        """
        response = await send(self._client, "GET", "/messages")
        if not response.is_success:
            raise unexpected_status(response, "fetch messages")
        messages = self._mapper.to_messages(json_body(response))
        logger.debug(f"[MessageStore] Listed {len(messages)} messages")
        return messages

    async def fetch_messages_for_owner(self, account_id: AccountId) -> list[Message]:
        response = await send(
            self._client, "GET", f"/accounts/{account_id.value}/messages"
        )
        if not response.is_success:
            raise unexpected_status(response, "fetch account messages")
        return self._mapper.to_messages(json_body(response))

    async def get_message(self, message_id: MessageId) -> Optional[Message]:
        """
        Get a single message.

        Returns:
            Message if found, None when the server answers with an empty body
        """
        response = await send(self._client, "GET", f"/messages/{message_id.value}")
        if not response.is_success:
            raise unexpected_status(response, "fetch message")
        body = json_body(response)
        if body is None:
            return None
        return self._mapper.to_message(body)

    async def create_message(self, text: str, owner_id: AccountId) -> Message:
        """
        Post a new message.

        Args:
            text: Already validated message text
            owner_id: Account stamped as owner

        Returns:
            The message as persisted by the server

        Raises:
            InvalidInputError: 400, the server rejected the text or owner
            UnauthenticatedError: 401
            RemoteUnavailableError: any other non-2xx status
        """
        response = await send(
            self._client,
            "POST",
            "/messages",
            self._mapper.create_payload(text, owner_id),
        )
        if response.status_code == 400:
            raise InvalidInputError(
                "Invalid message data. Please check your message text and try again."
            )
        if response.status_code == 401:
            raise UnauthenticatedError("Please log in again to create messages.")
        if not response.is_success:
            raise unexpected_status(response, "create message")

        message = self._mapper.to_message(json_body(response))
        logger.info(f"[MessageStore] Created message {message.id} for {owner_id}")
        return message

    async def update_message(self, message_id: MessageId, text: str) -> MutationResult:
        """
        Replace the text of a message.

        Returns:
            MutationResult with affected_count 1, or 0 when no row matched

        Raises:
            InvalidInputError: 400, either bad text or unknown message id
        """
        response = await send(
            self._client,
            "PATCH",
            f"/messages/{message_id.value}",
            self._mapper.update_payload(text),
        )
        if response.status_code == 400:
            raise InvalidInputError("Invalid message text or message not found")
        if not response.is_success:
            raise unexpected_status(response, "update message")

        result = MutationResult(affected_count(response))
        logger.info(
            f"[MessageStore] Update of {message_id} affected {result.affected_count} row(s)"
        )
        return result

    async def delete_message(self, message_id: MessageId) -> MutationResult:
        """
        Delete a message.

        Returns:
            MutationResult with affected_count 1, or 0 if it was already gone
        """
        response = await send(self._client, "DELETE", f"/messages/{message_id.value}")
        if not response.is_success:
            raise unexpected_status(response, "delete message")

        result = MutationResult(affected_count(response))
        logger.info(
            f"[MessageStore] Delete of {message_id} affected {result.affected_count} row(s)"
        )
        return result
