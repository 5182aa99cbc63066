"""
Feed Synchronizer - The authoritative feed snapshot and its refresh policy.

Consistency policy:
- The snapshot is only ever replaced wholesale with what the server returned.
- Every successful create/update/delete is followed by a full re-fetch
  instead of a local splice, so the displayed feed always equals a state the
  server actually returned.
- At most one list request is outstanding. A refresh() issued while another
  is in flight joins it instead of starting a second request. The re-fetch
  after a mutation never joins a request sent before the mutation: it waits
  that one out and then starts its own.
- clear() invalidates any list request still in flight; its response is
  dropped instead of restoring the previous account's feed.
- CRUD calls are NOT deduplicated. Two concurrent deletes of the same id
  both reach the server; the loser gets affected-count 0, which is reported
  as MutationOutcome.TARGET_GONE rather than raised.

Ordering: newest first. By timestamp when every message has one, otherwise
by message id.
"""

import asyncio
import logging
from typing import Iterable, Optional

from feed_client.application.services.session import Session
from feed_client.domain.entities.account import Account
from feed_client.domain.entities.message import Message
from feed_client.domain.exceptions.access_denied import AccessDeniedError
from feed_client.domain.exceptions.unauthenticated import UnauthenticatedError
from feed_client.domain.ports.repositories.message_repository import MessageRepository
from feed_client.domain.services.ownership import can_mutate
from feed_client.domain.services.text_rules import validate_message_text
from feed_client.domain.value_objects.message_id import MessageId
from feed_client.domain.value_objects.mutation_result import MutationResult

logger = logging.getLogger(__name__)


def sort_feed(messages: Iterable[Message]) -> tuple[Message, ...]:
    """
    Order messages newest first and drop repeated ids.

    Primary key is posted_at_epoch_ms (descending) when present on all
    messages, with message id as tie-breaker; otherwise message id alone.
    The first occurrence of a repeated id wins.
    """
    unique: dict[MessageId, Message] = {}
    for message in messages:
        if message.id in unique:
            logger.warning(f"[Feed] Duplicate message id {message.id} in response, ignoring")
            continue
        unique[message.id] = message

    items = list(unique.values())
    if all(m.posted_at_epoch_ms is not None for m in items):
        return tuple(
            sorted(items, key=lambda m: (m.posted_at_epoch_ms, m.id.value), reverse=True)
        )
    return tuple(sorted(items, key=lambda m: m.id.value, reverse=True))


class FeedSynchronizer:
    """
    Owns the feed snapshot shown to the user.

    Example Usage:
        synchronizer = FeedSynchronizer(repo, session, max_text_length=255)
        await synchronizer.refresh()
        created = await synchronizer.create_and_refresh("hello")
        result = await synchronizer.delete_and_refresh(created.id)
    """

    def __init__(
        self,
        message_repository: MessageRepository,
        session: Session,
        max_text_length: int,
        refresh_after_mutation: bool = True,
    ):
        """
        Args:
            message_repository: Remote message store
            session: Holder of the current account
            max_text_length: Limit declared by the active backend contract
            refresh_after_mutation: Re-fetch after each successful mutation.
                When False the caller refreshes explicitly; the snapshot is
                still never patched locally.
        """
        self._repo = message_repository
        self._session = session
        self._max_text_length = max_text_length
        self._refresh_after_mutation = refresh_after_mutation
        self._snapshot: tuple[Message, ...] = ()
        self._in_flight: Optional[asyncio.Future] = None
        # Bumped by clear(); a fetch started under an older value is stale
        self._generation = 0

    @property
    def snapshot(self) -> tuple[Message, ...]:
        return self._snapshot

    @property
    def refresh_in_flight(self) -> bool:
        return self._in_flight is not None

    @property
    def max_text_length(self) -> int:
        return self._max_text_length

    def find(self, message_id: MessageId) -> Optional[Message]:
        for message in self._snapshot:
            if message.id == message_id:
                return message
        return None

    def clear(self) -> None:
        self._generation += 1
        self._in_flight = None
        self._snapshot = ()

    async def refresh(self) -> tuple[Message, ...]:
        """
        Re-read the whole feed from the server.

        Returns:
            The new snapshot

        Raises:
            RemoteUnavailableError / MalformedEntityError: snapshot unchanged
        """
        if self._in_flight is None:
            self._in_flight = asyncio.ensure_future(self._fetch(self._generation))
        else:
            logger.debug("[Feed] Refresh already in flight, joining it")
        return await asyncio.shield(self._in_flight)

    async def _fetch(self, generation: int) -> tuple[Message, ...]:
        try:
            messages = await self._repo.list_messages()
            if generation != self._generation:
                logger.info("[Feed] Feed was cleared during refresh, dropping response")
                return self._snapshot
            self._snapshot = sort_feed(messages)
            logger.info(f"[Feed] Snapshot refreshed with {len(self._snapshot)} messages")
            return self._snapshot
        except Exception as e:
            logger.warning(f"[Feed] Refresh failed, keeping previous snapshot: {e}")
            raise
        finally:
            if generation == self._generation:
                self._in_flight = None

    async def create_and_refresh(self, text: str) -> Message:
        """
        Post a message as the current account, then re-read the feed.

        Returns:
            The message as persisted by the server

        Raises:
            UnauthenticatedError: No account logged in (no request is sent)
            InvalidInputError: Empty or too long text, or server 400
        """
        identity = self._require_identity("create a message")
        cleaned = validate_message_text(text, self._max_text_length)

        created = await self._repo.create_message(cleaned, identity.id)
        await self._after_mutation()
        return created

    async def update_and_refresh(self, message_id: MessageId, text: str) -> MutationResult:
        """
        Replace the text of an owned message, then re-read the feed.

        Returns:
            MutationResult; TARGET_GONE when the message no longer exists

        Raises:
            UnauthenticatedError: No account logged in
            AccessDeniedError: The snapshot shows another owner
            InvalidInputError: Empty or too long text, or server 400
        """
        identity = self._require_identity("edit a message")
        cleaned = validate_message_text(text, self._max_text_length)
        self._check_ownership(identity, message_id)

        result = await self._repo.update_message(message_id, cleaned)
        if not result.applied:
            logger.info(f"[Feed] Message {message_id} no longer exists, refreshing")
        await self._after_mutation()
        return result

    async def delete_and_refresh(self, message_id: MessageId) -> MutationResult:
        """
        Delete an owned message, then re-read the feed.

        Deleting a message that is already gone is not an error: the result
        has affected_count 0 and the feed is refreshed all the same.
        """
        identity = self._require_identity("delete a message")
        self._check_ownership(identity, message_id)

        result = await self._repo.delete_message(message_id)
        if not result.applied:
            logger.info(f"[Feed] Message {message_id} was already deleted, refreshing")
        await self._after_mutation()
        return result

    def _require_identity(self, action: str) -> Account:
        identity = self._session.current()
        if identity is None:
            raise UnauthenticatedError(f"Please log in to {action}.")
        return identity

    def _check_ownership(self, identity: Account, message_id: MessageId) -> None:
        # Unknown locally (stale snapshot): the server decides
        target = self.find(message_id)
        if target is None:
            logger.debug(f"[Feed] Message {message_id} not in snapshot, server decides")
            return
        if not can_mutate(identity, target):
            raise AccessDeniedError(
                f"Account {identity.id} does not own message {message_id}"
            )

    async def _after_mutation(self) -> None:
        if not self._refresh_after_mutation:
            return
        pending = self._in_flight
        if pending is not None:
            # Sent before the mutation, so its response may not include it
            logger.debug("[Feed] Waiting out an earlier refresh before re-reading")
            try:
                await asyncio.shield(pending)
            except Exception as e:
                # Already raised to that refresh's own callers
                logger.debug(f"[Feed] Earlier refresh failed: {e}")
        await self.refresh()
