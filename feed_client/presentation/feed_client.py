"""
FeedClient - The operation set the UI layer calls.

Guidelines:
- Thin layer: builds a Command/Query and runs it through its handler
- Handlers come from the Dishka container
- Each call runs under a fresh correlation ID, which is logged and sent to
  the feed service as X-Correlation-ID
- Errors propagate unchanged; the UI decides how to show them. Affected-count
  0 comes back as MutationResult.outcome == TARGET_GONE, not as an error

Flow:
  UI → FeedClient → Command → Handler → FeedSynchronizer → Repository → HTTP

Example Usage:
    async with open_feed_client() as client:
        await client.login("alice", "secret")
        await client.list_feed(refresh=True)
        post = await client.create_post("hello")
        result = await client.remove_post(post.id)
"""

import logging
import uuid
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional, Union

import httpx
from dishka import AsyncContainer

from feed_client.application.commands.auth import (
    LoginCommand,
    LoginHandler,
    LogoutCommand,
    LogoutHandler,
    RegisterCommand,
    RegisterHandler,
)
from feed_client.application.commands.messages import (
    CreatePostCommand,
    CreatePostHandler,
    EditPostCommand,
    EditPostHandler,
    RemovePostCommand,
    RemovePostHandler,
)
from feed_client.application.queries.messages import (
    GetPostHandler,
    GetPostQuery,
    ListAccountPostsHandler,
    ListAccountPostsQuery,
    ListFeedHandler,
    ListFeedQuery,
)
from feed_client.application.services.session import Session
from feed_client.config.logging_config import correlation_id_var, setup_logging
from feed_client.config.settings import Config
from feed_client.domain.entities.account import Account
from feed_client.domain.entities.message import Message
from feed_client.domain.exceptions.invalid_input import InvalidInputError
from feed_client.domain.services.ownership import can_mutate
from feed_client.domain.value_objects.account_id import AccountId
from feed_client.domain.value_objects.message_id import MessageId
from feed_client.domain.value_objects.mutation_result import MutationResult
from feed_client.setup.ioc.container import create_container

logger = logging.getLogger(__name__)


def _message_id(value: Union[MessageId, int]) -> MessageId:
    if isinstance(value, MessageId):
        return value
    try:
        return MessageId(value)
    except ValueError as e:
        raise InvalidInputError(str(e)) from e


def _account_id(value: Union[AccountId, int]) -> AccountId:
    if isinstance(value, AccountId):
        return value
    try:
        return AccountId(value)
    except ValueError as e:
        raise InvalidInputError(str(e)) from e


@asynccontextmanager
async def _operation(name: str) -> AsyncIterator[str]:
    correlation_id = uuid.uuid4().hex[:12]
    token = correlation_id_var.set(correlation_id)
    logger.debug(f"[FeedClient] {name} started")
    try:
        yield correlation_id
    finally:
        correlation_id_var.reset(token)


class FeedClient:
    """Facade over the feed client core. One instance per container."""

    def __init__(self, container: AsyncContainer, session: Session):
        self._container = container
        self._session = session

    # ==================== IDENTITY ====================

    async def login(self, username: str, password: str) -> Account:
        async with _operation("login"):
            handler = await self._container.get(LoginHandler)
            return await handler.execute(LoginCommand(username=username, password=password))

    async def register(self, username: str, password: str) -> Account:
        async with _operation("register"):
            handler = await self._container.get(RegisterHandler)
            return await handler.execute(
                RegisterCommand(username=username, password=password)
            )

    async def logout(self) -> None:
        async with _operation("logout"):
            handler = await self._container.get(LogoutHandler)
            await handler.execute(LogoutCommand())

    def current_identity(self) -> Optional[Account]:
        return self._session.current()

    def can_mutate(self, message: Message) -> bool:
        """Whether to offer edit/delete for this message."""
        return can_mutate(self._session.current(), message)

    # ==================== FEED ====================

    async def list_feed(self, refresh: bool = False) -> list[Message]:
        async with _operation("list_feed"):
            handler = await self._container.get(ListFeedHandler)
            return await handler.execute(ListFeedQuery(refresh=refresh))

    async def refresh_feed(self) -> list[Message]:
        return await self.list_feed(refresh=True)

    async def account_posts(self, account_id: Union[AccountId, int]) -> list[Message]:
        async with _operation("account_posts"):
            handler = await self._container.get(ListAccountPostsHandler)
            return await handler.execute(
                ListAccountPostsQuery(account_id=_account_id(account_id))
            )

    async def get_post(self, message_id: Union[MessageId, int]) -> Optional[Message]:
        async with _operation("get_post"):
            handler = await self._container.get(GetPostHandler)
            return await handler.execute(GetPostQuery(message_id=_message_id(message_id)))

    # ==================== POSTS ====================

    async def create_post(self, text: str) -> Message:
        async with _operation("create_post"):
            handler = await self._container.get(CreatePostHandler)
            return await handler.execute(CreatePostCommand(text=text))

    async def edit_post(self, message_id: Union[MessageId, int], text: str) -> MutationResult:
        async with _operation("edit_post"):
            handler = await self._container.get(EditPostHandler)
            return await handler.execute(
                EditPostCommand(message_id=_message_id(message_id), text=text)
            )

    async def remove_post(self, message_id: Union[MessageId, int]) -> MutationResult:
        async with _operation("remove_post"):
            handler = await self._container.get(RemovePostHandler)
            return await handler.execute(
                RemovePostCommand(message_id=_message_id(message_id))
            )


@asynccontextmanager
async def open_feed_client(
    config: type[Config] = Config,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    configure_logging: bool = False,
) -> AsyncIterator[FeedClient]:
    """
    Build the container, yield a FeedClient, and close the container on exit
    (which closes the shared HTTP client).

    Args:
        config: Config class to read settings from
        transport: Optional httpx transport override
        configure_logging: Install the stdout/file handlers from config.
            Leave False when the host application owns logging.
    """
    if configure_logging:
        setup_logging(config.LOG_LEVEL, config.LOG_PATH, config.LOG_FORMAT)
    container = create_container(config, transport)
    try:
        session = await container.get(Session)
        yield FeedClient(container, session)
    finally:
        await container.close()
