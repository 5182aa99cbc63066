"""
Dishka DI Container Setup.

Registers the whole client at APP scope: one HTTP client, one session and
one feed synchronizer for the lifetime of the container.

Flow:
  Container → provides → HttpMessageRepository → to → FeedSynchronizer → to → handlers
                                  ↓
                          bound to MessageRepository interface

Tests pass an httpx.MockTransport to run the full stack without a network.
"""

from collections.abc import AsyncIterator
from typing import Optional

import httpx
from dishka import AsyncContainer, Provider, Scope, make_async_container, provide

from feed_client.application.commands.auth import (
    LoginHandler,
    LogoutHandler,
    RegisterHandler,
)
from feed_client.application.commands.messages import (
    CreatePostHandler,
    EditPostHandler,
    RemovePostHandler,
)
from feed_client.application.queries.messages import (
    GetPostHandler,
    ListAccountPostsHandler,
    ListFeedHandler,
)
from feed_client.application.services.feed_synchronizer import FeedSynchronizer
from feed_client.application.services.session import Session
from feed_client.config.settings import Config
from feed_client.domain.ports.repositories import AccountRepository, MessageRepository
from feed_client.infrastructure.remote import (
    BackendContract,
    EntityMapper,
    HttpAccountRepository,
    HttpMessageRepository,
    create_http_client,
)


class AppProvider(Provider):
    """
    Application dependency provider.

    Args:
        config: Config class (or subclass) to read settings from
        transport: Optional httpx transport override
    """

    def __init__(
        self,
        config: type[Config] = Config,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__()
        self._config = config
        self._transport = transport

    # ==================== HTTP ====================

    @provide(scope=Scope.APP)
    async def get_http_client(self) -> AsyncIterator[httpx.AsyncClient]:
        """
        Provide the shared AsyncClient (singleton).

        Closed when the container is closed.
        """
        client = create_http_client(
            self._config.FEED_API_BASE_URL,
            timeout_seconds=self._config.HTTP_TIMEOUT_SECONDS,
            transport=self._transport,
        )
        yield client
        await client.aclose()

    @provide(scope=Scope.APP)
    def get_entity_mapper(self) -> EntityMapper:
        return EntityMapper(BackendContract.from_name(self._config.FEED_BACKEND_CONTRACT))

    # ==================== REPOSITORIES ====================

    @provide(scope=Scope.APP)
    def get_message_repository(
        self, client: httpx.AsyncClient, mapper: EntityMapper
    ) -> MessageRepository:
        """
        - Return type is ABSTRACT (MessageRepository)
        - Implementation is CONCRETE (HttpMessageRepository)
        """
        return HttpMessageRepository(client, mapper)

    @provide(scope=Scope.APP)
    def get_account_repository(
        self, client: httpx.AsyncClient, mapper: EntityMapper
    ) -> AccountRepository:
        return HttpAccountRepository(client, mapper)

    # ==================== STATE ====================

    @provide(scope=Scope.APP)
    def get_session(self) -> Session:
        return Session()

    @provide(scope=Scope.APP)
    def get_feed_synchronizer(
        self,
        message_repository: MessageRepository,
        session: Session,
        mapper: EntityMapper,
    ) -> FeedSynchronizer:
        return FeedSynchronizer(
            message_repository,
            session,
            max_text_length=mapper.max_text_length,
            refresh_after_mutation=self._config.REFRESH_AFTER_MUTATION,
        )

    # ==================== HANDLERS ====================

    @provide(scope=Scope.APP)
    def get_login_handler(
        self, account_repository: AccountRepository, session: Session
    ) -> LoginHandler:
        return LoginHandler(account_repository, session)

    @provide(scope=Scope.APP)
    def get_register_handler(
        self, account_repository: AccountRepository, session: Session
    ) -> RegisterHandler:
        return RegisterHandler(account_repository, session)

    @provide(scope=Scope.APP)
    def get_logout_handler(
        self, session: Session, synchronizer: FeedSynchronizer
    ) -> LogoutHandler:
        return LogoutHandler(session, synchronizer)

    @provide(scope=Scope.APP)
    def get_create_post_handler(self, synchronizer: FeedSynchronizer) -> CreatePostHandler:
        return CreatePostHandler(synchronizer)

    @provide(scope=Scope.APP)
    def get_edit_post_handler(self, synchronizer: FeedSynchronizer) -> EditPostHandler:
        return EditPostHandler(synchronizer)

    @provide(scope=Scope.APP)
    def get_remove_post_handler(self, synchronizer: FeedSynchronizer) -> RemovePostHandler:
        return RemovePostHandler(synchronizer)

    @provide(scope=Scope.APP)
    def get_list_feed_handler(self, synchronizer: FeedSynchronizer) -> ListFeedHandler:
        return ListFeedHandler(synchronizer)

    @provide(scope=Scope.APP)
    def get_list_account_posts_handler(
        self, message_repository: MessageRepository
    ) -> ListAccountPostsHandler:
        return ListAccountPostsHandler(message_repository)

    @provide(scope=Scope.APP)
    def get_get_post_handler(self, message_repository: MessageRepository) -> GetPostHandler:
        return GetPostHandler(message_repository)


def create_container(
    config: type[Config] = Config,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> AsyncContainer:
    return make_async_container(AppProvider(config, transport))
