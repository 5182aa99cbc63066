"""
Remote Layer - HTTP+JSON implementations for the feed service.
"""

from feed_client.infrastructure.remote.entity_mapper import BackendContract, EntityMapper
from feed_client.infrastructure.remote.http_client import create_http_client
from feed_client.infrastructure.remote.http_message_repository import (
    HttpMessageRepository,
)
from feed_client.infrastructure.remote.http_account_repository import (
    HttpAccountRepository,
)

__all__ = [
    "BackendContract",
    "EntityMapper",
    "create_http_client",
    "HttpMessageRepository",
    "HttpAccountRepository",
]
