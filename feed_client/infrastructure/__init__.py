"""
Infrastructure Layer - Technical implementations of domain ports.

This layer contains:
- remote/: httpx repositories for the feed service and the entity mapper
"""

from feed_client.infrastructure.remote import (
    BackendContract,
    EntityMapper,
    HttpAccountRepository,
    HttpMessageRepository,
    create_http_client,
)

__all__ = [
    "BackendContract",
    "EntityMapper",
    "HttpAccountRepository",
    "HttpMessageRepository",
    "create_http_client",
]
