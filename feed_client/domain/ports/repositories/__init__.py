"""
REPOSITORY PORTS - Remote store interfaces

Each repository port:
- Is an abstract base class (ABC)
- Defines one method per remote operation
- Performs exactly one exchange per call, never retries

Implementations: feed_client/infrastructure/remote/
"""

from feed_client.domain.ports.repositories.message_repository import MessageRepository
from feed_client.domain.ports.repositories.account_repository import AccountRepository

__all__ = [
    "MessageRepository",
    "AccountRepository",
]
