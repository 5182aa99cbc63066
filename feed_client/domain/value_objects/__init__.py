"""
VALUE OBJECTS - Immutable domain types

Each value object:
- Has no identity (compared by value)
- Is immutable (frozen dataclass)
- Validates itself on creation
"""

from feed_client.domain.value_objects.account_id import AccountId
from feed_client.domain.value_objects.message_id import MessageId
from feed_client.domain.value_objects.mutation_result import (
    MutationOutcome,
    MutationResult,
)

__all__ = [
    "AccountId",
    "MessageId",
    "MutationOutcome",
    "MutationResult",
]
