"""
ENTITIES - Business objects with identity

Each entity:
- Has a unique server-assigned identifier
- Pure Python dataclasses (no pydantic, no wire field names)
"""

from feed_client.domain.entities.account import Account
from feed_client.domain.entities.message import Message

__all__ = [
    "Account",
    "Message",
]
