"""
Ownership Policy.

Decides whether the current account may edit or delete a message.
The answer only controls whether the client offers the action and attempts
the call; the feed service can still reject it (affected-count 0 or 401).
"""

from typing import Optional

from feed_client.domain.entities.account import Account
from feed_client.domain.entities.message import Message


def can_mutate(identity: Optional[Account], message: Message) -> bool:
    if identity is None:
        return False
    return message.is_owned_by(identity.id)
