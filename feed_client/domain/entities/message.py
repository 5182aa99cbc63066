"""
Message Entity - A short text post owned by exactly one account.

Immutable: the feed snapshot hands these out directly, so an edit only
shows up as a new instance from the next server read.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
from feed_client.domain.value_objects.account_id import AccountId
from feed_client.domain.value_objects.message_id import MessageId


@dataclass(frozen=True)
class Message:
    id: MessageId
    owner_id: AccountId
    text: str
    posted_at_epoch_ms: Optional[int] = None

    def __post_init__(self):
        if not isinstance(self.text, str):
            raise ValueError(f"Message text must be a string, got {self.text!r}")
        if self.posted_at_epoch_ms is not None and (
            isinstance(self.posted_at_epoch_ms, bool)
            or not isinstance(self.posted_at_epoch_ms, int)
        ):
            raise ValueError(
                f"Invalid timestamp for message {self.id}: {self.posted_at_epoch_ms!r}"
            )

    def is_owned_by(self, account_id: AccountId) -> bool:
        return self.owner_id == account_id
