"""
Account Entity - An authenticated user of the feed.
"""

from dataclasses import dataclass
from feed_client.domain.value_objects.account_id import AccountId


@dataclass(frozen=True)
class Account:
    id: AccountId
    username: str

    def __post_init__(self):
        if not self.username:
            raise ValueError("Account username cannot be empty")
