"""
Session - Single-slot holder for the authenticated account.

Starts empty, is set on login/registration and cleared on logout. A second
login overwrites the first. The client runs on one asyncio loop, so reads and
writes need no lock.
"""

import logging
from typing import Optional

from feed_client.domain.entities.account import Account

logger = logging.getLogger(__name__)


class Session:
    def __init__(self):
        self._identity: Optional[Account] = None

    def login(self, identity: Account) -> None:
        if self._identity is not None and self._identity != identity:
            logger.info(
                f"[Session] Replacing {self._identity.username} with {identity.username}"
            )
        self._identity = identity

    def logout(self) -> None:
        if self._identity is not None:
            logger.info(f"[Session] Logged out {self._identity.username}")
        self._identity = None

    def current(self) -> Optional[Account]:
        return self._identity

    @property
    def is_authenticated(self) -> bool:
        return self._identity is not None
