"""
Account Repository Port - Interface for registration and login.
Implementation: feed_client/infrastructure/remote/http_account_repository.py
"""

from abc import ABC, abstractmethod

from feed_client.domain.entities.account import Account


class AccountRepository(ABC):
    @abstractmethod
    async def register(self, username: str, password: str) -> Account: ...

    @abstractmethod
    async def login(self, username: str, password: str) -> Account: ...
