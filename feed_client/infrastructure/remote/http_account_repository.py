"""
HTTP Account Repository Implementation.

    POST /register {username, password} → account   (409 username taken)
    POST /login    {username, password} → account   (401 bad credentials)

The backend echoes the password back in the account body; EntityMapper drops
it and it is never logged.
"""

import logging

import httpx

from feed_client.domain.entities.account import Account
from feed_client.domain.exceptions.invalid_input import (
    InvalidInputError,
    UsernameTakenError,
)
from feed_client.domain.exceptions.unauthenticated import UnauthenticatedError
from feed_client.domain.ports.repositories.account_repository import AccountRepository
from feed_client.infrastructure.remote.entity_mapper import EntityMapper
from feed_client.infrastructure.remote.http_client import json_body, send, unexpected_status

logger = logging.getLogger(__name__)


class HttpAccountRepository(AccountRepository):
    def __init__(self, client: httpx.AsyncClient, mapper: EntityMapper):
        self._client = client
        self._mapper = mapper

    async def register(self, username: str, password: str) -> Account:
        response = await send(
            self._client,
            "POST",
            "/register",
            self._mapper.credentials_payload(username, password),
        )
        if response.status_code == 409:
            raise UsernameTakenError(username)
        if response.status_code == 400:
            raise InvalidInputError("Registration rejected: invalid username or password")
        if not response.is_success:
            raise unexpected_status(response, "register")

        account = self._mapper.to_account(json_body(response))
        logger.info(f"[Accounts] Registered {account.username} as {account.id}")
        return account

    async def login(self, username: str, password: str) -> Account:
        response = await send(
            self._client,
            "POST",
            "/login",
            self._mapper.credentials_payload(username, password),
        )
        if response.status_code == 401:
            raise UnauthenticatedError("Invalid username or password")
        if response.status_code == 400:
            raise InvalidInputError("Login rejected: invalid username or password")
        if not response.is_success:
            raise unexpected_status(response, "log in")

        account = self._mapper.to_account(json_body(response))
        logger.info(f"[Accounts] Logged in {account.username} ({account.id})")
        return account
