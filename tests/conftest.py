import asyncio
import json
import re
from typing import Callable, Optional

import httpx
import pytest

from feed_client.application.services.session import Session
from feed_client.domain.entities.account import Account
from feed_client.domain.entities.message import Message
from feed_client.domain.ports.repositories.message_repository import MessageRepository
from feed_client.domain.value_objects.account_id import AccountId
from feed_client.domain.value_objects.message_id import MessageId
from feed_client.domain.value_objects.mutation_result import MutationResult
from feed_client.infrastructure.remote.entity_mapper import EntityMapper

BASE_URL = "http://feed.test"

ALICE = Account(id=AccountId(1), username="alice")
BOB = Account(id=AccountId(2), username="bob")


def make_message(
    message_id: int, owner: int, text: str = "hello", ts: Optional[int] = None
) -> Message:
    return Message(
        id=MessageId(message_id),
        owner_id=AccountId(owner),
        text=text,
        posted_at_epoch_ms=ts,
    )


def mock_client(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
    return httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(handler))


class InMemoryMessageRepository(MessageRepository):
    """MessageRepository fake that records calls and can hold list requests."""

    def __init__(self, messages=()):
        self.messages: dict[int, Message] = {m.id.value: m for m in messages}
        self.calls: list[str] = []
        self.list_gate: Optional[asyncio.Event] = None
        self.list_error: Optional[Exception] = None
        self._next_id = max(self.messages, default=0) + 1

    def count(self, name: str) -> int:
        return self.calls.count(name)

    async def list_messages(self) -> list[Message]:
        self.calls.append("list")
        # State as of request arrival; the gate only delays the response
        current = list(self.messages.values())
        error = self.list_error
        if self.list_gate is not None:
            await self.list_gate.wait()
        if error is not None:
            raise error
        return current

    async def fetch_messages_for_owner(self, account_id: AccountId) -> list[Message]:
        self.calls.append("list_owner")
        return [m for m in self.messages.values() if m.owner_id == account_id]

    async def get_message(self, message_id: MessageId) -> Optional[Message]:
        self.calls.append("get")
        return self.messages.get(message_id.value)

    async def create_message(self, text: str, owner_id: AccountId) -> Message:
        self.calls.append("create")
        message = Message(
            id=MessageId(self._next_id), owner_id=owner_id, text=text, posted_at_epoch_ms=None
        )
        self.messages[self._next_id] = message
        self._next_id += 1
        return message

    async def update_message(self, message_id: MessageId, text: str) -> MutationResult:
        self.calls.append("update")
        existing = self.messages.get(message_id.value)
        if existing is None:
            return MutationResult(0)
        self.messages[message_id.value] = Message(
            id=existing.id,
            owner_id=existing.owner_id,
            text=text,
            posted_at_epoch_ms=existing.posted_at_epoch_ms,
        )
        return MutationResult(1)

    async def delete_message(self, message_id: MessageId) -> MutationResult:
        self.calls.append("delete")
        if self.messages.pop(message_id.value, None) is None:
            return MutationResult(0)
        return MutationResult(1)


class FakeFeedServer:
    """
    In-memory feed service speaking the current wire contract.

    Accepts either owner key on create so the legacy contract can be
    exercised against it. DELETE answers in plain text, PATCH in JSON.
    """

    MAX_TEXT = 255

    def __init__(self):
        self.accounts: dict[str, dict] = {}
        self.messages: dict[int, dict] = {}
        self.requests: list[httpx.Request] = []
        self.create_bodies: list[dict] = []
        self._next_account = 1
        self._next_message = 1
        self._clock = 1_700_000_000_000

    def count(self, method: str, path: str) -> int:
        return sum(1 for r in self.requests if r.method == method and r.url.path == path)

    def seed_account(self, username: str, password: str) -> int:
        account_id = self._next_account
        self._next_account += 1
        self.accounts[username] = {"accountId": account_id, "password": password}
        return account_id

    def seed_message(self, owner: int, text: str) -> int:
        message_id = self._next_message
        self._next_message += 1
        self._clock += 1000
        self.messages[message_id] = {
            "messageId": message_id,
            "postedBy": owner,
            "messageText": text,
            "timePostedEpoch": self._clock,
        }
        return message_id

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        body = json.loads(request.content) if request.content else None
        path = request.url.path
        method = request.method

        if method == "POST" and path == "/register":
            if not body.get("username") or body["username"] in self.accounts:
                return httpx.Response(409)
            account_id = self.seed_account(body["username"], body["password"])
            return httpx.Response(200, json={"accountId": account_id, **body})

        if method == "POST" and path == "/login":
            account = self.accounts.get(body.get("username"))
            if account is None or account["password"] != body.get("password"):
                return httpx.Response(401)
            return httpx.Response(
                200, json={"accountId": account["accountId"], **body}
            )

        if method == "GET" and path == "/messages":
            return httpx.Response(200, json=list(self.messages.values()))

        if method == "POST" and path == "/messages":
            self.create_bodies.append(body)
            owner = body.get("postedBy", body.get("accountId"))
            text = body.get("messageText") or ""
            known = {a["accountId"] for a in self.accounts.values()}
            if not text.strip() or len(text) > self.MAX_TEXT or owner not in known:
                return httpx.Response(400)
            message_id = self.seed_message(owner, text)
            return httpx.Response(200, json=self.messages[message_id])

        match = re.fullmatch(r"/accounts/(\d+)/messages", path)
        if method == "GET" and match:
            owner = int(match.group(1))
            owned = [m for m in self.messages.values() if m["postedBy"] == owner]
            return httpx.Response(200, json=owned)

        match = re.fullmatch(r"/messages/(\d+)", path)
        if match:
            message_id = int(match.group(1))
            if method == "GET":
                message = self.messages.get(message_id)
                if message is None:
                    return httpx.Response(200, content=b"")
                return httpx.Response(200, json=message)
            if method == "PATCH":
                text = (body or {}).get("messageText") or ""
                if not text.strip() or len(text) > self.MAX_TEXT:
                    return httpx.Response(400)
                if message_id not in self.messages:
                    return httpx.Response(200, json=0)
                self.messages[message_id]["messageText"] = text
                return httpx.Response(200, json=1)
            if method == "DELETE":
                if self.messages.pop(message_id, None) is None:
                    return httpx.Response(200, content=b"")
                return httpx.Response(200, text="1")

        return httpx.Response(404)


@pytest.fixture()
def mapper():
    return EntityMapper()


@pytest.fixture()
def session():
    return Session()


@pytest.fixture()
def repo():
    return InMemoryMessageRepository()


@pytest.fixture()
def feed_server():
    return FakeFeedServer()
